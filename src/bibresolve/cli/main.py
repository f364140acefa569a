"""Command-line interface for bibresolve.

Provides CLI commands for resolving identifiers into BibLaTeX entries.
"""

import importlib.metadata
import logging
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibresolve")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@click.group()
@click.version_option(version=__version__, prog_name="bibresolve")
def cli() -> None:
    """Resolve DOIs, arXiv ids and web pages into BibLaTeX entries.

    Use 'bibresolve COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("identifiers", nargs=-1, required=True)
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    envvar="BIBRESOLVE_JOBS",
    help="Maximum concurrent jobs (default: one per identifier)",
)
@click.option(
    "--user-agent",
    type=str,
    default=None,
    envvar="BIBRESOLVE_USER_AGENT",
    help="User-Agent header sent with every request",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    envvar="BIBRESOLVE_TIMEOUT",
    help="Page read timeout in seconds (default: 15)",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def fetch(
    identifiers: tuple[str, ...],
    jobs: int | None,
    user_agent: str | None,
    timeout: float | None,
    audit_log: str | None,
    verbose: bool,
) -> None:
    """Resolve each IDENTIFIER and print its BibLaTeX entry.

    IDENTIFIER can be a DOI, an arXiv id or URL, a USENIX presentation URL
    or any other web page URL. Records are printed to stdout in input
    order; failures and a summary line go to stderr. The exit code is 0
    even when some identifiers fail.

    Examples
    --------
        bibresolve fetch 10.1145/3290605.3300857
        bibresolve fetch arXiv:1706.03762 https://example.org/post -j 4
    """
    from bibresolve.audit import AuditLogger, generate_run_id
    from bibresolve.engine import ResolverConfig, run_batch
    from bibresolve.utils import format_elapsed

    _configure_logging(verbose)

    defaults = ResolverConfig()
    try:
        config = ResolverConfig(
            user_agent=user_agent or defaults.user_agent,
            read_timeout=timeout if timeout is not None else defaults.read_timeout,
            max_workers=jobs,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if verbose:
        click.echo(f"Resolving {len(identifiers)} identifier(s)...", err=True)

    audit_logger = None
    if audit_log:
        audit_logger = AuditLogger(generate_run_id(), Path(audit_log))
        audit_logger.run_started(command=sys.argv, parameters=config.to_dict())

    try:
        batch = run_batch(list(identifiers), config=config, audit_logger=audit_logger)
        if audit_logger:
            audit_logger.run_finished(
                succeeded=batch.succeeded,
                failed=batch.failed,
                total=batch.total,
                duration_seconds=batch.elapsed_seconds,
            )
    finally:
        if audit_logger:
            audit_logger.close()

    for result in batch.results:
        if result.ok:
            click.echo(result.output, nl=False)
        else:
            click.secho(f"✗ {result.identifier}: {result.error}", fg="red", err=True)

    click.echo(
        f"✓ {batch.succeeded} ✗ {batch.failed} total {batch.total} "
        f"elapsed {format_elapsed(batch.elapsed_seconds)}",
        err=True,
    )


@cli.command()
@click.argument("identifiers", nargs=-1)
def pull(identifiers: tuple[str, ...]) -> None:
    """Pull entries into a bibliography file (not implemented)."""
    click.secho("✗ pull: not implemented", fg="red", err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
