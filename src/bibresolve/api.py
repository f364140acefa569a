"""Public API for resolving identifiers.

This module provides the high-level entry points of bibresolve:
- Resolving one identifier into a CanonicalRecord
- Resolving one identifier straight to BibLaTeX text
- Resolving a batch of identifiers concurrently
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from bibresolve import registry
from bibresolve.engine.config import BatchResult, ResolverConfig
from bibresolve.fetch import Fetcher, HttpFetcher
from bibresolve.models import CanonicalRecord
from bibresolve.serialize import serialize_record

if TYPE_CHECKING:
    from bibresolve.audit.logger import AuditLogger

__all__ = [
    "resolve_identifier",
    "resolve_to_biblatex",
    "resolve_many",
]


def _default_fetcher(config: ResolverConfig | None, fetcher: Fetcher | None) -> Fetcher:
    if fetcher is not None:
        return fetcher
    return HttpFetcher.from_config(config or ResolverConfig())


def resolve_identifier(
    raw: str,
    *,
    config: ResolverConfig | None = None,
    fetcher: Fetcher | None = None,
) -> CanonicalRecord:
    """Resolve one identifier into a canonical record.

    Parameters
    ----------
    raw : str
        A DOI, arXiv id or URL, USENIX presentation URL or webpage URL.
    config : ResolverConfig | None, optional
        Resolver configuration, used to build the default fetcher.
    fetcher : Fetcher | None, optional
        Fetch collaborator; overrides ``config``.

    Returns
    -------
    CanonicalRecord
        Validated record.

    Raises
    ------
    ResolutionError
        If the identifier is unrecognized or cannot be resolved.

    Examples
    --------
        >>> from bibresolve import resolve_identifier
        >>> record = resolve_identifier("arXiv:1706.03762")
        >>> print(record.title)
    """
    return registry.resolve(raw, _default_fetcher(config, fetcher))


def resolve_to_biblatex(
    raw: str,
    *,
    config: ResolverConfig | None = None,
    fetcher: Fetcher | None = None,
) -> str:
    """Resolve one identifier and serialize the record as BibLaTeX.

    Raises
    ------
    ResolutionError
        If resolution fails or the serialized entry does not read back.
    """
    return serialize_record(resolve_identifier(raw, config=config, fetcher=fetcher))


def resolve_many(
    identifiers: Sequence[str],
    *,
    config: ResolverConfig | None = None,
    fetcher: Fetcher | None = None,
    audit_logger: AuditLogger | None = None,
) -> BatchResult:
    """Resolve a batch of identifiers concurrently.

    Individual failures never raise; they are reported per job.

    Parameters
    ----------
    identifiers : Sequence[str]
        Raw identifiers.
    config : ResolverConfig | None, optional
        Resolver configuration (timeouts, worker cap).
    fetcher : Fetcher | None, optional
        Fetch collaborator shared by all jobs.
    audit_logger : AuditLogger | None, optional
        Receives per-job audit events.

    Returns
    -------
    BatchResult
        Results in submission order with success and failure tallies.

    Examples
    --------
        >>> from bibresolve import resolve_many
        >>> batch = resolve_many(["10.1145/3290605.3300857", "https://example.org/"])
        >>> print(batch.succeeded, batch.failed)
    """
    from bibresolve.engine import run_batch

    return run_batch(identifiers, config=config, fetcher=fetcher, audit_logger=audit_logger)
