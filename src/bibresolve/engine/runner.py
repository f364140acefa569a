"""Concurrent batch runner.

Every identifier is an independent job: recognize, resolve, serialize and
read back. Jobs run on a thread pool, results are collected as they
complete and slotted back into submission order. A failing job only ever
produces its own error message; nothing is retried or cancelled.
"""

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from bibresolve.audit.logger import AuditLogger
from bibresolve.engine.config import BatchResult, ResolverConfig
from bibresolve.errors import ResolutionError
from bibresolve.fetch import Fetcher, HttpFetcher
from bibresolve.models import JobResult
from bibresolve.registry import dispatch, resolve_parsed
from bibresolve.serialize import serialize_record

__all__ = ["run_batch", "run_job"]

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    """Error message reported for a failed job."""
    if isinstance(exc, ResolutionError):
        return str(exc)
    return f"internal error: {type(exc).__name__}: {exc}"


def run_job(index: int, identifier: str, fetcher: Fetcher) -> JobResult:
    """Run one job to completion, turning any failure into a result.

    Parameters
    ----------
    index : int
        0-based position of the identifier in the batch.
    identifier : str
        Raw identifier text.
    fetcher : Fetcher
        Fetch collaborator shared by the batch.

    Returns
    -------
    JobResult
        Serialized record on success, error message otherwise.
    """
    family_name: str | None = None
    try:
        family, parsed = dispatch(identifier)
        family_name = family.name

        record = resolve_parsed(family, parsed, identifier, fetcher)
        output = serialize_record(record)
    except Exception as exc:
        logger.debug("job %d (%s) failed", index, identifier, exc_info=True)
        return JobResult(index=index, identifier=identifier, family=family_name, error=_describe(exc))

    return JobResult(index=index, identifier=identifier, family=family_name, output=output)


def run_batch(
    identifiers: Sequence[str],
    config: ResolverConfig | None = None,
    fetcher: Fetcher | None = None,
    audit_logger: AuditLogger | None = None,
) -> BatchResult:
    """Resolve a batch of identifiers concurrently.

    Parameters
    ----------
    identifiers : Sequence[str]
        Raw identifiers, in the order their results should be reported.
    config : ResolverConfig | None, optional
        Resolver configuration. Uses defaults if not provided.
    fetcher : Fetcher | None, optional
        Fetch collaborator. An ``HttpFetcher`` built from ``config`` if
        not provided.
    audit_logger : AuditLogger | None, optional
        Receives ``job_started``/``job_finished`` events when given.

    Returns
    -------
    BatchResult
        One result per identifier in submission order, with tallies.
    """
    if config is None:
        config = ResolverConfig()
    if fetcher is None:
        fetcher = HttpFetcher.from_config(config)

    started = time.perf_counter()
    slots: list[JobResult | None] = [None] * len(identifiers)

    if identifiers:
        workers = config.workers_for(len(identifiers))
        logger.debug("running %d jobs on %d workers", len(identifiers), workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {}
            for index, identifier in enumerate(identifiers):
                if audit_logger:
                    audit_logger.job_started(index, identifier)
                futures[executor.submit(run_job, index, identifier, fetcher)] = index

            for future in as_completed(futures):
                result = future.result()
                slots[futures[future]] = result
                logger.debug(
                    "job %d finished: %s",
                    result.index,
                    "ok" if result.ok else result.error,
                )
                if audit_logger:
                    audit_logger.job_finished(
                        result.index,
                        result.identifier,
                        family=result.family,
                        ok=result.ok,
                        error=result.error,
                    )

    results = [result for result in slots if result is not None]
    succeeded = sum(1 for result in results if result.ok)

    return BatchResult(
        results=results,
        succeeded=succeeded,
        failed=len(results) - succeeded,
        total=len(identifiers),
        elapsed_seconds=time.perf_counter() - started,
    )
