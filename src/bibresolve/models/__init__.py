"""Shared data types for bibresolve.

This package contains the canonical record, the parsed identifier value
types and the per-job result consumed across the pipeline.
"""

from bibresolve.models.identifiers import (
    DOI_RESOLVER_BASE,
    ArxivIdentifier,
    ConferencePageIdentifier,
    DoiIdentifier,
    ParsedIdentifier,
    WebpageIdentifier,
    build_citation_key,
)
from bibresolve.models.records import (
    CanonicalRecord,
    EntryKind,
    JobResult,
    validate_record,
)

__all__ = [
    # Record models
    "CanonicalRecord",
    "EntryKind",
    "JobResult",
    "validate_record",
    # Identifiers
    "DOI_RESOLVER_BASE",
    "DoiIdentifier",
    "ArxivIdentifier",
    "ConferencePageIdentifier",
    "WebpageIdentifier",
    "ParsedIdentifier",
    "build_citation_key",
]
