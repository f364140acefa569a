"""Resolve bibliographic identifiers into BibLaTeX records.

This package provides:
- Data models (bibresolve.models): canonical record and identifier types
- Families (bibresolve.families): DOI, arXiv, USENIX and webpage resolvers
- Registry (bibresolve.registry): priority-ordered family dispatch
- Signals (bibresolve.signals): metadata extraction from HTML
- Normalization (bibresolve.normalize): field normalization helpers
- Serialization (bibresolve.serialize): BibLaTeX writer and reader
- Engine (bibresolve.engine): concurrent batch runner
- Audit (bibresolve.audit): JSONL event logging
- CLI (bibresolve.cli): command-line interface
- Public API (bibresolve.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bibresolve.api import resolve_identifier, resolve_many, resolve_to_biblatex
from bibresolve.engine import BatchResult, ResolverConfig
from bibresolve.errors import (
    ExtractionError,
    FetchError,
    ResolutionError,
    SerializationError,
    UnrecognizedIdentifierError,
    ValidationError,
)
from bibresolve.models import CanonicalRecord, EntryKind

__all__ = [
    "__version__",
    "__license__",
    "CanonicalRecord",
    "EntryKind",
    "ResolverConfig",
    "BatchResult",
    "resolve_identifier",
    "resolve_to_biblatex",
    "resolve_many",
    "ResolutionError",
    "UnrecognizedIdentifierError",
    "FetchError",
    "ExtractionError",
    "ValidationError",
    "SerializationError",
]
