"""BibLaTeX serialization.

- format_entry / serialize_record: canonical record to BibLaTeX text
- parse_bibliography: BibTeX/BibLaTeX text to entries
"""

from bibresolve.serialize.biblatex import (
    escape_braces,
    format_entry,
    record_fields,
    serialize_record,
)
from bibresolve.serialize.parser import BibEntry, ParseResult, parse_bibliography

__all__ = [
    "escape_braces",
    "format_entry",
    "record_fields",
    "serialize_record",
    "BibEntry",
    "ParseResult",
    "parse_bibliography",
]
