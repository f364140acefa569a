"""Identifier families.

Each family module exposes the same two plain functions:

- ``recognize(raw) -> ParsedIdentifier | None``: pure, never performs I/O
- ``resolve(parsed, fetcher) -> CanonicalRecord``: exactly one fetch

Families:
- doi: DOIs in any common textual or URL form
- arxiv: arXiv ids and abs/pdf URLs
- usenix: canonical USENIX conference presentation pages
- webpage: any other http(s) page (fallback)
"""

from bibresolve.families import arxiv, doi, usenix, webpage

__all__ = ["doi", "arxiv", "usenix", "webpage"]
