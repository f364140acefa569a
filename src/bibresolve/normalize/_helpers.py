"""Helper functions and compiled regex patterns for normalization.

Patterns are compiled once at import time and shared read-only by every
worker thread.
"""

import re
from collections.abc import Iterable
from urllib.parse import urljoin, urlsplit

# Pre-compiled regex patterns
WHITESPACE_RE = re.compile(r"\s+")
DOI_ANYWHERE_RE = re.compile(r"\b(10\.\d{4,9})/([-._;()/:A-Z0-9]+)\b", re.IGNORECASE)
DOI_IN_URL_RE = re.compile(
    r"https?://(?:dx\.)?doi\.org/(?P<doi>10\.\d{4,9}/[-._;()/:A-Z0-9]+)",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(\d{4})\b", re.ASCII)
DASHES_RE = re.compile("[–—]")


def normalize_ws(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim.

    Parameters
    ----------
    text : str
        Raw text.

    Returns
    -------
    str
        Text with normalized whitespace.
    """
    return WHITESPACE_RE.sub(" ", text).strip()


def dedup_casefold(values: Iterable[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling and order.

    Parameters
    ----------
    values : Iterable[str]
        Values in priority order.

    Returns
    -------
    list[str]
        Deduplicated values.
    """
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        folded = value.casefold()
        if folded in seen:
            continue
        seen.add(folded)
        out.append(value)
    return out


def first_present(*candidates: str | None) -> str | None:
    """Return the first candidate that is not None or blank.

    This is the building block of every field precedence chain.
    """
    for candidate in candidates:
        if candidate is not None and candidate.strip():
            return candidate
    return None


def is_absolute_url(value: str) -> bool:
    """Whether a value is an absolute URL with scheme and host."""
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def absolutize(base: str, candidate: str) -> str | None:
    """Resolve a possibly relative or scheme-relative URL against a base.

    Parameters
    ----------
    base : str
        Base URL of the document.
    candidate : str
        URL as found in the document.

    Returns
    -------
    str | None
        Absolute URL, or None when either URL is malformed (e.g., an
        unterminated IPv6 host).
    """
    candidate = candidate.strip()
    if is_absolute_url(candidate):
        return candidate
    try:
        return urljoin(base, candidate)
    except ValueError:
        return None
