"""Parsed identifier value types and stable citation keys.

A parsed identifier is a pure function of the raw input text: building one
never performs I/O. Each family module owns the recognizer that produces
its type.
"""

from dataclasses import dataclass
from urllib.parse import quote, urlsplit

__all__ = [
    "DoiIdentifier",
    "ArxivIdentifier",
    "ConferencePageIdentifier",
    "WebpageIdentifier",
    "ParsedIdentifier",
    "DOI_RESOLVER_BASE",
    "build_citation_key",
]

DOI_RESOLVER_BASE = "https://doi.org"

# Printable ASCII minus the characters a DOI suffix must not carry raw in a
# URL path. Controls and non-ASCII are always encoded by quote().
_DOI_PATH_SAFE = "".join(chr(c) for c in range(0x21, 0x7F) if chr(c) not in ' "#<>?`{}')


@dataclass(frozen=True)
class DoiIdentifier:
    """A DOI split into registrant prefix and item suffix.

    Attributes
    ----------
    prefix : str
        Registrant prefix (e.g., "10.1000").
    suffix : str
        Item suffix (e.g., "182").
    """

    prefix: str
    suffix: str

    @property
    def doi(self) -> str:
        """Full DOI string."""
        return f"{self.prefix}/{self.suffix}"

    @property
    def url(self) -> str:
        """Registrar URL with the suffix percent-encoded."""
        return f"{DOI_RESOLVER_BASE}/{self.prefix}/{quote(self.suffix, safe=_DOI_PATH_SAFE)}"


@dataclass(frozen=True)
class ArxivIdentifier:
    """An arXiv identifier normalized to its canonical id.

    Attributes
    ----------
    canonical_id : str
        Id without version (e.g., "1810.04805" or "astro-ph/0603274").
    version : str | None
        Explicit version number when present (e.g., "2").
    is_legacy : bool
        True for archive/number style ids.
    """

    canonical_id: str
    version: str | None
    is_legacy: bool


@dataclass(frozen=True)
class ConferencePageIdentifier:
    """A canonical USENIX conference presentation URL."""

    url: str


@dataclass(frozen=True)
class WebpageIdentifier:
    """Any http(s) URL handled by the generic webpage family."""

    url: str


ParsedIdentifier = DoiIdentifier | ArxivIdentifier | ConferencePageIdentifier | WebpageIdentifier


def build_citation_key(prefix: str, url: str, default_host: str = "site") -> str:
    """Build a stable citation key from a URL.

    Parameters
    ----------
    prefix : str
        Entry-kind prefix (e.g., "web", "conf", "usenix").
    url : str
        Resolved URL of the item.
    default_host : str, optional
        Host used when the URL has none, by default "site".

    Returns
    -------
    str
        Key of the form ``<prefix>:<host>:<path-slug>``; an empty path maps
        to ``root``, and so does a URL that cannot be parsed.

    Examples
    --------
        >>> build_citation_key("web", "https://example.com/a/b/")
        'web:example.com:a-b'
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return f"{prefix}:{default_host}:root"
    host = parts.hostname or default_host
    path = parts.path.strip("/")
    slug = path.replace("/", "-") if path else "root"
    return f"{prefix}:{host}:{slug}"
