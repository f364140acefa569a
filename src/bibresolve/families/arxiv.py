"""arXiv identifier family.

Recognizes bare arXiv ids (new-style ``YYMM.NNNNN`` and legacy
``archive/NNNNNNN``, each with an optional ``vN``), ``arXiv:`` prefixed ids
and ``abs/`` or ``pdf/`` URLs on arXiv hosts. Resolution queries the arXiv
Atom API for the single record.
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from urllib.parse import urlencode

from bibresolve.errors import ExtractionError
from bibresolve.fetch import Fetcher
from bibresolve.families.arxiv_categories import archive_of, map_category
from bibresolve.models import ArxivIdentifier, CanonicalRecord, EntryKind
from bibresolve.normalize import dedup_casefold, normalize_date, normalize_ws
from bibresolve.normalize._helpers import DOI_IN_URL_RE

__all__ = [
    "NAME",
    "ARXIV_API_URL",
    "AtomEntry",
    "recognize",
    "resolve",
    "parse_atom_entry",
    "build_record",
]

logger = logging.getLogger(__name__)

NAME = "arxiv"
ARXIV_API_URL = "https://export.arxiv.org/api/query"
ARXIV_ABS_URL = "https://arxiv.org/abs/"
ARXIV_DOI_PREFIX = "10.48550/arXiv."
ARXIV_HOST_SUFFIXES = ("arxiv.org", "xxx.lanl.gov", "export.arxiv.org")

PREFIX_RE = re.compile(r"^arxiv:\s*", re.IGNORECASE)
NEW_STYLE_RE = re.compile(r"^(?P<core>\d{4}\.\d{4,5})(?:v(?P<version>\d+))?$", re.ASCII)
LEGACY_RE = re.compile(
    r"^(?P<core>[A-Za-z-]+(?:\.[A-Za-z-]+)?/\d{7})(?:v(?P<version>\d+))?$",
    re.ASCII,
)


@dataclass
class AtomEntry:
    """Fields read from the first ``<entry>`` of an arXiv Atom feed."""

    title: str = ""
    summary: str = ""
    updated: str | None = None
    authors: list[str] = field(default_factory=list)
    published_doi: str | None = None
    primary_category: str | None = None
    categories: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


def _strip_url(text: str) -> str | None:
    """Reduce an arXiv URL to its id path; None for unsupported arXiv pages.

    Non-arXiv text is returned unchanged.
    """
    scheme, sep, rest = text.partition("://")
    if not sep or scheme not in ("http", "https"):
        return text
    host, slash, path = rest.partition("/")
    if not slash or not host.lower().endswith(ARXIV_HOST_SUFFIXES):
        return text

    path = path.split("?", 1)[0].split("#", 1)[0]
    if path.startswith("abs/"):
        return path[len("abs/") :]
    if path.startswith("pdf/"):
        return path[len("pdf/") :].removesuffix(".pdf")
    # find/, list/, search/ and anything else list several items or none
    return None


def recognize(raw: str) -> ArxivIdentifier | None:
    """Recognize an arXiv id or URL.

    Parameters
    ----------
    raw : str
        Raw identifier text.

    Returns
    -------
    ArxivIdentifier | None
        Canonical id, optional version and legacy flag; None if the text is
        not an arXiv id.

    Examples
    --------
        >>> recognize("https://arxiv.org/pdf/1810.04805v1.pdf")
        ArxivIdentifier(canonical_id='1810.04805', version='1', is_legacy=False)
    """
    text = PREFIX_RE.sub("", raw.strip(), count=1)
    stripped = _strip_url(text)
    if stripped is None:
        return None
    text = stripped.strip("/")

    match = NEW_STYLE_RE.match(text)
    if match:
        return ArxivIdentifier(match.group("core"), match.group("version"), is_legacy=False)

    match = LEGACY_RE.match(text)
    if match:
        return ArxivIdentifier(match.group("core"), match.group("version"), is_legacy=True)

    return None


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def parse_atom_entry(xml_text: str, arxiv_id: str) -> AtomEntry:
    """Read the first entry of an arXiv Atom response.

    Elements are matched by local name, so namespace prefixes do not
    matter. The first DOI seen, from a related doi.org link or from
    ``<arxiv:doi>``, wins.

    Parameters
    ----------
    xml_text : str
        Atom document.
    arxiv_id : str
        Requested id, used in error messages.

    Returns
    -------
    AtomEntry
        Extracted fields.

    Raises
    ------
    ExtractionError
        If the XML is malformed, or no entry carries a title, summary or
        author.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise ExtractionError(f"XML parse error: {exc}", identifier=arxiv_id) from exc

    entry = next((el for el in root.iter() if _local_name(el.tag) == "entry"), None)
    if entry is None:
        raise ExtractionError(f"no Atom entry found for arXiv id {arxiv_id}", identifier=arxiv_id)

    atom = AtomEntry()
    for child in entry:
        name = _local_name(child.tag)
        if name == "title":
            atom.title = normalize_ws("".join(child.itertext()))
        elif name == "summary":
            atom.summary = _text(child)
        elif name == "updated":
            atom.updated = _text(child) or None
        elif name == "author":
            for part in child:
                if _local_name(part.tag) == "name" and _text(part):
                    atom.authors.append(_text(part))
        elif name == "primary_category":
            atom.primary_category = child.get("term") or atom.primary_category
        elif name == "category":
            if child.get("term"):
                atom.categories.append(child.get("term"))
        elif name == "link":
            match = DOI_IN_URL_RE.search(child.get("href", ""))
            if child.get("rel") == "related" and match and atom.published_doi is None:
                atom.published_doi = match.group("doi")
        elif name == "doi":
            if _text(child) and atom.published_doi is None:
                atom.published_doi = _text(child)
        elif name == "comment":
            if _text(child):
                atom.comments.append(_text(child))

    if not atom.title and not atom.summary and not atom.authors:
        raise ExtractionError(f"no Atom entry found for arXiv id {arxiv_id}", identifier=arxiv_id)
    return atom


def _keywords(atom: AtomEntry) -> list[str]:
    labels = [map_category(term, atom.primary_category) for term in atom.categories]
    keywords = dedup_casefold(label for label in labels if label)
    if not keywords and atom.primary_category:
        label = map_category(atom.primary_category, atom.primary_category)
        if label:
            keywords.append(label)
    return keywords


def build_record(atom: AtomEntry, parsed: ArxivIdentifier) -> CanonicalRecord:
    """Synthesize the ``@online`` record for an arXiv entry.

    Parameters
    ----------
    atom : AtomEntry
        Parsed Atom fields.
    parsed : ArxivIdentifier
        Recognized identifier.

    Returns
    -------
    CanonicalRecord
        Record keyed ``arXiv:<id>``; the DOI falls back to the
        arXiv-minted ``10.48550/arXiv.<id>``.
    """
    arxiv_id = parsed.canonical_id
    key = f"arXiv:{arxiv_id}"

    eprint_class = None
    if not parsed.is_legacy and atom.primary_category:
        eprint_class = archive_of(atom.primary_category)

    note = "; ".join(f"Comment: {comment}" for comment in atom.comments) or None

    return CanonicalRecord(
        entry_kind=EntryKind.ONLINE,
        key=key,
        title=atom.title,
        url=f"{ARXIV_ABS_URL}{arxiv_id}",
        authors=tuple(atom.authors),
        date=normalize_date(atom.updated),
        doi=atom.published_doi or f"{ARXIV_DOI_PREFIX}{arxiv_id}",
        abstract=atom.summary or None,
        keywords=tuple(_keywords(atom)),
        publisher="arXiv",
        number=key,
        note=note,
        eprint_type="arXiv",
        eprint=arxiv_id,
        eprint_class=eprint_class,
        eprint_version=parsed.version,
    )


def resolve(parsed: ArxivIdentifier, fetcher: Fetcher) -> CanonicalRecord:
    """Query the arXiv API for one id and build its record."""
    query = urlencode({"id_list": parsed.canonical_id, "max_results": 1})
    response = fetcher.fetch(f"{ARXIV_API_URL}?{query}", api=True)
    logger.debug("arXiv %s: %d bytes of Atom", parsed.canonical_id, len(response.body))
    atom = parse_atom_entry(response.body, parsed.canonical_id)
    return build_record(atom, parsed)
