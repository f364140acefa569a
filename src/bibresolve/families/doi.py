"""DOI identifier family.

The DOI registrar answers content negotiation with a ready-made BibTeX
entry, so resolution is a field mapping rather than a precedence search.
"""

import logging
import re

from bibresolve.errors import ExtractionError
from bibresolve.fetch import Fetcher
from bibresolve.models import CanonicalRecord, DoiIdentifier, EntryKind
from bibresolve.normalize import (
    clean_doi,
    normalize_date,
    normalize_ws,
    split_tags,
    strip_unescaped_braces,
)
from bibresolve.normalize._helpers import DASHES_RE, DOI_ANYWHERE_RE
from bibresolve.serialize import BibEntry, parse_bibliography

__all__ = ["NAME", "BIBTEX_MEDIA_TYPE", "recognize", "resolve", "entry_to_record"]

logger = logging.getLogger(__name__)

NAME = "doi"
BIBTEX_MEDIA_TYPE = "application/x-bibtex"

PREFIX_RE = re.compile(r"^(?:urn:)?doi:\s*", re.IGNORECASE)
QUERY_OR_FRAGMENT_RE = re.compile(r"[?#]")
TRAILING_PROSE_PUNCTUATION = ".,;:)]}\"'"

MONTHS = {
    "jan": "01",
    "feb": "02",
    "mar": "03",
    "apr": "04",
    "may": "05",
    "jun": "06",
    "jul": "07",
    "aug": "08",
    "sep": "09",
    "oct": "10",
    "nov": "11",
    "dec": "12",
}

# Registrar fields consumed by the mapping below; everything else goes to extra
MAPPED_FIELDS = frozenset(
    {
        "title",
        "shorttitle",
        "author",
        "editor",
        "date",
        "year",
        "month",
        "journal",
        "journaltitle",
        "booktitle",
        "eventtitle",
        "volume",
        "number",
        "issue",
        "pages",
        "doi",
        "url",
        "issn",
        "isbn",
        "publisher",
        "abstract",
        "keywords",
        "language",
        "langid",
        "institution",
        "school",
        "organization",
        "note",
        "urldate",
    }
)


def recognize(raw: str) -> DoiIdentifier | None:
    """Find the first DOI in a string.

    Known textual prefixes are stripped, anything after the first ``?`` or
    ``#`` is dropped and trailing prose punctuation trimmed before the
    search. The DOI may sit anywhere in the remaining text.

    Parameters
    ----------
    raw : str
        Raw identifier text (bare DOI, ``doi:`` form, doi.org URL or prose).

    Returns
    -------
    DoiIdentifier | None
        Prefix and suffix of the first DOI found, or None.

    Examples
    --------
        >>> recognize("see https://doi.org/10.1000/xyz123?foo=bar.")
        DoiIdentifier(prefix='10.1000', suffix='xyz123')
    """
    text = PREFIX_RE.sub("", raw.strip(), count=1)
    text = QUERY_OR_FRAGMENT_RE.split(text, maxsplit=1)[0]
    text = text.rstrip(TRAILING_PROSE_PUNCTUATION)

    match = DOI_ANYWHERE_RE.search(text)
    if match is None:
        return None
    return DoiIdentifier(prefix=match.group(1), suffix=match.group(2))


def _clean(value: str | None) -> str | None:
    """Collapse whitespace and brace markup of a registrar value."""
    if value is None:
        return None
    cleaned = strip_unescaped_braces(normalize_ws(value))
    return cleaned or None


def _names(value: str | None) -> tuple[str, ...]:
    cleaned = _clean(value)
    if not cleaned:
        return ()
    return tuple(name.strip() for name in cleaned.split(" and ") if name.strip())


def _registrar_date(entry: BibEntry) -> str | None:
    date = normalize_date(_clean(entry.get("date")))
    if date:
        return date

    year = normalize_date(_clean(entry.get("year")))
    if not year:
        return None
    month = (_clean(entry.get("month")) or "").lower()
    if month[:3] in MONTHS:
        return f"{year}-{MONTHS[month[:3]]}"
    if month.isdigit() and 1 <= int(month) <= 12:
        return f"{year}-{int(month):02d}"
    return year


def _pages(value: str | None) -> str | None:
    cleaned = _clean(value)
    if not cleaned:
        return None
    return DASHES_RE.sub("-", cleaned).replace("--", "-")


def entry_to_record(entry: BibEntry, parsed: DoiIdentifier) -> CanonicalRecord:
    """Map a registrar BibTeX entry onto a canonical record.

    Parameters
    ----------
    entry : BibEntry
        First entry of the registrar response.
    parsed : DoiIdentifier
        DOI that was resolved.

    Returns
    -------
    CanonicalRecord
        Record keeping the registrar's entry type and key. ``url`` falls
        back to the doi.org URL and ``doi`` to the recognized DOI.
        Unmapped fields are kept verbatim in ``extra``.
    """
    language_field = "language" if entry.get("language") else "langid"
    institution = _clean(entry.get("institution")) or _clean(entry.get("school"))

    extra = tuple(
        (name, value) for name, value in entry.fields if name not in MAPPED_FIELDS and value
    )

    return CanonicalRecord(
        entry_kind=EntryKind.from_bibtex(entry.entry_type),
        key=entry.key or f"doi:{parsed.doi}",
        title=_clean(entry.get("title")) or "",
        url=_clean(entry.get("url")) or parsed.url,
        authors=_names(entry.get("author")),
        editors=_names(entry.get("editor")),
        date=_registrar_date(entry),
        journal_title=_clean(entry.get("journaltitle")) or _clean(entry.get("journal")),
        book_title=_clean(entry.get("booktitle")),
        event_title=_clean(entry.get("eventtitle")),
        volume=_clean(entry.get("volume")),
        number=_clean(entry.get("number")) or _clean(entry.get("issue")),
        pages=_pages(entry.get("pages")),
        doi=clean_doi(entry.get("doi")) or parsed.doi,
        issn=_clean(entry.get("issn")),
        isbn=_clean(entry.get("isbn")),
        urldate=_clean(entry.get("urldate")),
        language=_clean(entry.get(language_field)),
        language_field=language_field,
        abstract=_clean(entry.get("abstract")),
        keywords=tuple(split_tags(_clean(entry.get("keywords")))),
        short_title=_clean(entry.get("shorttitle")),
        publisher=_clean(entry.get("publisher")),
        institution=institution,
        organization=_clean(entry.get("organization")),
        note=_clean(entry.get("note")),
        extra=extra,
    )


def resolve(parsed: DoiIdentifier, fetcher: Fetcher) -> CanonicalRecord:
    """Fetch the registrar's BibTeX for a DOI and map it to a record.

    Raises
    ------
    ExtractionError
        If the response holds no bibliography entry.
    """
    response = fetcher.fetch(parsed.url, {"Accept": BIBTEX_MEDIA_TYPE})
    result = parse_bibliography(response.body)
    if not result.entries:
        detail = f": {result.errors[0]}" if result.errors else ""
        raise ExtractionError(f"empty bibliography for DOI {parsed.doi}{detail}", identifier=parsed.doi)

    logger.debug("DOI %s: registrar entry @%s", parsed.doi, result.entries[0].entry_type)
    return entry_to_record(result.entries[0], parsed)
