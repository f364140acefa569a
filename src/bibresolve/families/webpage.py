"""Generic webpage family, the last-resort fallback.

Any http(s) URL is accepted except known utility endpoints. The record is
synthesized from embedded metadata with conservative heuristics: HighWire
``citation_*`` tags first, then JSON-LD, OpenGraph and plain meta tags,
then raw HTML.
"""

import logging
from urllib.parse import urlsplit

from bibresolve.fetch import Fetcher
from bibresolve.families._page import article_author_names, highwire_creators
from bibresolve.models import CanonicalRecord, EntryKind, WebpageIdentifier, build_citation_key
from bibresolve.normalize import (
    absolutize,
    build_pages,
    clean_doi,
    dedup_casefold,
    derive_short_title,
    first_present,
    invert_simple_name,
    normalize_date,
    normalize_ws,
    pick_earlier_year,
    split_creators,
    split_tags,
    strip_site_suffix,
    usable_creators,
)
from bibresolve.signals import (
    PageSignals,
    json_authors,
    json_date_published,
    json_description,
    json_headline,
    json_keywords,
)
from bibresolve.utils import get_utc_date

__all__ = ["NAME", "DENYLIST", "recognize", "resolve", "classify", "extract_record"]

logger = logging.getLogger(__name__)

NAME = "webpage"

# Utility endpoints that never describe a citable item
DENYLIST = ("jetpack.wordpress.com/jetpack-comment/",)

# HighWire container tag -> (entry kind, key prefix), checked in order
HIGHWIRE_KINDS = (
    (("citation_conference_title", "citation_conference"), EntryKind.INPROCEEDINGS, "conf"),
    (("citation_dissertation_institution",), EntryKind.THESIS, "thesis"),
    (("citation_technical_report_institution",), EntryKind.REPORT, "report"),
    (("citation_journal_title",), EntryKind.ARTICLE, "article"),
    (("citation_inbook_title",), EntryKind.INCOLLECTION, "incollection"),
)
ONLINE_KEY_PREFIX = "web"


def recognize(raw: str) -> WebpageIdentifier | None:
    """Accept any http(s) URL with a host, minus the denylist."""
    url = raw.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        return None
    if any(denied in url for denied in DENYLIST):
        return None
    return WebpageIdentifier(url=url)


def classify(signals: PageSignals) -> tuple[EntryKind, str]:
    """Infer the entry kind and citation-key prefix of a page.

    Without any HighWire tag the page is ``online``. With HighWire tags,
    the first container tag present decides; none present still means
    ``online``.
    """
    if signals.has_highwire:
        for names, kind, prefix in HIGHWIRE_KINDS:
            if signals.meta_value_any(*names) is not None:
                return kind, prefix
    return EntryKind.ONLINE, ONLINE_KEY_PREFIX


def _authors(signals: PageSignals) -> list[str]:
    authors = highwire_creators(signals, "citation_author", "citation_authors")
    if not authors:
        authors = usable_creators(json_authors(signals.json_ld) or [])
    if not authors:
        authors = article_author_names(signals)
    if not authors:
        meta_author = signals.meta_name("author")
        if meta_author:
            authors = usable_creators(split_creators(meta_author))
    if not authors and signals.rel_author:
        authors = [invert_simple_name(signals.rel_author)]
    return dedup_casefold(authors)


def _online_or_year(signals: PageSignals) -> str | None:
    online = signals.meta_value("citation_online_date")
    year = signals.meta_value("citation_year")
    if online and year:
        return pick_earlier_year(online, year)
    return online or year


def extract_record(signals: PageSignals, base_url: str) -> CanonicalRecord:
    """Apply the webpage field precedence to a page's signals.

    Parameters
    ----------
    signals : PageSignals
        Signals of the fetched page.
    base_url : str
        Final URL of the page, or its ``<base href>`` when present.

    Returns
    -------
    CanonicalRecord
        Record keyed on the canonical URL, stamped with today's access date.
    """
    nodes = signals.json_ld
    kind, key_prefix = classify(signals)

    canonical_href = signals.link_href("canonical")
    canonical = (canonical_href and absolutize(base_url, canonical_href)) or base_url

    title = first_present(
        signals.meta_value("citation_title"),
        json_headline(nodes),
        signals.meta_property("og:title"),
        signals.title,
    )
    title = normalize_ws(title or base_url)
    site_name = signals.meta_property("og:site_name")
    if site_name:
        title = strip_site_suffix(title, site_name)

    editors = dedup_casefold(highwire_creators(signals, "citation_editor", "citation_editors"))

    date = normalize_date(
        first_present(
            signals.meta_value("citation_publication_date"),
            signals.meta_value("citation_cover_date"),
            signals.meta_value("citation_date"),
            _online_or_year(signals),
            json_date_published(nodes),
            signals.meta_property("article:published_time"),
            signals.time_datetime,
        )
    )

    journal = signals.meta_value("citation_journal_title")
    book_title = signals.meta_value("citation_inbook_title")
    if book_title is None and journal is None:
        book_title = signals.meta_value("citation_book_title")

    url_candidate = first_present(
        signals.meta_value("citation_public_url"),
        signals.meta_value("citation_abstract_html_url"),
        signals.meta_value("citation_fulltext_html_url"),
        signals.meta_property("og:url"),
    )
    url = (url_candidate and absolutize(base_url, url_candidate)) or canonical

    language = first_present(
        signals.meta_value("citation_language"),
        signals.meta_name("language"),
        signals.meta_name("lang"),
        signals.meta_http_equiv("content-language"),
        signals.html_lang,
    )

    abstract = first_present(
        signals.meta_value("citation_abstract"),
        json_description(nodes),
        signals.meta_name("description"),
    )

    keywords = split_tags(
        first_present(
            signals.meta_value("citation_keywords"),
            json_keywords(nodes),
            signals.meta_name("keywords"),
        )
    )

    return CanonicalRecord(
        entry_kind=kind,
        key=build_citation_key(key_prefix, canonical),
        title=title,
        url=url,
        authors=tuple(_authors(signals)),
        editors=tuple(editors),
        date=date,
        journal_title=journal,
        book_title=book_title,
        event_title=signals.meta_value_any("citation_conference_title", "citation_conference"),
        volume=signals.meta_value("citation_volume"),
        number=first_present(
            signals.meta_value("citation_issue"),
            signals.meta_value("citation_technical_report_number"),
        ),
        pages=build_pages(
            signals.meta_value("citation_firstpage"),
            signals.meta_value("citation_lastpage"),
        ),
        doi=clean_doi(signals.meta_value("citation_doi")),
        issn=first_present(
            signals.meta_value_any("citation_issn", "citation_ISSN"),
            signals.meta_value("citation_eIssn"),
        ),
        urldate=get_utc_date(),
        language=language,
        abstract=normalize_ws(abstract) if abstract else None,
        keywords=tuple(keywords),
        short_title=derive_short_title(title),
        publisher=signals.meta_value("citation_publisher"),
        institution=first_present(
            signals.meta_value("citation_dissertation_institution"),
            signals.meta_value("citation_technical_report_institution"),
        ),
        organization=site_name,
    )


def resolve(parsed: WebpageIdentifier, fetcher: Fetcher) -> CanonicalRecord:
    """Fetch a page once and synthesize its record from embedded metadata."""
    response = fetcher.fetch(parsed.url)
    signals = PageSignals.from_html(response.body)

    base_url = response.final_url
    if signals.base_href:
        base_url = absolutize(base_url, signals.base_href) or base_url

    logger.debug(
        "webpage %s: %d meta tags, highwire=%s",
        base_url,
        len(signals.meta),
        signals.has_highwire,
    )
    return extract_record(signals, base_url)
