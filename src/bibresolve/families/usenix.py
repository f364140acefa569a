"""USENIX conference-presentation family.

Only the canonical ``https://www.usenix.org/conference/<x>/presentation/<y>``
shape is recognized; other schemes, hosts and path families are rejected,
not corrected. Field precedence prefers JSON-LD, then HighWire
``citation_*`` tags, then OpenGraph tags and raw HTML fallbacks.
"""

import logging
import re

from bibresolve.fetch import Fetcher
from bibresolve.families._page import article_author_names, highwire_creators, require_html
from bibresolve.models import (
    CanonicalRecord,
    ConferencePageIdentifier,
    EntryKind,
    build_citation_key,
)
from bibresolve.normalize import (
    absolutize,
    build_pages,
    clean_doi,
    dedup_casefold,
    derive_short_title,
    first_present,
    normalize_date,
    normalize_ws,
    strip_site_suffix,
    strip_unescaped_braces,
    usable_creators,
)
from bibresolve.signals import (
    PageSignals,
    json_alternative_headline,
    json_authors,
    json_date_published,
    json_has_article_type,
    json_is_part_of_name,
    json_name,
    json_url,
)

__all__ = ["NAME", "PRESENTATION_URL_RE", "recognize", "resolve", "extract_record"]

logger = logging.getLogger(__name__)

NAME = "usenix"
PRESENTATION_URL_RE = re.compile(
    r"^https://www\.usenix\.org/conference/.*/presentation(?:[/?#].*)?$"
)


def recognize(raw: str) -> ConferencePageIdentifier | None:
    """Recognize a canonical USENIX presentation URL.

    The match is case-sensitive and anchored; surrounding whitespace is
    not trimmed.
    """
    if PRESENTATION_URL_RE.match(raw) is None:
        return None
    return ConferencePageIdentifier(url=raw)


def _authors(signals: PageSignals) -> list[str]:
    authors: list[str] = []
    if json_has_article_type(signals.json_ld):
        authors = usable_creators(json_authors(signals.json_ld) or [])
    if not authors:
        authors = highwire_creators(signals, "citation_author", "citation_authors")
    if not authors:
        authors = article_author_names(signals)
    return dedup_casefold(authors)


def extract_record(signals: PageSignals, final_url: str) -> CanonicalRecord:
    """Apply the USENIX field precedence to a page's signals.

    Parameters
    ----------
    signals : PageSignals
        Signals of the fetched presentation page.
    final_url : str
        URL the page was served from; key source and last-resort URL.

    Returns
    -------
    CanonicalRecord
        ``inproceedings`` when a conference container is known, otherwise
        ``article``. The title has its unescaped brace groups collapsed.
    """
    nodes = signals.json_ld

    title = first_present(
        json_name(nodes),
        signals.meta_value("citation_title"),
        signals.meta_property("og:title"),
        signals.title,
    )
    title = normalize_ws(title or final_url)
    site_name = signals.meta_property("og:site_name")
    if site_name:
        title = strip_site_suffix(title, site_name)
    title = strip_unescaped_braces(title)

    date = normalize_date(
        first_present(
            json_date_published(nodes),
            signals.meta_value("citation_publication_date"),
            signals.meta_value("citation_cover_date"),
            signals.meta_value("citation_date"),
            signals.meta_property("article:published_time"),
        )
    )

    book_title = first_present(
        signals.meta_value("citation_conference_title"),
        json_is_part_of_name(nodes),
    )

    url_candidate = first_present(
        json_url(nodes),
        signals.meta_value("citation_public_url"),
        signals.meta_value("citation_abstract_html_url"),
        signals.meta_value("citation_fulltext_html_url"),
        signals.meta_property("og:url"),
    )
    url = (url_candidate and absolutize(final_url, url_candidate)) or final_url

    language = first_present(
        signals.meta_value("citation_language"),
        signals.meta_name("language"),
        signals.meta_name("lang"),
    )

    short_title = first_present(json_alternative_headline(nodes), derive_short_title(title))

    return CanonicalRecord(
        entry_kind=EntryKind.INPROCEEDINGS if book_title else EntryKind.ARTICLE,
        key=build_citation_key(NAME, final_url),
        title=title,
        url=url,
        authors=tuple(_authors(signals)),
        date=date,
        journal_title=signals.meta_value("citation_journal_title"),
        book_title=book_title,
        volume=signals.meta_value("citation_volume"),
        number=signals.meta_value("citation_issue"),
        pages=build_pages(
            signals.meta_value("citation_firstpage"),
            signals.meta_value("citation_lastpage"),
        ),
        doi=clean_doi(signals.meta_value("citation_doi")),
        isbn=signals.meta_value("citation_isbn"),
        language=language,
        language_field="language",
        short_title=short_title,
    )


def resolve(parsed: ConferencePageIdentifier, fetcher: Fetcher) -> CanonicalRecord:
    """Fetch a presentation page once and synthesize its record.

    Raises
    ------
    FetchError
        If the page cannot be fetched or is not HTML.
    """
    response = fetcher.fetch(parsed.url)
    require_html(response, parsed.url)
    signals = PageSignals.from_html(response.body)
    logger.debug(
        "USENIX %s: %d meta tags, %d JSON-LD nodes",
        response.final_url,
        len(signals.meta),
        len(signals.json_ld),
    )
    return extract_record(signals, response.final_url)
