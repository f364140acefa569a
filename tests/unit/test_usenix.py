"""Tests for the USENIX conference-page family."""

import pytest

from bibresolve.errors import FetchError
from bibresolve.families import usenix
from bibresolve.models import ConferencePageIdentifier, EntryKind
from bibresolve.signals import PageSignals

PAGE_URL = "https://www.usenix.org/conference/usenixsecurity24/presentation/example"

HIGHWIRE_HEAD = """
<title>Some Paper Title | USENIX</title>
<meta property="og:site_name" content="USENIX">
<meta property="og:title" content="Some Paper Title | USENIX">
<meta name="citation_title" content="Some Paper Title">
<meta name="citation_author" content="Alice Example">
<meta name="citation_author" content="Bob Example">
<meta name="citation_author" content="alice example">
<meta name="citation_conference_title" content="33rd USENIX Security Symposium (USENIX Security 24)">
<meta name="citation_publication_date" content="2024/08/14">
<meta name="citation_firstpage" content="1001">
<meta name="citation_lastpage" content="1018">
<meta name="citation_isbn" content="978-1-939133-44-1">
<meta name="citation_pdf_url" content="https://www.usenix.org/system/files/sec24-example.pdf">
"""

JSON_LD_HEAD = """
<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "ScholarlyArticle",
  "name": "JSON {Title}: With Braces",
  "alternativeHeadline": "JSON Short",
  "author": [{"@type": "Person", "name": "Carol Json"}],
  "datePublished": "2023-01-05",
  "url": "/conference/nsdi23/presentation/canonical",
  "isPartOf": {"@type": "Event", "name": "NSDI '23"}
}
</script>
<meta name="citation_title" content="HighWire Title">
<meta name="citation_author" content="Dave Highwire">
<meta name="citation_publication_date" content="2022/02/02">
<meta name="language" content="English">
"""


def _signals(html_page, head: str) -> PageSignals:
    return PageSignals.from_html(html_page(head=head))


# ---------------------------------------------------------------------------
# recognize
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        PAGE_URL,
        "https://www.usenix.org/conference/nsdi23/presentation",
        "https://www.usenix.org/conference/atc22/presentation/smith?tab=paper#abstract",
    ],
)
def test_recognize_canonical_presentation_urls(raw: str) -> None:
    """Test canonical presentation URLs are recognized verbatim."""
    assert usenix.recognize(raw) == ConferencePageIdentifier(url=raw)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "http://www.usenix.org/conference/x/presentation/y",
        "https://usenix.org/conference/x/presentation/y",
        "https://www.usenix.org/publications/login/fall2024/example",
        "https://www.usenix.org/conference/x/presentations",
        "https://WWW.USENIX.ORG/conference/x/presentation/y",
        " " + PAGE_URL,
        "https://www.usenix.org/event/sec09/presentation/smith",
        "https://www.usenix.org/conference/osdi24/program",
        "https://blog.usenix.org/conference/x/presentation/y",
    ],
)
def test_recognize_rejects_other_shapes(raw: str) -> None:
    """Test other schemes, hosts, paths and untrimmed input are rejected."""
    assert usenix.recognize(raw) is None


# ---------------------------------------------------------------------------
# extract_record
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_extract_record_from_highwire(html_page) -> None:
    """Test a HighWire-only presentation page."""
    record = usenix.extract_record(_signals(html_page, HIGHWIRE_HEAD), PAGE_URL)

    assert record.entry_kind is EntryKind.INPROCEEDINGS
    assert record.key == "usenix:www.usenix.org:conference-usenixsecurity24-presentation-example"
    assert record.title == "Some Paper Title"
    assert record.authors == ("Alice Example", "Bob Example")
    assert record.date == "2024-08-14"
    assert record.book_title == "33rd USENIX Security Symposium (USENIX Security 24)"
    assert record.pages == "1001-1018"
    assert record.isbn == "978-1-939133-44-1"
    assert record.url == PAGE_URL
    assert record.language is None
    assert record.language_field == "language"
    assert record.short_title is None


@pytest.mark.unit
def test_extract_record_prefers_json_ld(html_page) -> None:
    """Test JSON-LD wins over HighWire for title, authors, date, url and container."""
    url = "https://www.usenix.org/conference/nsdi23/presentation/json"

    record = usenix.extract_record(_signals(html_page, JSON_LD_HEAD), url)

    assert record.title == "JSON Title: With Braces"
    assert record.authors == ("Carol Json",)
    assert record.date == "2023-01-05"
    assert record.url == "https://www.usenix.org/conference/nsdi23/presentation/canonical"
    assert record.book_title == "NSDI '23"
    assert record.entry_kind is EntryKind.INPROCEEDINGS
    assert record.short_title == "JSON Short"
    assert record.language == "English"
    assert record.key == "usenix:www.usenix.org:conference-nsdi23-presentation-json"


@pytest.mark.unit
def test_extract_record_ignores_non_article_json_ld_authors(html_page) -> None:
    """Test JSON-LD authors count only for article-like types."""
    head = (
        '<script type="application/ld+json">{"@type": "WebPage", "author": "Web Master"}</script>'
        '<meta name="citation_author" content="Real Author">'
        '<meta name="citation_title" content="T">'
    )

    record = usenix.extract_record(_signals(html_page, head), PAGE_URL)

    assert record.authors == ("Real Author",)


@pytest.mark.unit
def test_extract_record_drops_unusable_json_ld_authors(html_page) -> None:
    """Test blank, URL and handle author names from JSON-LD are dropped."""
    head = (
        '<script type="application/ld+json">'
        '{"@type": "ScholarlyArticle", "name": "T", "author": '
        '[{"name": "  "}, {"name": "Carol Json"}, "https://example.com/carol", "@carol"]}'
        "</script>"
    )

    record = usenix.extract_record(_signals(html_page, head), PAGE_URL)

    assert record.authors == ("Carol Json",)


@pytest.mark.unit
def test_extract_record_malformed_json_ld_url_falls_back(html_page) -> None:
    """Test an unparseable JSON-LD url leaves the page URL in place."""
    head = (
        '<script type="application/ld+json">'
        '{"@type": "ScholarlyArticle", "name": "T", "url": "http://[bad"}'
        "</script>"
    )

    record = usenix.extract_record(_signals(html_page, head), PAGE_URL)

    assert record.url == PAGE_URL


@pytest.mark.unit
def test_extract_record_og_fallbacks(html_page) -> None:
    """Test OpenGraph title with site suffix, article:author names and no container."""
    head = """
    <meta property="og:site_name" content="USENIX">
    <meta property="og:title" content="Only OG: A Title - USENIX">
    <meta property="article:author" content="https://www.facebook.com/usenix">
    <meta property="article:author" content="Erin Writer">
    <meta property="article:published_time" content="2020-10-01T12:00:00Z">
    """

    record = usenix.extract_record(_signals(html_page, head), PAGE_URL)

    assert record.entry_kind is EntryKind.ARTICLE
    assert record.title == "Only OG: A Title"
    assert record.short_title == "Only OG"
    assert record.authors == ("Erin Writer",)
    assert record.date == "2020-10-01"
    assert record.book_title is None


@pytest.mark.unit
def test_extract_record_title_falls_back_to_url(html_page) -> None:
    """Test a page without any title signal is titled by its URL."""
    record = usenix.extract_record(_signals(html_page, ""), PAGE_URL)

    assert record.title == PAGE_URL


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_resolve_fetches_page_once(fake_fetcher, html_page) -> None:
    """Test one fetch and extraction against the final URL."""
    fake_fetcher.add(PAGE_URL, html_page(head=HIGHWIRE_HEAD))

    record = usenix.resolve(ConferencePageIdentifier(url=PAGE_URL), fake_fetcher)

    assert record.title == "Some Paper Title"
    assert fake_fetcher.urls == [PAGE_URL]


@pytest.mark.unit
def test_resolve_rejects_non_html(fake_fetcher) -> None:
    """Test a declared non-HTML content type is a fetch error."""
    fake_fetcher.add(PAGE_URL, "%PDF-1.7", content_type="application/pdf")

    with pytest.raises(FetchError, match="non-HTML content-type"):
        usenix.resolve(ConferencePageIdentifier(url=PAGE_URL), fake_fetcher)


@pytest.mark.unit
def test_resolve_accepts_missing_content_type(fake_fetcher, html_page) -> None:
    """Test a response without a Content-Type header is parsed as HTML."""
    fake_fetcher.add(PAGE_URL, html_page(head=HIGHWIRE_HEAD), content_type=None)

    record = usenix.resolve(ConferencePageIdentifier(url=PAGE_URL), fake_fetcher)

    assert record.entry_kind is EntryKind.INPROCEEDINGS
