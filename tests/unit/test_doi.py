"""Tests for the DOI family."""

import pytest

from bibresolve.errors import ExtractionError, FetchError
from bibresolve.families import doi
from bibresolve.models import DoiIdentifier, EntryKind
from bibresolve.serialize import parse_bibliography

REGISTRAR_BIBTEX = (
    " @article{Vaswani_2017, title={Attention Is {All} You Need}, volume={30}, "
    "ISSN={1049-5258}, url={http://dx.doi.org/10.5555/3295222.3295349}, "
    "DOI={10.5555/3295222.3295349}, "
    "journal={Advances in Neural Information Processing Systems}, "
    "publisher={Curran Associates}, author={Vaswani, Ashish and Shazeer, Noam}, "
    "year={2017}, month=dec, pages={5998--6008}, collection={NIPS'17} }\n"
)

PARSED = DoiIdentifier(prefix="10.5555", suffix="3295222.3295349")


# ---------------------------------------------------------------------------
# recognize
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "10.1000/182",
        "  10.1000/182  ",
        "doi:10.1000/182",
        "DOI: 10.1000/182",
        "urn:doi:10.1000/182",
        "URN:DOI:10.1000/182",
        "https://doi.org/10.1000/182",
        "https://dx.doi.org/10.1000/182?utm_source=x",
        "https://doi.org/10.1000/182#section",
        "10.1000/182.",
        "(see 10.1000/182)",
    ],
)
def test_recognize_common_forms(raw: str) -> None:
    """Test prefixes, URL wrappers, queries and prose punctuation are handled."""
    assert doi.recognize(raw) == DoiIdentifier(prefix="10.1000", suffix="182")


@pytest.mark.unit
def test_recognize_takes_first_of_several_dois() -> None:
    """Test text holding two DOIs yields the first one."""
    parsed = doi.recognize("see 10.1000/aaa and 10.2000/bbb")

    assert parsed == DoiIdentifier(prefix="10.1000", suffix="aaa")


@pytest.mark.unit
def test_recognize_keeps_structured_suffix() -> None:
    """Test dots, slashes and parentheses inside a suffix are kept."""
    parsed = doi.recognize("10.1002/(SICI)1097-4571(199806)49:8/693")

    assert parsed is not None
    assert parsed.suffix == "(SICI)1097-4571(199806)49:8/693"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    ["not a doi", "https://example.com/", "1706.03762", "10.12/too-short-prefix"],
)
def test_recognize_rejects_non_dois(raw: str) -> None:
    """Test text without a DOI is not recognized."""
    assert doi.recognize(raw) is None


# ---------------------------------------------------------------------------
# entry_to_record
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_entry_to_record_maps_registrar_fields() -> None:
    """Test the registrar entry is mapped field by field."""
    entry = parse_bibliography(REGISTRAR_BIBTEX).entries[0]

    record = doi.entry_to_record(entry, PARSED)

    assert record.entry_kind is EntryKind.ARTICLE
    assert record.key == "Vaswani_2017"
    assert record.title == "Attention Is All You Need"
    assert record.authors == ("Vaswani, Ashish", "Shazeer, Noam")
    assert record.date == "2017-12"
    assert record.journal_title == "Advances in Neural Information Processing Systems"
    assert record.volume == "30"
    assert record.pages == "5998-6008"
    assert record.doi == "10.5555/3295222.3295349"
    assert record.issn == "1049-5258"
    assert record.url == "http://dx.doi.org/10.5555/3295222.3295349"
    assert record.publisher == "Curran Associates"
    assert record.language_field == "langid"
    assert record.extra == (("collection", "NIPS'17"),)


@pytest.mark.unit
def test_entry_to_record_fallbacks() -> None:
    """Test url, doi and key fall back to the recognized DOI."""
    entry = parse_bibliography("@misc{, title={Untitled Dataset}, year={2021}, month={3}}").entries[0]
    parsed = DoiIdentifier(prefix="10.1000", suffix="182")

    record = doi.entry_to_record(entry, parsed)

    assert record.entry_kind is EntryKind.MISC
    assert record.key == "doi:10.1000/182"
    assert record.url == "https://doi.org/10.1000/182"
    assert record.doi == "10.1000/182"
    assert record.date == "2021-03"


@pytest.mark.unit
def test_entry_to_record_prefers_full_date_and_language_field() -> None:
    """Test an explicit date wins over year/month and language is kept as is."""
    text = (
        "@inproceedings{k, title={T}, date={2019-05-01}, year={2018}, "
        "language={english}, school={MIT}, number={4}}"
    )
    entry = parse_bibliography(text).entries[0]

    record = doi.entry_to_record(entry, PARSED)

    assert record.entry_kind is EntryKind.INPROCEEDINGS
    assert record.date == "2019-05-01"
    assert record.language == "english"
    assert record.language_field == "language"
    assert record.institution == "MIT"
    assert record.number == "4"


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_resolve_requests_bibtex(fake_fetcher) -> None:
    """Test one fetch of the doi.org URL with the BibTeX media type."""
    fake_fetcher.add(PARSED.url, REGISTRAR_BIBTEX, content_type="application/x-bibtex")

    record = doi.resolve(PARSED, fake_fetcher)

    assert record.key == "Vaswani_2017"
    assert fake_fetcher.calls == [
        ("https://doi.org/10.5555/3295222.3295349", {"Accept": "application/x-bibtex"}, False)
    ]


@pytest.mark.unit
def test_resolve_empty_response_is_extraction_error(fake_fetcher) -> None:
    """Test a response without any entry fails extraction."""
    fake_fetcher.add(PARSED.url, "<html>Not BibTeX</html>", content_type="text/html")

    with pytest.raises(ExtractionError, match="empty bibliography"):
        doi.resolve(PARSED, fake_fetcher)


@pytest.mark.unit
def test_resolve_propagates_fetch_errors(fake_fetcher) -> None:
    """Test registrar failures surface as fetch errors."""
    with pytest.raises(FetchError, match="404"):
        doi.resolve(DoiIdentifier(prefix="10.1000", suffix="missing"), fake_fetcher)
