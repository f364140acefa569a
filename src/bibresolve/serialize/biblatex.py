"""BibLaTeX writer for canonical records."""

from bibresolve.errors import SerializationError
from bibresolve.models import CanonicalRecord
from bibresolve.serialize.parser import parse_bibliography

__all__ = ["escape_braces", "record_fields", "format_entry", "serialize_record"]

FIELD_INDENT = "    "


def escape_braces(value: str) -> str:
    """Escape literal braces so they survive inside a braced value."""
    return value.replace("{", "\\{").replace("}", "\\}")


def record_fields(record: CanonicalRecord) -> list[tuple[str, str]]:
    """List the BibLaTeX fields of a record in output order.

    Absent and empty values are left out. Authors and editors are joined
    with `` and ``, keywords with ``", "``. Registrar extras come last.

    Parameters
    ----------
    record : CanonicalRecord
        Record to flatten.

    Returns
    -------
    list[tuple[str, str]]
        ``(field, value)`` pairs, values unescaped.
    """
    candidates: list[tuple[str, str | None]] = [
        ("title", record.title),
        ("shorttitle", record.short_title),
        ("date", record.date),
        ("author", " and ".join(record.authors) if record.authors else None),
        ("editor", " and ".join(record.editors) if record.editors else None),
        (record.language_field, record.language),
        ("abstract", record.abstract),
        ("journaltitle", record.journal_title),
        ("booktitle", record.book_title),
        ("eventtitle", record.event_title),
        ("volume", record.volume),
        ("number", record.number),
        ("pages", record.pages),
        ("doi", record.doi),
        ("issn", record.issn),
        ("isbn", record.isbn),
        ("url", record.url),
        ("urldate", record.urldate),
        ("keywords", ", ".join(record.keywords) if record.keywords else None),
        ("publisher", record.publisher),
        ("institution", record.institution),
        ("organization", record.organization),
        ("eprinttype", record.eprint_type),
        ("eprint", record.eprint),
        ("eprintclass", record.eprint_class),
        ("eprintversion", record.eprint_version),
        ("note", record.note),
    ]
    fields = [(name, value) for name, value in candidates if value]
    fields.extend((name, value) for name, value in record.extra if value)
    return fields


def format_entry(record: CanonicalRecord) -> str:
    """Format a record as one BibLaTeX entry block.

    Parameters
    ----------
    record : CanonicalRecord
        Record to format.

    Returns
    -------
    str
        ``@<kind>{<key>,`` followed by one indented ``field = {value},``
        line per field and a closing ``}`` line.

    Examples
    --------
        >>> print(format_entry(record), end="")
        @online{web:example.com:root,
            title = {Home},
            url = {https://example.com/},
        }
    """
    lines = [f"@{record.entry_kind.value}{{{record.key},"]
    for name, value in record_fields(record):
        lines.append(f"{FIELD_INDENT}{name} = {{{escape_braces(value)}}},")
    lines.append("}")
    return "\n".join(lines) + "\n"


def serialize_record(record: CanonicalRecord) -> str:
    """Format a record and verify the text parses back as the same entry.

    Parameters
    ----------
    record : CanonicalRecord
        Validated record.

    Returns
    -------
    str
        BibLaTeX entry text.

    Raises
    ------
    SerializationError
        If the formatted text does not parse back into exactly one entry
        with the record's key, a title and a url.
    """
    text = format_entry(record)
    parsed = parse_bibliography(text)

    if parsed.errors or len(parsed.entries) != 1:
        raise SerializationError(
            f"failed to parse constructed BibLaTeX for {record.key}: "
            f"{len(parsed.entries)} entries, errors={parsed.errors}"
        )
    entry = parsed.entries[0]
    if entry.key != record.key:
        raise SerializationError(
            f"constructed BibLaTeX key mismatch: expected {record.key!r}, got {entry.key!r}"
        )
    if not entry.get("title") or not entry.get("url"):
        raise SerializationError(f"constructed BibLaTeX for {record.key} lost its title or url")
    return text
