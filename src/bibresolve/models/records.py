"""Canonical record data models for bibresolve.

Every identifier family produces a ``CanonicalRecord``; the serializer and
the batch runner consume nothing else.
"""

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any

from bibresolve.errors import ValidationError

__all__ = [
    "EntryKind",
    "CanonicalRecord",
    "JobResult",
    "validate_record",
]


class EntryKind(str, Enum):
    """BibLaTeX entry type of a resolved record.

    The first six are synthesized by the HTML and arXiv families. ``BOOK``
    and ``MISC`` only carry registrar entries returned for DOIs.
    """

    ARTICLE = "article"
    INPROCEEDINGS = "inproceedings"
    THESIS = "thesis"
    REPORT = "report"
    INCOLLECTION = "incollection"
    ONLINE = "online"
    BOOK = "book"
    MISC = "misc"

    @classmethod
    def from_bibtex(cls, entry_type: str) -> "EntryKind":
        """Map a BibTeX/BibLaTeX entry type onto an entry kind.

        Parameters
        ----------
        entry_type : str
            Entry type as read from a bibliography (case-insensitive).

        Returns
        -------
        EntryKind
            Matching kind, ``MISC`` for anything unknown.
        """
        key = entry_type.strip().lower()
        return _BIBTEX_ALIASES.get(key, cls.MISC)


_BIBTEX_ALIASES: dict[str, EntryKind] = {
    "article": EntryKind.ARTICLE,
    "inproceedings": EntryKind.INPROCEEDINGS,
    "conference": EntryKind.INPROCEEDINGS,
    "thesis": EntryKind.THESIS,
    "phdthesis": EntryKind.THESIS,
    "mastersthesis": EntryKind.THESIS,
    "report": EntryKind.REPORT,
    "techreport": EntryKind.REPORT,
    "incollection": EntryKind.INCOLLECTION,
    "inbook": EntryKind.INCOLLECTION,
    "online": EntryKind.ONLINE,
    "electronic": EntryKind.ONLINE,
    "www": EntryKind.ONLINE,
    "book": EntryKind.BOOK,
    "misc": EntryKind.MISC,
}


@dataclass(frozen=True)
class CanonicalRecord:
    """Normalized, serializer-ready bibliographic entry.

    All optional fields default to None (or an empty tuple). Only
    ``entry_kind``, ``key``, ``title`` and ``url`` are required for a
    record to be valid.

    Attributes
    ----------
    entry_kind : EntryKind
        BibLaTeX entry type.
    key : str
        Stable citation key.
    title : str
        Title text (unescaped).
    url : str
        Resolved URL of the item.
    authors : tuple[str, ...]
        Author names in source order.
    editors : tuple[str, ...]
        Editor names in source order.
    date : str | None
        ISO date: ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.
    journal_title : str | None
        Journal container (``journaltitle``).
    book_title : str | None
        Book or proceedings container (``booktitle``).
    event_title : str | None
        Conference name (``eventtitle``).
    volume, number, pages : str | None
        Locators.
    doi, issn, isbn : str | None
        Identifiers.
    urldate : str | None
        Access date (``YYYY-MM-DD``).
    language : str | None
        Language code or name.
    language_field : str
        Field name used for the language (``langid`` or ``language``).
    abstract : str | None
        Abstract text.
    keywords : tuple[str, ...]
        Keywords, deduplicated case-insensitively.
    short_title : str | None
        Short title.
    publisher, institution, organization : str | None
        Publishing bodies.
    note : str | None
        Free-text note.
    eprint_type, eprint, eprint_class, eprint_version : str | None
        Preprint server fields.
    extra : tuple[tuple[str, str], ...]
        Registrar fields without a canonical slot, emitted verbatim.
    """

    entry_kind: EntryKind
    key: str
    title: str
    url: str
    authors: tuple[str, ...] = ()
    editors: tuple[str, ...] = ()
    date: str | None = None
    journal_title: str | None = None
    book_title: str | None = None
    event_title: str | None = None
    volume: str | None = None
    number: str | None = None
    pages: str | None = None
    doi: str | None = None
    issn: str | None = None
    isbn: str | None = None
    urldate: str | None = None
    language: str | None = None
    language_field: str = "langid"
    abstract: str | None = None
    keywords: tuple[str, ...] = ()
    short_title: str | None = None
    publisher: str | None = None
    institution: str | None = None
    organization: str | None = None
    note: str | None = None
    eprint_type: str | None = None
    eprint: str | None = None
    eprint_class: str | None = None
    eprint_version: str | None = None
    extra: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def with_changes(self, **changes: Any) -> "CanonicalRecord":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["entry_kind"] = self.entry_kind.value
        return data


def validate_record(record: CanonicalRecord, identifier: str | None = None) -> CanonicalRecord:
    """Check the invariants every resolved record must hold.

    Parameters
    ----------
    record : CanonicalRecord
        Record to check.
    identifier : str | None, optional
        Raw identifier, attached to the error.

    Returns
    -------
    CanonicalRecord
        The same record, for chaining.

    Raises
    ------
    ValidationError
        If the title or url is empty, or the key is missing.
    """
    if not record.title or not record.title.strip():
        raise ValidationError(f"empty title for {record.url or identifier}", identifier=identifier)
    if not record.url or not record.url.strip():
        raise ValidationError(f"missing url for {identifier}", identifier=identifier)
    if not record.key or not record.key.strip():
        raise ValidationError(f"missing citation key for {record.url}", identifier=identifier)
    return record


@dataclass(frozen=True)
class JobResult:
    """Outcome of one job in a batch.

    Attributes
    ----------
    index : int
        0-based position of the identifier in the submitted list.
    identifier : str
        Raw identifier text.
    family : str | None
        Name of the family that recognized the identifier.
    output : str | None
        Serialized record when the job succeeded.
    error : str | None
        Error message when the job failed.
    """

    index: int
    identifier: str
    family: str | None = None
    output: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the job produced a record."""
        return self.error is None and self.output is not None
