"""Ordered identifier-family registry.

Dispatch is a linear scan over ``FAMILIES`` in priority order; the first
family whose ``recognize`` returns a parsed identifier owns the input.
The webpage family accepts any http(s) URL, so it must stay last.
"""

import logging
from collections.abc import Callable
from typing import Any, NamedTuple

from bibresolve.errors import UnrecognizedIdentifierError
from bibresolve.families import arxiv, doi, usenix, webpage
from bibresolve.fetch import Fetcher
from bibresolve.models import CanonicalRecord, ParsedIdentifier, validate_record

__all__ = [
    "Family",
    "FAMILIES",
    "family_names",
    "recognize",
    "dispatch",
    "resolve_parsed",
    "resolve",
]

logger = logging.getLogger(__name__)


class Family(NamedTuple):
    """One identifier family: its name and its two entry points."""

    name: str
    recognize: Callable[[str], ParsedIdentifier | None]
    resolve: Callable[[Any, Fetcher], CanonicalRecord]


FAMILIES: tuple[Family, ...] = tuple(
    Family(module.NAME, module.recognize, module.resolve)
    for module in (doi, arxiv, usenix, webpage)
)


def family_names() -> list[str]:
    """Names of the registered families in priority order."""
    return [family.name for family in FAMILIES]


def recognize(raw: str) -> tuple[Family, ParsedIdentifier] | None:
    """Find the first family that recognizes ``raw``.

    Parameters
    ----------
    raw : str
        Raw identifier text as supplied by the caller.

    Returns
    -------
    tuple[Family, ParsedIdentifier] | None
        The owning family and its parsed identifier, or None when no
        family accepts the text.
    """
    for family in FAMILIES:
        parsed = family.recognize(raw)
        if parsed is not None:
            return family, parsed
    return None


def dispatch(raw: str) -> tuple[Family, ParsedIdentifier]:
    """Like ``recognize``, but unrecognized input is an error.

    Raises
    ------
    UnrecognizedIdentifierError
        If no family recognizes ``raw``.
    """
    match = recognize(raw)
    if match is None:
        raise UnrecognizedIdentifierError(raw)
    return match


def resolve_parsed(
    family: Family,
    parsed: ParsedIdentifier,
    raw: str,
    fetcher: Fetcher,
) -> CanonicalRecord:
    """Resolve an already recognized identifier and validate the record."""
    logger.debug("resolving %r with family %s", raw, family.name)
    return validate_record(family.resolve(parsed, fetcher), raw)


def resolve(raw: str, fetcher: Fetcher) -> CanonicalRecord:
    """Recognize, resolve and validate one identifier.

    Parameters
    ----------
    raw : str
        Raw identifier text.
    fetcher : Fetcher
        Fetch collaborator used for the single remote request.

    Returns
    -------
    CanonicalRecord
        Record with a non-empty title and url.

    Raises
    ------
    UnrecognizedIdentifierError
        If no family recognizes ``raw``.
    ResolutionError
        Any fetch, extraction or validation failure of the owning family.
    """
    family, parsed = dispatch(raw)
    return resolve_parsed(family, parsed, raw, fetcher)
