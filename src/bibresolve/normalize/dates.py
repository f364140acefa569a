"""Date normalization."""

import re

from ._helpers import YEAR_RE

_ISO_FULL_RE = re.compile(r"^(\d{4})[-/](\d{2})[-/](\d{2})", re.ASCII)
_ISO_YEAR_MONTH_RE = re.compile(r"^(\d{4})[-/](\d{2})\b", re.ASCII)
_ISO_YEAR_RE = re.compile(r"^(\d{4})\b", re.ASCII)


def normalize_date(value: str | None) -> str | None:
    """Normalize a date string to the most specific ISO form it carries.

    Time-of-day components are truncated.

    Parameters
    ----------
    value : str | None
        Raw date (e.g., "2020/01/02", "2020-01-02T10:00:00Z", "2020").

    Returns
    -------
    str | None
        ``YYYY-MM-DD``, ``YYYY-MM`` or ``YYYY``; None if no leading year.

    Examples
    --------
        >>> normalize_date("2020/01/02")
        '2020-01-02'
        >>> normalize_date("2020-01")
        '2020-01'
    """
    if not value:
        return None
    text = value.strip()

    match = _ISO_FULL_RE.match(text)
    if match:
        return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"

    match = _ISO_YEAR_MONTH_RE.match(text)
    if match:
        return f"{match.group(1)}-{match.group(2)}"

    match = _ISO_YEAR_RE.match(text)
    if match:
        return match.group(1)

    return None


def extract_year(value: str) -> int | None:
    """Extract the first standalone 4-digit year from a string."""
    match = YEAR_RE.search(value)
    return int(match.group(1)) if match else None


def pick_earlier_year(online: str, year: str) -> str:
    """Choose between an online-first date and a citation year.

    Online-first dates often precede the issue year; when the online date's
    year is later than the citation year, the citation year wins.

    Parameters
    ----------
    online : str
        Value of ``citation_online_date``.
    year : str
        Value of ``citation_year``.

    Returns
    -------
    str
        The value to use as the date.
    """
    online_year = extract_year(online) or 0
    citation_year = extract_year(year) or 0
    if online_year > citation_year > 0:
        return year
    return online
