"""Page ranges and DOI cleanup."""

from ._helpers import DASHES_RE, DOI_ANYWHERE_RE


def build_pages(first: str | None, last: str | None) -> str | None:
    """Combine first and last page into a ``first-last`` range.

    En and em dashes are replaced with ASCII hyphens. A single present
    bound is returned alone.

    Parameters
    ----------
    first : str | None
        ``citation_firstpage`` value.
    last : str | None
        ``citation_lastpage`` value.

    Returns
    -------
    str | None
        Page range, or None when neither bound is given.
    """
    first = DASHES_RE.sub("-", first).strip() if first else ""
    last = DASHES_RE.sub("-", last).strip() if last else ""
    if first and last:
        return f"{first}-{last}"
    return first or last or None


def clean_doi(value: str | None) -> str | None:
    """Extract a bare ``10.xxxx/...`` DOI from a wrapped or prefixed value.

    Examples
    --------
        >>> clean_doi("https://doi.org/10.1000/xyz123")
        '10.1000/xyz123'
    """
    if not value:
        return None
    match = DOI_ANYWHERE_RE.search(value)
    if match is None:
        return None
    return f"{match.group(1)}/{match.group(2)}"
