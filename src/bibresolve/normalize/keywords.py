"""Keyword list normalization."""

from ._helpers import dedup_casefold, normalize_ws


def split_tags(value: str | None) -> list[str]:
    """Split a keyword string into normalized, deduplicated tags.

    Semicolons take priority over commas as the separator.

    Parameters
    ----------
    value : str | None
        Raw keyword string (e.g., "ml; nlp; ML").

    Returns
    -------
    list[str]
        Tags in source order, case-insensitively deduplicated.

    Examples
    --------
        >>> split_tags("ml; nlp; ML")
        ['ml', 'nlp']
    """
    if not value or not value.strip():
        return []
    text = value.strip()
    if ";" in text:
        parts = text.split(";")
    elif "," in text:
        parts = text.split(",")
    else:
        parts = [text]

    tags = []
    for part in parts:
        tag = normalize_ws(part).strip(",;").strip()
        if tag:
            tags.append(tag)
    return dedup_casefold(tags)
