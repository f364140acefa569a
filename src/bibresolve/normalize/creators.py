"""Author and editor name handling."""

from ._helpers import normalize_ws


def normalize_name(name: str) -> str:
    """Collapse whitespace and strip stray commas around a name."""
    return normalize_ws(name).strip(",").strip()


def split_creators(value: str) -> list[str]:
    """Split a single string holding several creator names.

    Separators are tried in order: semicolon, `` and ``, comma.

    Parameters
    ----------
    value : str
        Raw creator list (e.g., "Doe, Jane; Roe, Richard").

    Returns
    -------
    list[str]
        Individual names (may contain empty strings for empty segments).
    """
    text = value.strip()
    if ";" in text:
        parts = text.split(";")
    elif " and " in text:
        parts = text.split(" and ")
    elif len(text.split(",")) > 1:
        parts = text.split(",")
    else:
        parts = [text]
    return [normalize_name(part) for part in parts]


def looks_like_url_or_handle(value: str) -> bool:
    """Whether a creator value is a profile URL or social handle, not a name."""
    return "@" in value or value.startswith(("http://", "https://"))


def usable_creators(values: list[str]) -> list[str]:
    """Trim creator values and drop blanks, URLs and handles."""
    out: list[str] = []
    for value in values:
        name = value.strip()
        if name and not looks_like_url_or_handle(name):
            out.append(name)
    return out


def invert_simple_name(name: str) -> str:
    """Flip a two-token "First Last" name into "Last, First".

    Anything with a comma or a different token count is returned unchanged.
    """
    if "," not in name:
        parts = name.split()
        if len(parts) == 2:
            return f"{parts[1]}, {parts[0]}"
    return name
