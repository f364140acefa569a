"""Title post-processing."""

import re

_UNESCAPED_BRACE_PAIR_RE = re.compile(r"(?<!\\)\{([^{}]*)\}")


def strip_site_suffix(title: str, site: str) -> str:
    """Remove a trailing " - SiteName" style suffix from a page title.

    Parameters
    ----------
    title : str
        Page title.
    site : str
        Site name (e.g., from ``og:site_name``).

    Returns
    -------
    str
        Title without the suffix, trimmed.

    Examples
    --------
        >>> strip_site_suffix("An Interesting Post — My Blog", "My Blog")
        'An Interesting Post'
    """
    site = site.strip()
    if not site:
        return title.strip()
    pattern = re.compile(r"\s*[-–—=|:~#]\s*" + re.escape(site) + r"\s*$", re.IGNORECASE)
    return pattern.sub("", title, count=1).strip()


def strip_unescaped_braces(title: str) -> str:
    """Collapse every unescaped brace pair, innermost first, then unescape.

    Pairs are removed repeatedly until none remain, so nested groups
    collapse fully. Escaped braces (``\\{``, ``\\}``) survive the stripping
    and are unescaped at the end.

    Parameters
    ----------
    title : str
        Title possibly containing brace markup.

    Returns
    -------
    str
        Title with bracket characters removed and content kept.

    Examples
    --------
        >>> strip_unescaped_braces("nest {one {two}} end")
        'nest one two end'
        >>> strip_unescaped_braces("\\\\{esc\\\\}")
        '{esc}'
    """
    current = title
    while True:
        stripped = _UNESCAPED_BRACE_PAIR_RE.sub(lambda m: m.group(1), current)
        if stripped == current:
            break
        current = stripped
    return current.replace("\\{", "{").replace("\\}", "}")


def derive_short_title(title: str) -> str | None:
    """Derive a short title from the part before the first colon.

    Returns None unless the head is non-empty and meaningfully shorter
    than the full title.
    """
    head, sep, _ = title.partition(":")
    if not sep:
        return None
    head = head.strip()
    if head and len(head) + 3 < len(title):
        return head
    return None
