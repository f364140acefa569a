"""Signal extraction from raw HTML.

Tags are located with pattern matching over the raw document text and
their attributes read with a simple key/value pattern; no parse tree is
built, so malformed or nested markup is read on a best-effort basis.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from bibresolve.normalize import normalize_ws

__all__ = [
    "MetaSignal",
    "LinkSignal",
    "PageSignals",
    "collect_meta",
    "collect_links",
    "collect_title",
    "collect_json_ld",
    "collect_html_lang",
    "collect_time_datetime",
    "collect_base_href",
    "collect_rel_author",
]

# Pre-compiled regex patterns
META_TAG_RE = re.compile(r"<meta\b[^>]*>", re.IGNORECASE | re.DOTALL)
LINK_TAG_RE = re.compile(r"<link\b[^>]*>", re.IGNORECASE | re.DOTALL)
HTML_TAG_RE = re.compile(r"<html\b[^>]*>", re.IGNORECASE | re.DOTALL)
BASE_TAG_RE = re.compile(r"<base\b[^>]*>", re.IGNORECASE | re.DOTALL)
ATTR_RE = re.compile(r"""([a-zA-Z_:\-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
TIME_DATETIME_RE = re.compile(
    r"""<time\b[^>]*?datetime\s*=\s*(?:"([^"]*)"|'([^']*)')[^>]*>""",
    re.IGNORECASE | re.DOTALL,
)
SCRIPT_LD_JSON_RE = re.compile(
    r"""<script\b[^>]*type\s*=\s*["']application/ld\+json["'][^>]*>(.*?)</script>""",
    re.IGNORECASE | re.DOTALL,
)
REL_AUTHOR_RE = re.compile(
    r"""<a\b[^>]*\brel\s*=\s*(?:"[^"]*\bauthor\b[^"]*"|'[^']*\bauthor\b[^']*')[^>]*>(.*?)</a>""",
    re.IGNORECASE | re.DOTALL,
)
TAG_STRIP_RE = re.compile(r"<[^>]+>", re.DOTALL)


@dataclass(frozen=True)
class MetaSignal:
    """One ``<meta>`` tag with its identifying attribute and content."""

    name: str | None
    property: str | None
    http_equiv: str | None
    content: str


@dataclass(frozen=True)
class LinkSignal:
    """One ``<link>`` tag with both ``rel`` and ``href`` present."""

    rel: str
    href: str


def _attributes(tag: str) -> list[tuple[str, str]]:
    """Read ``key="value"`` / ``key='value'`` pairs from a tag, keys lowercased."""
    pairs = []
    for match in ATTR_RE.finditer(tag):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        pairs.append((match.group(1).lower(), value))
    return pairs


def _attribute(tag: str, key: str) -> str | None:
    for name, value in _attributes(tag):
        if name == key:
            return value
    return None


def collect_meta(html: str) -> list[MetaSignal]:
    """Extract every ``<meta>`` tag that carries a ``content`` attribute.

    Parameters
    ----------
    html : str
        Raw document text.

    Returns
    -------
    list[MetaSignal]
        Meta signals in document order. When an attribute repeats inside a
        tag, the last occurrence wins.
    """
    signals = []
    for match in META_TAG_RE.finditer(html):
        attrs: dict[str, str] = {}
        for key, value in _attributes(match.group(0)):
            if key in ("name", "property", "http-equiv", "content"):
                attrs[key] = value
        if "content" not in attrs:
            continue
        signals.append(
            MetaSignal(
                name=attrs.get("name"),
                property=attrs.get("property"),
                http_equiv=attrs.get("http-equiv"),
                content=attrs["content"],
            )
        )
    return signals


def collect_links(html: str) -> list[LinkSignal]:
    """Extract every ``<link>`` tag that carries both ``rel`` and ``href``."""
    signals = []
    for match in LINK_TAG_RE.finditer(html):
        attrs = dict(_attributes(match.group(0)))
        rel = attrs.get("rel")
        href = attrs.get("href")
        if rel is not None and href is not None:
            signals.append(LinkSignal(rel=rel, href=href))
    return signals


def collect_title(html: str) -> str | None:
    """Text of the first ``<title>`` element, whitespace-collapsed."""
    match = TITLE_RE.search(html)
    if match is None:
        return None
    return normalize_ws(match.group(1)) or None


def collect_html_lang(html: str) -> str | None:
    """``lang`` attribute of the ``<html>`` tag."""
    match = HTML_TAG_RE.search(html)
    if match is None:
        return None
    return _attribute(match.group(0), "lang")


def collect_base_href(html: str) -> str | None:
    """``href`` attribute of the first ``<base>`` tag."""
    match = BASE_TAG_RE.search(html)
    if match is None:
        return None
    return _attribute(match.group(0), "href")


def collect_time_datetime(html: str) -> str | None:
    """``datetime`` attribute of the first ``<time>`` tag that has one."""
    match = TIME_DATETIME_RE.search(html)
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def collect_json_ld(html: str) -> list[Any]:
    """Parse every ``application/ld+json`` script block.

    HTML comment markers and NUL characters are removed before decoding.
    Blocks that fail to decode are skipped. A top-level array contributes
    each of its items as a separate node.

    Parameters
    ----------
    html : str
        Raw document text.

    Returns
    -------
    list[Any]
        Decoded JSON-LD nodes in document order.
    """
    nodes: list[Any] = []
    for match in SCRIPT_LD_JSON_RE.finditer(html):
        raw = match.group(1).strip()
        cleaned = raw.replace("<!--", "").replace("-->", "").replace("\x00", "")
        try:
            value = json.loads(cleaned)
        except ValueError:
            continue
        if isinstance(value, list):
            nodes.extend(value)
        else:
            nodes.append(value)
    return nodes


def collect_rel_author(html: str) -> str | None:
    """Visible text of the first ``<a rel="author">`` byline link."""
    match = REL_AUTHOR_RE.search(html)
    if match is None:
        return None
    text = normalize_ws(TAG_STRIP_RE.sub("", match.group(1)))
    return text or None


@dataclass(frozen=True)
class PageSignals:
    """All signals of one fetched document, extracted once.

    Lookup methods return the trimmed content of the first matching tag
    whose content is not blank, or None.
    """

    meta: tuple[MetaSignal, ...] = ()
    links: tuple[LinkSignal, ...] = ()
    title: str | None = None
    json_ld: tuple[Any, ...] = ()
    html_lang: str | None = None
    time_datetime: str | None = None
    base_href: str | None = None
    rel_author: str | None = None

    @classmethod
    def from_html(cls, html: str) -> "PageSignals":
        """Run every collector over a document."""
        return cls(
            meta=tuple(collect_meta(html)),
            links=tuple(collect_links(html)),
            title=collect_title(html),
            json_ld=tuple(collect_json_ld(html)),
            html_lang=collect_html_lang(html),
            time_datetime=collect_time_datetime(html),
            base_href=collect_base_href(html),
            rel_author=collect_rel_author(html),
        )

    def _first(self, predicate) -> str | None:
        for signal in self.meta:
            if predicate(signal):
                content = signal.content.strip()
                if content:
                    return content
        return None

    def meta_value(self, name: str) -> str | None:
        """Content of the first meta tag whose ``name`` equals ``name`` exactly."""
        return self._first(lambda m: m.name == name)

    def meta_value_any(self, *names: str) -> str | None:
        """``meta_value`` tried for each name in order."""
        for name in names:
            value = self.meta_value(name)
            if value is not None:
                return value
        return None

    def meta_values(self, name: str) -> list[str]:
        """Contents of every meta tag named ``name``, in document order."""
        return [m.content for m in self.meta if m.name == name]

    def meta_name(self, name: str) -> str | None:
        """Like ``meta_value`` but matching the name case-insensitively."""
        wanted = name.lower()
        return self._first(lambda m: m.name is not None and m.name.lower() == wanted)

    def meta_property(self, prop: str) -> str | None:
        """Content of the first meta tag whose ``property`` equals ``prop``."""
        return self._first(lambda m: m.property == prop)

    def meta_properties(self, prop: str) -> list[str]:
        """Contents of every meta tag with ``property`` equal to ``prop``."""
        return [m.content for m in self.meta if m.property == prop]

    def meta_http_equiv(self, key: str) -> str | None:
        """Content of the first meta tag whose ``http-equiv`` matches ``key``."""
        wanted = key.lower()
        return self._first(lambda m: m.http_equiv is not None and m.http_equiv.lower() == wanted)

    def link_href(self, rel: str) -> str | None:
        """``href`` of the first link whose ``rel`` matches case-insensitively."""
        wanted = rel.lower()
        for link in self.links:
            if link.rel.lower() == wanted:
                return link.href
        return None

    @property
    def has_highwire(self) -> bool:
        """Whether any ``citation_*`` meta tag is present."""
        return any(m.name is not None and m.name.startswith("citation_") for m in self.meta)
