"""Accessors over decoded JSON-LD nodes.

Each accessor scans the nodes in document order and returns the value from
the first node that carries it. Non-object nodes are ignored.
"""

from collections.abc import Sequence
from typing import Any

from bibresolve.normalize import split_creators

__all__ = [
    "ARTICLE_LIKE_TYPES",
    "json_types",
    "json_has_article_type",
    "json_headline",
    "json_name",
    "json_alternative_headline",
    "json_date_published",
    "json_description",
    "json_url",
    "json_is_part_of_name",
    "json_keywords",
    "json_authors",
]

ARTICLE_LIKE_TYPES = frozenset(
    {"ScholarlyArticle", "Article", "CreativeWork", "PresentationDigitalDocument"}
)


def _objects(nodes: Sequence[Any]):
    return (node for node in nodes if isinstance(node, dict))


def _first_string(nodes: Sequence[Any], *keys: str) -> str | None:
    for node in _objects(nodes):
        for key in keys:
            value = node.get(key)
            if isinstance(value, str):
                return value
    return None


def json_types(nodes: Sequence[Any]) -> list[str]:
    """All ``@type`` values across nodes, flattening array types."""
    types: list[str] = []
    for node in _objects(nodes):
        value = node.get("@type")
        if isinstance(value, str):
            types.append(value)
        elif isinstance(value, list):
            types.extend(item for item in value if isinstance(item, str))
    return types


def json_has_article_type(nodes: Sequence[Any]) -> bool:
    """Whether any node declares an article-like ``@type``."""
    return any(t in ARTICLE_LIKE_TYPES for t in json_types(nodes))


def json_headline(nodes: Sequence[Any]) -> str | None:
    """``headline``, else ``name``, of the first node having either."""
    return _first_string(nodes, "headline", "name")


def json_name(nodes: Sequence[Any]) -> str | None:
    """``name``, else ``headline``, of the first node having either."""
    return _first_string(nodes, "name", "headline")


def json_alternative_headline(nodes: Sequence[Any]) -> str | None:
    return _first_string(nodes, "alternativeHeadline")


def json_date_published(nodes: Sequence[Any]) -> str | None:
    return _first_string(nodes, "datePublished")


def json_description(nodes: Sequence[Any]) -> str | None:
    return _first_string(nodes, "description")


def json_url(nodes: Sequence[Any]) -> str | None:
    return _first_string(nodes, "url")


def json_is_part_of_name(nodes: Sequence[Any]) -> str | None:
    """``isPartOf.name`` of the first node whose container has a name."""
    for node in _objects(nodes):
        container = node.get("isPartOf")
        if isinstance(container, dict) and isinstance(container.get("name"), str):
            return container["name"]
    return None


def json_keywords(nodes: Sequence[Any]) -> str | None:
    """Keywords as one comma-separated string.

    A string value is returned as is; an array value has its string items
    joined with ``", "``.
    """
    for node in _objects(nodes):
        if "keywords" not in node:
            continue
        value = node["keywords"]
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return ", ".join(item for item in value if isinstance(item, str))
    return None


def json_authors(nodes: Sequence[Any]) -> list[str] | None:
    """Author names from the first node with a usable ``author`` value.

    Parameters
    ----------
    nodes : Sequence[Any]
        Decoded JSON-LD nodes.

    Returns
    -------
    list[str] | None
        Names in source order. A string value is split into creators; an
        array contributes its string items and the ``name`` of its object
        items; a single object contributes its ``name``. None if no node
        yields a name.
    """
    for node in _objects(nodes):
        value = node.get("author")
        if isinstance(value, str):
            return split_creators(value)
        if isinstance(value, dict):
            value = [value]
        if isinstance(value, list):
            names = []
            for item in value:
                if isinstance(item, str):
                    names.append(item)
                elif isinstance(item, dict) and isinstance(item.get("name"), str):
                    names.append(item["name"])
            if names:
                return names
    return None
