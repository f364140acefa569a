"""Helpers shared by the HTML-page families."""

from bibresolve.errors import FetchError
from bibresolve.fetch import FetchResponse
from bibresolve.normalize import (
    is_absolute_url,
    looks_like_url_or_handle,
    split_creators,
    usable_creators,
)
from bibresolve.signals import PageSignals


def require_html(response: FetchResponse, url: str) -> None:
    """Reject a response whose declared content type is not an HTML type.

    A response without a ``Content-Type`` header is accepted.

    Raises
    ------
    FetchError
        If the content type is declared and is not HTML.
    """
    content_type = response.content_type
    if content_type and "html" not in content_type:
        raise FetchError(f"non-HTML content-type for URL {url}: {content_type}", identifier=url)


def highwire_creators(signals: PageSignals, name: str, list_name: str) -> list[str]:
    """Creators from repeated ``name`` tags plus one split ``list_name`` tag.

    Used for ``citation_author``/``citation_authors`` and
    ``citation_editor``/``citation_editors``.
    """
    creators = usable_creators(signals.meta_values(name))
    combined = signals.meta_value(list_name)
    if combined:
        creators.extend(usable_creators(split_creators(combined)))
    return creators


def article_author_names(signals: PageSignals) -> list[str]:
    """OpenGraph ``article:author`` values that are names, not profile links."""
    names = []
    for value in signals.meta_properties("article:author"):
        value = value.strip()
        if value and not is_absolute_url(value) and not looks_like_url_or_handle(value):
            names.append(value)
    return names
