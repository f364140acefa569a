"""Signal extractors for fetched documents.

Signals are typed observations read from raw HTML (meta tags, link tags,
title text, JSON-LD nodes, time tags, base href). Extraction is pure and
performed once per document.
"""

from bibresolve.signals.html import (
    LinkSignal,
    MetaSignal,
    PageSignals,
    collect_base_href,
    collect_html_lang,
    collect_json_ld,
    collect_links,
    collect_meta,
    collect_rel_author,
    collect_time_datetime,
    collect_title,
)
from bibresolve.signals.jsonld import (
    ARTICLE_LIKE_TYPES,
    json_alternative_headline,
    json_authors,
    json_date_published,
    json_description,
    json_has_article_type,
    json_headline,
    json_is_part_of_name,
    json_keywords,
    json_name,
    json_types,
    json_url,
)

__all__ = [
    # HTML signals
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
    # JSON-LD accessors
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
