"""Pure normalization helpers shared by the identifier families.

Every function here is deterministic and free of I/O.
"""

from bibresolve.normalize._helpers import (
    absolutize,
    dedup_casefold,
    first_present,
    is_absolute_url,
    normalize_ws,
)
from bibresolve.normalize.creators import (
    invert_simple_name,
    looks_like_url_or_handle,
    normalize_name,
    split_creators,
    usable_creators,
)
from bibresolve.normalize.dates import extract_year, normalize_date, pick_earlier_year
from bibresolve.normalize.keywords import split_tags
from bibresolve.normalize.locators import build_pages, clean_doi
from bibresolve.normalize.title import (
    derive_short_title,
    strip_site_suffix,
    strip_unescaped_braces,
)

__all__ = [
    # Text
    "normalize_ws",
    "dedup_casefold",
    "first_present",
    # URLs
    "absolutize",
    "is_absolute_url",
    # Creators
    "normalize_name",
    "split_creators",
    "usable_creators",
    "looks_like_url_or_handle",
    "invert_simple_name",
    # Dates
    "normalize_date",
    "extract_year",
    "pick_earlier_year",
    # Keywords and locators
    "split_tags",
    "build_pages",
    "clean_doi",
    # Titles
    "strip_site_suffix",
    "strip_unescaped_braces",
    "derive_short_title",
]
