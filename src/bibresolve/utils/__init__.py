"""Common utility functions for bibresolve."""

from bibresolve.utils.timestamps import format_elapsed, get_iso_timestamp, get_utc_date

__all__ = [
    "get_iso_timestamp",
    "get_utc_date",
    "format_elapsed",
]
