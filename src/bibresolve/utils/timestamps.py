"""Timestamp utilities for bibresolve.

This module provides consistent timestamp functions across the codebase.
"""

from datetime import UTC, datetime

__all__ = ["get_iso_timestamp", "get_utc_date", "format_elapsed"]


def get_iso_timestamp() -> str:
    """Get current UTC timestamp in ISO8601 format with microseconds.

    Returns
    -------
    str
        ISO8601 timestamp with microseconds (e.g., "2026-02-03T12:34:56.123456Z").
    """
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def get_utc_date() -> str:
    """Get the current UTC date as ``YYYY-MM-DD``.

    Used as the access date (``urldate``) of webpage records.
    """
    return datetime.now(UTC).date().isoformat()


def format_elapsed(seconds: float) -> str:
    """Render a duration for the run summary line.

    Parameters
    ----------
    seconds : float
        Elapsed wall-clock seconds.

    Returns
    -------
    str
        Milliseconds below one second (e.g., "250ms"), seconds with two
        decimals below a minute (e.g., "3.42s"), otherwise minutes and
        seconds (e.g., "2m05s").
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(int(seconds), 60)
    return f"{minutes}m{rest:02d}s"
