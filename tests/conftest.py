"""Pytest configuration and fixtures for test suite."""

import sys
import threading
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibresolve.errors import FetchError  # noqa: E402
from bibresolve.fetch import FetchResponse  # noqa: E402

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


class FakeFetcher:
    """In-memory fetcher serving canned responses by exact URL.

    A route maps a URL to a body string, a ``FetchResponse`` or an
    exception instance to raise. Unknown URLs raise ``FetchError`` the way
    a 404 would. Every call is recorded.
    """

    def __init__(self, routes: Mapping[str, object] | None = None) -> None:
        self.routes: dict[str, object] = dict(routes or {})
        self.calls: list[tuple[str, dict[str, str], bool]] = []
        self._lock = threading.Lock()

    def add(
        self,
        url: str,
        body: str,
        content_type: str | None = "text/html; charset=utf-8",
        final_url: str | None = None,
    ) -> None:
        headers = {"content-type": content_type} if content_type else {}
        self.routes[url] = FetchResponse(
            final_url=final_url or url,
            status=200,
            headers=headers,
            body=body,
        )

    def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        api: bool = False,
    ) -> FetchResponse:
        with self._lock:
            self.calls.append((url, dict(headers or {}), api))

        route = self.routes.get(url)
        if route is None:
            raise FetchError(f"failed request for URL {url}: 404 Client Error: Not Found")
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, FetchResponse):
            return route
        return FetchResponse(final_url=url, status=200, headers={}, body=str(route))

    @property
    def urls(self) -> list[str]:
        return [url for url, _, _ in self.calls]


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Empty fake fetcher; add routes in the test."""
    return FakeFetcher()


@pytest.fixture
def html_page() -> Callable[..., str]:
    """Build a small HTML document from head and body fragments."""

    def _build(head: str = "", body: str = "", lang: str | None = None) -> str:
        lang_attr = f' lang="{lang}"' if lang else ""
        return (
            "<!DOCTYPE html>\n"
            f"<html{lang_attr}>\n"
            f"<head>\n{head}\n</head>\n"
            f"<body>\n{body}\n</body>\n"
            "</html>\n"
        )

    return _build


@pytest.fixture
def meta() -> Callable[..., str]:
    """Render ``<meta>`` tags: ``meta(name="x", content="y")``."""

    def _build(content: str, name: str | None = None, prop: str | None = None) -> str:
        attr = f'name="{name}"' if name is not None else f'property="{prop}"'
        return f'<meta {attr} content="{content}">'

    return _build
