"""HTTP fetch collaborator.

Every family performs exactly one GET through a ``Fetcher``. The default
``HttpFetcher`` uses ``requests``; tests inject any object with the same
``fetch`` method.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import requests

from bibresolve.errors import FetchError

if TYPE_CHECKING:
    from bibresolve.engine.config import ResolverConfig

__all__ = [
    "DEFAULT_USER_AGENT",
    "FetchResponse",
    "Fetcher",
    "HttpFetcher",
]

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; bibresolve/0.1; +https://pypi.org/project/bibresolve/)"
CONNECT_TIMEOUT_SECONDS = 5.0
READ_TIMEOUT_SECONDS = 15.0
API_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class FetchResponse:
    """Outcome of one successful GET.

    Attributes
    ----------
    final_url : str
        URL after redirects.
    status : int
        HTTP status code (2xx).
    headers : dict[str, str]
        Response headers with lowercased names.
    body : str
        Decoded response body.
    """

    final_url: str
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def content_type(self) -> str:
        """Lowercased ``Content-Type`` header, empty when absent."""
        return self.headers.get("content-type", "").lower()


class Fetcher(Protocol):
    """Anything that can GET a URL on behalf of a family."""

    def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        api: bool = False,
    ) -> FetchResponse:
        """GET ``url``; ``api=True`` selects the shorter API timeout."""
        ...


class HttpFetcher:
    """``requests``-backed fetcher with one session per worker thread.

    Parameters
    ----------
    user_agent : str, optional
        ``User-Agent`` header sent with every request.
    connect_timeout : float, optional
        Seconds to wait for a connection.
    read_timeout : float, optional
        Seconds to wait for a page response.
    api_timeout : float, optional
        Seconds to wait for a metadata API response.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        connect_timeout: float = CONNECT_TIMEOUT_SECONDS,
        read_timeout: float = READ_TIMEOUT_SECONDS,
        api_timeout: float = API_TIMEOUT_SECONDS,
    ) -> None:
        self.user_agent = user_agent
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.api_timeout = api_timeout
        self._local = threading.local()

    @classmethod
    def from_config(cls, config: "ResolverConfig") -> "HttpFetcher":
        """Build a fetcher from resolver configuration."""
        return cls(
            user_agent=config.user_agent,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            api_timeout=config.api_timeout,
        )

    @property
    def session(self) -> requests.Session:
        """Session owned by the calling thread."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.user_agent
            self._local.session = session
        return session

    def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        api: bool = False,
    ) -> FetchResponse:
        """GET a URL, following redirects.

        Parameters
        ----------
        url : str
            URL to fetch.
        headers : Mapping[str, str] | None, optional
            Extra request headers (e.g., ``Accept``).
        api : bool, optional
            Use the API read timeout instead of the page read timeout.

        Returns
        -------
        FetchResponse
            Final URL, status, headers and decoded body.

        Raises
        ------
        FetchError
            On transport failure, timeout or a non-2xx status.
        """
        timeout = (self.connect_timeout, self.api_timeout if api else self.read_timeout)
        logger.debug("GET %s (timeout=%s)", url, timeout)

        try:
            response = self.session.get(
                url,
                headers=dict(headers or {}),
                timeout=timeout,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"failed request for URL {url}: {exc}") from exc

        # Bodies without a declared charset are read as UTF-8
        if "charset" not in response.headers.get("content-type", "").lower():
            response.encoding = "utf-8"

        logger.debug("GET %s -> %s %s", url, response.status_code, response.url)
        return FetchResponse(
            final_url=response.url,
            status=response.status_code,
            headers={name.lower(): value for name, value in response.headers.items()},
            body=response.text,
        )
