"""OpenRadar HTTP transport.

Usage:
    client = SonarClient(url="https://openradar.appspot.com", token="abc123")
    data   = client.send(router.read(radar_id=123))
"""

import threading
from typing import Any

import requests

from sonar.router import Route

DEFAULT_URL = "https://openradar.appspot.com"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class SonarError(Exception):
    """Base exception for all bug tracker errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(SonarError):
    """Raised on HTTP 401 — invalid or expired token."""


class NotFoundError(SonarError):
    """Raised on HTTP 404 — radar or endpoint not found."""


class NetworkError(SonarError):
    """Raised on connection timeout or unreachable server."""


class ParseError(SonarError):
    """Raised when the response body is not the JSON we expect."""

    def __init__(self, message: str = "Unable to parse JSON") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class SonarClient:
    """Thin wrapper around the OpenRadar REST API.

    Each thread gets its own ``requests.Session``, so calls from a worker pool
    never share cookies or connection state.
    """

    def __init__(self, url: str = DEFAULT_URL, token: str = "", timeout: int = 30) -> None:
        self.base_url = url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def send(self, route: Route) -> Any:
        """Perform the request described by *route* and return the decoded JSON.

        An empty response body decodes to ``{}``.

        Raises:
            AuthenticationError: HTTP 401
            NotFoundError:       HTTP 404
            SonarError:          Any other non-2xx response
            NetworkError:        Timeout, connection or any other transport failure
            ParseError:          Body is not valid JSON
        """
        response = self._request(route)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError() from exc

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @property
    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            # OpenRadar takes the raw token, no scheme prefix
            session.headers["Authorization"] = self._token
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def _request(self, route: Route) -> requests.Response:
        url = f"{self.base_url}{route.path}"
        try:
            response = self._session.request(
                route.method,
                url,
                params=route.params or None,
                data=route.data or None,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while contacting '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(
                f"Unable to reach OpenRadar server at '{self.base_url}'"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise NetworkError(f"Request to '{url}' failed: {exc}") from exc

        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed — check that your token is valid and not expired."
            )
        if response.status_code == 404:
            raise NotFoundError(
                f"Resource not found: {url}"
            )
        if not response.ok:
            raise SonarError(
                f"Unexpected response {response.status_code} from {url}: {response.text[:200]}"
            )

        return response
