"""OpenRadar backend.

Usage:
    with OpenRadar(token="abc123") as tracker:
        result = tracker.fetch(123).result()
        radar  = result.unwrap()
"""

from concurrent.futures import Future
from typing import Optional

from sonar import router
from sonar.client import DEFAULT_URL, ParseError, SonarClient, SonarError
from sonar.mapper import map_radar_fields
from sonar.models import Radar
from sonar.trackers.base import BugTracker, Completion, Result, TwoFactorProvider

INVALID_ID = "Invalid radar ID"


class OpenRadar(BugTracker):
    """openradar.appspot.com tracker. Fetching works without authentication."""

    def __init__(
        self,
        token: str = "",
        url: str = DEFAULT_URL,
        timeout: int = 30,
        max_workers: int = 4,
        client: Optional[SonarClient] = None,
    ) -> None:
        super().__init__(max_workers=max_workers)
        self._owns_client = client is None
        self._client = client or SonarClient(url=url, token=token, timeout=timeout)

    def login(self, get_two_factor_code: TwoFactorProvider, completion: Completion = None) -> Future:
        """No-op: the token already rides on every request. Never asks for a code."""
        return self._complete(Result.success(), completion)

    def fetch(self, radar_id: int, completion: Completion = None) -> Future:
        """Fetch and parse radar *radar_id*; the Result value is a Radar."""
        if radar_id <= 0:
            return self._complete(Result.failure(SonarError(INVALID_ID)), completion)
        return self._dispatch(self._fetch, radar_id, completion=completion)

    def create(self, radar: Radar, completion: Completion = None) -> Future:
        """Submit *radar*, which must already carry its id; the Result value echoes that id."""
        if radar.id is None:
            return self._complete(Result.failure(SonarError(INVALID_ID)), completion)
        return self._dispatch(self._create, radar, completion=completion)

    def close(self) -> None:
        """Shut down the worker pool; an injected client is left open for its owner."""
        super().close()
        if self._owns_client:
            self._client.close()

    # ------------------------------------------------------------------
    # Internal (run on the worker pool)
    # ------------------------------------------------------------------

    def _fetch(self, radar_id: int) -> Radar:
        payload = self._client.send(router.read(radar_id))
        if not isinstance(payload, dict) or not isinstance(payload.get("result"), dict):
            raise ParseError()
        return map_radar_fields(payload["result"])

    def _create(self, radar: Radar) -> int:
        self._client.send(router.create(radar))
        return radar.id
