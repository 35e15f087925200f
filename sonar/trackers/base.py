"""Bug tracker interface.

A tracker exposes three asynchronous operations: ``login``, ``fetch`` and
``create``. Each returns a ``Future`` resolving to a ``Result`` and, when a
completion callback is given, calls it exactly once with that same Result.
"""

import abc
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sonar.client import SonarError
from sonar.models import Radar

Completion = Optional[Callable[["Result"], None]]
TwoFactorProvider = Callable[[Callable[[Optional[str]], None]], None]


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[SonarError] = None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: SonarError) -> "Result":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the held error."""
        if self.error is not None:
            raise self.error
        return self.value


class BugTracker(abc.ABC):
    """Base class for bug tracker backends."""

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def login(self, get_two_factor_code: TwoFactorProvider, completion: Completion = None) -> Future:
        ...

    @abc.abstractmethod
    def fetch(self, radar_id: int, completion: Completion = None) -> Future:
        ...

    @abc.abstractmethod
    def create(self, radar: Radar, completion: Completion = None) -> Future:
        ...

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Dispatch helpers
    # ------------------------------------------------------------------

    def _dispatch(self, operation: Callable[..., Any], *args: Any, completion: Completion = None) -> Future:
        """Run *operation* on the worker pool, turning SonarError into a failed Result."""
        def run() -> Result:
            try:
                result = Result.success(operation(*args))
            except SonarError as exc:
                result = Result.failure(exc)
            if completion is not None:
                completion(result)
            return result

        return self._executor.submit(run)

    @staticmethod
    def _complete(result: Result, completion: Completion = None) -> Future:
        """Deliver *result* on the calling thread and return it as a resolved Future."""
        if completion is not None:
            completion(result)
        future: Future = Future()
        future.set_result(result)
        return future
