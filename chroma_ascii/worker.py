from __future__ import annotations

"""
Request/response boundary around process_image().

- DitherWorker serves requests on a single background thread, strictly in
  submission order. A newer request never cancels one that is already running.
- LatestOnly lets the caller drop stale responses by monotonic request id.
- Debouncer coalesces bursts of setting changes so only the last one runs.
"""

import itertools
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .core_types import DitherResult, DitherSettings, U8Image
from .pipeline import process_image

DEBOUNCE_SECONDS = 0.150


@dataclass(frozen=True)
class DitherRequest:
    id: int
    pixels: U8Image
    settings: DitherSettings


@dataclass(frozen=True)
class DitherResponse:
    id: int
    result: Optional[DitherResult]
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None


class DitherWorker:
    """Single-thread worker. Use as a context manager or call close()."""

    def __init__(self, *, debug: bool = False) -> None:
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dither")
        self._debug = debug

    def _run(self, request: DitherRequest) -> DitherResponse:
        try:
            result = process_image(request.pixels, request.settings, debug=self._debug)
        except ValueError as exc:
            return DitherResponse(id=request.id, result=None, error=exc)
        return DitherResponse(id=request.id, result=result)

    def submit(self, request: DitherRequest) -> "Future[DitherResponse]":
        return self._pool.submit(self._run, request)

    def close(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "DitherWorker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class LatestOnly:
    """Issue monotonic request ids and tell whether a response is still current."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_current(self, response: DitherResponse) -> bool:
        return response.id == self._latest


class Debouncer:
    """
    Call fn only after `delay` seconds without another trigger().
    Each trigger replaces the pending arguments.
    """

    def __init__(self, fn: Callable[..., None], delay: float = DEBOUNCE_SECONDS) -> None:
        self._fn = fn
        self._delay = float(delay)
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None
        self._lock = threading.Lock()

    def _take_pending(self) -> Optional[Tuple[tuple, dict]]:
        with self._lock:
            pending, self._pending = self._pending, None
            self._timer = None
            return pending

    def _fire(self) -> None:
        pending = self._take_pending()
        if pending is not None:
            args, kwargs = pending
            self._fn(*args, **kwargs)

    def trigger(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Run the pending call now, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        self._fire()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None


__all__ = [
    "DEBOUNCE_SECONDS",
    "DitherRequest",
    "DitherResponse",
    "DitherWorker",
    "LatestOnly",
    "Debouncer",
]
