import threading
import time

import numpy as np

from chroma_ascii.core_types import DitherSettings, InvalidDimensions
from chroma_ascii.pipeline import process_image
from chroma_ascii.worker import (
    Debouncer,
    DitherRequest,
    DitherResponse,
    DitherWorker,
    LatestOnly,
)


def test_worker_serves_requests_in_order(colour_rgba) -> None:
    ids = LatestOnly()
    densities = [10, 20, 30]
    with DitherWorker() as worker:
        futures = [
            worker.submit(DitherRequest(ids.next_id(), colour_rgba, DitherSettings(density=d)))
            for d in densities
        ]
        responses = [f.result(timeout=30) for f in futures]
    assert [r.id for r in responses] == [1, 2, 3]
    assert [r.result.cols for r in responses] == densities
    assert all(r.ok for r in responses)


def test_worker_result_matches_inline_run(colour_rgba) -> None:
    settings = DitherSettings(algorithm="sierra", palette_mode="4-bit", density=25)
    with DitherWorker() as worker:
        response = worker.submit(DitherRequest(7, colour_rgba, settings)).result(timeout=30)
    inline = process_image(colour_rgba, settings)
    assert response.result.text == inline.text
    assert response.result.color_indices == inline.color_indices


def test_worker_reports_bad_input_as_error() -> None:
    empty = np.zeros((0, 5, 4), dtype=np.uint8)
    with DitherWorker() as worker:
        response = worker.submit(DitherRequest(1, empty, DitherSettings())).result(timeout=30)
    assert not response.ok
    assert response.result is None
    assert isinstance(response.error, InvalidDimensions)


def test_latest_only_flags_stale_responses() -> None:
    ids = LatestOnly()
    first = ids.next_id()
    second = ids.next_id()
    assert second > first
    assert ids.latest == second
    assert not ids.is_current(DitherResponse(id=first, result=None))
    assert ids.is_current(DitherResponse(id=second, result=None))


def test_debouncer_runs_only_the_last_call() -> None:
    calls = []
    done = threading.Event()

    def record(value):
        calls.append(value)
        done.set()

    debouncer = Debouncer(record, delay=0.05)
    for value in range(5):
        debouncer.trigger(value)
    assert done.wait(2.0)
    time.sleep(0.1)
    assert calls == [4]


def test_debouncer_flush_and_cancel() -> None:
    calls = []
    debouncer = Debouncer(calls.append, delay=10.0)
    debouncer.trigger("now")
    debouncer.flush()
    assert calls == ["now"]
    debouncer.flush()
    assert calls == ["now"]

    debouncer.trigger("never")
    debouncer.cancel()
    debouncer.flush()
    assert calls == ["now"]
