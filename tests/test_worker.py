"""Tests for the worker message protocol."""

import pytest

from metro_lines.messages import MessageError, parse_inbound
from metro_lines.worker import LinesRendererWorker, WorkerThread

VIEWBOX = [[-1, -1], [3, -1], [3, 3], [-1, 3], [-1, -1]]


def _types(messages):
    return [m["type"] for m in messages]


@pytest.fixture
def outbox():
    return []


@pytest.fixture
def worker(outbox):
    return LinesRendererWorker(outbox.append)


def test_init_brackets_loading(worker, outbox, two_arcs):
    worker.handle_message({"type": "init", "data": two_arcs})
    assert _types(outbox) == ["add_loading_item", "remove_loading_item", "finished_init"]
    assert len(worker.topology.segments) == 2


def test_render_round_trip(worker, outbox, two_arcs):
    worker.handle_message({"type": "init", "data": two_arcs})
    outbox.clear()
    worker.handle_message(
        {"type": "request_render", "data": {"width": 1, "zoom": 0, "viewbox": VIEWBOX}}
    )
    assert _types(outbox) == ["add_loading_item", "remove_loading_item", "rendered"]
    collection = outbox[-1]["data"]
    (feature,) = collection["features"]
    assert feature["properties"] == {"id": "#FF0000", "stroke": "#FF0000"}
    assert len(feature["geometry"]["coordinates"]) == 3


def test_render_before_init_is_empty(worker, outbox):
    worker.handle_message(
        {"type": "request_render", "data": {"width": 4, "zoom": 12, "viewbox": VIEWBOX}}
    )
    assert outbox[-1]["type"] == "rendered"
    assert outbox[-1]["data"]["features"] == []


def test_reinit_replaces_topology(worker, two_arcs, shared_corridor):
    worker.handle_message({"type": "init", "data": shared_corridor})
    worker.handle_message({"type": "init", "data": two_arcs})
    assert len(worker.topology.segments) == 2
    assert {c.color for c in worker.topology.connections} == {"#FF0000"}


def test_unknown_message_reports_error(worker, outbox):
    worker.handle_message({"type": "explode"})
    assert _types(outbox) == ["error"]
    assert "message" in outbox[0]["data"]


def test_invalid_topology_reports_error(worker, outbox):
    worker.handle_message({"type": "init", "data": {"type": "Topology"}})
    assert _types(outbox) == ["error"]
    assert "init" in outbox[0]["data"]["message"]


def test_open_viewbox_rejected():
    with pytest.raises(MessageError, match="viewbox"):
        parse_inbound(
            {
                "type": "request_render",
                "data": {"width": 2, "zoom": 10, "viewbox": VIEWBOX[:-1] + [[0, 0]]},
            }
        )


def test_short_viewbox_rejected():
    with pytest.raises(MessageError):
        parse_inbound(
            {"type": "request_render", "data": {"width": 2, "zoom": 10, "viewbox": VIEWBOX[:3]}}
        )


def test_process_topology_direct(worker, outbox, shared_corridor):
    worker.process_topology(shared_corridor)
    assert _types(outbox) == ["add_loading_item", "remove_loading_item"]
    assert len(worker.topology.connections) == 4


def test_worker_thread_processes_in_order(two_arcs):
    outbox = []
    with WorkerThread(outbox.append) as thread:
        thread.post({"type": "init", "data": two_arcs})
        thread.post(
            {"type": "request_render", "data": {"width": 2, "zoom": 8, "viewbox": VIEWBOX}}
        )
        thread.post({"type": "bogus"})
        thread.join_queue()
    assert _types(outbox) == [
        "add_loading_item",
        "remove_loading_item",
        "finished_init",
        "add_loading_item",
        "remove_loading_item",
        "rendered",
        "error",
    ]


@pytest.mark.parametrize("zoom", [-1100, 1100, 1e307, -1e307])
def test_extreme_zoom_still_renders(worker, outbox, two_arcs, zoom):
    worker.handle_message({"type": "init", "data": two_arcs})
    outbox.clear()
    worker.handle_message(
        {"type": "request_render", "data": {"width": 3, "zoom": zoom, "viewbox": VIEWBOX}}
    )
    assert _types(outbox) == ["add_loading_item", "remove_loading_item", "rendered"]


def test_huge_width_still_renders(worker, outbox, two_arcs):
    worker.handle_message({"type": "init", "data": two_arcs})
    outbox.clear()
    worker.handle_message(
        {"type": "request_render", "data": {"width": 1e200, "zoom": 12, "viewbox": VIEWBOX}}
    )
    assert outbox[-1]["type"] == "rendered"


def test_unexpected_failure_reports_error(worker, outbox, monkeypatch):
    def boom(*args):
        raise RuntimeError("render exploded")

    monkeypatch.setattr(worker, "render", boom)
    worker.handle_message(
        {"type": "request_render", "data": {"width": 3, "zoom": 12, "viewbox": VIEWBOX}}
    )
    assert _types(outbox) == ["error"]
    assert outbox[0]["data"]["message"] == "RuntimeError: render exploded"
