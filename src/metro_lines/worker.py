"""Renderer worker: owns one ingested topology and answers messages.

The worker processes one message at a time, in arrival order. Both
operations are bracketed by paired ``add_loading_item`` /
``remove_loading_item`` notifications so the host can show progress.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Sequence
from typing import Any

from geojson import FeatureCollection

from metro_lines.layout.engine import render_lines
from metro_lines.layout.spacing import scale_spacing
from metro_lines.messages import (
    AddLoadingItem,
    ErrorDetail,
    FinishedInit,
    InitMessage,
    MessageError,
    OutboundMessage,
    RemoveLoadingItem,
    Rendered,
    WorkerError,
    parse_inbound,
)
from metro_lines.parser.model import Coord, LineTopology
from metro_lines.parser.topojson import TopologyError, ingest_topology
from metro_lines.render.geojson import assemble_features

logger = logging.getLogger(__name__)

PostMessage = Callable[[dict[str, Any]], None]


class LinesRendererWorker:
    """Holds the current segments and connections and renders them on request."""

    def __init__(self, post_message: PostMessage) -> None:
        self._post_message = post_message
        self.topology = LineTopology()

    def _post(self, message: OutboundMessage) -> None:
        self._post_message(message.model_dump())

    def _add_loading_item(self) -> None:
        self._post(AddLoadingItem())

    def _remove_loading_item(self) -> None:
        self._post(RemoveLoadingItem())

    def process_topology(self, data: Any) -> None:
        """Replace the held topology with a freshly ingested one."""
        self._add_loading_item()
        try:
            self.topology = ingest_topology(data)
        finally:
            self._remove_loading_item()

    def render(self, requested_spacing: float, viewbox: Sequence[Coord]) -> FeatureCollection:
        """Render the held topology at a spacing, culled to viewbox."""
        self._add_loading_item()
        try:
            result = render_lines(self.topology, requested_spacing, viewbox)
            return assemble_features(result.lines)
        finally:
            self._remove_loading_item()

    def message_init(self, data: Any) -> None:
        self.process_topology(data)
        self._post(FinishedInit())

    def message_request_render(
        self, line_width: float, zoom: float, viewbox: Sequence[Coord]
    ) -> None:
        spacing = scale_spacing(line_width, zoom)
        rendered = self.render(spacing, viewbox)
        self._post(Rendered(data=rendered))

    def handle_message(self, payload: Any) -> None:
        """Validate and dispatch one inbound message.

        Invalid messages, and failures while handling a valid one, are
        answered with an ``error`` message instead of raising, so one bad
        payload does not stop the worker.
        """
        try:
            message = parse_inbound(payload)
        except MessageError as e:
            logger.warning("Rejected message: %s", e)
            self._post(WorkerError(data=ErrorDetail(message=str(e))))
            return

        try:
            if isinstance(message, InitMessage):
                self.message_init(message.data)
            else:
                req = message.data
                self.message_request_render(req.width, req.zoom, req.viewbox)
        except TopologyError as e:
            logger.warning("Rejected topology: %s", e)
            self._post(WorkerError(data=ErrorDetail(message=str(e))))
        except Exception as e:
            logger.exception("Failed handling %s message", message.type)
            self._post(
                WorkerError(data=ErrorDetail(message=f"{type(e).__name__}: {e}"))
            )


class WorkerThread:
    """Run a LinesRendererWorker on a dedicated daemon thread.

    Messages posted with post() are handled strictly in order; outbound
    messages are delivered through post_message on the worker thread.
    """

    _STOP = object()

    def __init__(self, post_message: PostMessage) -> None:
        self.worker = LinesRendererWorker(post_message)
        self._inbox: queue.Queue[Any] = queue.Queue()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="lines-renderer", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while True:
            payload = self._inbox.get()
            try:
                if payload is self._STOP:
                    return
                self.worker.handle_message(payload)
            except Exception:
                logger.exception("Worker failed handling a message")
            finally:
                self._inbox.task_done()

    def post(self, payload: Any) -> None:
        """Queue an inbound message for the worker thread."""
        self._inbox.put(payload)

    def join_queue(self) -> None:
        """Block until every queued message has been handled."""
        self._inbox.join()

    def stop(self, timeout: float | None = None) -> None:
        """Finish queued messages, then stop the thread."""
        if self._thread is None:
            return
        self._inbox.put(self._STOP)
        self._thread.join(timeout)
        self._thread = None

    def __enter__(self) -> WorkerThread:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
