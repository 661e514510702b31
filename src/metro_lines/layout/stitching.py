"""Joining per-segment offset lines across connections."""

from __future__ import annotations

import logging

from metro_lines.layout.constants import (
    SMOOTH_CONNECTIONS_BELOW,
    SMOOTH_CONNECTIONS_FACTOR,
    SMOOTH_CONNECTIONS_ITERATIONS,
)
from metro_lines.layout.offsets import EndpointRegistry, EndpointVariant, RenderedLines
from metro_lines.layout.smoothing import smooth_path
from metro_lines.parser.model import Connection, Coord

logger = logging.getLogger(__name__)

_FROM_CHAIN = (EndpointVariant.ACTUAL, EndpointVariant.BUFFER, EndpointVariant.INVASIVE)
_TO_CHAIN = (EndpointVariant.INVASIVE, EndpointVariant.BUFFER, EndpointVariant.ACTUAL)


def connection_chain(
    connection: Connection,
    registry: EndpointRegistry,
) -> list[Coord] | None:
    """Return the six control points joining a connection's two lines.

    The chain runs from the drawn end of the source line back through its
    buffer and invasive points, then out through the target's invasive
    and buffer points to its drawn end. None if any point is missing.
    """
    chain: list[Coord] = []
    for seg_id, tag, variants in (
        (connection.from_id, connection.from_tag, _FROM_CHAIN),
        (connection.to_id, connection.to_tag, _TO_CHAIN),
    ):
        for variant in variants:
            point = registry.lookup(seg_id, connection.color, tag, variant)
            if point is None:
                return None
            chain.append(point)
    return chain


def stitch_connections(
    connections: list[Connection],
    registry: EndpointRegistry,
    rendered: RenderedLines,
    spacing: float,
) -> int:
    """Append one joining line per complete connection.

    Connections touching a segment or color that was not drawn in this
    call are skipped; partial joins are never emitted. Returns how many
    connections were skipped.
    """
    should_smooth = spacing < SMOOTH_CONNECTIONS_BELOW
    dropped = 0

    for connection in connections:
        chain = connection_chain(connection, registry)
        if chain is None:
            dropped += 1
            continue
        if should_smooth:
            chain = smooth_path(
                chain, SMOOTH_CONNECTIONS_ITERATIONS, SMOOTH_CONNECTIONS_FACTOR
            )
        rendered.add(connection.color, chain)

    if dropped:
        logger.debug("Skipped %d connection(s) with undrawn endpoints", dropped)
    return dropped
