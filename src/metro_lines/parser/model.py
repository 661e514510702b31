"""Data model for ingested line topologies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Coord = tuple[float, float]


class EndpointTag(Enum):
    """End of a segment where a connection attaches."""

    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class ArcRef:
    """A signed reference to an arc in the topology's arc table.

    Non-negative values traverse the arc forward; the one's-complement
    encoding ``-index - 1`` traverses it reversed.
    """

    raw: int

    @property
    def index(self) -> int:
        return self.raw if self.raw >= 0 else -self.raw - 1

    @property
    def reversed(self) -> bool:
        return self.raw < 0

    @property
    def exit_tag(self) -> EndpointTag:
        """Endpoint a route leaves this arc through."""
        return EndpointTag.TOP if self.reversed else EndpointTag.BOTTOM

    @property
    def entry_tag(self) -> EndpointTag:
        """Endpoint a route enters this arc through."""
        return EndpointTag.BOTTOM if self.reversed else EndpointTag.TOP


@dataclass(frozen=True)
class Segment:
    """One arc of the shared topology and the route colors traversing it."""

    id: int
    geometry: tuple[Coord, ...]
    colors: tuple[str, ...] = ()

    @property
    def top(self) -> Coord:
        return self.geometry[0]

    @property
    def bottom(self) -> Coord:
        return self.geometry[-1]


@dataclass(frozen=True)
class Connection:
    """A directed join between two segment endpoints for one color."""

    from_id: int
    from_tag: EndpointTag
    to_id: int
    to_tag: EndpointTag
    color: str

    @property
    def dedupe_key(self) -> str:
        return ":".join(
            [self.color, str(self.from_id), self.from_tag.value,
             str(self.to_id), self.to_tag.value]
        )


@dataclass
class LineTopology:
    """Segments and connections recovered from one topology load."""

    segments: dict[int, Segment] = field(default_factory=dict)
    connections: list[Connection] = field(default_factory=list)

    def segment_colors(self) -> list[str]:
        """Return every route color in first-seen segment order."""
        seen: dict[str, None] = {}
        for segment in self.segments.values():
            for color in segment.colors:
                seen.setdefault(color)
        return list(seen)

    def connections_for(self, color: str) -> list[Connection]:
        """Return connections belonging to a single route color."""
        return [c for c in self.connections if c.color == color]
