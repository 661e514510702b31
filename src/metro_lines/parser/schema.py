"""Pydantic schema for the TopoJSON lines export consumed by the renderer."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_STROKE = "#000000"


class LineProperties(BaseModel):
    """Display metadata attached to one route."""

    stroke: str = Field(
        DEFAULT_STROKE, pattern=r"^#[0-9A-Fa-f]{6}$", description="Route color"
    )
    title: str = Field("", description="Route name")
    agency: str = Field("", description="Operating agency")

    @field_validator("stroke", mode="before")
    @classmethod
    def _default_missing_stroke(cls, value):
        return DEFAULT_STROKE if value in (None, "") else value


class LineGeometry(BaseModel):
    """One route as an ordered list of signed arc references."""

    type: Literal["LineString"] = "LineString"
    arcs: list[int] = Field(default_factory=list)
    properties: LineProperties = Field(default_factory=LineProperties)


class LinesCollection(BaseModel):
    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: list[LineGeometry] = Field(default_factory=list)


class TopologyObjects(BaseModel):
    lines: LinesCollection


class Topology(BaseModel):
    """A shared-topology export: routes referencing a global arc table."""

    type: Literal["Topology"]
    objects: TopologyObjects
    arcs: list[list[tuple[float, float]]]
    bbox: Optional[tuple[float, float, float, float]] = None
    upperBounds: Optional[tuple[float, float]] = None

    @field_validator("arcs")
    @classmethod
    def _arcs_are_lines(cls, arcs):
        for i, arc in enumerate(arcs):
            if len(arc) < 2:
                raise ValueError(f"arc {i} has {len(arc)} coordinate(s), need at least 2")
        return arcs

    @property
    def routes(self) -> list[LineGeometry]:
        return self.objects.lines.geometries

    def extent(self) -> tuple[float, float, float, float]:
        """Return (min_lon, min_lat, max_lon, max_lat) of the topology."""
        if self.bbox is not None:
            return self.bbox
        xs = [x for arc in self.arcs for x, _ in arc]
        ys = [y for arc in self.arcs for _, y in arc]
        if not xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(xs), min(ys), max(xs), max(ys))
