"""Corner-cutting path smoothing."""

from __future__ import annotations

from collections.abc import Sequence

from metro_lines.parser.model import Coord


def smooth_path(
    coords: Sequence[Coord],
    iterations: int,
    factor: float,
) -> list[Coord]:
    """Smooth a polyline with Chaikin corner cutting.

    Each pass replaces every edge (p, q) by the two points
    ``factor*p + (1-factor)*q`` and ``(1-factor)*p + factor*q``. The first
    and last points are kept so smoothed lines still meet their
    neighbours.
    """
    points = list(coords)
    if len(points) < 3:
        return points

    for _ in range(iterations):
        cut: list[Coord] = [points[0]]
        for (x0, y0), (x1, y1) in zip(points, points[1:]):
            cut.append((factor * x0 + (1 - factor) * x1, factor * y0 + (1 - factor) * y1))
            cut.append(((1 - factor) * x0 + factor * x1, (1 - factor) * y0 + factor * y1))
        cut.append(points[-1])
        points = cut

    return points
