"""
Ternary Geometry
================
Barycentric mapping between a (clay, silt, sand) composition and the 2D
coordinates of an equilateral triangle, plus the derived line work of the
diagram (grid lines, ticks, crosshair).

Screen coordinates follow Qt widget conventions: x grows to the right, y grows
downwards. The apex is 100 % clay, the bottom-left corner 100 % sand and the
bottom-right corner 100 % silt.
"""
from __future__ import annotations

from dataclasses import dataclass
from math import sqrt
from typing import TYPE_CHECKING

import numpy as np

from soiltexture.config import GRID_STEP, TICK_LENGTH
from soiltexture.model.composition import Axis, Composition

if TYPE_CHECKING:
    import numpy.typing as npt

Point2D = tuple[float, float]

SQRT3_2 = sqrt(3.0) / 2.0


@dataclass(frozen=True)
class GridLine:
    """A constant-fraction line across the triangle."""
    axis: Axis
    fraction: float
    points: npt.NDArray[np.float64]  # (2, 2): start, end


@dataclass(frozen=True)
class Tick:
    """A tick on the edge where `axis` is read, with its label anchor."""
    axis: Axis
    fraction: float
    points: npt.NDArray[np.float64]  # (2, 2): on-edge point, outer end
    label_pos: npt.NDArray[np.float64]  # (2,)

    @property
    def label(self) -> str:
        return f"{int(round(self.fraction * 100))}"


def triangle_vertices(center: Point2D, size: float) -> npt.NDArray[np.float64]:
    """
    Corners of an equilateral triangle centred (by bounding box) at `center`.

    Args:
        center: (x, y) of the bounding box centre in screen space.
        size: Side length.

    Returns:
        Array of shape (3, 2) with rows top (clay), bottom-left (sand),
        bottom-right (silt).
    """
    cx, cy = center
    half_h = size * SQRT3_2 / 2.0
    return np.array([
        [cx, cy - half_h],
        [cx - size / 2.0, cy + half_h],
        [cx + size / 2.0, cy + half_h],
    ], dtype=np.float64)


def forward(composition: Composition, center: Point2D, size: float) -> npt.NDArray[np.float64]:
    """
    Project a composition onto the triangle.

    The input is not required to sum to 1; partial compositions are used to
    place grid lines and ticks.

    Returns:
        (x, y) as an array of shape (2,).
    """
    top, bottom_left, bottom_right = triangle_vertices(center, size)
    return composition.clay * top + composition.sand * bottom_left + composition.silt * bottom_right


def inverse(point: Point2D, center: Point2D, size: float) -> Composition:
    """
    Recover the barycentric weights of a screen point.

    Solves  P - BR = clay * (T - BR) + sand * (BL - BR)  for (clay, sand) and
    sets silt = 1 - clay - sand. The result is unconstrained: points outside
    the triangle yield negative components, which the caller must reject or
    clamp.
    """
    top, bottom_left, bottom_right = triangle_vertices(center, size)
    matrix = np.column_stack((top - bottom_right, bottom_left - bottom_right))
    rhs = np.asarray(point, dtype=np.float64) - bottom_right
    clay, sand = np.linalg.solve(matrix, rhs)
    return Composition(float(clay), float(1.0 - clay - sand), float(sand))


def _steps(step: float, *, include_ends: bool) -> list[float]:
    n = int(round(1.0 / step))
    indices = range(0, n + 1) if include_ends else range(1, n)
    return [round(k * step, 10) for k in indices]


def _line_endpoints(axis: Axis, fraction: float) -> tuple[Composition, Composition]:
    """
    End points of the line where `axis` equals `fraction`.

    The second point always lies on the edge where that axis is read:
    clay on the left edge (silt = 0), silt on the right edge (sand = 0),
    sand on the bottom edge (clay = 0).
    """
    rest = 1.0 - fraction
    if axis is Axis.CLAY:
        return Composition(fraction, rest, 0.0), Composition(fraction, 0.0, rest)
    if axis is Axis.SILT:
        return Composition(0.0, fraction, rest), Composition(rest, fraction, 0.0)
    return Composition(rest, 0.0, fraction), Composition(0.0, rest, fraction)


def grid_lines(center: Point2D, size: float, step: float = GRID_STEP) -> list[GridLine]:
    """Interior constant-fraction lines for every axis at multiples of `step`."""
    lines: list[GridLine] = []
    for axis in Axis:
        for fraction in _steps(step, include_ends=False):
            start, end = _line_endpoints(axis, fraction)
            lines.append(GridLine(
                axis=axis,
                fraction=fraction,
                points=np.vstack([forward(start, center, size), forward(end, center, size)]),
            ))
    return lines


def _outward_direction(axis: Axis, vertices: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    top, bottom_left, bottom_right = vertices
    if axis is Axis.CLAY:
        v = bottom_left - bottom_right  # parallel to the bottom edge, pointing left
    elif axis is Axis.SILT:
        v = top - bottom_left  # parallel to the left edge, pointing up-right
    else:
        v = bottom_right - top  # parallel to the right edge, pointing down-right
    return v / np.linalg.norm(v)


def tick_marks(
    center: Point2D,
    size: float,
    step: float = GRID_STEP,
    length: float = TICK_LENGTH,
) -> list[Tick]:
    """
    Ticks (0 % to 100 %) along each axis' reading edge.

    Each tick continues its constant-fraction line outwards by `length`; the
    label anchor sits a further `length` beyond the tick end.
    """
    vertices = triangle_vertices(center, size)
    ticks: list[Tick] = []
    for axis in Axis:
        direction = _outward_direction(axis, vertices)
        for fraction in _steps(step, include_ends=True):
            _, on_edge = _line_endpoints(axis, fraction)
            base = forward(on_edge, center, size)
            tip = base + direction * length
            ticks.append(Tick(
                axis=axis,
                fraction=fraction,
                points=np.vstack([base, tip]),
                label_pos=tip + direction * length,
            ))
    return ticks


def crosshair(composition: Composition, center: Point2D, size: float) -> dict[Axis, npt.NDArray[np.float64]]:
    """
    Segments from the composition's dot to each reading edge.

    Returns:
        Mapping axis -> array of shape (2, 2) (dot, point on the edge).
    """
    dot = forward(composition, center, size)
    segments: dict[Axis, npt.NDArray[np.float64]] = {}
    for axis in Axis:
        _, on_edge = _line_endpoints(axis, composition[axis])
        segments[axis] = np.vstack([dot, forward(on_edge, center, size)])
    return segments


def contains(point: Point2D, center: Point2D, size: float) -> bool:
    """True when the screen point lies inside or on the triangle."""
    return not inverse(point, center, size).has_negative()
