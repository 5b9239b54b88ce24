"""
Composition Types
=================
Pure value types describing a point of the soil texture simplex.

Classes:
    Axis: The three texture fractions, usable as tuple indices.
    Composition: Immutable (clay, silt, sand) triple.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, Iterator, Sequence

from soiltexture.config import TOLERANCE


class Axis(IntEnum):
    """Composition axes. Values double as indices into (clay, silt, sand)."""
    CLAY = 0
    SILT = 1
    SAND = 2

    @property
    def field(self) -> str:
        return self.name.lower()

    def others(self) -> tuple[Axis, Axis]:
        """The two remaining axes, in (clay, silt, sand) order."""
        a, b = (axis for axis in Axis if axis is not self)
        return a, b


LockState = frozenset[Axis]  # at most two axes


@dataclass(frozen=True)
class Composition:
    """
    Fractions of clay, silt and sand.

    A committed composition sums to 1 with every component in [0, 1]. The
    geometry helpers also build partial or out-of-range triples on purpose
    (grid lines, raw pointer readings), so the constructor does not validate.
    """
    clay: float
    silt: float
    sand: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Composition:
        if len(values) != 3:
            raise ValueError(f"Expected 3 components (clay, silt, sand), got {len(values)}.")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    @classmethod
    def from_percent(cls, clay: float, silt: float, sand: float) -> Composition:
        return cls(clay / 100.0, silt / 100.0, sand / 100.0)

    def __getitem__(self, axis: int) -> float:
        return (self.clay, self.silt, self.sand)[axis]

    def __iter__(self) -> Iterator[float]:
        return iter((self.clay, self.silt, self.sand))

    def as_tuple(self) -> tuple[float, float, float]:
        return self.clay, self.silt, self.sand

    def with_value(self, axis: Axis, value: float) -> Composition:
        return replace(self, **{axis.field: value})

    @property
    def total(self) -> float:
        return self.clay + self.silt + self.sand

    def is_valid(self, tol: float = TOLERANCE) -> bool:
        """True when every component is in [0, 1] and the sum is 1."""
        if not all(math.isfinite(v) for v in self):
            return False
        return all(-tol <= v <= 1.0 + tol for v in self) and abs(self.total - 1.0) <= tol

    def has_negative(self, tol: float = TOLERANCE) -> bool:
        """True when a component is below -tol."""
        return any(v < -tol for v in self)

    def clamped(self) -> Composition:
        """Clamp every component to [0, 1]."""
        return Composition(*(min(1.0, max(0.0, v)) for v in self))

    def normalized(self) -> Composition:
        """Rescale to sum to 1. A zero total is returned unchanged."""
        total = self.total
        if total <= 0.0:
            return self
        return Composition(*(v / total for v in self))

    def percentages(self) -> tuple[str, str, str]:
        """Rounded integer percentages, as shown in the numeric inputs."""
        return tuple(str(int(round(v * 100.0))) for v in self)  # type: ignore[return-value]

    def __str__(self) -> str:
        clay, silt, sand = self.percentages()
        return f"clay {clay}%, silt {silt}%, sand {sand}%"


def mean(compositions: Iterable[Composition]) -> Composition:
    """Unweighted arithmetic mean of the given compositions."""
    points = list(compositions)
    if not points:
        raise ValueError("Cannot average an empty sequence of compositions.")
    n = len(points)
    return Composition(
        sum(p.clay for p in points) / n,
        sum(p.silt for p in points) / n,
        sum(p.sand for p in points) / n,
    )
