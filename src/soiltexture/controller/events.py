"""
Controller Events
=================
Immutable records of the inputs the rendering surface forwards to the
controller. Each one is handled by exactly one reducer function.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from soiltexture.model.classifier import TextureClass
from soiltexture.model.composition import Axis


@dataclass(frozen=True)
class PointerDown:
    """Drag start at a screen position."""
    x: float
    y: float


@dataclass(frozen=True)
class PointerMove:
    """Pointer motion; only acted on while dragging."""
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class SliderChange:
    axis: Axis
    value: float  # percent, 0..100


@dataclass(frozen=True)
class NumericInput:
    """Free text typed into an axis' input; staged until committed."""
    axis: Axis
    text: str


@dataclass(frozen=True)
class NumericCommit:
    axis: Axis


@dataclass(frozen=True)
class LockToggle:
    axis: Axis


@dataclass(frozen=True)
class LegendSelect:
    texture_class: TextureClass


@dataclass(frozen=True)
class Resize:
    """New triangle placement reported by the rendering surface."""
    center: tuple[float, float]
    size: float


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[
    PointerDown, PointerMove, PointerUp, PointerLeave,
    SliderChange, NumericInput, NumericCommit,
    LockToggle, LegendSelect, Resize, Reset,
]
