"""
USDA Texture Classifier
=======================
Maps a (clay, silt, sand) composition to one of the twelve USDA soil texture
classes.

The rules are evaluated in order and the first match wins. Several predicates
overlap at their boundaries (e.g. clay >= 0.40 with silt = 0.40 satisfies both
"Clay" and "Silty Clay"), so the order below is part of the definition. The
last class, Sandy Loam, is the fallback and has no predicate of its own.

This module is the source of truth for class assignment. The polygon table in
`soiltexture.model.regions` is for drawing only.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable

from soiltexture.model.composition import Composition


class TextureClass(str, Enum):
    """USDA soil texture classes. The value is the display label."""
    CLAY = "Clay"
    SILTY_CLAY = "Silty Clay"
    SANDY_CLAY = "Sandy Clay"
    SILTY_CLAY_LOAM = "Silty Clay Loam"
    CLAY_LOAM = "Clay Loam"
    SANDY_CLAY_LOAM = "Sandy Clay Loam"
    LOAM = "Loam"
    SILT_LOAM = "Silt Loam"
    SILT = "Silt"
    SAND = "Sand"
    LOAMY_SAND = "Loamy Sand"
    SANDY_LOAM = "Sandy Loam"

    def __str__(self) -> str:
        return self.value


Predicate = Callable[[float, float, float], bool]  # (clay, silt, sand) -> bool

RULES: tuple[tuple[TextureClass, Predicate], ...] = (
    (TextureClass.CLAY, lambda c, si, sa: c >= 0.40 and si <= 0.40 and sa <= 0.45),
    (TextureClass.SILTY_CLAY, lambda c, si, sa: c >= 0.40 and si >= 0.40),
    (TextureClass.SANDY_CLAY, lambda c, si, sa: c >= 0.35 and sa >= 0.45),
    (TextureClass.SILTY_CLAY_LOAM, lambda c, si, sa: 0.27 <= c < 0.40 and sa <= 0.20),
    (TextureClass.CLAY_LOAM, lambda c, si, sa: 0.27 <= c < 0.40 and 0.20 < sa <= 0.45),
    (TextureClass.SANDY_CLAY_LOAM, lambda c, si, sa: 0.20 <= c < 0.35 and si < 0.28 and sa > 0.45),
    (TextureClass.LOAM, lambda c, si, sa: 0.07 <= c < 0.27 and 0.28 <= si < 0.50 and sa < 0.52),
    (TextureClass.SILT_LOAM,
     lambda c, si, sa: (si >= 0.50 and 0.12 <= c < 0.27) or (0.50 <= si < 0.80 and c < 0.12)),
    (TextureClass.SILT, lambda c, si, sa: si >= 0.80 and c < 0.12),
    (TextureClass.SAND, lambda c, si, sa: si + 1.5 * c < 0.15),
    (TextureClass.LOAMY_SAND, lambda c, si, sa: si + 1.5 * c >= 0.15 and si + 2.0 * c < 0.30),
)

DEFAULT_CLASS = TextureClass.SANDY_LOAM


def classify(clay: float, silt: float, sand: float) -> TextureClass:
    """
    Return the texture class of a normalized composition.

    Args:
        clay: Clay fraction in [0, 1].
        silt: Silt fraction in [0, 1].
        sand: Sand fraction in [0, 1].

    Returns:
        The first class whose rule matches, or Sandy Loam when none does.
    """
    for texture_class, predicate in RULES:
        if predicate(clay, silt, sand):
            return texture_class
    return DEFAULT_CLASS


def classify_composition(composition: Composition) -> TextureClass:
    return classify(composition.clay, composition.silt, composition.sand)
