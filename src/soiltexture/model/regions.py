"""
Texture Region Table
====================
Static polygons (in composition space) and display colours of the twelve USDA
texture classes.

The vertices are written in percent as (clay, silt, sand). Neighbouring
regions share their edge vertices, so together the polygons tile the whole
triangle. Exact boundary points are still decided by the classifier rule
order, not by this table.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from soiltexture.model.classifier import TextureClass
from soiltexture.model.composition import Composition, mean

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """Boundary polygon and colours of one texture class."""
    texture_class: TextureClass
    vertices: tuple[Composition, ...]
    base_color: str
    highlight_color: str

    @property
    def label(self) -> str:
        return self.texture_class.value

    @property
    def centroid(self) -> Composition:
        """Vertex mean, renormalized to sum to 1."""
        return mean(self.vertices).normalized()


def _region(
    texture_class: TextureClass,
    vertices_percent: list[tuple[float, float, float]],
    base_color: str,
    highlight_color: str,
) -> Region:
    return Region(
        texture_class=texture_class,
        vertices=tuple(Composition.from_percent(*v) for v in vertices_percent),
        base_color=base_color,
        highlight_color=highlight_color,
    )


_TABLE = (
    _region(TextureClass.CLAY,
            [(40, 15, 45), (55, 0, 45), (100, 0, 0), (60, 40, 0), (40, 40, 20)],
            "#e8b4a0", "#d9825f"),
    _region(TextureClass.SILTY_CLAY,
            [(40, 40, 20), (60, 40, 0), (40, 60, 0)],
            "#d9b9d6", "#b97db3"),
    _region(TextureClass.SANDY_CLAY,
            [(35, 0, 65), (55, 0, 45), (40, 15, 45), (35, 20, 45)],
            "#f2c6a6", "#e69a63"),
    _region(TextureClass.SILTY_CLAY_LOAM,
            [(27, 53, 20), (40, 40, 20), (40, 60, 0), (27, 73, 0)],
            "#c7c3e6", "#8f88cf"),
    _region(TextureClass.CLAY_LOAM,
            [(27, 28, 45), (35, 20, 45), (40, 15, 45), (40, 40, 20), (27, 53, 20)],
            "#e9cfa3", "#d7a65a"),
    _region(TextureClass.SANDY_CLAY_LOAM,
            [(20, 0, 80), (35, 0, 65), (35, 20, 45), (27, 28, 45), (20, 28, 52)],
            "#f4dbb0", "#e8b765"),
    _region(TextureClass.LOAM,
            [(7, 41, 52), (20, 28, 52), (27, 28, 45), (27, 50, 23), (7, 50, 43)],
            "#cfe3b0", "#9cc65f"),
    _region(TextureClass.SILT_LOAM,
            [(0, 50, 50), (7, 50, 43), (27, 50, 23), (27, 73, 0), (12, 88, 0), (12, 80, 8), (0, 80, 20)],
            "#b9dcd2", "#6fb8a3"),
    _region(TextureClass.SILT,
            [(0, 80, 20), (12, 80, 8), (12, 88, 0), (0, 100, 0)],
            "#a9cbe6", "#5b9bd0"),
    _region(TextureClass.SAND,
            [(0, 0, 100), (10, 0, 90), (0, 15, 85)],
            "#fbf0c2", "#f3d65d"),
    _region(TextureClass.LOAMY_SAND,
            [(10, 0, 90), (15, 0, 85), (0, 30, 70), (0, 15, 85)],
            "#f6e6b4", "#ebc961"),
    _region(TextureClass.SANDY_LOAM,
            [(15, 0, 85), (20, 0, 80), (20, 28, 52), (7, 41, 52), (7, 50, 43), (0, 50, 50), (0, 30, 70)],
            "#efdcae", "#dcb35a"),
)

REGIONS: Mapping[TextureClass, Region] = MappingProxyType({r.texture_class: r for r in _TABLE})


def region_for(texture_class: TextureClass) -> Region:
    return REGIONS[texture_class]


def polygon_for(texture_class: TextureClass) -> tuple[Composition, ...]:
    """Ordered boundary vertices of a class, in composition space."""
    return REGIONS[texture_class].vertices


def centroid_of(texture_class: TextureClass) -> Composition:
    """
    Representative composition of a class.

    The unweighted mean of the polygon vertices, renormalized so the three
    fractions sum to 1. Used to jump to a class from the legend.
    """
    return REGIONS[texture_class].centroid


def colors_for(texture_class: TextureClass) -> tuple[str, str]:
    region = REGIONS[texture_class]
    return region.base_color, region.highlight_color


def lookup(name: str) -> TextureClass:
    """
    Resolve a class by display label ("Silty Clay") or enum name ("SILTY_CLAY").

    Raises:
        KeyError: If no class matches.
    """
    key = name.strip()
    for texture_class in TextureClass:
        if key.casefold() in (texture_class.value.casefold(), texture_class.name.casefold()):
            return texture_class
    raise KeyError(f"No texture class named '{name}'")


def _check_table() -> None:
    """Log table entries that break the composition invariants."""
    for region in _TABLE:
        for vertex in region.vertices:
            if not vertex.is_valid():
                logger.warning("Region %s has an invalid vertex: %s", region.label, vertex)


_check_table()
