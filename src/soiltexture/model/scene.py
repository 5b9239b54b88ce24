"""
Diagram Scene
=============
Everything the rendering surface needs to draw one frame, computed from a
composition and the triangle placement. Coordinates are screen-space numpy
arrays; no Qt types are involved so the scene can be built and inspected in
tests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from soiltexture.config import GRID_STEP, TICK_LENGTH
from soiltexture.model import geometry
from soiltexture.model.classifier import TextureClass, classify_composition
from soiltexture.model.composition import Axis, Composition
from soiltexture.model.regions import REGIONS

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class SceneRegion:
    """A texture region projected to screen space."""
    texture_class: TextureClass
    polygon: npt.NDArray[np.float64]  # (N, 2), open ring
    fill_color: str
    label_pos: npt.NDArray[np.float64]  # (2,)
    highlighted: bool

    @property
    def label(self) -> str:
        return self.texture_class.value


@dataclass(frozen=True)
class DiagramScene:
    center: tuple[float, float]
    size: float
    composition: Composition
    texture_class: TextureClass
    vertices: npt.NDArray[np.float64]  # (3, 2): top, bottom-left, bottom-right
    grid: list[geometry.GridLine]
    ticks: list[geometry.Tick]
    regions: list[SceneRegion]
    dot: npt.NDArray[np.float64]
    crosshair: dict[Axis, npt.NDArray[np.float64]]

    def region(self, texture_class: TextureClass) -> SceneRegion:
        for region in self.regions:
            if region.texture_class is texture_class:
                return region
        raise KeyError(texture_class)


def build_scene(
    composition: Composition,
    center: tuple[float, float],
    size: float,
    *,
    step: float = GRID_STEP,
    tick_length: float = TICK_LENGTH,
) -> DiagramScene:
    """
    Project the static diagram and the current composition.

    The active class comes from the classifier; its region is flagged as
    highlighted and drawn with the highlight colour.
    """
    current = classify_composition(composition)

    regions: list[SceneRegion] = []
    for texture_class, region in REGIONS.items():
        polygon = np.vstack([geometry.forward(v, center, size) for v in region.vertices])
        is_current = texture_class is current
        regions.append(SceneRegion(
            texture_class=texture_class,
            polygon=polygon,
            fill_color=region.highlight_color if is_current else region.base_color,
            label_pos=geometry.forward(region.centroid, center, size),
            highlighted=is_current,
        ))

    return DiagramScene(
        center=center,
        size=size,
        composition=composition,
        texture_class=current,
        vertices=geometry.triangle_vertices(center, size),
        grid=geometry.grid_lines(center, size, step),
        ticks=geometry.tick_marks(center, size, step, tick_length),
        regions=regions,
        dot=geometry.forward(composition, center, size),
        crosshair=geometry.crosshair(composition, center, size),
    )
