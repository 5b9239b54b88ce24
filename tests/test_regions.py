"""Tests for the region polygon table."""

import pytest

from soiltexture.model.classifier import TextureClass, classify_composition
from soiltexture.model.regions import REGIONS, centroid_of, colors_for, lookup, polygon_for, region_for


def _area(vertices) -> float:
    """Shoelace area in the (sand, clay) plane; the simplex has area 0.5."""
    points = [(v.sand, v.clay) for v in vertices]
    total = 0.0
    for (x1, y1), (x2, y2) in zip(points, points[1:] + points[:1]):
        total += x1 * y2 - x2 * y1
    return abs(total) / 2.0


def test_every_class_has_a_region():
    assert set(REGIONS) == set(TextureClass)


@pytest.mark.parametrize("texture_class", list(TextureClass))
def test_polygons_are_valid(texture_class):
    vertices = polygon_for(texture_class)
    assert 3 <= len(vertices) <= 7
    for vertex in vertices:
        assert vertex.is_valid()


def test_regions_tile_the_triangle():
    assert sum(_area(polygon_for(cls)) for cls in TextureClass) == pytest.approx(0.5)


@pytest.mark.parametrize("texture_class", list(TextureClass))
def test_centroid_is_normalized_and_classified_as_its_class(texture_class):
    centroid = centroid_of(texture_class)
    assert centroid.total == pytest.approx(1.0)
    assert classify_composition(centroid) is texture_class


def test_sand_centroid_is_vertex_mean():
    centroid = centroid_of(TextureClass.SAND)
    assert centroid.clay == pytest.approx(0.10 / 3)
    assert centroid.silt == pytest.approx(0.15 / 3)
    assert centroid.sand == pytest.approx((1.0 + 0.90 + 0.85) / 3)


def test_colors():
    base, highlight = colors_for(TextureClass.LOAM)
    assert base.startswith("#") and highlight.startswith("#")
    assert base != highlight
    assert region_for(TextureClass.LOAM).label == "Loam"


@pytest.mark.parametrize("name", ["Silty Clay", "silty clay", "SILTY_CLAY", " Silty Clay "])
def test_lookup_by_label_or_name(name):
    assert lookup(name) is TextureClass.SILTY_CLAY


def test_lookup_unknown_name():
    with pytest.raises(KeyError):
        lookup("Peat")


def test_table_is_read_only():
    with pytest.raises(TypeError):
        REGIONS[TextureClass.SAND] = None  # type: ignore[index]
