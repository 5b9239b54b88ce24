"""Tests for the USDA texture classifier."""

import itertools

import pytest

from soiltexture.model.classifier import RULES, TextureClass, classify, classify_composition
from soiltexture.model.composition import Composition


@pytest.mark.parametrize("clay, silt, sand, expected", [
    (0.50, 0.30, 0.20, TextureClass.CLAY),
    (0.10, 0.85, 0.05, TextureClass.SILT),
    (0.15, 0.40, 0.45, TextureClass.LOAM),
    (0.02, 0.05, 0.93, TextureClass.SAND),  # silt + 1.5 clay = 0.08
    (0.03, 0.02, 0.95, TextureClass.SAND),  # silt + 1.5 clay = 0.065
    (0.45, 0.50, 0.05, TextureClass.SILTY_CLAY),
    (0.40, 0.10, 0.50, TextureClass.SANDY_CLAY),
    (0.33, 0.57, 0.10, TextureClass.SILTY_CLAY_LOAM),
    (0.33, 0.32, 0.35, TextureClass.CLAY_LOAM),
    (0.27, 0.15, 0.58, TextureClass.SANDY_CLAY_LOAM),
    (0.15, 0.65, 0.20, TextureClass.SILT_LOAM),
    (0.05, 0.60, 0.35, TextureClass.SILT_LOAM),
    (0.05, 0.15, 0.80, TextureClass.LOAMY_SAND),
    (0.10, 0.25, 0.65, TextureClass.SANDY_LOAM),
])
def test_reference_points(clay, silt, sand, expected):
    assert classify(clay, silt, sand) is expected


def test_clay_wins_over_silty_clay_on_shared_boundary():
    # silt = 0.40 satisfies both rules; Clay comes first
    assert classify(0.50, 0.40, 0.10) is TextureClass.CLAY


@pytest.mark.parametrize("clay, silt, sand, expected", [
    (0.20, 0.28, 0.52, TextureClass.SANDY_LOAM),
    (0.10, 0.38, 0.52, TextureClass.SANDY_LOAM),
    (0.20, 0.29, 0.51, TextureClass.LOAM),
])
def test_loam_sand_bound_is_exclusive(clay, silt, sand, expected):
    assert classify(clay, silt, sand) is expected


def test_sandy_loam_is_the_fallback():
    assert TextureClass.SANDY_LOAM not in [cls for cls, _ in RULES]
    assert len(RULES) == 11


def test_every_simplex_point_gets_one_label():
    seen = set()
    for clay_pct, silt_pct in itertools.product(range(0, 101), repeat=2):
        if clay_pct + silt_pct > 100:
            continue
        clay, silt = clay_pct / 100, silt_pct / 100
        label = classify(clay, silt, 1.0 - clay - silt)
        assert isinstance(label, TextureClass)
        seen.add(label)
    assert seen == set(TextureClass)


def test_classification_is_deterministic():
    composition = Composition(0.21, 0.33, 0.46)
    assert classify_composition(composition) is classify_composition(composition)
    assert classify_composition(composition) is classify(0.21, 0.33, 0.46)


def test_labels_are_display_names():
    assert str(TextureClass.SILTY_CLAY_LOAM) == "Silty Clay Loam"
    assert len(TextureClass) == 12
