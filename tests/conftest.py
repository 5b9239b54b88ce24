"""Shared test fixtures."""

from __future__ import annotations

import pytest

from soiltexture.controller.reducer import ControllerState
from soiltexture.model.composition import Composition

CENTER = (300.0, 280.0)
SIZE = 500.0
TOL = 1e-6


def assert_sums_to_one(composition: Composition, tol: float = TOL) -> None:
    assert abs(composition.total - 1.0) <= tol, composition
    assert all(v >= -tol for v in composition), composition


@pytest.fixture
def state() -> ControllerState:
    """Controller at (0.30, 0.40, 0.30), no locks, default triangle placement."""
    return ControllerState(composition=Composition(0.30, 0.40, 0.30), center=CENTER, size=SIZE)
