"""
Configuration & Global Constants
================================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (default composition, tolerances,
   grid spacing, canvas sizes) scattered throughout the code.
2. Environment: It reads the few settings that may be overridden from the
   environment (log level, log file) in one place.

Exports:
    DEFAULT_COMPOSITION (tuple): Initial (clay, silt, sand) fractions.
    TOLERANCE (float): Numerical tolerance for sum/range checks.
    GRID_STEP (float): Fraction between grid lines and ticks.
    AXIS_META (tuple): Display metadata indexed by Axis.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

# Application identity (used by QCoreApplication / QSettings)
ORG_ID: str = "soiltexture"
APP_ID: str = "soil-texture-triangle"
VISIBLE_APP_NAME: str = "Soil Texture Triangle"

# Composition defaults
DEFAULT_COMPOSITION: tuple[float, float, float] = (0.30, 0.40, 0.30)  # clay, silt, sand
TOLERANCE: float = 1e-6
MAX_LOCKS: int = 2

# Diagram geometry
GRID_STEP: float = 0.1
TICK_LENGTH: float = 8.0  # px
DEFAULT_TRIANGLE_SIZE: float = 500.0  # px, side length
DEFAULT_CENTER: tuple[float, float] = (300.0, 280.0)
CANVAS_MARGIN: float = 60.0  # px, room for ticks and axis titles
DOT_RADIUS: float = 7.0


@dataclass(frozen=True)
class AxisMeta:
    """Display metadata of a single composition axis."""
    label: str
    color: str


# Indexed by soiltexture.model.composition.Axis (CLAY, SILT, SAND)
AXIS_META: tuple[AxisMeta, AxisMeta, AxisMeta] = (
    AxisMeta(label="Clay", color="#b5523b"),
    AxisMeta(label="Silt", color="#4f7cac"),
    AxisMeta(label="Sand", color="#c9a227"),
)


def _level_from_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


LOG_LEVEL: int = _level_from_env("SOILTEXTURE_LOG_LEVEL", logging.INFO)
LOG_FILE: Optional[str] = os.environ.get("SOILTEXTURE_LOG_FILE") or None
