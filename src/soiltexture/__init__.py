"""Interactive USDA soil texture triangle."""

__version__ = "0.1.0"
