"""Wheel geometry, symbol layout, themes and SVG rendering."""

from __future__ import annotations

from .geometry import ChartGeometry, GeometryOptions, compute_geometry, polar_to_cartesian, wheel_angle
from .layout import SymbolPlacement, place_symbols, spread_positions
from .theme import THEMES, Theme, get_theme
from .wheel import (
    DEFAULT_VISIBILITY,
    WheelOptions,
    WheelRenderResult,
    render_composite,
    render_natal,
    render_synastry,
    render_wheel,
)

__all__ = [
    "DEFAULT_VISIBILITY",
    "THEMES",
    "ChartGeometry",
    "GeometryOptions",
    "SymbolPlacement",
    "Theme",
    "WheelOptions",
    "WheelRenderResult",
    "compute_geometry",
    "get_theme",
    "place_symbols",
    "polar_to_cartesian",
    "render_composite",
    "render_natal",
    "render_synastry",
    "render_wheel",
    "spread_positions",
    "wheel_angle",
]
