"""Canvas geometry: ring radii, font sizing and polar conversion."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.angles import normalize_degrees
from ..errors import ChartInputError

__all__ = [
    "ChartGeometry",
    "GeometryOptions",
    "compute_geometry",
    "polar_to_cartesian",
    "wheel_angle",
]


@dataclass(frozen=True)
class GeometryOptions:
    margin_factor: float = 0.04
    ring_thickness_fraction: float = 0.15
    font_size_fraction: float = 0.55
    pos_adj_factor: float = 2.2


@dataclass(frozen=True)
class ChartGeometry:
    """Derived canvas measurements.

    Rings are stacked inward from :attr:`max_radius`, one ring thickness
    each: signs, houses, cusp axis, outer bodies, inner bodies.
    """

    width: float
    height: float
    center_x: float
    center_y: float
    margin: float
    max_radius: float
    ring_thickness: float
    font_size: float
    symbol_size: float
    symbol_scale: float
    pos_adj: float

    def ring_radius(self, rings_in: float) -> float:
        return self.max_radius - rings_in * self.ring_thickness

    @property
    def sign_ring_radius(self) -> float:
        return self.max_radius

    @property
    def house_ring_radius(self) -> float:
        return self.ring_radius(1)

    @property
    def axis_ring_radius(self) -> float:
        return self.ring_radius(2)

    @property
    def outer_body_radius(self) -> float:
        return self.ring_radius(3)

    @property
    def inner_body_radius(self) -> float:
        return self.ring_radius(4)

    @property
    def angle_line_radius(self) -> float:
        return self.max_radius + self.margin / 2.0

    def point(self, radius: float, theta: float) -> tuple[float, float]:
        return polar_to_cartesian(self.center_x, self.center_y, radius, theta)


def compute_geometry(
    width: float, height: float | None = None, options: GeometryOptions | None = None
) -> ChartGeometry:
    """Derive :class:`ChartGeometry` for a ``width`` x ``height`` canvas.

    ``height`` defaults to ``width``. Non-positive sizes or scale factors,
    or a margin that swallows the canvas, raise :class:`ChartInputError`.
    """

    opts = options or GeometryOptions()
    w = float(width)
    h = float(width if height is None else height)
    if not (math.isfinite(w) and math.isfinite(h)) or w <= 0 or h <= 0:
        raise ChartInputError(
            "canvas size must be positive", details={"width": width, "height": height}
        )

    for label in ("ring_thickness_fraction", "font_size_fraction", "pos_adj_factor"):
        value = getattr(opts, label)
        if not math.isfinite(value) or value <= 0:
            raise ChartInputError(f"{label} must be positive", details={label: value})

    margin = min(w, h) * opts.margin_factor
    max_radius = min(w - margin, h - margin) / 2.0
    if max_radius <= 0:
        raise ChartInputError(
            "margin leaves no room for the wheel", details={"margin_factor": opts.margin_factor}
        )
    ring_thickness = max_radius * opts.ring_thickness_fraction
    font_size = ring_thickness * opts.font_size_fraction
    symbol_size = font_size * 0.8
    return ChartGeometry(
        width=w,
        height=h,
        center_x=w / 2.0,
        center_y=h / 2.0,
        margin=margin,
        max_radius=max_radius,
        ring_thickness=ring_thickness,
        font_size=font_size,
        symbol_size=symbol_size,
        symbol_scale=symbol_size / 20.0,
        pos_adj=font_size / opts.pos_adj_factor,
    )


def wheel_angle(longitude: float, ascendant: float) -> float:
    """Return ``longitude`` measured from the ascendant, in ``[0, 360)``."""

    return normalize_degrees(longitude - ascendant)


def polar_to_cartesian(cx: float, cy: float, radius: float, theta: float) -> tuple[float, float]:
    # theta 0 is the left horizon; angles grow counter-clockwise on screen.
    rad = math.radians(theta)
    return cx - radius * math.cos(rad), cy + radius * math.sin(rad)
