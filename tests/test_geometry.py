from __future__ import annotations

import pytest

from astrowheel.errors import ChartInputError
from astrowheel.visual.geometry import (
    GeometryOptions,
    compute_geometry,
    polar_to_cartesian,
    wheel_angle,
)


def test_square_canvas_defaults():
    geo = compute_geometry(600)
    assert geo.height == 600
    assert geo.margin == pytest.approx(24.0)
    assert geo.max_radius == pytest.approx(288.0)
    assert geo.ring_thickness == pytest.approx(43.2)
    assert geo.font_size == pytest.approx(23.76)
    assert geo.symbol_size == pytest.approx(23.76 * 0.8)
    assert geo.symbol_scale == pytest.approx(0.9504)
    assert geo.pos_adj == pytest.approx(10.8)


def test_ring_radii_step_inward():
    geo = compute_geometry(600)
    rt = geo.ring_thickness
    assert geo.sign_ring_radius == pytest.approx(288.0)
    assert geo.house_ring_radius == pytest.approx(288.0 - rt)
    assert geo.axis_ring_radius == pytest.approx(288.0 - 2 * rt)
    assert geo.outer_body_radius == pytest.approx(288.0 - 3 * rt)
    assert geo.inner_body_radius == pytest.approx(288.0 - 4 * rt)
    assert geo.angle_line_radius == pytest.approx(300.0)


def test_rectangular_canvas_uses_short_side():
    geo = compute_geometry(800, 600)
    assert (geo.center_x, geo.center_y) == (400.0, 300.0)
    assert geo.max_radius == pytest.approx(288.0)


def test_custom_fractions():
    geo = compute_geometry(1000, options=GeometryOptions(margin_factor=0.0, ring_thickness_fraction=0.1))
    assert geo.max_radius == pytest.approx(500.0)
    assert geo.ring_thickness == pytest.approx(50.0)


@pytest.mark.parametrize("width,height", [(0, None), (-10, 100), (100, 0), (float("nan"), None)])
def test_invalid_canvas_is_rejected(width, height):
    with pytest.raises(ChartInputError):
        compute_geometry(width, height)


@pytest.mark.parametrize("field", ["pos_adj_factor", "font_size_fraction", "ring_thickness_fraction"])
def test_non_positive_scale_factors_are_rejected(field):
    with pytest.raises(ChartInputError) as excinfo:
        compute_geometry(600, options=GeometryOptions(**{field: 0.0}))
    assert excinfo.value.code == "INVALID_INPUT"


def test_orientation_puts_ascendant_on_the_left():
    assert wheel_angle(350.0, 350.0) == 0.0
    assert wheel_angle(80.0, 350.0) == pytest.approx(90.0)
    x, y = polar_to_cartesian(100.0, 100.0, 50.0, 0.0)
    assert (x, y) == pytest.approx((50.0, 100.0))
    x, y = polar_to_cartesian(100.0, 100.0, 50.0, 90.0)
    assert (x, y) == pytest.approx((100.0, 150.0))
