from __future__ import annotations

import pytest

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
st = hypothesis.strategies

from astrowheel.canonical import AngularPosition, BodyPosition
from astrowheel.catalogs import ASPECT_CATALOG, BODIES, AspectDefinition, Nature
from astrowheel.core.aspects import (
    AspectEngine,
    OrbPolicy,
    aspect_grid,
    count_by_type,
    filter_by_strength,
    filter_challenging,
    filter_harmonious,
    filter_major,
    filter_minor,
    find_grand_trines,
    find_stelliums,
    find_t_squares,
    group_by_type,
)


def _body(name: str, lon: float, speed: float = 0.0) -> BodyPosition:
    return BodyPosition(BODIES[name], AngularPosition(lon, 0.0, speed))


def test_exact_trine():
    hit = AspectEngine().match(10.0, 130.0)
    assert hit is not None
    assert hit.name == "trine"
    assert hit.orb == pytest.approx(0.0)
    assert hit.strength == pytest.approx(1.0)
    assert hit.is_exact
    assert hit.nature is Nature.HARMONIOUS


def test_square_orb_one_degree_is_not_exact():
    hit = AspectEngine().match(0.0, 91.0)
    assert hit is not None
    assert hit.name == "square"
    assert hit.orb == pytest.approx(1.0)
    assert hit.strength == pytest.approx(1.0 - 1.0 / 6.0, rel=1e-4)
    assert not hit.is_exact


def test_square_just_inside_one_degree_is_exact():
    hit = AspectEngine().match(0.0, 90.999)
    assert hit is not None and hit.is_exact


def test_distance_beyond_180_folds_back():
    hit = AspectEngine().match(0.0, 181.0)
    assert hit is not None
    assert hit.name == "opposition"
    assert hit.distance == pytest.approx(179.0)
    assert hit.orb == pytest.approx(1.0)


def test_no_aspect_outside_every_orb():
    assert AspectEngine().match(0.0, 75.0) is None


@given(
    st.floats(0.0, 359.999),
    st.floats(0.0, 359.999),
    st.floats(-2.0, 2.0),
    st.floats(-2.0, 2.0),
)
def test_detection_is_symmetric(a: float, b: float, speed_a: float, speed_b: float) -> None:
    engine = AspectEngine()
    forward = engine.match(a, b, speed_a=speed_a, speed_b=speed_b)
    backward = engine.match(b, a, speed_a=speed_b, speed_b=speed_a)
    if forward is None:
        assert backward is None
        return
    assert backward is not None
    assert forward.name == backward.name
    assert forward.orb == pytest.approx(backward.orb)
    assert forward.applying == backward.applying
    assert 0.0 <= forward.strength <= 1.0


def test_tie_resolves_to_first_declared_entry():
    alpha = AspectDefinition("alpha", 60.0, 5.0, Nature.NEUTRAL, "a", True)
    beta = AspectDefinition("beta", 60.0, 5.0, Nature.NEUTRAL, "b", True)
    assert AspectEngine((alpha, beta)).match(0.0, 61.0).name == "alpha"
    assert AspectEngine((beta, alpha)).match(0.0, 61.0).name == "beta"


def test_applying_and_separating():
    engine = AspectEngine()
    applying = engine.match(0.0, 92.0, speed_b=-1.0)
    assert applying is not None and applying.applying
    separating = engine.match(0.0, 92.0, speed_b=1.0)
    assert separating is not None and separating.separating
    stationary = engine.match(0.0, 92.0)
    assert stationary is not None and not stationary.applying


def test_body_adjustments_widen_orb():
    policy = OrbPolicy(body_adjustments={"Sun": 1.0, "moon": 1.0})
    engine = AspectEngine(policy=policy)
    assert AspectEngine().match(0.0, 97.0, body_a="sun", body_b="moon") is None
    hit = engine.match(0.0, 97.0, body_a="sun", body_b="moon")
    assert hit is not None
    assert hit.allowed_orb == pytest.approx(8.0)


def test_disabled_and_zero_orb_aspects_are_skipped():
    assert AspectEngine(policy=OrbPolicy(enabled={"trine": False})).match(10.0, 130.0) is None
    assert AspectEngine(policy=OrbPolicy(orbs_by_aspect={"trine": 0.0})).match(10.0, 130.0) is None
    shrunk = OrbPolicy(body_adjustments={"sun": -4.0, "moon": -4.0})
    assert AspectEngine(policy=shrunk).match(0.0, 120.0, body_a="sun", body_b="moon") is None


def test_major_only_policy():
    assert AspectEngine().match(0.0, 150.0).name == "quincunx"
    assert AspectEngine(policy=OrbPolicy.major_only()).match(0.0, 150.0) is None


def test_engine_keeps_catalog_immutable():
    engine = AspectEngine()
    assert engine.catalog == ASPECT_CATALOG
    assert isinstance(engine.catalog, tuple)
    with pytest.raises(TypeError):
        engine.policy.enabled["trine"] = False  # type: ignore[index]


def test_find_and_cross_aspects(natal_chart, partner_chart):
    names = {(a.body_a, a.body_b, a.name) for a in natal_chart.aspects}
    assert ("sun", "moon", "trine") in names
    assert ("sun", "saturn", "opposition") in names

    cross = AspectEngine().cross_aspects(natal_chart.bodies, partner_chart.bodies)
    assert any(a.body_a == "sun" and a.body_b == "sun" and a.name == "conjunction" for a in cross)
    assert all(a.body_a in {b.name for b in natal_chart.bodies} for a in cross)


def test_filters_and_grouping():
    engine = AspectEngine()
    aspects = [
        engine.match(0.0, 120.0, body_a="sun", body_b="moon"),
        engine.match(0.0, 92.0, body_a="sun", body_b="mars"),
        engine.match(0.0, 150.5, body_a="sun", body_b="saturn"),
        engine.match(0.0, 119.0, body_a="venus", body_b="jupiter"),
    ]
    assert [a.name for a in filter_major(aspects)] == ["trine", "square", "trine"]
    assert [a.name for a in filter_minor(aspects)] == ["quincunx"]
    assert len(filter_harmonious(aspects)) == 2
    assert [a.body_b for a in filter_challenging(aspects)] == ["mars"]
    assert [a.body_b for a in filter_by_strength(aspects, 0.9)] == ["moon"]
    assert list(group_by_type(aspects)) == ["square", "trine", "quincunx"]
    assert count_by_type(aspects) == {"square": 1, "trine": 2, "quincunx": 1}

    grid = aspect_grid(aspects)
    assert grid["moon"]["sun"] is grid["sun"]["moon"]


def test_patterns():
    engine = AspectEngine()
    bodies = [
        _body("sun", 5.0),
        _body("moon", 125.0),
        _body("mars", 245.0),
        _body("mercury", 15.0),
        _body("venus", 20.0),
    ]
    aspects = engine.find_aspects(bodies)
    trines = find_grand_trines(aspects)
    assert [p.bodies for p in trines] == [("mars", "moon", "sun")]

    stelliums = find_stelliums(bodies)
    assert len(stelliums) == 1
    assert stelliums[0].sign == "aries"
    assert set(stelliums[0].bodies) == {"sun", "mercury", "venus"}

    t_bodies = [_body("sun", 0.0), _body("moon", 180.0), _body("mars", 90.0)]
    t_squares = find_t_squares(engine.find_aspects(t_bodies))
    assert len(t_squares) == 1
    assert t_squares[0].apex == "mars"
