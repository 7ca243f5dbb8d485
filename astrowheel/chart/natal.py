"""Turn raw ephemeris output into a resolved :class:`Chart`."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..canonical import AngularPosition, BodyPosition, ensure_finite
from ..catalogs import BODIES, Classification, resolve_body
from ..core.angles import normalize_degrees
from ..core.aspects import AspectEngine
from ..core.houses import build_house_cusps, house_for_longitude, validate_cusps
from ..errors import ChartInputError
from .models import Chart, ChartInput

LOG = logging.getLogger(__name__)

__all__ = ["angle_positions", "build_chart"]


def angle_positions(ascendant: float, midheaven: float) -> dict[str, float]:
    """Return the four chart angles; DSC and IC oppose ASC and MC."""

    asc = normalize_degrees(ensure_finite(ascendant, field="ascendant"))
    mc = normalize_degrees(ensure_finite(midheaven, field="midheaven"))
    return {
        "asc": asc,
        "ic": normalize_degrees(mc + 180.0),
        "dsc": normalize_degrees(asc + 180.0),
        "mc": mc,
    }


def _resolve_bodies(
    raw: Mapping[str, AngularPosition], cusps: list[float]
) -> tuple[BodyPosition, ...]:
    resolved: dict[str, BodyPosition] = {}
    for name, position in raw.items():
        info = resolve_body(name)
        if info is None or info.classification is Classification.ANGLE:
            LOG.debug("skipping unsupported body %r", name)
            continue
        if info.name in resolved:
            LOG.debug("duplicate body %r ignored", name)
            continue
        if not isinstance(position, AngularPosition):
            raise ChartInputError(
                f"position for {name!r} is not an AngularPosition",
                details={"body": name},
            )
        house = house_for_longitude(position.longitude, cusps)
        resolved[info.name] = BodyPosition(info, position, house)

    order = {key: idx for idx, key in enumerate(BODIES)}
    return tuple(sorted(resolved.values(), key=lambda body: order[body.name]))


def build_chart(chart_input: ChartInput, *, engine: AspectEngine | None = None) -> Chart:
    """Validate ``chart_input`` and compute houses and aspects.

    Raises
    ------
    ChartInputError
        When the cusp count is not twelve or an angle or position is not a
        finite number.
    """

    if chart_input.ascendant is None or chart_input.midheaven is None:
        raise ChartInputError("ascendant and midheaven are required")
    cusps = validate_cusps(chart_input.cusps)
    angles = angle_positions(chart_input.ascendant, chart_input.midheaven)
    bodies = _resolve_bodies(chart_input.bodies, cusps)

    angle_bodies = tuple(
        BodyPosition(BODIES[name], AngularPosition(lon), house_for_longitude(lon, cusps))
        for name, lon in angles.items()
    )
    active_engine = engine or AspectEngine()
    aspects = active_engine.find_aspects(bodies)
    LOG.debug(
        "built chart %r with %d bodies and %d aspects",
        chart_input.name,
        len(bodies),
        len(aspects),
    )
    return Chart(
        bodies=bodies,
        angles=angle_bodies,
        houses=build_house_cusps(cusps),
        aspects=tuple(aspects),
        name=chart_input.name,
        metadata=dict(chart_input.metadata),
    )
