"""Composite (midpoint) charts built from two resolved charts."""

from __future__ import annotations

import logging

from ..canonical import AngularPosition
from ..core.angles import arc_midpoint
from ..core.aspects import AspectEngine
from .models import Chart, ChartInput
from .natal import build_chart

LOG = logging.getLogger(__name__)

__all__ = ["composite_chart", "composite_input"]


def composite_input(first: Chart, second: Chart, *, name: str | None = None) -> ChartInput:
    """Return the midpoint :class:`ChartInput` of two charts.

    Only bodies present in both charts survive. Latitude and speed are the
    arithmetic means of the sources. Cusps are midpointed index by index;
    ASC and MC are midpointed and the opposite angles follow from them.
    """

    partner = {body.name: body for body in second.bodies}
    bodies: dict[str, AngularPosition] = {}
    for body in first.bodies:
        other = partner.get(body.name)
        if other is None:
            LOG.debug("dropping %s from composite: missing in second chart", body.name)
            continue
        bodies[body.name] = AngularPosition(
            arc_midpoint(body.longitude, other.longitude),
            (body.position.latitude + other.position.latitude) / 2.0,
            (body.speed + other.speed) / 2.0,
        )
    for name_only in sorted(set(partner) - {body.name for body in first.bodies}):
        LOG.debug("dropping %s from composite: missing in first chart", name_only)

    cusps = tuple(arc_midpoint(a, b) for a, b in zip(first.cusps, second.cusps))
    label = name or " / ".join(part for part in (first.name, second.name) if part) or None
    return ChartInput(
        bodies=bodies,
        cusps=cusps,
        ascendant=arc_midpoint(first.ascendant, second.ascendant),
        midheaven=arc_midpoint(first.midheaven, second.midheaven),
        name=label,
        metadata={"kind": "composite"},
    )


def composite_chart(
    first: Chart,
    second: Chart,
    *,
    engine: AspectEngine | None = None,
    name: str | None = None,
) -> Chart:
    """Build the resolved composite chart of ``first`` and ``second``."""

    return build_chart(composite_input(first, second, name=name), engine=engine)
