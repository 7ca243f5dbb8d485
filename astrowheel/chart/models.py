"""Chart level data containers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..canonical import AngularPosition, BodyPosition
from ..core.aspects import Aspect
from ..core.houses import HouseCusp

__all__ = ["Chart", "ChartInput"]


@dataclass(frozen=True)
class ChartInput:
    """Raw ephemeris output for one chart.

    ``bodies`` is keyed by the provider's body names; unknown names are
    skipped when the chart is built. ``cusps`` must hold twelve values.
    """

    bodies: Mapping[str, AngularPosition]
    cusps: tuple[float, ...]
    ascendant: float
    midheaven: float
    name: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Chart:
    """A resolved chart: catalogued bodies with houses, cusps and aspects."""

    bodies: tuple[BodyPosition, ...]
    angles: tuple[BodyPosition, ...]
    houses: tuple[HouseCusp, ...]
    aspects: tuple[Aspect, ...]
    name: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def _angle(self, name: str) -> float:
        for body in self.angles:
            if body.name == name:
                return body.longitude
        raise KeyError(name)

    @property
    def ascendant(self) -> float:
        return self._angle("asc")

    @property
    def midheaven(self) -> float:
        return self._angle("mc")

    @property
    def descendant(self) -> float:
        return self._angle("dsc")

    @property
    def imum_coeli(self) -> float:
        return self._angle("ic")

    @property
    def cusps(self) -> tuple[float, ...]:
        return tuple(house.longitude for house in self.houses)

    def body(self, name: str) -> BodyPosition | None:
        key = name.lower()
        for body in self.bodies + self.angles:
            if body.name == key:
                return body
        return None

    def house_placements(self) -> dict[str, int]:
        return {body.name: body.house for body in self.bodies if body.house is not None}

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "bodies": [
                {
                    "name": body.name,
                    "longitude": round(body.longitude, 6),
                    "sign": body.sign.name,
                    "degree_in_sign": round(body.degree_in_sign, 6),
                    "speed": body.speed,
                    "retrograde": body.retrograde,
                    "house": body.house,
                }
                for body in self.bodies
            ],
            "angles": {body.name: round(body.longitude, 6) for body in self.angles},
            "houses": [house.to_dict() for house in self.houses],
            "aspects": [aspect.to_dict() for aspect in self.aspects],
        }
