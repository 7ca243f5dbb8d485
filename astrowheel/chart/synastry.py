"""Cross-chart aspects and house overlays between two charts."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.aspects import Aspect, AspectEngine
from ..core.houses import house_for_longitude
from .models import Chart

__all__ = ["SynastryResult", "build_synastry", "house_overlay"]


@dataclass(frozen=True)
class SynastryResult:
    primary: Chart
    partner: Chart
    aspects: tuple[Aspect, ...]
    partner_in_primary_houses: dict[str, int]
    primary_in_partner_houses: dict[str, int]

    def to_dict(self) -> dict[str, object]:
        return {
            "primary": self.primary.name,
            "partner": self.partner.name,
            "aspects": [aspect.to_dict() for aspect in self.aspects],
            "partner_in_primary_houses": dict(self.partner_in_primary_houses),
            "primary_in_partner_houses": dict(self.primary_in_partner_houses),
        }


def house_overlay(guest: Chart, host: Chart) -> dict[str, int]:
    """Return the host-chart house of every body of ``guest``."""

    cusps = host.cusps
    return {body.name: house_for_longitude(body.longitude, cusps) for body in guest.bodies}


def build_synastry(
    primary: Chart, partner: Chart, *, engine: AspectEngine | None = None
) -> SynastryResult:
    """Aspects run from each ``primary`` body to each ``partner`` body."""

    active_engine = engine or AspectEngine()
    return SynastryResult(
        primary=primary,
        partner=partner,
        aspects=tuple(active_engine.cross_aspects(primary.bodies, partner.bodies)),
        partner_in_primary_houses=house_overlay(partner, primary),
        primary_in_partner_houses=house_overlay(primary, partner),
    )
