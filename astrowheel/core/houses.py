"""House assignment against twelve supplied cusps."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..canonical import ensure_finite
from ..catalogs import sign_for_longitude
from ..errors import ChartInputError
from .angles import angular_distance, normalize_degrees

LOG = logging.getLogger(__name__)

__all__ = [
    "HOUSE_COUNT",
    "HouseCusp",
    "build_house_cusps",
    "house_for_longitude",
    "house_sizes",
    "validate_cusps",
]

HOUSE_COUNT = 12


@dataclass(frozen=True)
class HouseCusp:
    """A house cusp with the span it covers and the sign on the cusp."""

    number: int
    longitude: float
    size: float
    sign: str
    ruler: str

    def to_dict(self) -> dict[str, object]:
        return {
            "number": self.number,
            "cusp": round(self.longitude, 6),
            "size": round(self.size, 6),
            "sign": self.sign,
            "ruler": self.ruler,
        }


def validate_cusps(cusps: Sequence[float]) -> list[float]:
    """Return normalised cusps or raise :class:`ChartInputError`."""

    values = list(cusps)
    if len(values) != HOUSE_COUNT:
        raise ChartInputError(
            f"expected {HOUSE_COUNT} house cusps, got {len(values)}",
            details={"cusp_count": len(values)},
        )
    return [
        normalize_degrees(ensure_finite(value, field=f"cusp[{idx + 1}]"))
        for idx, value in enumerate(values)
    ]


def house_for_longitude(longitude: float, cusps: Sequence[float]) -> int:
    """Return the 1-based house holding ``longitude``.

    A house whose next cusp is numerically smaller crosses the 0° seam and
    holds everything at or after its own cusp or before the next one.
    When no house matches (degenerate cusps) the house of the nearest cusp
    is returned.
    """

    normalized = validate_cusps(cusps)
    lon = normalize_degrees(longitude)
    for idx in range(HOUSE_COUNT):
        current = normalized[idx]
        following = normalized[(idx + 1) % HOUSE_COUNT]
        if following < current:
            if lon >= current or lon < following:
                return idx + 1
        elif current <= lon < following:
            return idx + 1

    nearest = min(range(HOUSE_COUNT), key=lambda i: angular_distance(lon, normalized[i]))
    LOG.debug("no house matched %.4f; falling back to nearest cusp %d", lon, nearest + 1)
    return nearest + 1


def house_sizes(cusps: Sequence[float]) -> list[float]:
    """Return the span of each house, wraparound aware."""

    normalized = validate_cusps(cusps)
    return [
        (normalized[(idx + 1) % HOUSE_COUNT] - normalized[idx] + 360.0) % 360.0
        for idx in range(HOUSE_COUNT)
    ]


def build_house_cusps(cusps: Sequence[float]) -> tuple[HouseCusp, ...]:
    normalized = validate_cusps(cusps)
    sizes = house_sizes(normalized)
    records = []
    for idx, (lon, size) in enumerate(zip(normalized, sizes)):
        sign = sign_for_longitude(lon)
        records.append(HouseCusp(idx + 1, lon, size, sign.name, sign.ruler))
    return tuple(records)
