"""Canonical position types exchanged between the engines."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .catalogs import BodyInfo, SignInfo, degree_in_sign, sign_for_longitude
from .core.angles import normalize_degrees
from .errors import ChartInputError

__all__ = ["AngularPosition", "BodyPosition", "ensure_finite"]


def ensure_finite(value: float, *, field: str) -> float:
    """Return ``value`` as ``float`` or raise :class:`ChartInputError`."""

    try:
        numeric = float(value)
    except (TypeError, ValueError) as exc:
        raise ChartInputError(
            f"{field} must be numeric", details={"field": field, "value": repr(value)}
        ) from exc
    if not math.isfinite(numeric):
        raise ChartInputError(
            f"{field} must be finite", details={"field": field, "value": repr(value)}
        )
    return numeric


@dataclass(frozen=True)
class AngularPosition:
    """Instantaneous ecliptic position.

    Attributes
    ----------
    longitude:
        Ecliptic longitude, wrapped into ``[0, 360)`` on construction.
    latitude:
        Ecliptic latitude in degrees.
    speed:
        Longitudinal motion in degrees per day; negative means retrograde.
    """

    longitude: float
    latitude: float = 0.0
    speed: float = 0.0

    def __post_init__(self) -> None:
        lon = ensure_finite(self.longitude, field="longitude")
        object.__setattr__(self, "longitude", normalize_degrees(lon))
        object.__setattr__(self, "latitude", ensure_finite(self.latitude, field="latitude"))
        object.__setattr__(self, "speed", ensure_finite(self.speed, field="speed"))

    @property
    def retrograde(self) -> bool:
        return self.speed < 0.0


@dataclass(frozen=True)
class BodyPosition:
    """A catalogued body together with its position and house."""

    info: BodyInfo
    position: AngularPosition
    house: int | None = None

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def longitude(self) -> float:
        return self.position.longitude

    @property
    def speed(self) -> float:
        return self.position.speed

    @property
    def retrograde(self) -> bool:
        return self.position.retrograde

    @property
    def sign(self) -> SignInfo:
        return sign_for_longitude(self.position.longitude)

    @property
    def degree_in_sign(self) -> float:
        return degree_in_sign(self.position.longitude)
