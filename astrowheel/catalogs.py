"""Static reference tables for aspects, signs, bodies and chart angles.

All tables are built once at import time and exposed read-only; the
aspect engine receives :data:`ASPECT_CATALOG` (or a caller supplied
replacement) at construction and never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .core.angles import normalize_degrees

__all__ = [
    "ASPECT_CATALOG",
    "ASPECTS_BY_NAME",
    "BODIES",
    "DEFAULT_VISIBILITY",
    "AspectDefinition",
    "BodyInfo",
    "Classification",
    "Nature",
    "SIGNS",
    "SignInfo",
    "degree_in_sign",
    "resolve_body",
    "sign_for_longitude",
]


class Classification(str, Enum):
    """Colour family used when painting a body or sign."""

    FIRE = "fire"
    EARTH = "earth"
    AIR = "air"
    WATER = "water"
    POINTS = "points"
    ASTEROIDS = "asteroids"
    ANGLE = "angle"
    OTHERS = "others"


class Nature(str, Enum):
    HARMONIOUS = "harmonious"
    CHALLENGING = "challenging"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class AspectDefinition:
    """One catalog entry describing an aspect family."""

    name: str
    angle: float
    orb: float
    nature: Nature
    glyph: str
    major: bool


# Declaration order is also the tie-break order of the aspect engine.
ASPECT_CATALOG: tuple[AspectDefinition, ...] = (
    AspectDefinition("conjunction", 0.0, 8.0, Nature.NEUTRAL, "☌", True),
    AspectDefinition("sextile", 60.0, 4.0, Nature.HARMONIOUS, "⚹", True),
    AspectDefinition("square", 90.0, 6.0, Nature.CHALLENGING, "□", True),
    AspectDefinition("trine", 120.0, 7.0, Nature.HARMONIOUS, "△", True),
    AspectDefinition("opposition", 180.0, 8.0, Nature.CHALLENGING, "☍", True),
    AspectDefinition("quincunx", 150.0, 2.0, Nature.NEUTRAL, "⚻", False),
    AspectDefinition("semisextile", 30.0, 1.0, Nature.NEUTRAL, "⚺", False),
    AspectDefinition("semisquare", 45.0, 1.0, Nature.CHALLENGING, "∠", False),
    AspectDefinition("sesquisquare", 135.0, 1.0, Nature.CHALLENGING, "⚼", False),
)

ASPECTS_BY_NAME: Mapping[str, AspectDefinition] = MappingProxyType(
    {definition.name: definition for definition in ASPECT_CATALOG}
)


@dataclass(frozen=True)
class SignInfo:
    index: int
    name: str
    glyph: str
    element: Classification
    ruler: str

    @property
    def start(self) -> float:
        return self.index * 30.0


_E = Classification
SIGNS: tuple[SignInfo, ...] = (
    SignInfo(0, "aries", "♈", _E.FIRE, "mars"),
    SignInfo(1, "taurus", "♉", _E.EARTH, "venus"),
    SignInfo(2, "gemini", "♊", _E.AIR, "mercury"),
    SignInfo(3, "cancer", "♋", _E.WATER, "moon"),
    SignInfo(4, "leo", "♌", _E.FIRE, "sun"),
    SignInfo(5, "virgo", "♍", _E.EARTH, "mercury"),
    SignInfo(6, "libra", "♎", _E.AIR, "venus"),
    SignInfo(7, "scorpio", "♏", _E.WATER, "mars"),
    SignInfo(8, "sagittarius", "♐", _E.FIRE, "jupiter"),
    SignInfo(9, "capricorn", "♑", _E.EARTH, "saturn"),
    SignInfo(10, "aquarius", "♒", _E.AIR, "saturn"),
    SignInfo(11, "pisces", "♓", _E.WATER, "jupiter"),
)


def sign_for_longitude(longitude: float) -> SignInfo:
    """Return the sign record holding ``longitude``."""

    return SIGNS[int(normalize_degrees(longitude) // 30.0) % 12]


def degree_in_sign(longitude: float) -> float:
    return normalize_degrees(longitude) % 30.0


@dataclass(frozen=True)
class BodyInfo:
    """Canonical metadata for a point that can appear on the wheel."""

    name: str
    label: str
    glyph: str
    classification: Classification
    kind: str


_BODY_ROWS: tuple[BodyInfo, ...] = (
    BodyInfo("sun", "Sun", "☉", _E.FIRE, "planet"),
    BodyInfo("moon", "Moon", "☽", _E.WATER, "planet"),
    BodyInfo("mercury", "Mercury", "☿", _E.AIR, "planet"),
    BodyInfo("venus", "Venus", "♀", _E.EARTH, "planet"),
    BodyInfo("mars", "Mars", "♂", _E.FIRE, "planet"),
    BodyInfo("jupiter", "Jupiter", "♃", _E.FIRE, "planet"),
    BodyInfo("saturn", "Saturn", "♄", _E.EARTH, "planet"),
    BodyInfo("uranus", "Uranus", "♅", _E.AIR, "planet"),
    BodyInfo("neptune", "Neptune", "♆", _E.WATER, "planet"),
    BodyInfo("pluto", "Pluto", "♇", _E.WATER, "planet"),
    BodyInfo("asc_node", "North Node", "☊", _E.POINTS, "point"),
    BodyInfo("chiron", "Chiron", "⚷", _E.ASTEROIDS, "asteroid"),
    BodyInfo("ceres", "Ceres", "⚳", _E.ASTEROIDS, "asteroid"),
    BodyInfo("pallas", "Pallas", "⚴", _E.ASTEROIDS, "asteroid"),
    BodyInfo("juno", "Juno", "⚵", _E.ASTEROIDS, "asteroid"),
    BodyInfo("vesta", "Vesta", "⚶", _E.ASTEROIDS, "asteroid"),
    BodyInfo("asc", "Asc", "Asc", _E.ANGLE, "angle"),
    BodyInfo("ic", "IC", "IC", _E.ANGLE, "angle"),
    BodyInfo("dsc", "Dsc", "Dsc", _E.ANGLE, "angle"),
    BodyInfo("mc", "MC", "MC", _E.ANGLE, "angle"),
)

BODIES: Mapping[str, BodyInfo] = MappingProxyType(
    {info.name: info for info in _BODY_ROWS}
)

# Planets, the node and the ASC/MC axis are shown by default; asteroids
# and the derived DSC/IC stay hidden.
DEFAULT_VISIBILITY: Mapping[str, bool] = MappingProxyType(
    {name: info.kind in ("planet", "point") or name in ("asc", "mc") for name, info in BODIES.items()}
)

_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "north node": "asc_node",
        "north_node": "asc_node",
        "true node": "asc_node",
        "mean node": "asc_node",
        "ascendant": "asc",
        "descendant": "dsc",
        "midheaven": "mc",
        "imum coeli": "ic",
    }
)


def resolve_body(name: str) -> BodyInfo | None:
    """Look up ``name`` case-insensitively, honouring common aliases."""

    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    return BODIES.get(key)
