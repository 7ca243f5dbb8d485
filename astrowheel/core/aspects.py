"""Aspect detection, orb policy and aspect-set analysis.

:class:`AspectEngine` classifies the relationship between two longitudes
against an injected, immutable catalog. The module also carries the
helpers that work over a list of detected aspects: filters, grouping,
the body grid and pattern detection (stelliums, grand trines and
T-squares).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType

from ..canonical import BodyPosition
from ..catalogs import ASPECT_CATALOG, SIGNS, AspectDefinition, Classification, Nature
from .angles import angular_distance, normalize_degrees

LOG = logging.getLogger(__name__)

__all__ = [
    "Aspect",
    "AspectEngine",
    "AspectPattern",
    "OrbPolicy",
    "aspect_grid",
    "count_by_type",
    "filter_by_strength",
    "filter_challenging",
    "filter_harmonious",
    "filter_major",
    "filter_minor",
    "find_grand_trines",
    "find_stelliums",
    "find_t_squares",
    "group_by_type",
]

EXACT_ORB_DEG = 1.0


def _frozen(mapping: Mapping[str, object] | None) -> Mapping:
    return MappingProxyType({str(k).lower(): v for k, v in (mapping or {}).items()})


@dataclass(frozen=True)
class OrbPolicy:
    """Immutable orb configuration consumed by :class:`AspectEngine`.

    ``orbs_by_aspect`` replaces a catalog orb, ``enabled`` switches aspects
    on or off (unlisted aspects stay on) and ``body_adjustments`` are added
    once per participating body. An effective orb of zero or less disables
    the aspect for that pair.
    """

    orbs_by_aspect: Mapping[str, float] = field(default_factory=dict)
    enabled: Mapping[str, bool] = field(default_factory=dict)
    body_adjustments: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "orbs_by_aspect",
            _frozen({k: float(v) for k, v in dict(self.orbs_by_aspect).items()}),
        )
        object.__setattr__(
            self, "enabled", _frozen({k: bool(v) for k, v in dict(self.enabled).items()})
        )
        object.__setattr__(
            self,
            "body_adjustments",
            _frozen({k: float(v) for k, v in dict(self.body_adjustments).items()}),
        )

    @classmethod
    def major_only(cls, catalog: Sequence[AspectDefinition] = ASPECT_CATALOG) -> "OrbPolicy":
        return cls(enabled={definition.name: definition.major for definition in catalog})

    def is_enabled(self, definition: AspectDefinition) -> bool:
        return bool(self.enabled.get(definition.name, True))

    def aspect_orb(self, definition: AspectDefinition) -> float:
        return float(self.orbs_by_aspect.get(definition.name, definition.orb))

    def adjustment(self, body: str | None) -> float:
        if not body:
            return 0.0
        return float(self.body_adjustments.get(body.lower(), 0.0))

    def effective_orb(
        self, definition: AspectDefinition, body_a: str | None = None, body_b: str | None = None
    ) -> float:
        return self.aspect_orb(definition) + self.adjustment(body_a) + self.adjustment(body_b)


@dataclass(frozen=True)
class Aspect:
    """A detected aspect between two bodies."""

    body_a: str
    body_b: str
    name: str
    angle: float
    distance: float
    orb: float
    allowed_orb: float
    applying: bool
    strength: float
    nature: Nature
    glyph: str
    major: bool

    @property
    def is_exact(self) -> bool:
        return self.orb < EXACT_ORB_DEG

    @property
    def separating(self) -> bool:
        return not self.applying

    def to_dict(self) -> dict[str, object]:
        return {
            "body_a": self.body_a,
            "body_b": self.body_b,
            "aspect": self.name,
            "angle": self.angle,
            "distance": round(self.distance, 6),
            "orb": round(self.orb, 6),
            "allowed_orb": self.allowed_orb,
            "applying": self.applying,
            "strength": round(self.strength, 6),
            "nature": self.nature.value,
            "exact": self.is_exact,
        }


class AspectEngine:
    """Classify longitude pairs against an aspect catalog.

    Exact ties between two catalog entries resolve to the entry declared
    first in the catalog.
    """

    def __init__(
        self,
        catalog: Sequence[AspectDefinition] = ASPECT_CATALOG,
        policy: OrbPolicy | None = None,
    ) -> None:
        self._catalog = tuple(catalog)
        self._policy = policy or OrbPolicy()

    @property
    def catalog(self) -> tuple[AspectDefinition, ...]:
        return self._catalog

    @property
    def policy(self) -> OrbPolicy:
        return self._policy

    def match(
        self,
        lon_a: float,
        lon_b: float,
        *,
        speed_a: float = 0.0,
        speed_b: float = 0.0,
        body_a: str = "a",
        body_b: str = "b",
    ) -> Aspect | None:
        """Return the best aspect formed by ``lon_a`` and ``lon_b`` or ``None``."""

        distance = angular_distance(lon_a, lon_b)
        best: AspectDefinition | None = None
        best_orb = 0.0
        best_limit = 0.0
        for definition in self._catalog:
            if not self._policy.is_enabled(definition):
                continue
            limit = self._policy.effective_orb(definition, body_a, body_b)
            if limit <= 0.0:
                continue
            deviation = abs(distance - definition.angle)
            if deviation > 180.0:
                deviation = 360.0 - deviation
            if deviation > limit:
                continue
            if best is None or deviation < best_orb:
                best, best_orb, best_limit = definition, deviation, limit

        if best is None:
            return None

        future = angular_distance(lon_a + speed_a, lon_b + speed_b)
        applying = abs(future - best.angle) < best_orb
        strength = max(0.0, 1.0 - best_orb / best_limit)
        return Aspect(
            body_a=body_a,
            body_b=body_b,
            name=best.name,
            angle=best.angle,
            distance=distance,
            orb=best_orb,
            allowed_orb=best_limit,
            applying=applying,
            strength=strength,
            nature=best.nature,
            glyph=best.glyph,
            major=best.major,
        )

    def match_bodies(self, first: BodyPosition, second: BodyPosition) -> Aspect | None:
        return self.match(
            first.longitude,
            second.longitude,
            speed_a=first.speed,
            speed_b=second.speed,
            body_a=first.name,
            body_b=second.name,
        )

    def find_aspects(self, bodies: Sequence[BodyPosition]) -> list[Aspect]:
        """Return aspects for every unordered pair within one chart."""

        hits: list[Aspect] = []
        for first, second in combinations(bodies, 2):
            hit = self.match_bodies(first, second)
            if hit is not None:
                hits.append(hit)
        LOG.debug("found %d aspects across %d bodies", len(hits), len(bodies))
        return hits

    def cross_aspects(
        self, bodies_a: Sequence[BodyPosition], bodies_b: Sequence[BodyPosition]
    ) -> list[Aspect]:
        """Return aspects between every body of one chart and every body of another."""

        hits: list[Aspect] = []
        for first in bodies_a:
            for second in bodies_b:
                hit = self.match_bodies(first, second)
                if hit is not None:
                    hits.append(hit)
        LOG.debug(
            "found %d cross aspects (%d x %d bodies)", len(hits), len(bodies_a), len(bodies_b)
        )
        return hits


# ---------------------------------------------------------------------------
# Aspect set helpers


def filter_major(aspects: Iterable[Aspect]) -> list[Aspect]:
    return [aspect for aspect in aspects if aspect.major]


def filter_minor(aspects: Iterable[Aspect]) -> list[Aspect]:
    return [aspect for aspect in aspects if not aspect.major]


def filter_harmonious(aspects: Iterable[Aspect]) -> list[Aspect]:
    return [aspect for aspect in aspects if aspect.nature is Nature.HARMONIOUS]


def filter_challenging(aspects: Iterable[Aspect]) -> list[Aspect]:
    return [aspect for aspect in aspects if aspect.nature is Nature.CHALLENGING]


def filter_by_strength(aspects: Iterable[Aspect], min_strength: float) -> list[Aspect]:
    return [aspect for aspect in aspects if aspect.strength >= min_strength]


def group_by_type(aspects: Iterable[Aspect]) -> dict[str, list[Aspect]]:
    """Group aspects by name, keys following catalog order."""

    order = {definition.name: idx for idx, definition in enumerate(ASPECT_CATALOG)}
    grouped: dict[str, list[Aspect]] = {}
    for aspect in sorted(aspects, key=lambda a: order.get(a.name, len(order))):
        grouped.setdefault(aspect.name, []).append(aspect)
    return grouped


def count_by_type(aspects: Iterable[Aspect]) -> dict[str, int]:
    return {name: len(items) for name, items in group_by_type(aspects).items()}


def aspect_grid(aspects: Iterable[Aspect]) -> dict[str, dict[str, Aspect]]:
    """Return a symmetric ``grid[a][b]`` lookup of aspects by body name."""

    grid: dict[str, dict[str, Aspect]] = {}
    for aspect in aspects:
        grid.setdefault(aspect.body_a, {})[aspect.body_b] = aspect
        grid.setdefault(aspect.body_b, {})[aspect.body_a] = aspect
    return grid


# ---------------------------------------------------------------------------
# Patterns


@dataclass(frozen=True)
class AspectPattern:
    kind: str
    bodies: tuple[str, ...]
    sign: str | None = None
    apex: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"kind": self.kind, "bodies": list(self.bodies)}
        if self.sign is not None:
            payload["sign"] = self.sign
        if self.apex is not None:
            payload["apex"] = self.apex
        return payload


def find_stelliums(bodies: Iterable[BodyPosition], *, min_count: int = 3) -> list[AspectPattern]:
    """Return one pattern per sign holding at least ``min_count`` bodies.

    Chart angles are not counted.
    """

    by_sign: dict[int, list[str]] = {}
    for body in bodies:
        if body.info.classification is Classification.ANGLE:
            continue
        index = int(normalize_degrees(body.longitude) // 30.0) % 12
        by_sign.setdefault(index, []).append(body.name)
    return [
        AspectPattern("stellium", tuple(names), sign=SIGNS[index].name)
        for index, names in sorted(by_sign.items())
        if len(names) >= min_count
    ]


def _pairs_by_name(aspects: Iterable[Aspect], name: str) -> set[frozenset[str]]:
    return {
        frozenset((aspect.body_a, aspect.body_b))
        for aspect in aspects
        if aspect.name == name and aspect.body_a != aspect.body_b
    }


def find_grand_trines(aspects: Iterable[Aspect]) -> list[AspectPattern]:
    """Return every triple of bodies that are mutually trine."""

    trines = _pairs_by_name(list(aspects), "trine")
    names = sorted({name for pair in trines for name in pair})
    patterns: list[AspectPattern] = []
    for a, b, c in combinations(names, 3):
        if {frozenset((a, b)), frozenset((b, c)), frozenset((a, c))} <= trines:
            patterns.append(AspectPattern("grand_trine", (a, b, c)))
    return patterns


def find_t_squares(aspects: Iterable[Aspect]) -> list[AspectPattern]:
    """Return oppositions whose two ends both square a third body (the apex)."""

    materialized = list(aspects)
    oppositions = sorted(
        tuple(sorted(pair)) for pair in _pairs_by_name(materialized, "opposition")
    )
    squares = _pairs_by_name(materialized, "square")
    square_names = sorted({name for pair in squares for name in pair})
    patterns: list[AspectPattern] = []
    for a, b in oppositions:
        for apex in square_names:
            if apex in (a, b):
                continue
            if frozenset((a, apex)) in squares and frozenset((b, apex)) in squares:
                patterns.append(AspectPattern("t_square", (a, b, apex), apex=apex))
    return patterns
