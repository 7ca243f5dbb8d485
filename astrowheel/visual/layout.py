"""Anti-overlap placement of body symbols around a ring.

The placement is a heuristic, not a global optimum: a forward and a
backward relaxation pass each produce a valid spacing and the two are
averaged so clusters spread symmetrically around their true positions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.angles import normalize_degrees

LOG = logging.getLogger(__name__)

__all__ = ["SymbolPlacement", "place_symbols", "spread_positions"]

STEP_PADDING = 0.1
MAX_PASSES = 1000


@dataclass(frozen=True)
class SymbolPlacement:
    name: str
    longitude: float
    adjusted: float

    @property
    def displaced(self) -> bool:
        return abs(self.adjusted - self.longitude) > 1e-9


def _forward_pass(values: list[float], step: float) -> list[float]:
    out = list(values)
    n = len(out)
    for _ in range(MAX_PASSES):
        changed = False
        for idx in range(n):
            prev = out[n - 1] - 360.0 if idx == 0 else out[idx - 1]
            if out[idx] < prev + step:
                out[idx] = prev + step
                changed = True
        if not changed:
            return out
    LOG.warning("forward spacing pass did not settle after %d passes", MAX_PASSES)
    return out


def _backward_pass(values: list[float], step: float) -> list[float]:
    out = list(values)
    n = len(out)
    for _ in range(MAX_PASSES):
        changed = False
        for idx in range(n - 1, -1, -1):
            nxt = out[0] + 360.0 if idx == n - 1 else out[idx + 1]
            if out[idx] > nxt - step:
                out[idx] = nxt - step
                changed = True
        if not changed:
            return out
    LOG.warning("backward spacing pass did not settle after %d passes", MAX_PASSES)
    return out


def _merge(forward: float, backward: float) -> float:
    # Both passes keep values unwrapped (forward >= original >= backward), so
    # the plain mean is the midpoint of the two displacements.
    return normalize_degrees((forward + backward) / 2.0)


def spread_positions(positions: Sequence[float], min_sep: float) -> list[float]:
    """Return ``positions`` adjusted so neighbouring gaps are ``>= min_sep``.

    ``positions`` must be in ascending order; the order is preserved. Each
    pass pushes a crowded symbol to ``min_sep + 0.1`` from its neighbour.
    When ``n`` symbols cannot fit the step is reduced to ``360 / n - 0.1``.
    """

    values = [normalize_degrees(value) for value in positions]
    n = len(values)
    if n <= 1:
        return list(positions)

    step = float(min_sep) + STEP_PADDING
    if n * step > 360.0:
        reduced = 360.0 / n - STEP_PADDING
        LOG.warning(
            "%d symbols cannot keep %.2f° apart; using %.2f°", n, float(min_sep), reduced
        )
        step = reduced

    forward = _forward_pass(values, step)
    backward = _backward_pass(values, step)
    return [_merge(f, b) for f, b in zip(forward, backward)]


def place_symbols(
    bodies: Sequence[tuple[str, float]], min_sep: float
) -> tuple[SymbolPlacement, ...]:
    """Sort ``(name, longitude)`` pairs and spread them around the ring."""

    ordered = sorted(
        ((name, normalize_degrees(lon)) for name, lon in bodies), key=lambda item: (item[1], item[0])
    )
    adjusted = spread_positions([lon for _, lon in ordered], min_sep)
    return tuple(
        SymbolPlacement(name, lon, adj) for (name, lon), adj in zip(ordered, adjusted)
    )
