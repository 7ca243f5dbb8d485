"""Angular primitives shared by the aspect, house and layout engines.

Every comparison in the package goes through these helpers so the
0°/360° seam is handled in exactly one place. Distances are always the
shorter arc and midpoints always sit on that shorter arc.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "EPSILON_DEG",
    "angular_distance",
    "arc_midpoint",
    "delta_angle",
    "format_dms",
    "normalize_degrees",
    "signed_delta",
]


EPSILON_DEG: Final[float] = 1e-9


def normalize_degrees(angle: float) -> float:
    """Return ``angle`` normalised to the ``[0, 360)`` interval.

    Parameters
    ----------
    angle:
        Value in **degrees**; any finite float is accepted.

    Returns
    -------
    float
        A degree value in ``[0, 360)``. Values within ``1e-9`` of ``360``
        are coerced to ``0`` so the seam compares consistently.
    """

    wrapped = float(angle) % 360.0
    if wrapped >= 360.0 - EPSILON_DEG:
        wrapped = 0.0
    return wrapped if wrapped >= 0.0 else wrapped + 360.0


def signed_delta(angle: float) -> float:
    """Return ``angle`` wrapped to the ``(-180, 180]`` interval."""

    wrapped = normalize_degrees(angle)
    if wrapped > 180.0:
        return wrapped - 360.0
    return wrapped


def delta_angle(a: float, b: float) -> float:
    """Signed shortest rotation that carries ``a`` onto ``b``.

    Positive results mean ``b`` lies counter-clockwise (zodiacal order)
    from ``a``. Exact oppositions resolve to ``+180``.
    """

    return signed_delta(float(b) - float(a))


def angular_distance(a: float, b: float) -> float:
    """Return the unsigned shorter-arc separation between two longitudes.

    The result lies in ``[0, 180]`` and is symmetric in its arguments.
    """

    diff = abs(normalize_degrees(a) - normalize_degrees(b))
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


def arc_midpoint(a: float, b: float) -> float:
    """Return the midpoint of the shorter arc between ``a`` and ``b``.

    ``arc_midpoint(350, 10)`` is ``0`` rather than the naive ``180``.
    """

    start = normalize_degrees(a)
    return normalize_degrees(start + delta_angle(start, b) / 2.0)


def format_dms(angle: float, *, within_sign: bool = False) -> str:
    """Format ``angle`` as ``D°MM'SS"``.

    With ``within_sign`` the degrees are reduced to the 0-30 span of the
    sign holding the longitude.
    """

    value = normalize_degrees(angle)
    if within_sign:
        value = value % 30.0
    total_seconds = int(round(value * 3600.0))
    degrees, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if not within_sign:
        degrees %= 360
    return f"{degrees}°{minutes:02d}'{seconds:02d}\""
