"""Colour themes for the wheel renderer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

from ..catalogs import Classification, Nature
from ..errors import ChartInputError

__all__ = ["THEMES", "Theme", "get_theme"]

PALETTE_KEYS: tuple[str, ...] = tuple(item.value for item in Classification) + (
    "positive",
    "negative",
)

_ASPECT_KEYS = {
    Nature.HARMONIOUS: "positive",
    Nature.CHALLENGING: "negative",
    Nature.NEUTRAL: "others",
}


@dataclass(frozen=True)
class Theme:
    """Palette keyed by :class:`Classification` plus chrome colours."""

    name: str
    palette: Mapping[str, str]
    transparency: float
    foreground: str
    background: str
    dim: str

    def color_for(self, classification: Classification) -> str:
        return self.palette.get(classification.value, self.palette["others"])

    def aspect_color(self, nature: Nature) -> str:
        return self.palette[_ASPECT_KEYS[nature]]

    def with_overrides(self, overrides: Mapping[str, str] | None) -> "Theme":
        if not overrides:
            return self
        unknown = sorted(set(overrides) - set(PALETTE_KEYS) - {"foreground", "background", "dim"})
        if unknown:
            raise ChartInputError(
                "unknown palette keys", details={"keys": unknown}
            )
        palette = dict(self.palette)
        chrome = {}
        for key, value in overrides.items():
            if key in ("foreground", "background", "dim"):
                chrome[key] = str(value)
            else:
                palette[key] = str(value)
        return replace(self, palette=MappingProxyType(palette), **chrome)


_COLORFUL = {
    "fire": "#ef476f",
    "earth": "#ffd166",
    "air": "#06d6a0",
    "water": "#81bce7",
    "points": "#118ab2",
    "asteroids": "#AA96DA",
    "positive": "#FFC0CB",
    "negative": "#AD8B73",
    "others": "#FFA500",
}

THEMES: Mapping[str, Theme] = MappingProxyType(
    {
        "light": Theme(
            "light",
            MappingProxyType({**_COLORFUL, "angle": "#758492"}),
            0.1,
            "#758492",
            "#FFFDF1",
            "#A4BACD",
        ),
        "dark": Theme(
            "dark",
            MappingProxyType({**_COLORFUL, "angle": "#F7F3F0"}),
            0.1,
            "#F7F3F0",
            "#343a40",
            "#515860",
        ),
        "mono": Theme(
            "mono",
            MappingProxyType({key: "#888888" for key in PALETTE_KEYS}),
            0.0,
            "#888888",
            "#FFFFFF",
            "#888888",
        ),
    }
)


def get_theme(name: str = "light", overrides: Mapping[str, str] | None = None) -> Theme:
    """Return the named theme with optional palette overrides applied."""

    try:
        theme = THEMES[name.lower()]
    except KeyError as exc:
        raise ChartInputError(
            f"unknown theme {name!r}", details={"available": sorted(THEMES)}
        ) from exc
    return theme.with_overrides(overrides)
