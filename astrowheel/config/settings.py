"""Configuration models and helpers for astrowheel settings."""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..catalogs import ASPECT_CATALOG, DEFAULT_VISIBILITY
from ..core.aspects import OrbPolicy
from ..errors import ChartInputError

LOG = logging.getLogger(__name__)

CURRENT_SETTINGS_SCHEMA_VERSION = 2

# -------------------- Settings Schema --------------------


class AspectsCfg(BaseModel):
    """Aspect switches and orb configuration."""

    enabled: Dict[str, bool] = Field(
        default_factory=lambda: {
            definition.name: definition.major or definition.name == "quincunx"
            for definition in ASPECT_CATALOG
        }
    )
    orbs_by_aspect: Dict[str, float] = Field(
        default_factory=lambda: {
            definition.name: definition.orb for definition in ASPECT_CATALOG
        }
    )
    orbs_by_body: Dict[str, float] = Field(
        default_factory=lambda: {
            "sun": 1.0,
            "moon": 1.0,
            "jupiter": 1.0,
            "saturn": 1.0,
            "uranus": 2.0,
            "neptune": 2.0,
            "pluto": 2.0,
        }
    )

    @field_validator("orbs_by_aspect", mode="before")
    @classmethod
    def _cap_orbs_by_aspect(cls, data: Dict[str, float] | object) -> Dict[str, float] | object:
        if not isinstance(data, dict):
            return data
        return {
            str(key).lower(): max(0.0, min(15.0, float(value)))
            for key, value in data.items()
        }

    @field_validator("orbs_by_body", mode="before")
    @classmethod
    def _cap_orbs_by_body(cls, data: Dict[str, float] | object) -> Dict[str, float] | object:
        if not isinstance(data, dict):
            return data
        return {
            str(key).lower(): max(-5.0, min(5.0, float(value)))
            for key, value in data.items()
        }

    def orb_policy(self) -> OrbPolicy:
        return OrbPolicy(
            orbs_by_aspect=self.orbs_by_aspect,
            enabled=self.enabled,
            body_adjustments=self.orbs_by_body,
        )


class RenderingCfg(BaseModel):
    """Wheel rendering options."""

    width: int = 600
    height: Optional[int] = None
    theme: Literal["light", "dark", "mono"] = "light"
    palette: Dict[str, str] = Field(default_factory=dict)
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0
    font_family: str = "sans-serif"
    font_size_fraction: float = 0.55
    outer_min_degree: float = 8.0
    inner_min_degree: float = 9.0
    margin_factor: float = 0.04
    ring_thickness_fraction: float = 0.15
    pos_adj_factor: float = 2.2
    show_aspects: bool = True
    retro_markers: bool = True
    show_title: bool = False

    @field_validator("width", mode="before")
    @classmethod
    def _cap_width(cls, value: int) -> int:
        return max(100, min(8000, int(value)))

    @field_validator("height", mode="before")
    @classmethod
    def _cap_height(cls, value: int | None) -> int | None:
        if value is None:
            return None
        return max(100, min(8000, int(value)))

    @field_validator("stroke_width", mode="before")
    @classmethod
    def _cap_stroke_width(cls, value: float) -> float:
        return max(0.1, min(10.0, float(value)))

    @field_validator("stroke_opacity", mode="before")
    @classmethod
    def _cap_stroke_opacity(cls, value: float) -> float:
        return max(0.0, min(1.0, float(value)))

    @field_validator("outer_min_degree", "inner_min_degree", mode="before")
    @classmethod
    def _cap_min_degree(cls, value: float) -> float:
        return max(0.0, min(30.0, float(value)))

    @field_validator("margin_factor", mode="before")
    @classmethod
    def _cap_margin(cls, value: float) -> float:
        return max(0.0, min(0.4, float(value)))

    @field_validator("ring_thickness_fraction", mode="before")
    @classmethod
    def _cap_ring_fraction(cls, value: float) -> float:
        return max(0.05, min(0.2, float(value)))

    @field_validator("font_size_fraction", mode="before")
    @classmethod
    def _cap_font_fraction(cls, value: float) -> float:
        return max(0.1, min(1.0, float(value)))

    @field_validator("pos_adj_factor", mode="before")
    @classmethod
    def _cap_pos_adj(cls, value: float) -> float:
        return max(0.5, min(10.0, float(value)))


class DisplayCfg(BaseModel):
    """Which bodies and chart angles appear on the wheel."""

    bodies: Dict[str, bool] = Field(default_factory=lambda: dict(DEFAULT_VISIBILITY))

    @field_validator("bodies", mode="before")
    @classmethod
    def _lower_keys(cls, data: Dict[str, bool] | object) -> Dict[str, bool] | object:
        if not isinstance(data, dict):
            return data
        return {str(key).lower(): bool(value) for key, value in data.items()}


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    aspects: AspectsCfg = Field(default_factory=AspectsCfg)
    rendering: RenderingCfg = Field(default_factory=RenderingCfg)
    display: DisplayCfg = Field(default_factory=DisplayCfg)

    def orb_policy(self) -> OrbPolicy:
        return self.aspects.orb_policy()


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("ASTROWHEEL_HOME", str(Path.home() / ".astrowheel")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        # v1 stored the body visibility table under rendering.display.
        rendering = upgraded.get("rendering")
        if isinstance(rendering, dict) and "display" in rendering:
            upgraded["display"] = {"bodies": rendering.pop("display")}
        version = 2
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        LOG.info("writing default settings to %s", source_path)
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    try:
        with source_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ChartInputError(
            f"cannot read settings file {source_path}: {exc}",
            details={"path": str(source_path)},
        ) from exc
    if not isinstance(raw, dict):
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    try:
        settings = Settings(**data)
    except ValidationError as exc:
        raise ChartInputError(
            f"invalid settings in {source_path}",
            details={
                "path": str(source_path),
                "errors": exc.errors(include_url=False, include_context=False),
            },
        ) from exc
    if upgraded:
        LOG.info("upgraded settings at %s to schema %d", source_path, settings.schema_version)
        save_settings(settings, source_path)
    return settings


def ensure_default_config() -> Path:
    """Ensure a configuration file exists on disk and return its path."""

    target = config_path()
    if not target.exists():
        save_settings(default_settings(), target)
    return target
