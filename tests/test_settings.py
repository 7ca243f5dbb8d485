from __future__ import annotations

import yaml

import pytest

from astrowheel.config import (
    CURRENT_SETTINGS_SCHEMA_VERSION,
    Settings,
    config_path,
    default_settings,
    ensure_default_config,
    get_config_home,
    load_settings,
    save_settings,
)
from astrowheel.catalogs import ASPECTS_BY_NAME
from astrowheel.core.aspects import AspectEngine
from astrowheel.errors import ChartInputError


def test_default_aspect_switches():
    settings = default_settings()
    enabled = settings.aspects.enabled
    assert enabled["quincunx"] is True
    assert enabled["trine"] is True
    assert enabled["semisextile"] is False
    assert enabled["sesquisquare"] is False
    assert settings.aspects.orbs_by_body["uranus"] == 2.0


def test_orb_policy_adds_body_adjustments():
    policy = default_settings().orb_policy()
    square = ASPECTS_BY_NAME["square"]
    assert policy.effective_orb(square, "sun", "moon") == pytest.approx(8.0)
    assert policy.effective_orb(square, "mercury", "venus") == pytest.approx(6.0)
    engine = AspectEngine(policy=policy)
    assert engine.match(0.0, 30.5) is None
    assert engine.match(0.0, 97.5, body_a="sun", body_b="moon").name == "square"


def test_values_are_clamped():
    settings = Settings(
        aspects={"orbs_by_aspect": {"Trine": 40}, "orbs_by_body": {"Sun": -12}},
        rendering={
            "width": 5,
            "outer_min_degree": 90,
            "stroke_opacity": 3,
            "pos_adj_factor": 0,
            "font_size_fraction": 4,
        },
    )
    assert settings.aspects.orbs_by_aspect == {"trine": 15.0}
    assert settings.aspects.orbs_by_body == {"sun": -5.0}
    assert settings.rendering.width == 100
    assert settings.rendering.outer_min_degree == 30.0
    assert settings.rendering.stroke_opacity == 1.0
    assert settings.rendering.pos_adj_factor == 0.5
    assert settings.rendering.font_size_fraction == 1.0


def test_config_home_from_environment(config_file):
    home = get_config_home()
    assert home.name == "home"
    path = config_path()
    assert path.parent == home
    assert path.parent.exists()
    assert ensure_default_config() == path
    assert path.exists()


def test_save_and_load_roundtrip(tmp_path):
    target = tmp_path / "config.yaml"
    settings = default_settings()
    settings.rendering.theme = "dark"
    settings.display.bodies["chiron"] = True
    save_settings(settings, target)
    loaded = load_settings(target)
    assert loaded.rendering.theme == "dark"
    assert loaded.display.bodies["chiron"] is True
    assert loaded == settings


def test_missing_file_writes_defaults(tmp_path):
    target = tmp_path / "nested" / "config.yaml"
    settings = load_settings(target)
    assert target.exists()
    assert settings == default_settings()


def test_v1_payload_is_upgraded(tmp_path):
    target = tmp_path / "config.yaml"
    target.write_text(
        yaml.safe_dump(
            {
                "schema_version": 1,
                "rendering": {"theme": "mono", "display": {"Chiron": True, "sun": False}},
            }
        ),
        encoding="utf-8",
    )
    settings = load_settings(target)
    assert settings.schema_version == CURRENT_SETTINGS_SCHEMA_VERSION
    assert settings.rendering.theme == "mono"
    assert settings.display.bodies == {"chiron": True, "sun": False}
    persisted = yaml.safe_load(target.read_text(encoding="utf-8"))
    assert persisted["schema_version"] == CURRENT_SETTINGS_SCHEMA_VERSION


@pytest.mark.parametrize(
    "document",
    ["rendering: {width: wide}\n", "rendering: [unclosed\n", "rendering: {theme: neon}\n"],
)
def test_broken_settings_file_raises_input_error(tmp_path, document):
    target = tmp_path / "config.yaml"
    target.write_text(document, encoding="utf-8")
    with pytest.raises(ChartInputError) as excinfo:
        load_settings(target)
    assert excinfo.value.code == "INVALID_INPUT"
    assert excinfo.value.details["path"] == str(target)
