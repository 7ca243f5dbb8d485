"""Shared chart fixtures for the astrowheel test-suite."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from astrowheel.chart import Chart, build_chart
from astrowheel.providers import chart_input_from_payload
from tests.helpers import natal_payload, partner_payload


@pytest.fixture
def natal_chart() -> Chart:
    return build_chart(chart_input_from_payload(natal_payload()))


@pytest.fixture
def partner_chart() -> Chart:
    return build_chart(chart_input_from_payload(partner_payload()))


@pytest.fixture
def payload_files(tmp_path: Path) -> tuple[Path, Path]:
    primary = tmp_path / "primary.json"
    partner = tmp_path / "partner.json"
    primary.write_text(json.dumps(natal_payload()), encoding="utf-8")
    partner.write_text(json.dumps(partner_payload()), encoding="utf-8")
    return primary, partner


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("ASTROWHEEL_HOME", str(tmp_path / "home"))
    return tmp_path / "config.yaml"


@pytest.fixture(autouse=True)
def _restore_package_logger():
    # configure_logging stops propagation; caplog needs records on the root.
    logger = logging.getLogger("astrowheel")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
