from __future__ import annotations

import json

import pytest

from astrowheel.cli import build_parser, main


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


def test_parser_lists_subcommands():
    parser = build_parser()
    args = parser.parse_args(["render", "natal", "--input", "chart.json"])
    assert args.command == "render"
    assert args.kind == "natal"
    with pytest.raises(SystemExit):
        parser.parse_args(["render", "bogus", "--input", "chart.json"])


def test_render_natal_to_file(payload_files, config_file, tmp_path, capsys):
    primary, _ = payload_files
    out = tmp_path / "wheel.svg"
    code = main(["render", "natal", "--input", str(primary), "--out", str(out), "--config", str(config_file)])
    assert code == 0
    svg = out.read_text(encoding="utf-8")
    assert svg.startswith("<svg") and svg.endswith("</svg>")
    assert config_file.exists()
    assert "rendered natal wheel" in capsys.readouterr().out


def test_render_synastry_to_stdout(payload_files, config_file, capsys):
    primary, partner = payload_files
    code = main(
        [
            "render",
            "synastry",
            "--input",
            str(primary),
            "--partner",
            str(partner),
            "--width",
            "800",
            "--theme",
            "dark",
            "--config",
            str(config_file),
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "width='800.00'" in out
    assert "#343a40" in out
    assert "id='inner-bodies'" in out


def test_render_composite(payload_files, config_file, tmp_path):
    primary, partner = payload_files
    out = tmp_path / "composite.svg"
    code = main(
        [
            "render",
            "composite",
            "--input",
            str(primary),
            "--partner",
            str(partner),
            "--out",
            str(out),
            "--config",
            str(config_file),
        ]
    )
    assert code == 0
    assert out.read_text(encoding="utf-8").startswith("<svg")


def test_partner_required(payload_files, config_file, capsys):
    primary, _ = payload_files
    code = main(["render", "synastry", "--input", str(primary), "--config", str(config_file)])
    assert code == 2
    assert "--partner is required" in capsys.readouterr().err


def test_invalid_input_reports_code(tmp_path, config_file, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text(
        json.dumps({"cusps": [0.0] * 11, "ascendant": 0.0, "midheaven": 270.0, "bodies": []}),
        encoding="utf-8",
    )
    code = main(["render", "natal", "--input", str(bad), "--config", str(config_file)])
    assert code == 2
    assert "INVALID_INPUT" in capsys.readouterr().err


def test_summary_json(payload_files, config_file, capsys):
    primary, partner = payload_files
    code = main(
        ["summary", "--input", str(primary), "--partner", str(partner), "--config", str(config_file)]
    )
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["name"] == "Primary"
    assert {house["number"] for house in payload["houses"]} == set(range(1, 13))
    assert payload["aspect_counts"]["trine"] >= 1
    assert any(a["body_a"] == "sun" and a["aspect"] == "trine" for a in payload["aspects"])
    assert payload["synastry"]["partner"] == "Partner"
    sun = next(body for body in payload["bodies"] if body["name"] == "sun")
    assert sun["house"] == 1


def test_summary_major_only(payload_files, config_file, capsys):
    primary, _ = payload_files
    assert main(["summary", "--input", str(primary), "--major-only", "--config", str(config_file)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert set(payload["aspect_counts"]) <= {"conjunction", "sextile", "square", "trine", "opposition"}


def test_missing_input_file_reports_code(tmp_path, config_file, capsys):
    missing = tmp_path / "missing.json"
    code = main(["render", "natal", "--input", str(missing), "--config", str(config_file)])
    assert code == 2
    err = capsys.readouterr().err
    assert err.startswith("INVALID_INPUT:")
    assert "missing.json" in err


def test_malformed_config_reports_code(payload_files, tmp_path, capsys):
    primary, _ = payload_files
    config = tmp_path / "broken.yaml"
    config.write_text("rendering: {width: wide}\n", encoding="utf-8")
    assert main(["render", "natal", "--input", str(primary), "--config", str(config)]) == 2
    assert "INVALID_INPUT" in capsys.readouterr().err

    assert main(["summary", "--input", str(primary), "--config", str(config)]) == 2
    error = json.loads(capsys.readouterr().err)["error"]
    assert error["code"] == "INVALID_INPUT"
