"""Argument and loading helpers shared by the subcommands."""

from __future__ import annotations

import argparse
from pathlib import Path

from ..chart import Chart, build_chart
from ..config import Settings, load_settings
from ..core.aspects import AspectEngine, OrbPolicy
from ..providers import load_chart_input


def add_chart_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        required=True,
        help="JSON chart payload for the primary chart",
    )
    parser.add_argument(
        "--partner",
        help="JSON chart payload for the second chart (synastry/composite)",
    )
    parser.add_argument(
        "--config",
        help="Settings YAML file (default: $ASTROWHEEL_HOME/config.yaml)",
    )


def resolve_settings(args: argparse.Namespace) -> Settings:
    return load_settings(Path(args.config) if args.config else None)


def build_engine(settings: Settings, *, major_only: bool = False) -> AspectEngine:
    policy = settings.orb_policy()
    if major_only:
        majors = OrbPolicy.major_only()
        policy = OrbPolicy(
            orbs_by_aspect=policy.orbs_by_aspect,
            enabled={
                name: enabled and policy.enabled.get(name, True)
                for name, enabled in majors.enabled.items()
            },
            body_adjustments=policy.body_adjustments,
        )
    return AspectEngine(policy=policy)


def load_chart(path: str, engine: AspectEngine) -> Chart:
    return build_chart(load_chart_input(path), engine=engine)
