"""``summary`` subcommand: aspects, houses and patterns as JSON."""

from __future__ import annotations

import argparse
import json
import sys

from ..chart import build_synastry
from ..core.aspects import count_by_type, find_grand_trines, find_stelliums, find_t_squares
from ..errors import WheelError
from ._common import add_chart_arguments, build_engine, load_chart, resolve_settings


def add_subparser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register the ``summary`` subcommand."""

    parser = sub.add_parser(
        "summary",
        help="Print aspects, house placements and patterns as JSON",
    )
    add_chart_arguments(parser)
    parser.add_argument(
        "--major-only",
        action="store_true",
        help="Restrict detection to the five major aspects",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute the summary subcommand."""

    try:
        settings = resolve_settings(args)
        engine = build_engine(settings, major_only=args.major_only)
        chart = load_chart(args.input, engine)
        payload: dict[str, object] = chart.to_dict()
        aspects = list(chart.aspects)
        payload["aspect_counts"] = count_by_type(aspects)
        payload["patterns"] = [
            pattern.to_dict()
            for pattern in (
                find_stelliums(chart.bodies)
                + find_grand_trines(aspects)
                + find_t_squares(aspects)
            )
        ]
        if args.partner:
            partner = load_chart(args.partner, engine)
            payload["synastry"] = build_synastry(chart, partner, engine=engine).to_dict()
    except WheelError as exc:
        print(json.dumps({"error": exc.to_payload()}), file=sys.stderr)
        return 2

    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0
