"""``render`` subcommand: write a natal, synastry or composite wheel."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..errors import WheelError
from ..visual import WheelOptions, render_composite, render_natal, render_synastry
from ._common import add_chart_arguments, build_engine, load_chart, resolve_settings

LOG = logging.getLogger(__name__)


def add_subparser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register the ``render`` subcommand."""

    parser = sub.add_parser(
        "render",
        help="Render a chart wheel as SVG",
        description=(
            "Render a natal wheel, a synastry bi-wheel or a composite wheel from "
            "JSON chart payloads."
        ),
    )
    parser.add_argument(
        "kind",
        choices=("natal", "synastry", "composite"),
        help="Wheel type to render",
    )
    add_chart_arguments(parser)
    parser.add_argument("--out", help="Destination SVG file (default: stdout)")
    parser.add_argument("--width", type=int, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, help="Canvas height (default: width)")
    parser.add_argument(
        "--theme",
        choices=("light", "dark", "mono"),
        help="Colour theme (default: from settings)",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute the render subcommand."""

    if args.kind != "natal" and not args.partner:
        print(f"--partner is required for {args.kind} wheels", file=sys.stderr)
        return 2

    try:
        settings = resolve_settings(args)
        engine = build_engine(settings)
        options = WheelOptions.from_settings(
            settings, width=args.width, height=args.height, theme=args.theme
        )
        primary = load_chart(args.input, engine)
        if args.kind == "natal":
            result = render_natal(primary, options)
        else:
            partner = load_chart(args.partner, engine)
            if args.kind == "synastry":
                result = render_synastry(primary, partner, options, engine=engine)
            else:
                result = render_composite(primary, partner, options, engine=engine)
    except WheelError as exc:
        print(f"{exc.code}: {exc.message}", file=sys.stderr)
        return 2

    if args.out:
        Path(args.out).write_text(result.svg, encoding="utf-8")
        LOG.info("wrote %s wheel to %s", args.kind, args.out)
        print(f"rendered {args.kind} wheel to {args.out}")
    else:
        sys.stdout.write(result.svg)
        sys.stdout.write("\n")
    return 0
