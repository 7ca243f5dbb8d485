"""astrowheel command line interface package."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from ..boot.logging import configure_logging
from . import render, summary

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="astrowheel", description="astrowheel chart CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    render.add_subparser(sub)
    summary.add_subparser(sub)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return args.func(args)
