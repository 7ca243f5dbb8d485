"""Chart assembly: natal, composite and synastry views."""

from __future__ import annotations

from .composite import composite_chart, composite_input
from .models import Chart, ChartInput
from .natal import angle_positions, build_chart
from .synastry import SynastryResult, build_synastry, house_overlay

__all__ = [
    "Chart",
    "ChartInput",
    "SynastryResult",
    "angle_positions",
    "build_chart",
    "build_synastry",
    "composite_chart",
    "composite_input",
    "house_overlay",
]
