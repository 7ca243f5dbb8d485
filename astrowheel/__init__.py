"""astrowheel: aspect, house and composite calculations with SVG wheel charts."""

from __future__ import annotations

from .canonical import AngularPosition, BodyPosition
from .catalogs import ASPECT_CATALOG, AspectDefinition, Classification, Nature
from .chart import Chart, ChartInput, build_chart, build_synastry, composite_chart
from .core.aspects import Aspect, AspectEngine, OrbPolicy
from .errors import ChartInputError, RenderError, WheelError
from .visual import WheelOptions, WheelRenderResult, render_wheel

__version__ = "0.1.0"

__all__ = [
    "ASPECT_CATALOG",
    "AngularPosition",
    "Aspect",
    "AspectDefinition",
    "AspectEngine",
    "BodyPosition",
    "Chart",
    "ChartInput",
    "ChartInputError",
    "Classification",
    "Nature",
    "OrbPolicy",
    "RenderError",
    "WheelError",
    "WheelOptions",
    "WheelRenderResult",
    "build_chart",
    "build_synastry",
    "composite_chart",
    "render_wheel",
    "__version__",
]
