"""SVG wheel renderer.

The wheel is drawn from the outside in: zodiac signs, houses, the cusp
axis, one or two body rings and finally the aspect lines in the centre.
Longitudes are measured from the primary chart's ascendant, which sits
on the left horizon, and increase counter-clockwise.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..canonical import BodyPosition
from ..catalogs import DEFAULT_VISIBILITY, SIGNS, Classification, Nature
from ..chart.composite import composite_chart
from ..chart.models import Chart
from ..chart.synastry import house_overlay
from ..config.settings import Settings
from ..core.aspects import Aspect, AspectEngine
from ..errors import RenderError, WheelError
from .geometry import ChartGeometry, GeometryOptions, compute_geometry, wheel_angle
from .layout import SymbolPlacement, place_symbols
from .theme import Theme, get_theme

LOG = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_VISIBILITY",
    "WheelOptions",
    "WheelRenderResult",
    "render_composite",
    "render_natal",
    "render_synastry",
    "render_wheel",
]


RETROGRADE_MARK = "℞"


@dataclass(frozen=True)
class WheelOptions:
    """Runtime toggles for a wheel render."""

    width: int = 600
    height: int | None = None
    theme: str = "light"
    palette: Mapping[str, str] = field(default_factory=dict)
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0
    font_family: str = "sans-serif"
    outer_min_degree: float = 8.0
    inner_min_degree: float = 9.0
    geometry: GeometryOptions = field(default_factory=GeometryOptions)
    show_aspects: bool = True
    show_retrograde: bool = True
    show_title: bool = False
    visibility: Mapping[str, bool] = field(default_factory=lambda: dict(DEFAULT_VISIBILITY))

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> "WheelOptions":
        """Build options from persisted :class:`Settings`; ``overrides`` win."""

        rendering = settings.rendering
        visibility = dict(DEFAULT_VISIBILITY)
        visibility.update(settings.display.bodies)
        values: dict[str, object] = {
            "width": rendering.width,
            "height": rendering.height,
            "theme": rendering.theme,
            "palette": dict(rendering.palette),
            "stroke_width": rendering.stroke_width,
            "stroke_opacity": rendering.stroke_opacity,
            "font_family": rendering.font_family,
            "outer_min_degree": rendering.outer_min_degree,
            "inner_min_degree": rendering.inner_min_degree,
            "geometry": GeometryOptions(
                margin_factor=rendering.margin_factor,
                ring_thickness_fraction=rendering.ring_thickness_fraction,
                font_size_fraction=rendering.font_size_fraction,
                pos_adj_factor=rendering.pos_adj_factor,
            ),
            "show_aspects": rendering.show_aspects,
            "show_retrograde": rendering.retro_markers,
            "show_title": rendering.show_title,
            "visibility": visibility,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)  # type: ignore[arg-type]

    def is_visible(self, name: str) -> bool:
        return bool(self.visibility.get(name, False))


@dataclass(frozen=True)
class WheelRenderResult:
    """Rendered document plus the data that went into it."""

    svg: str
    width: float
    height: float
    aspects: tuple[Aspect, ...]
    houses: dict[str, int]
    outer_placements: tuple[SymbolPlacement, ...]
    inner_placements: tuple[SymbolPlacement, ...] = ()
    partner_houses: dict[str, int] = field(default_factory=dict)

    @property
    def placements(self) -> tuple[SymbolPlacement, ...]:
        return self.outer_placements + self.inner_placements


# ---------------------------------------------------------------------------
# Drawing helpers


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _sector_path(
    geo: ChartGeometry, start: float, end: float, r_inner: float, r_outer: float
) -> str:
    span = (end - start) % 360.0
    large = 1 if span > 180.0 else 0
    x1, y1 = geo.point(r_outer, start)
    x2, y2 = geo.point(r_outer, end)
    x3, y3 = geo.point(r_inner, end)
    x4, y4 = geo.point(r_inner, start)
    return (
        f"M {_fmt(x1)} {_fmt(y1)} "
        f"A {_fmt(r_outer)} {_fmt(r_outer)} 0 {large} 0 {_fmt(x2)} {_fmt(y2)} "
        f"L {_fmt(x3)} {_fmt(y3)} "
        f"A {_fmt(r_inner)} {_fmt(r_inner)} 0 {large} 1 {_fmt(x4)} {_fmt(y4)} Z"
    )


def _line(
    geo: ChartGeometry,
    theta: float,
    r_from: float,
    r_to: float,
    color: str,
    width: float,
    opacity: float,
) -> str:
    x1, y1 = geo.point(r_from, theta)
    x2, y2 = geo.point(r_to, theta)
    return (
        f"<line x1='{_fmt(x1)}' y1='{_fmt(y1)}' x2='{_fmt(x2)}' y2='{_fmt(y2)}' "
        f"stroke='{color}' stroke-width='{_fmt(width)}' stroke-opacity='{_fmt(opacity)}'/>"
    )


def _text(x: float, y: float, content: str, color: str, size: float, **attrs: str) -> str:
    extra = "".join(f" {key.replace('_', '-')}='{value}'" for key, value in attrs.items())
    return (
        f"<text x='{_fmt(x)}' y='{_fmt(y)}' fill='{color}' font-size='{_fmt(size)}' "
        f"text-anchor='middle' dominant-baseline='central'{extra}>{html.escape(content)}</text>"
    )


def _sign_ring(geo: ChartGeometry, theme: Theme, asc: float, opts: WheelOptions) -> list[str]:
    out = ["<g id='signs'>"]
    r_outer = geo.sign_ring_radius
    r_inner = geo.house_ring_radius
    for sign in SIGNS:
        start = wheel_angle(sign.start, asc)
        end = wheel_angle(sign.start + 30.0, asc)
        color = theme.color_for(sign.element)
        out.append(
            f"<path d='{_sector_path(geo, start, end, r_inner, r_outer)}' fill='{color}' "
            f"fill-opacity='{_fmt(theme.transparency)}' stroke='{theme.foreground}' "
            f"stroke-width='{_fmt(opts.stroke_width)}' stroke-opacity='{_fmt(opts.stroke_opacity)}'/>"
        )
    out.append("</g>")
    return out


def _house_ring(
    geo: ChartGeometry, theme: Theme, chart: Chart, asc: float, opts: WheelOptions
) -> list[str]:
    out = ["<g id='houses'>"]
    r_outer = geo.house_ring_radius
    r_inner = geo.axis_ring_radius
    label_radius = (r_outer + r_inner) / 2.0
    for house in chart.houses:
        start = wheel_angle(house.longitude, asc)
        end = wheel_angle(house.longitude + house.size, asc)
        out.append(
            f"<path d='{_sector_path(geo, start, end, r_inner, r_outer)}' fill='none' "
            f"stroke='{theme.foreground}' stroke-width='{_fmt(opts.stroke_width)}' "
            f"stroke-opacity='{_fmt(opts.stroke_opacity)}'/>"
        )
        x, y = geo.point(label_radius, start + house.size / 2.0)
        out.append(_text(x, y, str(house.number), theme.dim, geo.font_size * 0.6))
    out.append("</g>")
    return out


def _axis_ring(
    geo: ChartGeometry, theme: Theme, chart: Chart, asc: float, inner: float, opts: WheelOptions
) -> list[str]:
    out = ["<g id='axes'>"]
    for house in chart.houses:
        theta = wheel_angle(house.longitude, asc)
        out.append(
            _line(geo, theta, inner, geo.axis_ring_radius, theme.dim, opts.stroke_width, opts.stroke_opacity)
        )
    for body in chart.angles:
        theta = wheel_angle(body.longitude, asc)
        out.append(
            _line(
                geo,
                theta,
                inner,
                geo.angle_line_radius,
                theme.color_for(body.info.classification),
                opts.stroke_width * 2.0,
                opts.stroke_opacity,
            )
        )
    out.append("</g>")
    return out


def _sign_symbols(geo: ChartGeometry, theme: Theme, asc: float) -> list[str]:
    out = ["<g id='sign-symbols'>"]
    radius = geo.max_radius - geo.ring_thickness / 2.0
    for sign in SIGNS:
        x, y = geo.point(radius, wheel_angle(sign.start + 15.0, asc))
        out.append(_text(x, y, sign.glyph, theme.color_for(sign.element), geo.font_size))
    out.append("</g>")
    return out


def _visible_bodies(chart: Chart, opts: WheelOptions) -> list[BodyPosition]:
    return [body for body in chart.bodies + chart.angles if opts.is_visible(body.name)]


def _body_ring(
    geo: ChartGeometry,
    theme: Theme,
    bodies: Sequence[BodyPosition],
    asc: float,
    r_inner: float,
    min_sep: float,
    ring_id: str,
    opts: WheelOptions,
) -> tuple[list[str], tuple[SymbolPlacement, ...]]:
    lookup = {body.name: body for body in bodies}
    placements = place_symbols([(body.name, body.longitude) for body in bodies], min_sep)
    r_outer = r_inner + geo.ring_thickness
    symbol_radius = r_inner + geo.ring_thickness / 2.0
    tick = geo.ring_thickness * 0.15
    out = [f"<g id='{ring_id}'>"]
    out.append(
        f"<circle cx='{_fmt(geo.center_x)}' cy='{_fmt(geo.center_y)}' r='{_fmt(r_inner)}' "
        f"fill='none' stroke='{theme.foreground}' stroke-width='{_fmt(opts.stroke_width)}' "
        f"stroke-opacity='{_fmt(opts.stroke_opacity)}'/>"
    )
    for placement in placements:
        body = lookup[placement.name]
        color = theme.color_for(body.info.classification)
        true_theta = wheel_angle(placement.longitude, asc)
        shown_theta = wheel_angle(placement.adjusted, asc)
        out.append(_line(geo, true_theta, r_inner, r_inner + tick, color, opts.stroke_width, 1.0))
        out.append(_line(geo, true_theta, r_outer - tick, r_outer, color, opts.stroke_width, 1.0))
        is_angle = body.info.classification is Classification.ANGLE
        size = geo.font_size * 0.6 if is_angle else geo.font_size
        x, y = geo.point(symbol_radius, shown_theta)
        out.append(_text(x, y, body.info.glyph, color, size, data_body=body.name))
        if opts.show_retrograde and body.retrograde:
            rx, ry = geo.point(symbol_radius - geo.pos_adj * 1.5, shown_theta)
            out.append(_text(rx, ry, RETROGRADE_MARK, theme.dim, geo.font_size * 0.4))
    out.append("</g>")
    return out, placements


def _aspect_layer(
    geo: ChartGeometry,
    theme: Theme,
    aspects: Sequence[Aspect],
    first: Mapping[str, BodyPosition],
    second: Mapping[str, BodyPosition],
    asc: float,
    radius: float,
    opts: WheelOptions,
) -> list[str]:
    out = ["<g id='aspects'>"]
    out.append(
        f"<circle cx='{_fmt(geo.center_x)}' cy='{_fmt(geo.center_y)}' r='{_fmt(radius)}' "
        f"fill='none' stroke='{theme.foreground}' stroke-width='{_fmt(opts.stroke_width)}' "
        f"stroke-opacity='{_fmt(opts.stroke_opacity)}'/>"
    )
    for aspect in aspects:
        a = first[aspect.body_a]
        b = second[aspect.body_b]
        x1, y1 = geo.point(radius, wheel_angle(a.longitude, asc))
        x2, y2 = geo.point(radius, wheel_angle(b.longitude, asc))
        opacity = 1.0 if aspect.name == "conjunction" else aspect.strength
        color = theme.aspect_color(aspect.nature)
        dash = " stroke-dasharray='4 3'" if aspect.nature is Nature.NEUTRAL else ""
        out.append(
            f"<line x1='{_fmt(x1)}' y1='{_fmt(y1)}' x2='{_fmt(x2)}' y2='{_fmt(y2)}' "
            f"stroke='{color}' stroke-width='{_fmt(opts.stroke_width)}' "
            f"stroke-opacity='{_fmt(opacity)}'{dash} data-aspect='{aspect.name}'/>"
        )
    out.append("</g>")
    return out


# ---------------------------------------------------------------------------
# Public API


def _compose(
    chart: Chart,
    partner: Chart | None,
    opts: WheelOptions,
    aspects: Sequence[Aspect] | None,
    engine: AspectEngine | None,
) -> WheelRenderResult:
    geo = compute_geometry(opts.width, opts.height, opts.geometry)
    theme = get_theme(opts.theme, opts.palette)
    asc = chart.ascendant

    primary_bodies = _visible_bodies(chart, opts)
    partner_bodies = _visible_bodies(partner, opts) if partner is not None else []
    primary_lookup = {body.name: body for body in chart.bodies + chart.angles}
    if partner is None:
        aspect_radius = geo.outer_body_radius
        second_lookup = primary_lookup
        candidates = list(aspects) if aspects is not None else list(chart.aspects)
    else:
        aspect_radius = geo.inner_body_radius
        second_lookup = {body.name: body for body in partner.bodies + partner.angles}
        if aspects is None:
            # Visible chart angles take part in cross-chart aspects.
            candidates = (engine or AspectEngine()).cross_aspects(primary_bodies, partner_bodies)
        else:
            candidates = list(aspects)

    visible = {body.name for body in primary_bodies}
    second_visible = visible if partner is None else {body.name for body in partner_bodies}
    drawn = tuple(
        aspect
        for aspect in candidates
        if aspect.body_a in visible and aspect.body_b in second_visible
    )

    width, height = geo.width, geo.height
    svg: list[str] = [
        "<svg xmlns='http://www.w3.org/2000/svg' "
        f"width='{_fmt(width)}' height='{_fmt(height)}' viewBox='0 0 {_fmt(width)} {_fmt(height)}' "
        f"font-family='{html.escape(opts.font_family, quote=True)}'>",
        f"<rect x='0' y='0' width='{_fmt(width)}' height='{_fmt(height)}' fill='{theme.background}'/>",
    ]
    if opts.show_title and chart.name:
        title = chart.name if partner is None or not partner.name else f"{chart.name} / {partner.name}"
        svg.append(f"<title>{html.escape(title)}</title>")

    svg.extend(_sign_ring(geo, theme, asc, opts))
    svg.extend(_house_ring(geo, theme, chart, asc, opts))
    svg.extend(_axis_ring(geo, theme, chart, asc, aspect_radius, opts))
    svg.extend(_sign_symbols(geo, theme, asc))

    outer_svg, outer_placements = _body_ring(
        geo,
        theme,
        partner_bodies if partner is not None else primary_bodies,
        asc,
        geo.outer_body_radius,
        opts.outer_min_degree,
        "outer-bodies",
        opts,
    )
    svg.extend(outer_svg)

    inner_placements: tuple[SymbolPlacement, ...] = ()
    if partner is not None:
        inner_svg, inner_placements = _body_ring(
            geo,
            theme,
            primary_bodies,
            asc,
            geo.inner_body_radius,
            opts.inner_min_degree,
            "inner-bodies",
            opts,
        )
        svg.extend(inner_svg)

    if opts.show_aspects:
        svg.extend(
            _aspect_layer(geo, theme, drawn, primary_lookup, second_lookup, asc, aspect_radius, opts)
        )
    svg.append("</svg>")

    return WheelRenderResult(
        svg="".join(svg),
        width=width,
        height=height,
        aspects=drawn,
        houses=chart.house_placements(),
        outer_placements=outer_placements,
        inner_placements=inner_placements,
        partner_houses=house_overlay(partner, chart) if partner is not None else {},
    )


def render_wheel(
    chart: Chart,
    partner: Chart | None = None,
    options: WheelOptions | None = None,
    *,
    aspects: Sequence[Aspect] | None = None,
    engine: AspectEngine | None = None,
) -> WheelRenderResult:
    """Render one chart, or ``chart`` inside ``partner``, as an SVG wheel.

    With a ``partner`` the outer body ring shows the partner, the inner
    ring shows ``chart`` and the aspect layer holds cross-chart aspects
    (``chart`` body first). ``aspects`` replaces the computed set.

    Raises
    ------
    ChartInputError
        For invalid canvas or theme options.
    RenderError
        For any other failure while composing the document.
    """

    opts = options or WheelOptions()
    try:
        result = _compose(chart, partner, opts, aspects, engine)
    except WheelError:
        raise
    except Exception as exc:
        LOG.exception("wheel rendering failed")
        raise RenderError(
            f"failed to render wheel: {exc}", details={"chart": chart.name}
        ) from exc
    LOG.debug(
        "rendered wheel %r (%d aspects, %d symbols)",
        chart.name,
        len(result.aspects),
        len(result.placements),
    )
    return result


def render_natal(chart: Chart, options: WheelOptions | None = None) -> WheelRenderResult:
    return render_wheel(chart, options=options)


def render_synastry(
    primary: Chart,
    partner: Chart,
    options: WheelOptions | None = None,
    *,
    engine: AspectEngine | None = None,
) -> WheelRenderResult:
    return render_wheel(primary, partner, options, engine=engine)


def render_composite(
    first: Chart,
    second: Chart,
    options: WheelOptions | None = None,
    *,
    engine: AspectEngine | None = None,
) -> WheelRenderResult:
    """Render the midpoint composite of two charts as a single wheel."""

    try:
        composite = composite_chart(first, second, engine=engine)
    except WheelError:
        raise
    except Exception as exc:
        raise RenderError(f"failed to build composite chart: {exc}") from exc
    return render_wheel(composite, options=options)
