"""Ephemeris provider boundary.

Position calculation happens outside this package. Callers hand an
:class:`EphemerisProvider` to :func:`chart_from_provider`; serialized
provider output is validated through :class:`ChartPayload`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..canonical import AngularPosition
from ..chart.models import Chart, ChartInput
from ..chart.natal import build_chart
from ..core.aspects import AspectEngine
from ..errors import ChartInputError

LOG = logging.getLogger(__name__)

__all__ = [
    "BodyPayload",
    "ChartPayload",
    "EphemerisProvider",
    "chart_from_provider",
    "chart_input_from_payload",
    "load_chart_input",
]


class EphemerisProvider(Protocol):
    def chart_input(
        self,
        moment: datetime,
        latitude: float,
        longitude: float,
        *,
        name: str | None = None,
        house_system: str = "placidus",
    ) -> ChartInput: ...


def chart_from_provider(
    provider: EphemerisProvider,
    moment: datetime,
    latitude: float,
    longitude: float,
    *,
    name: str | None = None,
    house_system: str = "placidus",
    engine: AspectEngine | None = None,
) -> Chart:
    """Ask ``provider`` for positions at ``moment`` and build the chart."""

    LOG.debug(
        "requesting %s chart for %s at (%.4f, %.4f)",
        house_system,
        moment.isoformat(),
        latitude,
        longitude,
    )
    chart_input = provider.chart_input(
        moment, latitude, longitude, name=name, house_system=house_system
    )
    return build_chart(chart_input, engine=engine)


# -------------------- Serialized payloads --------------------


class BodyPayload(BaseModel):
    name: str
    longitude: float
    latitude: float = 0.0
    speed: float = 0.0


class ChartPayload(BaseModel):
    """Validated shape of serialized provider output."""

    name: Optional[str] = None
    bodies: List[BodyPayload] = Field(default_factory=list)
    cusps: List[float]
    ascendant: float
    midheaven: float
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("bodies", mode="before")
    @classmethod
    def _accept_mapping(cls, value: object) -> object:
        # {"sun": {"longitude": ...}} or {"sun": 12.5} are both accepted.
        if isinstance(value, Mapping):
            rows = []
            for name, entry in value.items():
                if isinstance(entry, Mapping):
                    rows.append({"name": name, **entry})
                else:
                    rows.append({"name": name, "longitude": entry})
            return rows
        return value

    def to_chart_input(self) -> ChartInput:
        return ChartInput(
            bodies={
                body.name: AngularPosition(body.longitude, body.latitude, body.speed)
                for body in self.bodies
            },
            cusps=tuple(self.cusps),
            ascendant=self.ascendant,
            midheaven=self.midheaven,
            name=self.name,
            metadata=dict(self.metadata),
        )


def chart_input_from_payload(payload: Mapping[str, Any]) -> ChartInput:
    """Validate ``payload`` and return a :class:`ChartInput`.

    Raises
    ------
    ChartInputError
        When the payload does not match :class:`ChartPayload`.
    """

    try:
        model = ChartPayload.model_validate(payload)
    except ValidationError as exc:
        raise ChartInputError(
            "invalid chart payload",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc
    return model.to_chart_input()


def load_chart_input(path: str | Path) -> ChartInput:
    """Read a JSON chart payload from ``path``."""

    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ChartInputError(
            f"cannot read chart payload {source}: {exc.strerror or exc}",
            details={"path": str(source)},
        ) from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ChartInputError(
            f"{source} is not valid JSON", details={"path": str(source), "line": exc.lineno}
        ) from exc
    if not isinstance(document, Mapping):
        raise ChartInputError(f"{source} must hold a JSON object", details={"path": str(source)})
    return chart_input_from_payload(document)
