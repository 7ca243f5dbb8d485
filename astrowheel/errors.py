"""Error taxonomy shared by the chart engine, renderer and CLI."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = [
    "CHART_GENERATION_ERROR",
    "INVALID_INPUT",
    "ChartInputError",
    "RenderError",
    "WheelError",
]

INVALID_INPUT = "INVALID_INPUT"
CHART_GENERATION_ERROR = "CHART_GENERATION_ERROR"


class WheelError(RuntimeError):
    """Base error carrying a stable machine readable ``code``."""

    code: str = CHART_GENERATION_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = dict(details or {})

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class ChartInputError(WheelError, ValueError):
    """Raised when chart input violates the ephemeris contract."""

    code = INVALID_INPUT


class RenderError(WheelError):
    """Raised when the wheel document cannot be composed."""

    code = CHART_GENERATION_ERROR
