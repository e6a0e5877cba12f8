"""Base model for loosely-typed provider payloads."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict


class ProviderModel(BaseModel):
    """Base model with lenient coercion helpers.

    OpenWeather payloads are treated as optional-safe: a missing or
    malformed field must never stop a render, so subclasses run their raw
    values through these helpers in ``mode="before"`` validators and get a
    documented default instead of a validation error.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @staticmethod
    def coerce_float(v: Any, default: float | None = 0.0) -> float | None:
        """Convert ``v`` to a finite float, or return ``default``.

        Args:
            v: Raw value (number, numeric string, None, anything else)
            default: Value used when ``v`` is missing or not numeric

        Returns:
            The parsed float or ``default``
        """
        if v is None or isinstance(v, bool):
            return default
        try:
            result = float(v)
        except (TypeError, ValueError):
            return default
        return result if math.isfinite(result) else default

    @staticmethod
    def coerce_int(v: Any, default: int = 0) -> int:
        """Convert ``v`` to an int (truncating floats), or return ``default``."""
        result = ProviderModel.coerce_float(v, None)
        return default if result is None else int(result)

    @staticmethod
    def coerce_mapping(v: Any) -> Any:
        """Replace a missing or non-object nested value with an empty one."""
        return v if isinstance(v, dict) else {}

    @staticmethod
    def coerce_list(v: Any) -> Any:
        """Replace a missing array with an empty one, dropping non-objects."""
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]
