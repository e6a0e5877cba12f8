from __future__ import annotations

from typing import ClassVar, Dict

from pydantic import BaseModel, Field

from weatherpal.utils.formatting import round_half_up

AQI_CATEGORIES: Dict[int, str] = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}

UNKNOWN_AQI = "Unknown"
UNKNOWN_AQI_COLOR = "#9E9E9E"


def aqi_label(index: int) -> str:
    """Map an OpenWeather AQI index (1-5) to its label.

    Args:
        index: AQI index; 0 means the provider sent nothing

    Returns:
        One of the five fixed labels, or "Unknown" for anything else
    """
    return AQI_CATEGORIES.get(index, UNKNOWN_AQI)


class AirQuality(BaseModel):
    """Air quality sample for the user's location.

    Pairs the provider's coarse 1-5 index with the fine-grained PM2.5
    concentration. The index is kept as received, so out-of-range values
    survive parsing and are labelled "Unknown".
    """

    # Color codes for AQI categories
    AQI_COLORS: ClassVar[Dict[int, str]] = {
        1: "#4CAF50",  # Green
        2: "#8BC34A",  # Light Green
        3: "#FFC107",  # Amber
        4: "#FF9800",  # Orange
        5: "#F44336",  # Red
    }

    index: int = Field(0, description="OpenWeather AQI index (1-5, 0 when missing)")
    pm2_5: float = Field(0.0, description="PM2.5 concentration in µg/m³")

    @property
    def label(self) -> str:
        """Human-readable category for the index."""
        return aqi_label(self.index)

    @property
    def is_known(self) -> bool:
        """Whether the index is one of the five defined categories."""
        return self.index in AQI_CATEGORIES

    @property
    def color(self) -> str:
        """Get the color code associated with this AQI level.

        Returns:
            Hex color code (e.g., "#4CAF50"), grey when unknown
        """
        if not self.is_known:
            return UNKNOWN_AQI_COLOR
        return self.AQI_COLORS[self.index]

    @property
    def pm2_5_display(self) -> int:
        """PM2.5 rounded for display."""
        return round_half_up(self.pm2_5)

    @property
    def description(self) -> str:
        """Display string, e.g. "Air Quality: Fair (PM2.5 12)".

        The PM2.5 value is shown even when the label is "Unknown".
        """
        return f"Air Quality: {self.label} (PM2.5 {self.pm2_5_display})"
