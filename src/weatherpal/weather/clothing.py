"""Clothing advice by temperature bucket, with a rain gear override."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from weatherpal.weather.classify import mentions

RAIN_GEAR = ("Umbrella", "Rain jacket")
RAIN_TITLE = "Rain protection needed"
RAIN_WORDS = ("rain", "drizzle", "thunder")


class ClothingBucket(str, Enum):
    FREEZING = "freezing"
    COLD = "cold"
    COOL = "cool"
    MILD = "mild"
    WARM = "warm"
    HOT = "hot"


@dataclass(frozen=True)
class ClothingRecommendation:
    """A title plus an ordered list of clothing items."""

    title: str
    items: tuple[str, ...] = field(default_factory=tuple)

    def top(self, count: int = 2) -> list[str]:
        """First ``count`` items, as shown on the page."""
        return list(self.items[:count])


CLOTHING_RECOMMENDATIONS: dict[ClothingBucket, ClothingRecommendation] = {
    ClothingBucket.FREEZING: ClothingRecommendation(
        "Bundle up warmly",
        ("Heavy winter coat", "Thick scarf", "Gloves", "Warm boots", "Thermal layers"),
    ),
    ClothingBucket.COLD: ClothingRecommendation(
        "Dress warmly",
        ("Warm jacket", "Sweater", "Long pants", "Closed shoes", "Light scarf"),
    ),
    ClothingBucket.COOL: ClothingRecommendation(
        "Light layers",
        ("Light jacket", "Long sleeves", "Jeans", "Sneakers"),
    ),
    ClothingBucket.MILD: ClothingRecommendation(
        "Comfortable clothing",
        ("Light sweater", "T-shirt", "Comfortable pants", "Any shoes"),
    ),
    ClothingBucket.WARM: ClothingRecommendation(
        "Light clothing",
        ("T-shirt", "Shorts or light pants", "Sandals or sneakers", "Sunglasses"),
    ),
    ClothingBucket.HOT: ClothingRecommendation(
        "Stay cool",
        (
            "Light breathable clothes",
            "Shorts",
            "Sandals",
            "Sunglasses",
            "Hat for sun protection",
        ),
    ),
}

# Upper bounds (exclusive) in ascending order; anything above is HOT.
_BUCKET_LIMITS: tuple[tuple[float, ClothingBucket], ...] = (
    (0, ClothingBucket.FREEZING),
    (10, ClothingBucket.COLD),
    (15, ClothingBucket.COOL),
    (20, ClothingBucket.MILD),
    (25, ClothingBucket.WARM),
)


def clothing_bucket(temperature_c: float) -> ClothingBucket:
    """Temperature bucket: <0, [0,10), [10,15), [15,20), [20,25), >=25."""
    for limit, bucket in _BUCKET_LIMITS:
        if temperature_c < limit:
            return bucket
    return ClothingBucket.HOT


def recommend_clothing(temperature_c: float, condition_text: str) -> ClothingRecommendation:
    """Recommend clothing for a temperature and condition.

    The bucket table is looked up first; rain, drizzle or thunder then
    prepends rain gear and replaces the title.

    Args:
        temperature_c: Temperature in °C
        condition_text: Provider condition string

    Returns:
        A new ClothingRecommendation
    """
    base = CLOTHING_RECOMMENDATIONS[clothing_bucket(temperature_c)]
    if mentions(condition_text, RAIN_WORDS):
        return ClothingRecommendation(RAIN_TITLE, RAIN_GEAR + base.items)
    return ClothingRecommendation(base.title, base.items)
