import json
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from weatherpal.location import Coordinates
from weatherpal.settings.user import UserSettings

DATA_DIR = Path(__file__).parent / "data"


def load_json(name: str) -> dict[str, Any]:
    return json.loads((DATA_DIR / name).read_text())


def epoch(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    return int(datetime(year, month, day, hour, minute, tzinfo=UTC).timestamp())


@pytest.fixture
def current_payload() -> dict[str, Any]:
    return load_json("current_clear.json")


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return load_json("forecast.json")


@pytest.fixture
def air_payload() -> dict[str, Any]:
    return load_json("air_pollution.json")


@pytest.fixture
def settings(tmp_path: Path) -> UserSettings:
    return UserSettings(
        api_key="test-api-key-123",
        lat=51.5085,
        lon=-0.1257,
        output_dir=tmp_path / "preview",
        animation_interval=3600,
    )


@pytest.fixture
def coords() -> Coordinates:
    return Coordinates(lat=51.5085, lon=-0.1257)


@pytest.fixture
def noon_clock() -> Callable[[], datetime]:
    """Friday 3 May 2024, 10:00 UTC."""
    return lambda: datetime(2024, 5, 3, 10, 0, tzinfo=UTC)
