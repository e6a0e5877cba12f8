import pytest

from weatherpal.utils.formatting import format_percentage, format_temperature, round_half_up


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (2.5, 3),
        (-2.5, -2),
        (-0.5, 0),
        (0.49999999999999994, 0),
        (-0.49999999999999994, 0),
        (14.4, 14),
        (14.5, 15),
        (-7.6, -8),
        (3.0, 3),
    ],
)
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_format_helpers() -> None:
    assert format_temperature(21.6) == "22°C"
    assert format_percentage(48) == "48%"
