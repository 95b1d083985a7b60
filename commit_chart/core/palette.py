from enum import StrEnum
from typing import NamedTuple

RGBA = tuple[float, float, float, float]


class ChartColor(StrEnum):
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    VIOLET = "violet"


class ColorSet(NamedTuple):
    """Colors for the chart line, filled area, title and x-axis labels."""

    line: RGBA
    area: RGBA
    title: RGBA
    xlabel: RGBA


class UnknownColorError(ValueError):
    """Raised when a palette key is not one of ChartColor."""

    def __init__(self, key: str) -> None:
        self.key = key
        expected = ", ".join(color.value for color in ChartColor)
        super().__init__(f"Unknown color '{key}'. Expected one of: {expected}")


def _color_set(red: int, green: int, blue: int) -> ColorSet:
    rgb = (red / 255, green / 255, blue / 255)
    return ColorSet(
        line=(*rgb, 1.0),
        area=(*rgb, 0.25),
        title=(*rgb, 0.80),
        xlabel=(*rgb, 0.80),
    )


PALETTE: dict[ChartColor, ColorSet] = {
    ChartColor.RED: _color_set(201, 25, 0),
    ChartColor.ORANGE: _color_set(255, 137, 0),
    ChartColor.YELLOW: _color_set(255, 215, 0),
    ChartColor.GREEN: _color_set(32, 212, 32),
    ChartColor.BLUE: _color_set(30, 78, 255),
    ChartColor.VIOLET: _color_set(150, 0, 215),
}


def parse_color(key: str | None, default: str = ChartColor.VIOLET) -> ChartColor:
    """Parse a palette key, falling back to `default` when it is empty.

    Raises:
        UnknownColorError: If the key is not a known palette entry.
    """

    normalized = (key or "").strip().lower() or str(default).strip().lower()
    try:
        return ChartColor(normalized)
    except ValueError as exc:
        raise UnknownColorError(key or normalized) from exc


def resolve_color(color: ChartColor) -> ColorSet:
    return PALETTE[color]
