"""Percentage bar rendering."""

import math

from rudu.models import BAR_LENGTH, Band, PercentageBar

# Upper bounds (exclusive) for every band but the last
PERCENTAGE_THRESHOLDS: tuple[tuple[float, Band], ...] = (
    (20.0, Band.TINY),
    (40.0, Band.SMALL),
    (60.0, Band.MEDIUM),
    (80.0, Band.LARGE),
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def clamp_percentage(percentage: float) -> float:
    return min(100.0, max(0.0, percentage))


def filled_slots(percentage: float, width: int = BAR_LENGTH) -> int:
    """
    Number of filled slots for a percentage.

    Multiplies before dividing so exact halves such as 12.5% of 20 stay
    exact and round up to 3.
    """
    if width < 1:
        raise ValueError(f"bar width must be at least 1, got {width}")
    filled = round_half_up(percentage * width / 100)
    return min(width, max(0, filled))


def classify_percentage(percentage: float) -> Band:
    """Map a percentage to a band."""
    for upper, band in PERCENTAGE_THRESHOLDS:
        if percentage < upper:
            return band
    return Band.HUGE


def render_bar(
    percentage: float,
    width: int = BAR_LENGTH,
    fill_char: str = "#",
    empty_char: str = ".",
) -> PercentageBar:
    """Build the bar for a percentage, clamped to [0, 100]."""
    percentage = clamp_percentage(percentage)
    return PercentageBar(
        percentage=percentage,
        width=width,
        filled=filled_slots(percentage, width),
        fill_char=fill_char,
        empty_char=empty_char,
        band=classify_percentage(percentage),
    )
