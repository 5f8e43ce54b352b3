"""Byte count scaling and magnitude classification."""

from rudu.models import BANDS, UNITS, Band, ScaledSize


def _scale(size: float, units: tuple[str, ...]) -> tuple[float, int]:
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    if not units:
        raise ValueError("unit ladder must contain at least one unit")

    value = float(size)
    unit_index = 0
    # The last unit has nothing above it, so its value may exceed 1024
    while value >= 1024 and unit_index < len(units) - 1:
        value /= 1024.0
        unit_index += 1
    return value, unit_index


def human_readable(size: float, units: tuple[str, ...] = UNITS) -> tuple[str, int]:
    """
    Format a byte count with 1024-based units.

    Args:
        size: Non-negative byte count
        units: Unit ladder, smallest first

    Returns:
        Tuple of (formatted string, magnitude index)
    """
    value, unit_index = _scale(size, units)
    return f"{value:.2f} {units[unit_index]}", unit_index


def scale_size(size: int, units: tuple[str, ...] = UNITS) -> ScaledSize:
    """Scale a byte count into a ScaledSize record."""
    value, unit_index = _scale(size, units)
    return ScaledSize(
        size_bytes=size,
        value=value,
        unit_index=unit_index,
        unit=units[unit_index],
        band=classify_magnitude(unit_index),
    )


def classify_magnitude(unit_index: int) -> Band:
    """Map a magnitude index to a band; anything past the last band is huge."""
    if unit_index < 0:
        raise ValueError(f"magnitude index must be non-negative, got {unit_index}")
    return BANDS[min(unit_index, len(BANDS) - 1)]
