"""Data models for rudu."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")
BAR_LENGTH = 20


class Band(str, Enum):
    """Ordered size class used to tell small entries from large ones."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


BANDS: tuple[Band, ...] = tuple(Band)


class ReportConfig(BaseModel):
    """Settings for a single report run."""

    model_config = ConfigDict(frozen=True)

    units: tuple[str, ...] = Field(UNITS, description="Unit ladder, smallest first")
    bar_width: int = Field(BAR_LENGTH, ge=1, description="Number of slots in the bar")
    fill_char: str = Field("#", min_length=1, max_length=1, description="Filled slot glyph")
    empty_char: str = Field(".", min_length=1, max_length=1, description="Empty slot glyph")
    workers: int = Field(1, ge=1, description="Threads used to aggregate children")

    @field_validator("units")
    @classmethod
    def _units_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("unit ladder must contain at least one unit")
        return value


class ScaledSize(BaseModel):
    """A byte count scaled to the largest fitting unit."""

    model_config = ConfigDict(frozen=True)

    size_bytes: int = Field(..., ge=0, description="Original byte count")
    value: float = Field(..., description="Scaled value")
    unit_index: int = Field(..., ge=0, description="Position in the unit ladder")
    unit: str = Field(..., description="Unit label")
    band: Band = Field(..., description="Magnitude band")

    @property
    def text(self) -> str:
        """Human-readable size, two decimal places."""
        return f"{self.value:.2f} {self.unit}"


class PercentageBar(BaseModel):
    """Fixed-width proportional bar for a percentage."""

    model_config = ConfigDict(frozen=True)

    percentage: float = Field(..., ge=0, le=100)
    width: int = Field(..., ge=1)
    filled: int = Field(..., ge=0)
    fill_char: str = "#"
    empty_char: str = "."
    band: Band = Field(..., description="Percentage band")

    @property
    def empty(self) -> int:
        return self.width - self.filled

    @property
    def text(self) -> str:
        """Bar followed by the percentage, e.g. ``[##........]  20.0%``."""
        return (
            f"[{self.fill_char * self.filled}{self.empty_char * self.empty}] "
            f"{self.percentage:5.1f}%"
        )


class Entry(BaseModel):
    """One immediate child of the scanned directory."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Base filename of the child")
    path: str = Field(..., description="Full path of the child")
    size_bytes: int = Field(..., ge=0, description="Bytes allocated on disk")
    file_count: int = Field(0, ge=0, description="Regular files counted")
    skipped: int = Field(0, ge=0, description="Entries that could not be inspected")
    percentage: float = Field(..., ge=0, le=100, description="Share of the total")
    size: ScaledSize
    bar: PercentageBar

    @property
    def size_human(self) -> str:
        return self.size.text


class Report(BaseModel):
    """Complete result of one run, entries ordered largest first."""

    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Directory that was scanned")
    entries: tuple[Entry, ...] = Field(default_factory=tuple)
    total_bytes: int = Field(..., ge=0, description="Sum of all entry sizes")
    total_size: ScaledSize
    config: ReportConfig = Field(default_factory=ReportConfig)

    @property
    def total_human(self) -> str:
        return self.total_size.text

    @property
    def total_files(self) -> int:
        """Regular files counted across all entries."""
        return sum(e.file_count for e in self.entries)

    @property
    def total_skipped(self) -> int:
        """Entries skipped across all entries."""
        return sum(e.skipped for e in self.entries)
