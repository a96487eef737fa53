import calendar
from pathlib import Path
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

DOCUMENT_ID_COLUMN = "__document_id__"

# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z
MIN_SECONDS = -62135596800
MAX_SECONDS = 253402300799


@dataclass(frozen=True)
class Timestamp:
    """A UTC instant with nanosecond resolution."""
    seconds: int
    nanos: int = 0

    def __post_init__(self):
        # Carry whole seconds out of the nanosecond field
        seconds, nanos = divmod(self.nanos, 10 ** 9)
        object.__setattr__(self, "seconds", self.seconds + seconds)
        object.__setattr__(self, "nanos", nanos)

    @property
    def in_range(self) -> bool:
        """Whether the instant falls within years 1 to 9999."""
        return MIN_SECONDS <= self.seconds <= MAX_SECONDS

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        # Naive datetimes are treated as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        # DatetimeWithNanoseconds from google-api-core carries the full precision
        nanos = getattr(value, "nanosecond", value.microsecond * 1000)
        return cls(calendar.timegm(value.utctimetuple()), nanos)


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Reference:
    """Path of another document. Never dereferenced."""
    path: str


DocumentValue = Union[
    None, bool, int, float, str, bytes, Timestamp, GeoPoint, Reference,
    List[Any], Dict[str, Any]
]


@dataclass(frozen=True)
class Document:
    id: str
    fields: Dict[str, DocumentValue] = field(default_factory=dict)


@dataclass(frozen=True)
class ExportOptions:
    limit: int = 0
    output_dir: Path = Path(".")


@dataclass(frozen=True)
class CollectionExportOutcome:
    collection: str
    document_count: int = 0
    field_count: int = 0
    output_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        if not self.ok:
            return f"{self.collection}: FAILED ({self.error})"
        if self.output_path is None:
            return f"{self.collection}: empty, skipped"
        return (
            f"{self.collection}: {self.document_count} documents, "
            f"{self.field_count} fields -> {self.output_path}"
        )


@dataclass(frozen=True)
class ExportSummary:
    outcomes: List[CollectionExportOutcome]

    @property
    def failed(self) -> List[str]:
        return [x.collection for x in self.outcomes if not x.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def lines(self) -> List[str]:
        return [x.describe() for x in self.outcomes]
