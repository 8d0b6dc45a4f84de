"""Timestamp data type.

`Timestamp` is a point in time with nanosecond resolution (UTC).
`new_timestamp` is the type's constructor; it accepts four call forms:

    new_timestamp()                                   # now
    new_timestamp(1700000000.5)                       # seconds since epoch
    new_timestamp("2024-01-31 10:00:00", "%Y-%m-%d %H:%M:%S")
    new_timestamp({"string": "2024-01-31", "format": ["%Y-%m-%d"]})

A format is either one strptime string or a non-empty list of them; the
first format that matches wins.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NSECS_PER_SEC = 1_000_000_000
NSECS_PER_USEC = 1_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DEFAULT_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S.%f %Z",
    "%Y-%m-%dT%H:%M:%S %Z",
    "%Y-%m-%d %H:%M:%S.%f %Z",
    "%Y-%m-%d %H:%M:%S %Z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)

Format = Annotated[str, StringConstraints(min_length=2)]
Formats = Union[Format, Annotated[list[Format], Field(min_length=1)]]


class TimestampParseError(ValueError):
    """No format matched the given string."""


class TimestampArgs(BaseModel):
    """Keyword form of the string constructor."""

    model_config = ConfigDict(extra="forbid")

    string: str = Field(..., min_length=1)
    format: Formats | None = None

    def formats(self) -> tuple[str, ...]:
        if self.format is None:
            return DEFAULT_FORMATS
        if isinstance(self.format, str):
            return (self.format,)
        return tuple(self.format)


@dataclass(frozen=True, order=True)
class Timestamp:
    nsecs: int

    @classmethod
    def now(cls) -> Timestamp:
        return cls(time.time_ns())

    @classmethod
    def from_seconds(cls, seconds: int | float) -> Timestamp:
        if isinstance(seconds, int):
            return cls(seconds * NSECS_PER_SEC)
        return cls(int(seconds * NSECS_PER_SEC))

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        seconds = delta.days * 86_400 + delta.seconds
        return cls(seconds * NSECS_PER_SEC + delta.microseconds * NSECS_PER_USEC)

    @classmethod
    def parse(cls, string: str, formats: str | Sequence[str] = DEFAULT_FORMATS) -> Timestamp:
        if isinstance(formats, str):
            formats = (formats,)
        for fmt in formats:
            try:
                parsed = datetime.strptime(string, fmt)
            except ValueError:
                continue
            return cls.from_datetime(parsed)
        raise TimestampParseError(
            f"unable to parse {string!r} using any of the formats {', '.join(formats)}"
        )

    @classmethod
    def from_hash(cls, args: Mapping[str, Any]) -> Timestamp:
        validated = TimestampArgs.model_validate(dict(args))
        return cls.parse(validated.string, validated.formats())

    def to_seconds(self) -> float:
        return self.nsecs / NSECS_PER_SEC

    def to_datetime(self) -> datetime:
        seconds, nsecs = divmod(self.nsecs, NSECS_PER_SEC)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
            microsecond=nsecs // NSECS_PER_USEC
        )

    def format(self, fmt: str = "%Y-%m-%dT%H:%M:%S.%f %Z") -> str:
        return self.to_datetime().strftime(fmt)

    def __str__(self) -> str:
        seconds, nsecs = divmod(self.nsecs, NSECS_PER_SEC)
        base = datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
        return f"{base}.{nsecs:09d} UTC"


def new_timestamp(*args: Any) -> Timestamp:
    """Construct a `Timestamp` from one of the four supported call forms.

    Raises TypeError when the arguments match none of them, and
    `pydantic.ValidationError` when a string or format violates its
    constraints.
    """

    if not args:
        return Timestamp.now()

    first = args[0]
    if len(args) == 1 and isinstance(first, (int, float)) and not isinstance(first, bool):
        return Timestamp.from_seconds(first)
    if len(args) <= 2 and isinstance(first, str):
        validated = TimestampArgs(string=first, format=args[1] if len(args) == 2 else None)
        return Timestamp.parse(validated.string, validated.formats())
    if len(args) == 1 and isinstance(first, Mapping):
        return Timestamp.from_hash(first)

    kinds = ", ".join(type(a).__name__ for a in args)
    raise TypeError(f"new_timestamp: no call form accepts ({kinds})")


@dataclass(frozen=True)
class TimestampType:
    """Scalar type of `Timestamp` values, optionally bounded by `[from_, to]`."""

    from_: Timestamp | None = None
    to: Timestamp | None = None

    name: ClassVar[str] = "Timestamp"
    parent: ClassVar[str] = "ScalarType"

    @property
    def impl_class(self) -> type[Timestamp]:
        return Timestamp

    def is_instance(self, value: object) -> bool:
        if not isinstance(value, Timestamp):
            return False
        if self.from_ is not None and value < self.from_:
            return False
        if self.to is not None and value > self.to:
            return False
        return True

    def is_assignable(self, other: TimestampType) -> bool:
        """True when every value of `other` is also a value of this type."""

        if self.from_ is not None and (other.from_ is None or other.from_ < self.from_):
            return False
        if self.to is not None and (other.to is None or other.to > self.to):
            return False
        return True

    def generalize(self) -> TimestampType:
        return DEFAULT

    @staticmethod
    def new_function():
        return new_timestamp


DEFAULT = TimestampType()
