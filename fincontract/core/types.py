"""Core types: UtcDatetime, FrozenMap, Instant, Duration, ContractDuration, BoundedValue.

Instants are whole epoch seconds, the resolution shortcodes carry.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, ClassVar, Literal, final

from fincontract.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def now() -> UtcDatetime:
        return UtcDatetime(value=datetime.now(tz=UTC))


@final
@dataclass(frozen=True, slots=True)
class FrozenMap[K, V]:
    """Immutable sorted mapping, safe to share between contract evaluations.

    Entries are stored as a sorted tuple of (key, value) pairs.
    """

    _entries: tuple[tuple[K, V], ...]

    EMPTY: ClassVar[FrozenMap[Any, Any]]  # Assigned after class definition

    @staticmethod
    def create(items: dict[K, V] | Iterable[tuple[K, V]]) -> Ok[FrozenMap[K, V]] | Err[str]:
        """Create a FrozenMap. Duplicate keys: last value wins."""
        d = items if isinstance(items, dict) else dict(items)
        try:
            entries = tuple(sorted(d.items(), key=lambda kv: kv[0]))
        except TypeError as e:
            return Err(f"FrozenMap keys must be comparable: {e}")
        return Ok(FrozenMap(_entries=entries))

    def get(self, key: K, default: V | None = None) -> V | None:
        for k, v in self._entries:
            if k == key:
                return v
        return default

    def __getitem__(self, key: K) -> V:
        for k, v in self._entries:
            if k == key:
                return v
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._entries)

    def __iter__(self) -> Iterator[K]:
        return (k for k, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> tuple[tuple[K, V], ...]:
        return self._entries

    def to_dict(self) -> dict[K, V]:
        return dict(self._entries)


FrozenMap.EMPTY = FrozenMap(_entries=())


# ---------------------------------------------------------------------------
# Instants
# ---------------------------------------------------------------------------

_DDMMMYY = re.compile(r"^(\d\d?)-([A-Za-z]{3})-(\d\d)$", re.ASCII)

_MONTHS: dict[str, int] = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}


def is_epoch_digits(raw: str) -> bool:
    """True for a non-empty run of ASCII digits 0-9 only."""
    return raw.isascii() and raw.isdecimal()


def is_ddmmmyy(raw: object) -> bool:
    """True for day-month-year tokens such as '1-JAN-01' or '15-Mar-17'."""
    if not isinstance(raw, str):
        return False
    m = _DDMMMYY.match(raw)
    return m is not None and m.group(2).upper() in _MONTHS


@final
@dataclass(frozen=True, slots=True, order=True)
class Instant:
    """A point in time as whole UTC epoch seconds."""

    epoch: int

    def __post_init__(self) -> None:
        if isinstance(self.epoch, bool) or not isinstance(self.epoch, int):
            raise TypeError(f"Instant requires int epoch, got {self.epoch!r}")

    @staticmethod
    def parse(raw: Instant | datetime | int | str) -> Ok[Instant] | Err[str]:
        """Coerce an epoch, a numeric string, an aware datetime or a dd-Mmm-yy token."""
        match raw:
            case Instant():
                return Ok(raw)
            case bool():
                return Err(f"Instant cannot be built from bool {raw!r}")
            case int():
                return Ok(Instant(epoch=raw))
            case datetime():
                if raw.tzinfo is None:
                    return Err("Instant requires timezone-aware datetime, got naive")
                return Ok(Instant.from_datetime(raw))
            case str() if is_epoch_digits(raw):
                return Ok(Instant(epoch=int(raw)))
            case str() if is_ddmmmyy(raw):
                return Instant.from_ddmmmyy(raw)
            case _:
                return Err(f"Cannot interpret {raw!r} as an instant")

    @staticmethod
    def from_datetime(value: datetime) -> Instant:
        return Instant(epoch=int(value.astimezone(UTC).timestamp()))

    @staticmethod
    def from_ddmmmyy(raw: str) -> Ok[Instant] | Err[str]:
        """Midnight UTC of a dd-Mmm-yy date. Two-digit years 69-99 are 19xx."""
        match Instant.date_from_ddmmmyy(raw):
            case Err() as e:
                return e
            case Ok(d):
                return Ok(Instant.combine(d, time(0, 0, 0)))

    @staticmethod
    def date_from_ddmmmyy(raw: str) -> Ok[date] | Err[str]:
        m = _DDMMMYY.match(raw)
        if m is None or m.group(2).upper() not in _MONTHS:
            return Err(f"Not a dd-Mmm-yy date: {raw!r}")
        yy = int(m.group(3))
        year = 1900 + yy if yy >= 69 else 2000 + yy
        try:
            return Ok(date(year, _MONTHS[m.group(2).upper()], int(m.group(1))))
        except ValueError as e:
            return Err(f"Invalid date {raw!r}: {e}")

    @staticmethod
    def combine(d: date, t: time) -> Instant:
        """The instant at wall-clock time t (UTC) on date d."""
        return Instant.from_datetime(datetime.combine(d, t.replace(tzinfo=UTC)))

    @staticmethod
    def now() -> Instant:
        return Instant.from_datetime(datetime.now(tz=UTC))

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.epoch, tz=UTC)

    def to_date(self) -> date:
        return self.to_datetime().date()

    def time_of_day(self) -> time:
        return self.to_datetime().time()

    def is_after(self, other: Instant) -> bool:
        return self.epoch > other.epoch

    def is_before(self, other: Instant) -> bool:
        return self.epoch < other.epoch

    def plus_seconds(self, seconds: int) -> Instant:
        return Instant(epoch=self.epoch + seconds)


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_SECONDS_PER_UNIT: dict[str, int] = {"s": 1, "m": 60, "h": 3600, "d": 86400}


@final
@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """A non-negative interval in whole seconds."""

    seconds: int

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise TypeError(f"Duration must be >= 0, got {self.seconds}")

    @property
    def minutes(self) -> Decimal:
        return Decimal(self.seconds) / Decimal(60)

    @property
    def hours(self) -> Decimal:
        return Decimal(self.seconds) / Decimal(3600)

    @property
    def days(self) -> Decimal:
        return Decimal(self.seconds) / Decimal(86400)

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self.seconds)

    def as_concise(self) -> str:
        """Compact form, largest unit first: 93605 -> '1d2h5s'."""
        if self.seconds == 0:
            return "0s"
        parts: list[str] = []
        remaining = self.seconds
        for unit in ("d", "h", "m", "s"):
            count, remaining = divmod(remaining, _SECONDS_PER_UNIT[unit])
            if count:
                parts.append(f"{count}{unit}")
        return "".join(parts)


type DurationUnit = Literal["t", "s", "m", "h", "d"]

_DURATION = re.compile(r"^(\d+)([tsmhd])$", re.ASCII)


@final
@dataclass(frozen=True, slots=True)
class ContractDuration:
    """A requested contract duration: a count of ticks or a wall-clock length."""

    amount: int
    unit: DurationUnit

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise TypeError(f"ContractDuration.amount must be > 0, got {self.amount}")

    @staticmethod
    def parse(raw: str) -> Ok[ContractDuration] | Err[str]:
        """Parse '5t', '30s', '15m', '3h' or '2d' (unit is case-insensitive)."""
        m = _DURATION.match(raw.strip().lower())
        if m is None:
            return Err(f"Invalid duration {raw!r}: expected <count><t|s|m|h|d>")
        amount = int(m.group(1))
        if amount == 0:
            return Err(f"Invalid duration {raw!r}: count must be > 0")
        unit: DurationUnit = m.group(2)  # type: ignore[assignment]
        return Ok(ContractDuration(amount=amount, unit=unit))

    @property
    def is_ticks(self) -> bool:
        return self.unit == "t"

    def as_duration(self) -> Duration:
        """Wall-clock length. Tick counts have none and raise TypeError."""
        if self.is_ticks:
            raise TypeError("A tick count has no wall-clock length")
        return Duration(seconds=self.amount * _SECONDS_PER_UNIT[self.unit])


# ---------------------------------------------------------------------------
# Bounded calculated values
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class BoundedValue:
    """A named calculation whose result is clamped to [minimum, maximum].

    The raw value is kept so callers can detect out-of-band inputs.
    """

    name: str
    description: str
    raw: Decimal
    minimum: Decimal | None = None
    maximum: Decimal | None = None

    def __post_init__(self) -> None:
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise TypeError(
                f"BoundedValue {self.name}: minimum {self.minimum} > maximum {self.maximum}"
            )

    @property
    def amount(self) -> Decimal:
        value = self.raw
        if self.minimum is not None and value < self.minimum:
            value = self.minimum
        if self.maximum is not None and value > self.maximum:
            value = self.maximum
        return value

    @property
    def is_clamped(self) -> bool:
        return self.amount != self.raw
