"""Codec types — the format-agnostic records a shortcode decodes to.

ContractParameters is the canonical representation of a standard contract.
SpreadParameters has its own shape. LegacyPlaceholder marks a shortcode that
is never meant to be priced.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Literal, final

from fincontract.core.errors import FieldViolation, ValidationError
from fincontract.core.result import Err, Ok
from fincontract.core.types import ContractDuration, Instant, UtcDatetime
from fincontract.reference.types import AmountType

type InstantLike = Instant | datetime | int | str
type StopType = Literal["dollar", "point"]

LEGACY_CONTRACT_TYPE = "Invalid"
LEGACY_UNDERLYING = "config"


def _validation_error(violations: list[FieldViolation], source: str) -> ValidationError:
    return ValidationError(
        message=f"ContractParameters validation failed: {len(violations)} violation(s)",
        code="CONTRACT_VALIDATION",
        timestamp=UtcDatetime.now(),
        source=f"codec.types.{source}",
        fields=tuple(violations),
    )


@final
@dataclass(frozen=True, slots=True)
class ContractParameters:
    """Canonical parameters of a standard (non-spread) contract."""

    contract_type: str
    underlying_symbol: str
    currency: str
    date_start: Instant
    payout: Decimal | None = None
    date_expiry: Instant | None = None
    tick_count: int | None = None
    tick_expiry: bool = False
    fixed_expiry: bool = False
    starts_as_forward_starting: bool = False
    supplied_barrier: str | None = None
    supplied_high_barrier: str | None = None
    supplied_low_barrier: str | None = None
    prediction: Decimal | None = None
    shortcode: str | None = None
    amount_type: AmountType = "payout"

    def __post_init__(self) -> None:
        if (self.supplied_high_barrier is None) != (self.supplied_low_barrier is None):
            raise TypeError("ContractParameters: high and low barriers must be supplied together")
        if self.supplied_barrier is not None and self.supplied_high_barrier is not None:
            raise TypeError(
                "ContractParameters: a two-barrier contract carries no single supplied_barrier"
            )
        if self.tick_expiry and self.tick_count is None:
            raise TypeError("ContractParameters: tick_expiry requires tick_count")
        if self.tick_count is not None and not self.tick_expiry:
            raise TypeError("ContractParameters: tick_count is only valid with tick_expiry")
        if self.tick_count is not None and self.tick_count < 0:
            raise TypeError(f"ContractParameters: tick_count must be >= 0, got {self.tick_count}")

    @property
    def is_legacy(self) -> bool:
        return False

    @property
    def has_two_barriers(self) -> bool:
        return self.supplied_high_barrier is not None

    @staticmethod
    def create(
        *,
        contract_type: str,
        underlying_symbol: str,
        currency: str,
        date_start: InstantLike | None = None,
        date_expiry: InstantLike | None = None,
        duration: str | None = None,
        tick_count: int | None = None,
        payout: Decimal | int | str | None = None,
        barrier: str | int | Decimal | None = None,
        high_barrier: str | int | Decimal | None = None,
        low_barrier: str | int | Decimal | None = None,
        prediction: Decimal | int | str | None = None,
        fixed_expiry: bool = False,
        starts_as_forward_starting: bool = False,
    ) -> Ok[ContractParameters] | Err[ValidationError]:
        """Validate directly supplied parameters, collecting every violation.

        The end of the contract comes from exactly one of date_expiry,
        duration or tick_count. date_start defaults to now.
        """
        violations: list[FieldViolation] = []

        for path, raw in (
            ("contract_type", contract_type),
            ("underlying_symbol", underlying_symbol),
            ("currency", currency),
        ):
            if not raw:
                violations.append(FieldViolation(
                    path=path, constraint="required non-empty string", actual_value=repr(raw),
                ))

        start = Instant.now()
        if date_start is not None:
            match Instant.parse(date_start):
                case Err(e):
                    violations.append(FieldViolation(
                        path="date_start", constraint=e, actual_value=repr(date_start),
                    ))
                case Ok(s):
                    start = s

        ends = [name for name, v in (
            ("date_expiry", date_expiry), ("duration", duration), ("tick_count", tick_count),
        ) if v is not None]
        if len(ends) != 1:
            violations.append(FieldViolation(
                path="date_expiry",
                constraint="exactly one of date_expiry, duration, tick_count is required",
                actual_value=repr(ends),
            ))

        expiry: Instant | None = None
        if date_expiry is not None:
            match Instant.parse(date_expiry):
                case Err(e):
                    violations.append(FieldViolation(
                        path="date_expiry", constraint=e, actual_value=repr(date_expiry),
                    ))
                case Ok(x):
                    expiry = x

        ticks: int | None = None
        if tick_count is not None:
            if isinstance(tick_count, bool) or not isinstance(tick_count, int) or tick_count <= 0:
                violations.append(FieldViolation(
                    path="tick_count", constraint="must be a positive int",
                    actual_value=repr(tick_count),
                ))
            else:
                ticks = tick_count

        parsed_duration: ContractDuration | None = None
        if duration is not None:
            match ContractDuration.parse(duration):
                case Err(e):
                    violations.append(FieldViolation(
                        path="duration", constraint=e, actual_value=repr(duration),
                    ))
                case Ok(d):
                    parsed_duration = d

        amount = _parse_decimal(payout, "payout", violations)
        if amount is not None and amount <= 0:
            violations.append(FieldViolation(
                path="payout", constraint="must be > 0", actual_value=str(amount),
            ))
        predicted = _parse_decimal(prediction, "prediction", violations)

        if barrier is not None and (high_barrier is not None or low_barrier is not None):
            violations.append(FieldViolation(
                path="barrier", constraint="single barrier cannot be combined with high/low",
                actual_value=repr((barrier, high_barrier, low_barrier)),
            ))
        if (high_barrier is None) != (low_barrier is None):
            violations.append(FieldViolation(
                path="high_barrier", constraint="high and low barriers are supplied together",
                actual_value=repr((high_barrier, low_barrier)),
            ))

        if expiry is not None and start.is_after(expiry):
            violations.append(FieldViolation(
                path="date_expiry", constraint="must not be before date_start",
                actual_value=f"{expiry.epoch} < {start.epoch}",
            ))

        if violations:
            return Err(_validation_error(violations, "ContractParameters.create"))

        params = ContractParameters(
            contract_type=contract_type.upper(),
            underlying_symbol=underlying_symbol,
            currency=currency,
            date_start=start,
            payout=amount,
            date_expiry=expiry,
            tick_count=ticks,
            tick_expiry=ticks is not None,
            fixed_expiry=fixed_expiry,
            starts_as_forward_starting=starts_as_forward_starting,
            supplied_barrier=_barrier_str(barrier),
            supplied_high_barrier=_barrier_str(high_barrier),
            supplied_low_barrier=_barrier_str(low_barrier),
            prediction=predicted,
        )
        if parsed_duration is not None:
            return Ok(params.with_duration(parsed_duration))
        return Ok(params)

    def with_duration(self, duration: ContractDuration) -> ContractParameters:
        """Set the end of the contract from a requested duration."""
        if duration.is_ticks:
            return replace(
                self, tick_count=duration.amount, tick_expiry=True, date_expiry=None,
                shortcode=None,
            )
        return replace(
            self,
            date_expiry=self.date_start.plus_seconds(duration.as_duration().seconds),
            tick_count=None,
            tick_expiry=False,
            shortcode=None,
        )


def _parse_decimal(
    raw: Decimal | int | str | None, path: str, violations: list[FieldViolation],
) -> Decimal | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or (isinstance(raw, str) and not raw.isascii()):
        violations.append(FieldViolation(path=path, constraint="must be numeric", actual_value=repr(raw)))
        return None
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except InvalidOperation:
        violations.append(FieldViolation(path=path, constraint="must be numeric", actual_value=repr(raw)))
        return None
    if not value.is_finite():
        violations.append(FieldViolation(path=path, constraint="must be finite", actual_value=repr(raw)))
        return None
    return value


def _barrier_str(raw: str | int | Decimal | None) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, Decimal):
        return format(raw, "f")
    return str(raw)


@final
@dataclass(frozen=True, slots=True)
class SpreadParameters:
    """Decoded spread contract: amount per point with stop levels, no payout or barrier."""

    shortcode: str
    contract_type: str
    underlying_symbol: str
    currency: str
    amount_per_point: Decimal
    date_start: Instant
    stop_loss: Decimal
    stop_profit: Decimal
    stop_type: StopType

    @property
    def is_legacy(self) -> bool:
        return False


@final
@dataclass(frozen=True, slots=True)
class LegacyPlaceholder:
    """Inert record for a shortcode that must not be priced."""

    currency: str
    contract_type: str = LEGACY_CONTRACT_TYPE
    underlying_symbol: str = LEGACY_UNDERLYING

    @property
    def is_legacy(self) -> bool:
        return True


type DecodedShortcode = ContractParameters | SpreadParameters | LegacyPlaceholder
