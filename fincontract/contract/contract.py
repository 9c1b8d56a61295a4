"""Contract — one bet, assembled from canonical parameters and reference facts.

Static facts (type and category) are resolved eagerly by Contract.create.
Derived attributes are computed on first read and memoized for the life of
the instance. Re-anchoring the expiry returns a new Contract, so nothing
derived from the old expiry is reused.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from functools import cached_property
from typing import final

from fincontract.codec.encoder import encode
from fincontract.codec.types import ContractParameters
from fincontract.contract import barriers, temporal
from fincontract.contract.barriers import SuppliedBarrierType
from fincontract.contract.temporal import DEFAULT_TICK_INTERVAL_SECONDS, TicksRule
from fincontract.core.errors import (
    ContractError,
    FieldViolation,
    MissingFieldError,
    ReferenceDataError,
    ValidationError,
)
from fincontract.core.result import Err, Ok
from fincontract.core.types import BoundedValue, Duration, FrozenMap, Instant, UtcDatetime
from fincontract.reference.tables import CategoryTable, ContractTypeTable
from fincontract.reference.types import BarrierCategory, CategoryFacts, ExpiryKind, TypeFacts


def _reference_error(table: str, key: str, detail: str) -> ReferenceDataError:
    return ReferenceDataError(
        message=detail,
        code="REFERENCE_DATA",
        timestamp=UtcDatetime.now(),
        source="contract.contract.Contract.create",
        table=table,
        key=key,
    )


def _check_shape(
    params: ContractParameters, facts: TypeFacts, category: CategoryFacts,
) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    if facts.is_binary and params.payout is None:
        violations.append(FieldViolation(
            path="payout", constraint=f"required for {facts.payout_type} payout type",
            actual_value="None",
        ))
    if not facts.is_binary and params.payout is not None:
        violations.append(FieldViolation(
            path="payout", constraint=f"not allowed for {facts.payout_type} payout type",
            actual_value=str(params.payout),
        ))
    if category.two_barriers and not params.has_two_barriers:
        violations.append(FieldViolation(
            path="supplied_high_barrier",
            constraint=f"{category.code} contracts need high and low barriers",
            actual_value=repr((params.supplied_high_barrier, params.supplied_low_barrier)),
        ))
    if not category.two_barriers and params.has_two_barriers:
        violations.append(FieldViolation(
            path="supplied_high_barrier",
            constraint=f"{category.code} contracts take a single barrier",
            actual_value=repr((params.supplied_high_barrier, params.supplied_low_barrier)),
        ))
    if params.date_expiry is None and params.tick_count is None:
        violations.append(FieldViolation(
            path="date_expiry", constraint="date_expiry or tick_count is required",
            actual_value="None",
        ))
    if params.date_expiry is not None and params.date_start.is_after(params.date_expiry):
        violations.append(FieldViolation(
            path="date_expiry", constraint="must not be before date_start",
            actual_value=f"{params.date_expiry.epoch} < {params.date_start.epoch}",
        ))
    return violations


@final
@dataclass(frozen=True)
class Contract:
    """A single bet with its reference facts and a pricing reference time."""

    params: ContractParameters
    type_facts: TypeFacts
    category: CategoryFacts
    date_pricing: Instant
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS
    ticks_rules: FrozenMap[str, TicksRule] = field(default=FrozenMap.EMPTY)

    @staticmethod
    def create(
        params: ContractParameters,
        *,
        contract_types: ContractTypeTable,
        categories: CategoryTable,
        date_pricing: Instant | None = None,
        tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
        ticks_rules: FrozenMap[str, TicksRule] = FrozenMap.EMPTY,
    ) -> Ok[Contract] | Err[ContractError]:
        """Resolve reference facts and validate the contract shape.

        date_pricing defaults to now.
        """
        facts = contract_types.lookup(params.contract_type)
        if facts is None:
            return Err(_reference_error(
                "contract_types", params.contract_type,
                f"Unknown contract type {params.contract_type!r}",
            ))
        category = categories.get(facts.category)
        if category is None:
            return Err(_reference_error(
                "contract_categories", facts.category,
                f"Unknown category {facts.category!r} for {facts.code}",
            ))

        violations = _check_shape(params, facts, category)
        if violations:
            return Err(ValidationError(
                message=f"Contract validation failed: {len(violations)} violation(s)",
                code="CONTRACT_VALIDATION",
                timestamp=UtcDatetime.now(),
                source="contract.contract.Contract.create",
                fields=tuple(violations),
            ))

        return Ok(Contract(
            params=params,
            type_facts=facts,
            category=category,
            date_pricing=date_pricing if date_pricing is not None else Instant.now(),
            tick_interval_seconds=tick_interval_seconds,
            ticks_rules=ticks_rules,
        ))

    # --- Parameters ---

    @property
    def code(self) -> str:
        return self.params.contract_type

    @property
    def contract_type(self) -> str:
        return self.params.contract_type

    @property
    def underlying_symbol(self) -> str:
        return self.params.underlying_symbol

    @property
    def currency(self) -> str:
        return self.params.currency

    @property
    def payout(self) -> Decimal | None:
        return self.params.payout

    @property
    def date_start(self) -> Instant:
        return self.params.date_start

    @property
    def date_expiry(self) -> Instant:
        """Explicit expiry, or the estimated end of a tick contract."""
        return temporal.expiry_of(self.params, self.tick_interval_seconds)

    @property
    def tick_count(self) -> int | None:
        return self.params.tick_count

    @property
    def tick_expiry(self) -> bool:
        return self.params.tick_expiry

    @property
    def fixed_expiry(self) -> bool:
        return self.params.fixed_expiry

    @property
    def starts_as_forward_starting(self) -> bool:
        return self.params.starts_as_forward_starting

    @property
    def supplied_barrier(self) -> str | None:
        return self.params.supplied_barrier

    @property
    def supplied_high_barrier(self) -> str | None:
        return self.params.supplied_high_barrier

    @property
    def supplied_low_barrier(self) -> str | None:
        return self.params.supplied_low_barrier

    @property
    def prediction(self) -> Decimal | None:
        return self.params.prediction

    # --- Type facts ---

    @property
    def id(self) -> int:
        return self.type_facts.id

    @property
    def pricing_code(self) -> str:
        return self.type_facts.pricing_code

    @property
    def display_name(self) -> str:
        return self.type_facts.display_name

    @property
    def sentiment(self) -> str:
        return self.type_facts.sentiment

    @property
    def other_side_code(self) -> str | None:
        return self.type_facts.other_side_code

    @property
    def payout_type(self) -> str:
        return self.type_facts.payout_type

    @property
    def payouttime(self) -> str:
        return self.type_facts.payouttime

    # --- Category facts ---

    @property
    def category_code(self) -> str:
        return self.category.code

    @property
    def two_barriers(self) -> bool:
        return self.category.two_barriers

    @property
    def allow_forward_starting(self) -> bool:
        return self.category.allow_forward_starting

    @property
    def is_path_dependent(self) -> bool:
        return self.category.is_path_dependent

    @property
    def barrier_at_start(self) -> bool:
        return self.category.barrier_at_start

    @property
    def supported_expiries(self) -> tuple[ExpiryKind, ...]:
        return self.category.supported_expiries

    # --- Derived, memoized ---

    @cached_property
    def is_forward_starting(self) -> bool:
        return temporal.is_forward_starting(self.params, self.date_pricing, self.category)

    @cached_property
    def effective_start(self) -> Instant:
        return temporal.effective_start(self.params, self.date_pricing, self.tick_interval_seconds)

    @cached_property
    def remaining_time(self) -> Duration:
        return temporal.remaining_time(self.params, self.date_pricing, self.tick_interval_seconds)

    @cached_property
    def timeindays(self) -> BoundedValue:
        return temporal.time_in_days(self.params, self.date_pricing, self.tick_interval_seconds)

    @cached_property
    def timeinyears(self) -> BoundedValue:
        return temporal.time_in_years(self.params, self.date_pricing, self.tick_interval_seconds)

    @property
    def time_in_days(self) -> Decimal:
        return self.timeindays.amount

    @property
    def time_in_years(self) -> Decimal:
        return self.timeinyears.amount

    @cached_property
    def ticks_to_expiry(self) -> int | None:
        return temporal.ticks_to_expiry(self.params, self.category, self.ticks_rules)

    @cached_property
    def is_atm(self) -> bool:
        return barriers.is_atm(self.params, self.category)

    @cached_property
    def barrier_category(self) -> BarrierCategory | None:
        return barriers.barrier_category(self.params, self.category)

    @cached_property
    def supplied_barrier_type(self) -> SuppliedBarrierType | None:
        return barriers.supplied_barrier_type(self.params)

    @cached_property
    def shortcode(self) -> str | None:
        """The decoded shortcode, or the encoded one; None if it cannot be encoded."""
        if self.params.shortcode is not None:
            return self.params.shortcode
        return self.encode().unwrap_or(None)

    def time_to_expiry(self, from_: Instant | None = None) -> Duration:
        """Time to expiry from from_ (default date_pricing). Not the lifetime of a forward starter."""
        return temporal.time_to_expiry(
            self.params, self.date_pricing, from_=from_,
            tick_interval_seconds=self.tick_interval_seconds,
        )

    def encode(self) -> Ok[str] | Err[MissingFieldError]:
        return encode(self.params, self.category, is_forward_starting=self.is_forward_starting)

    # --- Re-anchoring ---

    def with_date_expiry(self, date_expiry: Instant) -> Contract:
        """A copy ending at date_expiry. Raises TypeError if that is before date_start."""
        if self.params.date_start.is_after(date_expiry):
            raise TypeError(
                f"date_expiry {date_expiry.epoch} is before date_start {self.params.date_start.epoch}"
            )
        return replace(self, params=replace(self.params, date_expiry=date_expiry, shortcode=None))

    def with_date_pricing(self, date_pricing: Instant) -> Contract:
        return replace(self, date_pricing=date_pricing)
