"""Temporal resolver — start, remaining time and duration facts for a contract.

Pure functions of the canonical parameters and a pricing reference time.
Durations never go negative: pricing after expiry clamps to zero.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from decimal import Decimal

from fincontract.codec.types import ContractParameters
from fincontract.core.types import BoundedValue, Duration, FrozenMap, Instant
from fincontract.reference.types import CategoryFacts

logger = logging.getLogger(__name__)

MIN_DAYS = Decimal("0.000001")
MAX_DAYS = Decimal("730")
DAYS_PER_YEAR = Decimal("365")
MIN_YEARS = Decimal("0.000000001")

# Estimated spacing of ticks, used when a tick contract has no explicit expiry.
DEFAULT_TICK_INTERVAL_SECONDS = 2

type TicksRule = Callable[[int], int]


def expiry_of(
    params: ContractParameters,
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
) -> Instant:
    """date_expiry, or the estimated end of a tick contract."""
    if params.date_expiry is not None:
        return params.date_expiry
    if params.tick_count is not None:
        return params.date_start.plus_seconds(params.tick_count * tick_interval_seconds)
    raise TypeError(
        f"{params.contract_type} contract has neither date_expiry nor tick_count"
    )


def is_forward_starting(
    params: ContractParameters, date_pricing: Instant, category: CategoryFacts,
) -> bool:
    return category.allow_forward_starting and date_pricing.is_before(params.date_start)


def effective_start(
    params: ContractParameters,
    date_pricing: Instant,
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
) -> Instant:
    """Reference instant for duration calculations.

    date_start when backpricing past expiry or before the contract is live,
    date_pricing otherwise. The expiry check comes first.
    """
    if date_pricing.is_after(expiry_of(params, tick_interval_seconds)):
        return params.date_start
    if date_pricing.is_after(params.date_start):
        return date_pricing
    return params.date_start


def time_to_expiry(
    params: ContractParameters,
    date_pricing: Instant,
    from_: Instant | None = None,
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
) -> Duration:
    """Time from from_ (default date_pricing) to expiry, clamped at zero.

    For a forward starting contract this is not its lifetime; pass
    from_=params.date_start for that.
    """
    start = from_ if from_ is not None else date_pricing
    end = expiry_of(params, tick_interval_seconds)
    return Duration(seconds=max(0, end.epoch - start.epoch))


def remaining_time(
    params: ContractParameters,
    date_pricing: Instant,
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
) -> Duration:
    when = date_pricing if date_pricing.is_after(params.date_start) else params.date_start
    return time_to_expiry(params, date_pricing, from_=when, tick_interval_seconds=tick_interval_seconds)


def time_in_days(
    params: ContractParameters,
    date_pricing: Instant,
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
) -> BoundedValue:
    """Duration to expiry from the effective start, in days, within [MIN_DAYS, MAX_DAYS]."""
    start = effective_start(params, date_pricing, tick_interval_seconds)
    days = time_to_expiry(
        params, date_pricing, from_=start, tick_interval_seconds=tick_interval_seconds,
    ).days
    value = BoundedValue(
        name="time_in_days",
        description="Duration of this contract in days",
        raw=days,
        minimum=MIN_DAYS,
        maximum=MAX_DAYS,
    )
    if value.is_clamped:
        logger.debug(
            "time_in_days for %s clamped from %s to %s",
            params.shortcode or params.contract_type, days, value.amount,
        )
    return value


def time_in_years(
    params: ContractParameters,
    date_pricing: Instant,
    tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
) -> BoundedValue:
    """time_in_days over a 365 day year, floored at MIN_YEARS."""
    days = time_in_days(params, date_pricing, tick_interval_seconds).amount
    return BoundedValue(
        name="time_in_years",
        description="Duration of this contract in years",
        raw=days / DAYS_PER_YEAR,
        minimum=MIN_YEARS,
    )


def default_ticks_to_expiry(tick_count: int) -> int:
    return tick_count + 1


def ticks_to_expiry(
    params: ContractParameters,
    category: CategoryFacts,
    rules: Mapping[str, TicksRule] | FrozenMap[str, TicksRule] | None = None,
) -> int | None:
    """Ticks until expiry; None for a contract that does not expire on ticks.

    rules maps a category code to its own count, replacing the
    tick_count + 1 default for that category.
    """
    if params.tick_count is None:
        return None
    rule = rules.get(category.code) if rules is not None else None
    if rule is None:
        rule = default_ticks_to_expiry
    return rule(params.tick_count)
