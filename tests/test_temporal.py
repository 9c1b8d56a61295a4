"""Tests for fincontract.contract.temporal — start, remaining time and duration facts."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fincontract.codec.types import ContractParameters
from fincontract.contract.temporal import (
    MAX_DAYS,
    MIN_DAYS,
    MIN_YEARS,
    effective_start,
    expiry_of,
    is_forward_starting,
    remaining_time,
    ticks_to_expiry,
    time_in_days,
    time_in_years,
    time_to_expiry,
)
from fincontract.core.types import Duration, FrozenMap, Instant
from fincontract.reference.tables import CategoryTable
from fincontract.reference.types import CategoryFacts

START = Instant(epoch=1_500_000_000)
DAY = 86400


def _params(length: int = DAY, **overrides: object) -> ContractParameters:
    fields: dict[str, object] = {
        "contract_type": "CALL",
        "underlying_symbol": "FRXUSDJPY",
        "currency": "USD",
        "date_start": START,
        "payout": Decimal("100"),
        "date_expiry": START.plus_seconds(length),
        "supplied_barrier": "S0P",
    }
    fields.update(overrides)
    return ContractParameters(**fields)  # type: ignore[arg-type]


def _ticks(count: int) -> ContractParameters:
    return _params(date_expiry=None, tick_count=count, tick_expiry=True)


_OFFSETS = st.integers(min_value=-800 * DAY, max_value=800 * DAY)
_LENGTHS = st.integers(min_value=0, max_value=1000 * DAY)


class TestEffectiveStart:
    def test_live_contract_uses_pricing_time(self) -> None:
        pricing = START.plus_seconds(100)
        assert effective_start(_params(), pricing) == pricing

    def test_not_yet_started_uses_start(self) -> None:
        assert effective_start(_params(), START.plus_seconds(-100)) == START

    def test_pricing_at_start_uses_start(self) -> None:
        assert effective_start(_params(), START) == START

    def test_backpricing_after_expiry_uses_start(self) -> None:
        assert effective_start(_params(), START.plus_seconds(2 * DAY)) == START

    def test_after_expiry_takes_precedence(self) -> None:
        # Expiry before start is a caller error; the expiry branch still wins.
        params = _params(date_expiry=START.plus_seconds(-10))
        assert effective_start(params, START.plus_seconds(-5)) == START


class TestTimeToExpiry:
    def test_from_pricing_time(self) -> None:
        assert time_to_expiry(_params(), START.plus_seconds(400)) == Duration(seconds=DAY - 400)

    def test_from_explicit_instant(self) -> None:
        assert time_to_expiry(_params(), START.plus_seconds(400), from_=START) == Duration(seconds=DAY)

    def test_tick_contract_uses_estimated_expiry(self) -> None:
        assert expiry_of(_ticks(5), tick_interval_seconds=2) == START.plus_seconds(10)
        assert time_to_expiry(_ticks(5), START) == Duration(seconds=10)

    def test_neither_expiry_nor_ticks(self) -> None:
        with pytest.raises(TypeError):
            expiry_of(_params(date_expiry=None))

    @given(offset=_OFFSETS, length=_LENGTHS)
    def test_never_negative(self, offset: int, length: int) -> None:
        params = _params(length)
        pricing = START.plus_seconds(offset)
        assert time_to_expiry(params, pricing).seconds >= 0
        assert remaining_time(params, pricing).seconds >= 0


class TestRemainingTime:
    def test_before_start_is_full_life(self) -> None:
        assert remaining_time(_params(), START.plus_seconds(-500)) == Duration(seconds=DAY)

    def test_live(self) -> None:
        assert remaining_time(_params(), START.plus_seconds(600)) == Duration(seconds=DAY - 600)

    def test_after_expiry_is_zero(self) -> None:
        assert remaining_time(_params(), START.plus_seconds(2 * DAY)) == Duration(seconds=0)


class TestTimeInDays:
    def test_one_day(self) -> None:
        value = time_in_days(_params(), START)
        assert value.amount == Decimal(1)
        assert not value.is_clamped

    def test_zero_length_is_floored(self) -> None:
        value = time_in_days(_params(0), START)
        assert value.amount == MIN_DAYS
        assert value.raw == Decimal(0)
        assert value.is_clamped

    def test_long_contract_is_capped(self) -> None:
        value = time_in_days(_params(1000 * DAY), START)
        assert value.amount == MAX_DAYS
        assert value.raw == Decimal(1000)

    def test_backpriced_contract_uses_full_life(self) -> None:
        assert time_in_days(_params(), START.plus_seconds(5 * DAY)).amount == Decimal(1)

    @given(offset=_OFFSETS, length=_LENGTHS)
    def test_always_within_band(self, offset: int, length: int) -> None:
        amount = time_in_days(_params(length), START.plus_seconds(offset)).amount
        assert MIN_DAYS <= amount <= MAX_DAYS

    def test_clamp_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="fincontract.contract.temporal"):
            time_in_days(_params(0), START)
        assert "clamped" in caplog.text


class TestTimeInYears:
    def test_365_days_is_one_year(self) -> None:
        assert time_in_years(_params(365 * DAY), START).amount == Decimal(1)

    def test_floor(self) -> None:
        value = time_in_years(_params(0), START)
        assert value.amount == MIN_DAYS / Decimal(365)
        assert value.amount >= MIN_YEARS

    @given(offset=_OFFSETS, length=_LENGTHS)
    def test_never_below_floor(self, offset: int, length: int) -> None:
        assert time_in_years(_params(length), START.plus_seconds(offset)).amount >= MIN_YEARS


class TestForwardStarting:
    def test_allowed_and_before_start(self, categories: CategoryTable) -> None:
        assert is_forward_starting(_params(), START.plus_seconds(-1), categories.lookup("callput"))

    def test_not_before_start(self, categories: CategoryTable) -> None:
        assert not is_forward_starting(_params(), START, categories.lookup("callput"))

    @given(offset=_OFFSETS)
    def test_gated_by_category(self, offset: int) -> None:
        category = CategoryFacts(code="touchnotouch", allow_forward_starting=False)
        assert not is_forward_starting(_params(), START.plus_seconds(offset), category)


class TestTicksToExpiry:
    def test_default_is_count_plus_one(self, categories: CategoryTable) -> None:
        assert ticks_to_expiry(_ticks(4), categories.lookup("callput")) == 5

    def test_time_contract_has_none(self, categories: CategoryTable) -> None:
        assert ticks_to_expiry(_params(), categories.lookup("callput")) is None

    def test_category_rule_overrides_default(self, categories: CategoryTable) -> None:
        rules = FrozenMap(_entries=(("digits", lambda n: n),))
        assert ticks_to_expiry(_ticks(4), categories.lookup("digits"), rules) == 4
        assert ticks_to_expiry(_ticks(4), categories.lookup("asian"), rules) == 5

    def test_plain_mapping_rules(self, categories: CategoryTable) -> None:
        rules = {"asian": lambda n: n * 2}
        assert ticks_to_expiry(_ticks(4), categories.lookup("asian"), rules) == 8
