"""Tests for fincontract.codec.encoder and fincontract.codec.barriers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fincontract.codec.barriers import (
    barrier_for_shortcode,
    barrier_from_shortcode,
    is_set,
    plain_decimal,
)
from fincontract.codec.encoder import encode
from fincontract.codec.types import ContractParameters
from fincontract.core.errors import MissingFieldError
from fincontract.core.result import Err, Ok, unwrap
from fincontract.core.types import Instant
from fincontract.reference.tables import CategoryTable

START = Instant(epoch=1491965798)
EXPIRY = Instant(epoch=1491965808)


def _call(**overrides: object) -> ContractParameters:
    fields: dict[str, object] = {
        "contract_type": "CALL",
        "underlying_symbol": "frxUSDJPY",
        "currency": "USD",
        "date_start": START,
        "payout": Decimal("100"),
        "date_expiry": EXPIRY,
        "supplied_barrier": "S0P",
    }
    fields.update(overrides)
    return ContractParameters(**fields)  # type: ignore[arg-type]


class TestBarrierForms:
    @pytest.mark.parametrize(
        ("barrier", "contract_type", "token"),
        [
            ("S0P", "CALL", "S0P"),
            ("S-25P", "PUT", "S-25P"),
            ("108.25", "CALL", "108250000"),
            ("0.000001", "CALL", "1"),
            ("7", "DIGITMATCH", "7"),
        ],
    )
    def test_round_trip(self, barrier: str, contract_type: str, token: str) -> None:
        assert barrier_for_shortcode(barrier, contract_type) == token
        assert barrier_from_shortcode(token, contract_type) == barrier

    def test_plain_decimal(self) -> None:
        assert plain_decimal(Decimal("1E+2")) == "100"
        assert plain_decimal(Decimal("10.50")) == "10.5"
        assert plain_decimal(Decimal("0.000")) == "0"

    @pytest.mark.parametrize(
        ("barrier", "expected"),
        [(None, False), ("", False), ("0", False), ("0.0", False), ("S0P", True), ("1.5", True)],
    )
    def test_is_set(self, barrier: str | None, expected: bool) -> None:
        assert is_set(barrier) is expected


class TestEncode:
    def test_single_barrier_gets_trailing_zero(self, categories: CategoryTable) -> None:
        assert encode(_call(), categories.lookup("callput")) == Ok(
            "CALL_FRXUSDJPY_100_1491965798_1491965808_S0P_0"
        )

    def test_forward_starting_now(self, categories: CategoryTable) -> None:
        shortcode = unwrap(encode(_call(), categories.lookup("callput"), is_forward_starting=True))
        assert shortcode == "CALL_FRXUSDJPY_100_1491965798F_1491965808_S0P_0"

    def test_sticky_forward_start(self, categories: CategoryTable) -> None:
        shortcode = unwrap(encode(
            _call(starts_as_forward_starting=True), categories.lookup("callput"),
        ))
        assert "_1491965798F_" in shortcode

    def test_fixed_expiry(self, categories: CategoryTable) -> None:
        shortcode = unwrap(encode(_call(fixed_expiry=True), categories.lookup("callput")))
        assert shortcode == "CALL_FRXUSDJPY_100_1491965798_1491965808F_S0P_0"

    def test_tick_expiry(self, categories: CategoryTable) -> None:
        params = _call(
            contract_type="DIGITMATCH", underlying_symbol="R_10", payout=Decimal("18.18"),
            date_expiry=None, tick_count=5, tick_expiry=True, supplied_barrier="7",
        )
        assert unwrap(encode(params, categories.lookup("digits"))) == (
            "DIGITMATCH_R_10_18.18_1491965798_5T_7_0"
        )

    def test_two_barriers_high_then_low(self, categories: CategoryTable) -> None:
        params = _call(
            contract_type="EXPIRYRANGE", supplied_barrier=None,
            supplied_high_barrier="110.5", supplied_low_barrier="S-10P",
        )
        assert unwrap(encode(params, categories.lookup("endsinout"))) == (
            "EXPIRYRANGE_FRXUSDJPY_100_1491965798_1491965808_110500000_S-10P"
        )

    def test_barrier_not_known_at_start_is_omitted(self, categories: CategoryTable) -> None:
        params = _call(contract_type="ASIANU", supplied_barrier=None, date_expiry=None,
                       tick_count=5, tick_expiry=True)
        assert unwrap(encode(params, categories.lookup("asian"))) == (
            "ASIANU_FRXUSDJPY_100_1491965798_5T"
        )

    def test_no_barrier_at_all(self, categories: CategoryTable) -> None:
        shortcode = unwrap(encode(_call(supplied_barrier=None), categories.lookup("callput")))
        assert shortcode == "CALL_FRXUSDJPY_100_1491965798_1491965808"


class TestEncodeMissingFields:
    def test_missing_payout(self, categories: CategoryTable) -> None:
        result = encode(_call(payout=None), categories.lookup("callput"))
        assert isinstance(result, Err)
        assert isinstance(result.error, MissingFieldError)
        assert result.error.fields == ("payout",)

    def test_missing_everything_reported_together(self, categories: CategoryTable) -> None:
        params = _call(underlying_symbol="", payout=None, date_expiry=None)
        result = encode(params, categories.lookup("callput"))
        assert isinstance(result, Err)
        assert result.error.fields == ("underlying_symbol", "payout", "date_expiry")

    def test_tick_contract_needs_no_expiry_date(self, categories: CategoryTable) -> None:
        params = _call(date_expiry=None, tick_count=5, tick_expiry=True)
        assert unwrap(encode(params, categories.lookup("callput"))) == (
            "CALL_FRXUSDJPY_100_1491965798_5T_S0P_0"
        )

    def test_two_barrier_category_needs_both(self, categories: CategoryTable) -> None:
        result = encode(_call(contract_type="EXPIRYMISS"), categories.lookup("endsinout"))
        assert isinstance(result, Err)
        assert result.error.fields == ("supplied_high_barrier", "supplied_low_barrier")
