"""Tests for fincontract.reference — contract type and category tables."""

from __future__ import annotations

from pathlib import Path

import pytest

from fincontract.core.errors import ReferenceDataError
from fincontract.core.result import Err, Ok, unwrap
from fincontract.reference.tables import (
    CategoryTable,
    ContractTypeTable,
    load_categories,
    load_contract_types,
)
from fincontract.reference.types import (
    BarrierCategory,
    CategoryFacts,
    all_barrier_categories,
)


class TestPackagedContractTypes:
    def test_every_type_has_a_known_category(
        self, contract_types: ContractTypeTable, categories: CategoryTable,
    ) -> None:
        for code in contract_types.codes():
            facts = contract_types.lookup(code)
            assert facts is not None
            assert facts.category in categories, code

    def test_other_side_is_symmetric(self, contract_types: ContractTypeTable) -> None:
        for code in contract_types.codes():
            facts = contract_types.lookup(code)
            assert facts is not None and facts.other_side_code is not None
            other = contract_types.lookup(facts.other_side_code)
            assert other is not None and other.other_side_code == code

    def test_call_facts(self, contract_types: ContractTypeTable) -> None:
        call = contract_types.lookup("CALL")
        assert call is not None
        assert (call.id, call.pricing_code, call.category) == (1, "CALL", "callput")
        assert call.is_binary

    def test_spreads_are_not_binary(self, contract_types: ContractTypeTable) -> None:
        spread = contract_types.lookup("SPREADU")
        assert spread is not None and not spread.is_binary

    def test_unknown_code(self, contract_types: ContractTypeTable) -> None:
        assert contract_types.lookup("GARBAGE") is None
        assert "GARBAGE" not in contract_types


class TestPackagedCategories:
    def test_callput_flags(self, categories: CategoryTable) -> None:
        callput = categories.lookup("callput")
        assert callput.allow_forward_starting
        assert not callput.two_barriers
        assert callput.supported_expiries == ("intraday", "daily", "tick")

    def test_two_barrier_categories(self, categories: CategoryTable) -> None:
        assert categories.lookup("endsinout").two_barriers
        assert categories.lookup("staysinout").two_barriers

    def test_asian_barrier_not_at_start(self, categories: CategoryTable) -> None:
        assert not categories.lookup("asian").barrier_at_start

    def test_unconfigured_category_gets_defaults(self, categories: CategoryTable) -> None:
        assert categories.get("lookback") is None
        assert categories.lookup("lookback") == CategoryFacts(code="lookback")


class TestFromMapping:
    def test_malformed_type_entry(self) -> None:
        result = ContractTypeTable.from_mapping({"CALL": {"display_name": "Higher"}})
        assert isinstance(result, Err)
        assert result.error.table == "contract_types"
        assert result.error.key == "CALL"

    def test_minimal_type_entry_defaults(self) -> None:
        table = unwrap(ContractTypeTable.from_mapping({
            "FOO": {"id": 99, "display_name": "Foo", "sentiment": "up", "category": "callput"},
        }))
        foo = table.lookup("FOO")
        assert foo is not None
        assert foo.pricing_code == "FOO"
        assert foo.payout_type == "binary"
        assert foo.other_side_code is None

    def test_category_with_bad_order(self) -> None:
        assert isinstance(CategoryTable.from_mapping({"x": {"display_order": "first"}}), Err)

    def test_empty_category_code_rejected(self) -> None:
        assert isinstance(CategoryTable.from_mapping({"": {}}), Err)


class TestLoaders:
    def test_load_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "types.yml"
        path.write_text(
            "CALL:\n  id: 1\n  display_name: Higher\n  sentiment: up\n  category: callput\n",
            encoding="utf-8",
        )
        table = unwrap(load_contract_types(path))
        assert table.codes() == ("CALL",)

    def test_missing_file_is_err(self, tmp_path: Path) -> None:
        result = load_categories(tmp_path / "nope.yml")
        assert isinstance(result, Err)
        assert isinstance(result.error, ReferenceDataError)

    def test_non_mapping_is_err(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert isinstance(load_contract_types(path), Err)

    def test_invalid_yaml_is_err(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("CALL: [unclosed\n", encoding="utf-8")
        assert isinstance(load_contract_types(path), Err)

    def test_logs_count(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="fincontract.reference.tables"):
            assert isinstance(load_categories(), Ok)
        assert "Loaded 7 contract categories" in caplog.text


class TestBarrierCategories:
    def test_fixed_set(self) -> None:
        assert all_barrier_categories() == (
            "euro_atm", "euro_non_atm", "lookback", "american",
            "non_financial", "asian", "reset", "spreads",
        )
        assert BarrierCategory("american") is BarrierCategory.AMERICAN
