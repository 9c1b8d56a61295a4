"""Contract type and category tables.

Loaded once at application startup (PyYAML) and injected into the decoder
and the contract factory. Tables are immutable after loading.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, final

import yaml

from fincontract.core.errors import ReferenceDataError
from fincontract.core.result import Err, Ok
from fincontract.core.types import FrozenMap, UtcDatetime
from fincontract.reference.types import CategoryFacts, TypeFacts

logger = logging.getLogger(__name__)

CONTRACT_TYPES_FILE = "contract_types.yml"
CATEGORIES_FILE = "contract_categories.yml"


def _reference_error(table: str, key: str, detail: str, source: str) -> ReferenceDataError:
    return ReferenceDataError(
        message=detail,
        code="REFERENCE_DATA",
        timestamp=UtcDatetime.now(),
        source=f"reference.tables.{source}",
        table=table,
        key=key,
    )


def _type_facts(code: str, entry: Mapping[str, Any]) -> TypeFacts:
    other = entry.get("other_side_code")
    return TypeFacts(
        code=code,
        id=int(entry["id"]),
        pricing_code=str(entry.get("pricing_code", code)),
        display_name=str(entry["display_name"]),
        sentiment=str(entry["sentiment"]),
        other_side_code=str(other) if other else None,
        payout_type=entry.get("payout_type", "binary"),
        payouttime=str(entry.get("payouttime", "end")),
        category=str(entry["category"]),
    )


def _category_facts(code: str, entry: Mapping[str, Any]) -> CategoryFacts:
    order = entry.get("display_order")
    return CategoryFacts(
        code=code,
        display_name=entry.get("display_name"),
        display_order=int(order) if order is not None else None,
        explanation=entry.get("explanation"),
        two_barriers=bool(entry.get("two_barriers", False)),
        allow_forward_starting=bool(entry.get("allow_forward_starting", False)),
        is_path_dependent=bool(entry.get("is_path_dependent", False)),
        barrier_at_start=bool(entry.get("barrier_at_start", True)),
        supported_expiries=tuple(entry.get("supported_expiries") or ()),
        is_binary=bool(entry.get("is_binary", True)),
        has_financial_barrier=bool(entry.get("has_financial_barrier", True)),
        supported_amount_type=tuple(entry.get("supported_amount_type") or ("payout", "stake")),
        allow_atm_barrier=bool(entry.get("allow_atm_barrier", False)),
    )


@final
@dataclass(frozen=True, slots=True)
class ContractTypeTable:
    """Type code (e.g. CALL) -> TypeFacts."""

    _types: FrozenMap[str, TypeFacts]

    @staticmethod
    def from_mapping(
        raw: Mapping[str, Mapping[str, Any]],
    ) -> Ok[ContractTypeTable] | Err[ReferenceDataError]:
        facts: dict[str, TypeFacts] = {}
        for code, entry in raw.items():
            try:
                facts[str(code)] = _type_facts(str(code), entry)
            except (KeyError, TypeError, ValueError) as e:
                return Err(_reference_error(
                    "contract_types", str(code), f"Malformed contract type entry: {e!r}",
                    "ContractTypeTable.from_mapping",
                ))
        match FrozenMap.create(facts):
            case Err(e):
                return Err(_reference_error(
                    "contract_types", "*", e, "ContractTypeTable.from_mapping",
                ))
            case Ok(entries):
                return Ok(ContractTypeTable(_types=entries))

    def lookup(self, code: str) -> TypeFacts | None:
        return self._types.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._types

    def __len__(self) -> int:
        return len(self._types)

    def codes(self) -> tuple[str, ...]:
        return tuple(self._types)


@final
@dataclass(frozen=True, slots=True)
class CategoryTable:
    """Category code (e.g. callput) -> CategoryFacts."""

    _categories: FrozenMap[str, CategoryFacts]

    @staticmethod
    def from_mapping(
        raw: Mapping[str, Mapping[str, Any]],
    ) -> Ok[CategoryTable] | Err[ReferenceDataError]:
        facts: dict[str, CategoryFacts] = {}
        for code, entry in raw.items():
            try:
                facts[str(code)] = _category_facts(str(code), entry)
            except (TypeError, ValueError) as e:
                return Err(_reference_error(
                    "contract_categories", str(code), f"Malformed category entry: {e!r}",
                    "CategoryTable.from_mapping",
                ))
        match FrozenMap.create(facts):
            case Err(e):
                return Err(_reference_error(
                    "contract_categories", "*", e, "CategoryTable.from_mapping",
                ))
            case Ok(entries):
                return Ok(CategoryTable(_categories=entries))

    def get(self, code: str) -> CategoryFacts | None:
        return self._categories.get(code)

    def lookup(self, code: str) -> CategoryFacts:
        """Facts for code; an unconfigured code gets default facts."""
        found = self._categories.get(code)
        return found if found is not None else CategoryFacts(code=code)

    def __contains__(self, code: object) -> bool:
        return code in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def codes(self) -> tuple[str, ...]:
        return tuple(self._categories)


# ---------------------------------------------------------------------------
# YAML loaders
# ---------------------------------------------------------------------------


def _read_yaml(
    path: Path | None, filename: str, table: str,
) -> Ok[dict[str, Any]] | Err[ReferenceDataError]:
    try:
        if path is None:
            text = resources.files("fincontract.reference").joinpath("data", filename).read_text(
                encoding="utf-8",
            )
        else:
            text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        return Err(_reference_error(table, str(path or filename), str(e), "_read_yaml"))
    if not isinstance(data, dict):
        return Err(_reference_error(
            table, str(path or filename), "top level must be a mapping", "_read_yaml",
        ))
    return Ok(data)


def load_contract_types(path: Path | None = None) -> Ok[ContractTypeTable] | Err[ReferenceDataError]:
    """Load the contract type table; None loads the packaged defaults."""
    match _read_yaml(path, CONTRACT_TYPES_FILE, "contract_types"):
        case Err() as e:
            return e
        case Ok(raw):
            pass
    result = ContractTypeTable.from_mapping(raw)
    if isinstance(result, Ok):
        logger.info("Loaded %d contract types", len(result.value))
    return result


def load_categories(path: Path | None = None) -> Ok[CategoryTable] | Err[ReferenceDataError]:
    """Load the contract category table; None loads the packaged defaults."""
    match _read_yaml(path, CATEGORIES_FILE, "contract_categories"):
        case Err() as e:
            return e
        case Ok(raw):
            pass
    result = CategoryTable.from_mapping(raw)
    if isinstance(result, Ok):
        logger.info("Loaded %d contract categories", len(result.value))
    return result
