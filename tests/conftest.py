"""Hypothesis profiles and pytest fixtures for fincontract.

Reference tables are the packaged defaults. Underlyings trade on a plain
weekday calendar unless a test registers its own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, settings

from fincontract.codec.decoder import ShortcodeDecoder
from fincontract.contract.factory import ContractFactory
from fincontract.core.result import unwrap
from fincontract.infra.memory_adapter import InMemoryUnderlyingRegistry, ShortcodeStrikeResolver
from fincontract.reference.tables import (
    CategoryTable,
    ContractTypeTable,
    load_categories,
    load_contract_types,
)

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# FIXTURES
# ===================================================================


@pytest.fixture(scope="session")
def contract_types() -> ContractTypeTable:
    return unwrap(load_contract_types())


@pytest.fixture(scope="session")
def categories() -> CategoryTable:
    return unwrap(load_categories())


@pytest.fixture
def registry() -> InMemoryUnderlyingRegistry:
    return InMemoryUnderlyingRegistry()


@pytest.fixture
def decoder(
    contract_types: ContractTypeTable, registry: InMemoryUnderlyingRegistry,
) -> ShortcodeDecoder:
    return ShortcodeDecoder(contract_types, registry, ShortcodeStrikeResolver())


@pytest.fixture
def factory(
    contract_types: ContractTypeTable,
    categories: CategoryTable,
    registry: InMemoryUnderlyingRegistry,
) -> ContractFactory:
    return ContractFactory(
        contract_types=contract_types,
        categories=categories,
        underlyings=registry,
        strikes=ShortcodeStrikeResolver(),
    )


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo setup_logging: close added handlers and restore the previous ones."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
