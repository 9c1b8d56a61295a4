"""ContractFactory — composition root for building contracts.

Holds the reference tables and collaborators loaded once at startup, and
builds contracts either from canonical parameters or from a shortcode.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import final

from fincontract.codec.decoder import ShortcodeDecoder
from fincontract.codec.types import ContractParameters, LegacyPlaceholder, SpreadParameters
from fincontract.contract.contract import Contract
from fincontract.contract.temporal import DEFAULT_TICK_INTERVAL_SECONDS, TicksRule
from fincontract.core.errors import ContractError, ReferenceDataError
from fincontract.core.result import Err, Ok
from fincontract.core.types import FrozenMap, Instant
from fincontract.infra.config import FincontractConfig
from fincontract.infra.protocols import StrikeResolver, UnderlyingRegistry
from fincontract.reference.tables import (
    CategoryTable,
    ContractTypeTable,
    load_categories,
    load_contract_types,
)

logger = logging.getLogger(__name__)

type Bet = Contract | SpreadParameters | LegacyPlaceholder


@final
class ContractFactory:
    """Builds Contracts against one set of reference tables and collaborators."""

    def __init__(
        self,
        *,
        contract_types: ContractTypeTable,
        categories: CategoryTable,
        underlyings: UnderlyingRegistry,
        strikes: StrikeResolver,
        tick_interval_seconds: int = DEFAULT_TICK_INTERVAL_SECONDS,
        ticks_rules: FrozenMap[str, TicksRule] = FrozenMap.EMPTY,
    ) -> None:
        self.contract_types = contract_types
        self.categories = categories
        self.decoder = ShortcodeDecoder(contract_types, underlyings, strikes)
        self._tick_interval_seconds = tick_interval_seconds
        self._ticks_rules = ticks_rules

    @staticmethod
    def from_config(
        config: FincontractConfig,
        *,
        underlyings: UnderlyingRegistry,
        strikes: StrikeResolver,
        ticks_rules: FrozenMap[str, TicksRule] = FrozenMap.EMPTY,
    ) -> Ok[ContractFactory] | Err[ReferenceDataError]:
        """Load both reference tables named by config and wire a factory."""
        match load_contract_types(config.contract_types_path):
            case Err() as e:
                return e
            case Ok(contract_types):
                pass
        match load_categories(config.categories_path):
            case Err() as e:
                return e
            case Ok(categories):
                pass
        return Ok(ContractFactory(
            contract_types=contract_types,
            categories=categories,
            underlyings=underlyings,
            strikes=strikes,
            tick_interval_seconds=config.tick_interval_seconds,
            ticks_rules=ticks_rules,
        ))

    def build(
        self, params: ContractParameters, date_pricing: Instant | None = None,
    ) -> Ok[Contract] | Err[ContractError]:
        return Contract.create(
            params,
            contract_types=self.contract_types,
            categories=self.categories,
            date_pricing=date_pricing,
            tick_interval_seconds=self._tick_interval_seconds,
            ticks_rules=self._ticks_rules,
        )

    def from_shortcode(
        self, shortcode: str, currency: str, date_pricing: Instant | None = None,
    ) -> Ok[Bet] | Err[ContractError]:
        """Decode and build. Spreads and legacy placeholders are returned as decoded.

        Error messages are prefixed with the shortcode.
        """
        match self.decoder.decode(shortcode, currency):
            case Err(e):
                return Err(e.with_context(shortcode))
            case Ok(ContractParameters() as params):
                pass
            case Ok(other):
                return Ok(other)
        match self.build(params, date_pricing):
            case Err(e):
                return Err(e.with_context(shortcode))
            case Ok() as built:
                return built

    def from_shortcodes(
        self, pairs: Iterable[tuple[str, str]], date_pricing: Instant | None = None,
    ) -> list[Ok[Bet] | Err[ContractError]]:
        """Build a batch; failures are reported per item and never stop the batch."""
        results = [self.from_shortcode(s, c, date_pricing) for s, c in pairs]
        failed = sum(1 for r in results if isinstance(r, Err))
        if failed:
            logger.info("%d of %d shortcodes could not be built", failed, len(results))
        return results
