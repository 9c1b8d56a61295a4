"""Collaborator protocols consumed by the codec and the contract factory.

Domain code depends on these abstractions; adapters implement them. Failures
raised by an implementation propagate to the caller unchanged.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable

from fincontract.core.types import Instant


@runtime_checkable
class TradingCalendar(Protocol):
    """Trading sessions of one underlying."""

    def closing_on(self, d: date) -> Instant | None:
        """Closing instant on d, or None when there is no session that day."""
        ...

    def regular_trading_day_after(self, d: date) -> date:
        """First day after d with a full-length session."""
        ...


@runtime_checkable
class Underlying(Protocol):
    """Handle for an underlying instrument."""

    @property
    def symbol(self) -> str: ...

    @property
    def calendar(self) -> TradingCalendar: ...


@runtime_checkable
class UnderlyingRegistry(Protocol):
    """Resolves a shortcode symbol (e.g. FRXUSDJPY) to an Underlying."""

    def resolve(self, symbol: str) -> Underlying: ...


@runtime_checkable
class StrikeResolver(Protocol):
    """Turns a raw shortcode barrier token into its canonical barrier string.

    Relative tokens such as S10P stay relative; resolving them against live
    spot is the pricing engine's concern.
    """

    def normalize(
        self,
        token: str,
        underlying: Underlying,
        contract_type: str,
        date_start: Instant,
    ) -> str: ...
