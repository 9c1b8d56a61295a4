"""In-memory implementations of the collaborator protocols.

Good enough for tests, batch tooling and replays where no live market data
is needed. All classes are @final.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import final

from fincontract.codec.barriers import barrier_from_shortcode
from fincontract.core.calendar import WeekdayTradingCalendar
from fincontract.core.types import Instant
from fincontract.infra.protocols import TradingCalendar, Underlying


@final
@dataclass(frozen=True, slots=True)
class SimpleUnderlying:
    """An underlying known only by its symbol and trading calendar."""

    symbol: str
    calendar: TradingCalendar = field(default_factory=WeekdayTradingCalendar)


@final
class InMemoryUnderlyingRegistry:
    """Symbol -> Underlying. Unregistered symbols get the default calendar."""

    def __init__(
        self,
        underlyings: dict[str, Underlying] | None = None,
        default_calendar: TradingCalendar | None = None,
    ) -> None:
        self._underlyings: dict[str, Underlying] = {
            symbol.upper(): u for symbol, u in (underlyings or {}).items()
        }
        self._default_calendar = (
            default_calendar if default_calendar is not None else WeekdayTradingCalendar()
        )

    def register(self, underlying: Underlying) -> None:
        self._underlyings[underlying.symbol.upper()] = underlying

    def resolve(self, symbol: str) -> Underlying:
        found = self._underlyings.get(symbol.upper())
        if found is not None:
            return found
        return SimpleUnderlying(symbol=symbol, calendar=self._default_calendar)


@final
class ShortcodeStrikeResolver:
    """Reads barriers as written by the encoder.

    Relative tokens and digit barriers are kept; scaled integers are divided
    by 1e6 back into absolute barriers.
    """

    def normalize(
        self,
        token: str,
        underlying: Underlying,  # noqa: ARG002
        contract_type: str,
        date_start: Instant,  # noqa: ARG002
    ) -> str:
        return barrier_from_shortcode(token, contract_type)
