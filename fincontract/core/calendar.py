"""Trading calendar: Monday-Friday sessions with holidays and early closes.

WeekdayTradingCalendar satisfies the TradingCalendar protocol the shortcode
decoder uses to turn a dd-Mmm-yy expiry into a closing instant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import final

from dateutil.rrule import DAILY, FR, MO, TH, TU, WE, rrule

from fincontract.core.types import FrozenMap, Instant

_WEEKDAYS = (MO, TU, WE, TH, FR)

# Upper bound on the forward search for a regular session (ten years).
_SEARCH_DAYS = 3660


@final
@dataclass(frozen=True, slots=True)
class WeekdayTradingCalendar:
    """Weekday sessions closing at regular_close (UTC).

    holidays: dates with no session at all.
    early_closes: dates whose session closes before regular_close.
    """

    regular_close: time = time(23, 59, 59)
    holidays: frozenset[date] = frozenset()
    early_closes: FrozenMap[date, time] = field(default=FrozenMap.EMPTY)

    def is_trading_day(self, d: date) -> bool:
        return d.weekday() < 5 and d not in self.holidays

    def closing_on(self, d: date) -> Instant | None:
        """Closing instant of the session on d, or None if the market is shut."""
        if not self.is_trading_day(d):
            return None
        close = self.early_closes.get(d)
        return Instant.combine(d, close if close is not None else self.regular_close)

    def regular_trading_day_after(self, d: date) -> date:
        """First trading day strictly after d whose session closes at the regular time."""
        sessions = rrule(
            DAILY,
            byweekday=_WEEKDAYS,
            dtstart=datetime.combine(d + timedelta(days=1), time(0, 0)),
            count=_SEARCH_DAYS,
        )
        for candidate in sessions:
            day = candidate.date()
            if day not in self.holidays and day not in self.early_closes:
                return day
        raise ValueError(f"No regular trading day within {_SEARCH_DAYS} sessions after {d}")
