"""Shortcode decoder — shortcode + currency to canonical parameters.

decode never raises for an unrecognized shortcode: it degrades to a
LegacyPlaceholder so a batch of shortcodes can be processed end to end.
Collaborator failures (registry, calendar, strike resolution) propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import final

from fincontract.codec.barriers import is_set
from fincontract.codec.patterns import (
    ShortcodeFields,
    SpreadFields,
    canonical_type,
    is_known_invalid,
    match_shortcode,
    strip_legacy_suffix,
    type_probe,
)
from fincontract.codec.types import (
    ContractParameters,
    DecodedShortcode,
    LegacyPlaceholder,
    SpreadParameters,
)
from fincontract.core.errors import ContractError, MissingCurrencyError, ReferenceDataError
from fincontract.core.result import Err, Ok
from fincontract.core.types import Instant, UtcDatetime, is_epoch_digits
from fincontract.infra.protocols import StrikeResolver, Underlying, UnderlyingRegistry
from fincontract.reference.tables import ContractTypeTable

logger = logging.getLogger(__name__)


def _decimal(text: str) -> Decimal | None:
    if not text:
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def closing_instant(underlying: Underlying, d: date) -> Ok[Instant] | Err[ReferenceDataError]:
    """Expiry instant for a date-only expiry.

    The session close on d when there is one. Otherwise the regular close
    time of the next regular trading day, placed on d itself.
    """
    calendar = underlying.calendar
    closing = calendar.closing_on(d)
    if closing is not None:
        return Ok(closing)
    next_day = calendar.regular_trading_day_after(d)
    regular_close = calendar.closing_on(next_day)
    if regular_close is None:
        return Err(ReferenceDataError(
            message=f"No regular close on {next_day} for {underlying.symbol}",
            code="CALENDAR",
            timestamp=UtcDatetime.now(),
            source="codec.decoder.closing_instant",
            table="trading_calendar",
            key="date_expiry",
        ))
    logger.debug(
        "No session on %s for %s; using %s close time from %s",
        d, underlying.symbol, regular_close.time_of_day(), next_day,
    )
    return Ok(Instant.combine(d, regular_close.time_of_day()))


@final
class ShortcodeDecoder:
    """Decodes shortcodes against an injected contract type table."""

    def __init__(
        self,
        contract_types: ContractTypeTable,
        underlyings: UnderlyingRegistry,
        strikes: StrikeResolver,
    ) -> None:
        self._types = contract_types
        self._underlyings = underlyings
        self._strikes = strikes

    def decode(
        self, shortcode: str, currency: str,
    ) -> Ok[DecodedShortcode] | Err[ContractError]:
        if not currency:
            return Err(MissingCurrencyError(
                message="A currency is required to decode a shortcode",
                code="MISSING_CURRENCY",
                timestamp=UtcDatetime.now(),
                source="codec.decoder.ShortcodeDecoder.decode",
                shortcode=shortcode,
            ))

        body = strip_legacy_suffix(shortcode)
        probe = type_probe(body)
        if probe not in self._types or is_known_invalid(body):
            logger.debug("Legacy shortcode %r (type probe %r)", shortcode, probe)
            return Ok(LegacyPlaceholder(currency=currency))

        found = match_shortcode(body)
        if found is None:
            logger.debug("Shortcode %r matches no known pattern", shortcode)
            return Ok(LegacyPlaceholder(currency=currency))

        name, fields = found
        logger.debug("Shortcode %r matched %s pattern", shortcode, name)
        match fields:
            case SpreadFields():
                return Ok(self._spread(shortcode, fields, currency))
            case ShortcodeFields():
                return self._standard(shortcode, fields, currency)

    def decode_many(
        self, pairs: Iterable[tuple[str, str]],
    ) -> list[Ok[DecodedShortcode] | Err[ContractError]]:
        """Decode (shortcode, currency) pairs; one bad shortcode never stops the batch."""
        return [self.decode(shortcode, currency) for shortcode, currency in pairs]

    def _spread(self, shortcode: str, f: SpreadFields, currency: str) -> DecodedShortcode:
        amount_per_point = _decimal(f.amount_per_point)
        stop_loss = _decimal(f.stop_loss)
        stop_profit = _decimal(f.stop_profit)
        if amount_per_point is None or stop_loss is None or stop_profit is None:
            return LegacyPlaceholder(currency=currency)
        underlying = self._underlyings.resolve(f.underlying_symbol)
        return SpreadParameters(
            shortcode=shortcode,
            contract_type=f.contract_type,
            underlying_symbol=underlying.symbol,
            currency=currency,
            amount_per_point=amount_per_point,
            date_start=Instant(epoch=int(f.date_start)),
            stop_loss=stop_loss,
            stop_profit=stop_profit,
            stop_type="dollar" if f.stop_type == "dollar" else "point",
        )

    def _standard(
        self, shortcode: str, f: ShortcodeFields, currency: str,
    ) -> Ok[DecodedShortcode] | Err[ContractError]:
        contract_type = canonical_type(f.contract_type)
        if f.barrier2 and not f.barrier:
            logger.debug("Shortcode %r has a second barrier but no first", shortcode)
            return Ok(LegacyPlaceholder(currency=currency))
        underlying = self._underlyings.resolve(f.underlying_symbol)

        if is_epoch_digits(f.date_start):
            start = Instant(epoch=int(f.date_start))
        else:
            match Instant.from_ddmmmyy(f.date_start):
                case Err(_):
                    return Ok(LegacyPlaceholder(currency=currency))
                case Ok(start):
                    pass

        expiry: Instant | None = None
        if f.date_expiry is not None:
            if is_epoch_digits(f.date_expiry):
                expiry = Instant(epoch=int(f.date_expiry))
            else:
                match Instant.date_from_ddmmmyy(f.date_expiry):
                    case Err(_):
                        return Ok(LegacyPlaceholder(currency=currency))
                    case Ok(expiry_date):
                        pass
                match closing_instant(underlying, expiry_date):
                    case Err() as e:
                        return e
                    case Ok(closing):
                        expiry = closing

        barrier = (
            self._strikes.normalize(f.barrier, underlying, contract_type, start)
            if f.barrier else None
        )
        barrier2 = (
            self._strikes.normalize(f.barrier2, underlying, contract_type, start)
            if f.barrier2 else None
        )
        two_barriers = is_set(barrier) and is_set(barrier2)

        tick_count = int(f.tick_count) if f.tick_count is not None else None
        return Ok(ContractParameters(
            contract_type=contract_type,
            underlying_symbol=f.underlying_symbol,
            currency=currency,
            date_start=start,
            payout=_decimal(f.payout),
            date_expiry=expiry,
            tick_count=tick_count,
            tick_expiry=tick_count is not None,
            fixed_expiry=f.fixed_expiry,
            starts_as_forward_starting=f.forward_start,
            supplied_barrier=None if two_barriers else barrier,
            supplied_high_barrier=barrier if two_barriers else None,
            supplied_low_barrier=barrier2 if two_barriers else None,
            shortcode=shortcode,
        ))
