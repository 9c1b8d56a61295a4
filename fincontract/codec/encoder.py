"""Shortcode encoder — canonical parameters back to the underscore-delimited form."""

from __future__ import annotations

from fincontract.codec.barriers import barrier_for_shortcode, plain_decimal
from fincontract.codec.types import ContractParameters
from fincontract.core.errors import MissingFieldError
from fincontract.core.result import Err, Ok
from fincontract.core.types import UtcDatetime
from fincontract.reference.types import CategoryFacts


def encode(
    params: ContractParameters,
    category: CategoryFacts,
    *,
    is_forward_starting: bool = False,
) -> Ok[str] | Err[MissingFieldError]:
    """Build the shortcode for params.

    The start carries an F marker when the contract is forward starting now
    or was bought as one. A single barrier known at start is followed by a
    literal 0 that existing consumers expect.
    """
    missing: list[str] = []
    if not params.underlying_symbol:
        missing.append("underlying_symbol")
    if params.payout is None:
        missing.append("payout")
    if params.tick_count is None and params.date_expiry is None:
        missing.append("date_expiry")
    if category.two_barriers and not params.has_two_barriers:
        missing.extend(("supplied_high_barrier", "supplied_low_barrier"))
    if missing:
        return Err(MissingFieldError(
            message=f"Cannot encode shortcode: missing {', '.join(missing)}",
            code="MISSING_FIELD",
            timestamp=UtcDatetime.now(),
            source="codec.encoder.encode",
            fields=tuple(missing),
        ))
    assert params.payout is not None

    start = str(params.date_start.epoch)
    if is_forward_starting or params.starts_as_forward_starting:
        start += "F"

    if params.tick_expiry:
        end = f"{params.tick_count}T"
    else:
        assert params.date_expiry is not None
        end = str(params.date_expiry.epoch)
        if params.fixed_expiry:
            end += "F"

    elements = [
        params.contract_type,
        params.underlying_symbol,
        plain_decimal(params.payout),
        start,
        end,
    ]
    if category.two_barriers:
        assert params.supplied_high_barrier is not None
        assert params.supplied_low_barrier is not None
        elements.append(barrier_for_shortcode(params.supplied_high_barrier, params.contract_type))
        elements.append(barrier_for_shortcode(params.supplied_low_barrier, params.contract_type))
    elif params.supplied_barrier and category.barrier_at_start:
        elements.append(barrier_for_shortcode(params.supplied_barrier, params.contract_type))
        elements.append("0")

    return Ok("_".join(elements).upper())
