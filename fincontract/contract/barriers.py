"""Barrier category resolver.

Up/down (callput) is the only category whose barrier category depends on
the contract: ATM or not. Every other category maps to a single tag.
The supplied barrier type tells whether barriers are spot offsets.
"""

from __future__ import annotations

from typing import Literal

from fincontract.codec.barriers import ATM_TOKEN, is_relative
from fincontract.codec.types import ContractParameters
from fincontract.core.types import FrozenMap
from fincontract.reference.types import BarrierCategory, CategoryFacts

CALLPUT = "callput"

type SuppliedBarrierType = Literal["relative", "absolute"]

BARRIER_CATEGORIES: FrozenMap[str, BarrierCategory] = FrozenMap(_entries=(
    ("asian", BarrierCategory.ASIAN),
    ("digits", BarrierCategory.NON_FINANCIAL),
    ("endsinout", BarrierCategory.EURO_NON_ATM),
    ("spreads", BarrierCategory.SPREADS),
    ("staysinout", BarrierCategory.AMERICAN),
    ("touchnotouch", BarrierCategory.AMERICAN),
))


def is_atm(params: ContractParameters, category: CategoryFacts) -> bool:
    """True only for a single-barrier contract struck at the spot at start (S0P).

    Fixed for the life of the contract.
    """
    if category.two_barriers:
        return False
    if params.supplied_barrier is None:
        return False
    return params.supplied_barrier == ATM_TOKEN


def barrier_category(
    params: ContractParameters, category: CategoryFacts,
) -> BarrierCategory | None:
    """None for a category with no barrier category configured."""
    if category.code == CALLPUT:
        return BarrierCategory.EURO_ATM if is_atm(params, category) else BarrierCategory.EURO_NON_ATM
    return BARRIER_CATEGORIES.get(category.code)


def supplied_barrier_type(params: ContractParameters) -> SuppliedBarrierType | None:
    """'relative' when any supplied barrier is an offset from spot, else 'absolute'.

    Relative barriers need market data at start to become levels. None for a
    contract without barriers.
    """
    supplied = [
        b for b in (
            params.supplied_barrier, params.supplied_high_barrier, params.supplied_low_barrier,
        ) if b is not None
    ]
    if not supplied:
        return None
    return "relative" if any(is_relative(b) for b in supplied) else "absolute"
