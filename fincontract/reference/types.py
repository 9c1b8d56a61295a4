"""Reference facts: static metadata for contract types and contract categories.

Both are looked up, never owned, by a Contract. All types are
@final @dataclass(frozen=True, slots=True).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, final

type ExpiryKind = Literal["intraday", "daily", "tick"]
type PayoutType = Literal["binary", "non-binary"]
type AmountType = Literal["payout", "stake"]


class BarrierCategory(Enum):
    """How a contract's barrier is observed, as used by pricing."""

    EURO_ATM = "euro_atm"
    EURO_NON_ATM = "euro_non_atm"
    LOOKBACK = "lookback"
    AMERICAN = "american"
    NON_FINANCIAL = "non_financial"
    ASIAN = "asian"
    RESET = "reset"
    SPREADS = "spreads"


def all_barrier_categories() -> tuple[str, ...]:
    return tuple(c.value for c in BarrierCategory)


@final
@dataclass(frozen=True, slots=True)
class TypeFacts:
    """Static metadata for one contract type code (e.g. CALL)."""

    code: str
    id: int
    pricing_code: str
    display_name: str
    sentiment: str
    other_side_code: str | None
    payout_type: PayoutType
    payouttime: str
    category: str

    @property
    def is_binary(self) -> bool:
        return self.payout_type == "binary"


@final
@dataclass(frozen=True, slots=True)
class CategoryFacts:
    """Behavioural flags for a contract category (e.g. callput).

    Defaults mirror a category with no configuration entry: single barrier,
    no forward starting, barrier known at start.
    """

    code: str
    display_name: str | None = None
    display_order: int | None = None
    explanation: str | None = None
    two_barriers: bool = False
    allow_forward_starting: bool = False
    is_path_dependent: bool = False
    barrier_at_start: bool = True
    supported_expiries: tuple[ExpiryKind, ...] = ()
    is_binary: bool = True
    has_financial_barrier: bool = True
    supported_amount_type: tuple[AmountType, ...] = ("payout", "stake")
    allow_atm_barrier: bool = False

    def __post_init__(self) -> None:
        if not self.code:
            raise TypeError("CategoryFacts requires a non-empty code")
