"""Structural shortcode patterns, tried in a fixed order.

Order matters: later patterns are more permissive and would mis-consume
fields meant for an earlier, more specific one. Each matcher returns the raw
captured fields or None; the decoder takes the first match.

Shapes, in order:
  spread       SPREADU_R_100_2_1400000000_10_20_DOLLAR
  legacy dates CALL_FRXUSDJPY_100_1_JAN_10_15_JAN_10_S0P_0
  modern       CALL_FRXUSDJPY_100_1491965798F_1491965808F_S0P_0
               DIGITMATCH_R_10_18.18_1491965798_5T_7_0
  mixed        CALL_FRXUSDJPY_100_1491965798_15_APR_17_S0P_0
  no barrier   ASIANU_R_75_10_1491965798_5T
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import final

from fincontract.core.types import FrozenMap

LEGACY_SUFFIX = "_E"

# Deprecated type aliases -> canonical type code.
TYPE_OVERRIDES: FrozenMap[str, str] = FrozenMap(_entries=(
    ("DOUBLEDOWN", "PUT"),
    ("DOUBLEUP", "CALL"),
    ("FLASHD", "PUT"),
    ("FLASHU", "CALL"),
    ("INTRADD", "PUT"),
    ("INTRADU", "CALL"),
))

# CLUB codes carry no separator after the type.
_CLUB = re.compile(r"^CLUB", re.IGNORECASE | re.ASCII)

# Hour-range shortcodes are known-invalid.
_LEGACY_HOUR_RANGE = re.compile(r"_\d+H\d+", re.ASCII)

# Shortcodes are ASCII: every pattern is compiled with re.ASCII so \d and \w
# never match digits or letters of other scripts.
_BARRIER = r"(S?-?\d+P?|)"

_SPREAD = re.compile(
    r"^(SPREADU|SPREADD)_([\w\d]+)_(\d*\.?\d*)_(\d+)_(\d*\.?\d*)_(\d*\.?\d*)_(DOLLAR|POINT)",
    re.ASCII,
)
_LEGACY_DATES = re.compile(
    r"^([^_]+)_([\w\d]+)_(\d+)_(\d\d?)_(\w\w\w)_(\d\d)_(\d\d?)_(\w\w\w)_(\d\d)_"
    + _BARRIER + "_" + _BARRIER + "$",
    re.ASCII,
)
_MODERN = re.compile(
    r"^([^_]+)_([\w\d]+)_(\d*\.?\d*)_(\d+)(?P<start_cond>F?)_(\d+)(?P<expiry_cond>[FT]?)_"
    + _BARRIER + "_" + _BARRIER + "$",
    re.ASCII,
)
_MIXED = re.compile(
    r"^([^_]+)_([\w\d]+)_(\d*\.?\d{1,2})_(\d+)_(\d\d?)_(\w\w\w)_(\d\d)_"
    + _BARRIER + "_" + _BARRIER + "$",
    re.ASCII,
)
_NO_BARRIER = re.compile(
    r"^([^_]+)_(R?_?[^_\W]+)_(\d*\.?\d*)_(\d+)_(\d+)(?P<expiry_cond>T?)$", re.ASCII,
)


@final
@dataclass(frozen=True, slots=True)
class ShortcodeFields:
    """Raw text captured from a standard shortcode.

    date_start and date_expiry are epoch digits or dd-Mmm-yy tokens.
    """

    contract_type: str
    underlying_symbol: str
    payout: str
    date_start: str
    date_expiry: str | None = None
    tick_count: str | None = None
    barrier: str = ""
    barrier2: str = ""
    forward_start: bool = False
    fixed_expiry: bool = False


@final
@dataclass(frozen=True, slots=True)
class SpreadFields:
    """Raw text captured from a spread shortcode."""

    contract_type: str
    underlying_symbol: str
    amount_per_point: str
    date_start: str
    stop_loss: str
    stop_profit: str
    stop_type: str


type PatternMatch = ShortcodeFields | SpreadFields
type Matcher = Callable[[str], PatternMatch | None]


def strip_legacy_suffix(shortcode: str) -> str:
    if shortcode.endswith(LEGACY_SUFFIX) and len(shortcode) > len(LEGACY_SUFFIX):
        return shortcode[: -len(LEGACY_SUFFIX)]
    return shortcode


def canonical_type(code: str) -> str:
    """Map a deprecated alias to its canonical type code."""
    found = TYPE_OVERRIDES.get(code)
    return found if found is not None else code


def type_probe(shortcode: str) -> str:
    """Leading type token, with aliases already resolved."""
    probe = "CLUB" if _CLUB.match(shortcode) else shortcode.split("_", 1)[0]
    return canonical_type(probe)


def is_known_invalid(shortcode: str) -> bool:
    return _LEGACY_HOUR_RANGE.search(shortcode) is not None


def _dmy(day: str, month: str, year: str) -> str:
    return f"{day}-{month}-{year}".upper()


def match_spread(shortcode: str) -> SpreadFields | None:
    m = _SPREAD.match(shortcode)
    if m is None:
        return None
    return SpreadFields(
        contract_type=m.group(1),
        underlying_symbol=m.group(2),
        amount_per_point=m.group(3),
        date_start=m.group(4),
        stop_loss=m.group(5),
        stop_profit=m.group(6),
        stop_type=m.group(7).lower(),
    )


def match_legacy_dates(shortcode: str) -> ShortcodeFields | None:
    m = _LEGACY_DATES.match(shortcode)
    if m is None:
        return None
    return ShortcodeFields(
        contract_type=m.group(1),
        underlying_symbol=m.group(2),
        payout=m.group(3),
        date_start=_dmy(m.group(4), m.group(5), m.group(6)),
        date_expiry=_dmy(m.group(7), m.group(8), m.group(9)),
        barrier=m.group(10),
        barrier2=m.group(11),
    )


def match_modern(shortcode: str) -> ShortcodeFields | None:
    m = _MODERN.match(shortcode)
    if m is None:
        return None
    tick = m.group("expiry_cond") == "T"
    return ShortcodeFields(
        contract_type=m.group(1),
        underlying_symbol=m.group(2),
        payout=m.group(3),
        date_start=m.group(4),
        date_expiry=None if tick else m.group(6),
        tick_count=m.group(6) if tick else None,
        barrier=m.group(8),
        barrier2=m.group(9),
        forward_start=m.group("start_cond") == "F",
        fixed_expiry=m.group("expiry_cond") == "F",
    )


def match_mixed(shortcode: str) -> ShortcodeFields | None:
    m = _MIXED.match(shortcode)
    if m is None:
        return None
    return ShortcodeFields(
        contract_type=m.group(1),
        underlying_symbol=m.group(2),
        payout=m.group(3),
        date_start=m.group(4),
        date_expiry=_dmy(m.group(5), m.group(6), m.group(7)),
        barrier=m.group(8),
        barrier2=m.group(9),
        fixed_expiry=True,
    )


def match_no_barrier(shortcode: str) -> ShortcodeFields | None:
    m = _NO_BARRIER.match(shortcode)
    if m is None:
        return None
    tick = m.group("expiry_cond") == "T"
    return ShortcodeFields(
        contract_type=m.group(1),
        underlying_symbol=m.group(2),
        payout=m.group(3),
        date_start=m.group(4),
        date_expiry=None if tick else m.group(5),
        tick_count=m.group(5) if tick else None,
    )


PATTERNS: tuple[tuple[str, Matcher], ...] = (
    ("spread", match_spread),
    ("legacy_dates", match_legacy_dates),
    ("modern", match_modern),
    ("mixed", match_mixed),
    ("no_barrier", match_no_barrier),
)


def match_shortcode(shortcode: str) -> tuple[str, PatternMatch] | None:
    """First pattern that matches, with its name."""
    for name, matcher in PATTERNS:
        found = matcher(shortcode)
        if found is not None:
            return name, found
    return None
