"""Command-line entry point: decode shortcodes and report what they resolve to.

    fincontract --currency USD CALL_FRXUSDJPY_100_1491965798_1491965808_S0P_0

Configuration comes from FINCONTRACT_* environment variables. One JSON
object per shortcode is written to stdout; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from fincontract.codec.types import SpreadParameters
from fincontract.contract.contract import Contract
from fincontract.contract.factory import Bet, ContractFactory
from fincontract.core.errors import ContractError
from fincontract.core.result import Err, Ok
from fincontract.core.types import Instant
from fincontract.infra.config import FincontractConfig
from fincontract.infra.logging_setup import setup_logging
from fincontract.infra.memory_adapter import InMemoryUnderlyingRegistry, ShortcodeStrikeResolver

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fincontract", description="Decode contract shortcodes")
    parser.add_argument("shortcodes", nargs="+", help="shortcodes to decode")
    parser.add_argument("--currency", required=True, help="settlement currency of the contracts")
    parser.add_argument(
        "--pricing-time", type=int, default=None, dest="pricing_time",
        help="pricing time as epoch seconds (default: now)",
    )
    parser.add_argument(
        "--log-file", type=Path, default=None, dest="log_file",
        help="also log to a daily rotating file",
    )
    return parser


def describe(shortcode: str, result: Ok[Bet] | Err[ContractError]) -> dict[str, object]:
    """JSON-ready summary of one shortcode's outcome."""
    match result:
        case Err(e):
            return {"shortcode": shortcode, "error": e.to_dict()}
        case Ok(Contract() as c):
            category = c.barrier_category
            return {
                "shortcode": shortcode,
                "kind": "contract",
                "contract_type": c.contract_type,
                "category": c.category_code,
                "underlying": c.underlying_symbol,
                "date_start": c.date_start.epoch,
                "date_expiry": c.date_expiry.epoch,
                "is_forward_starting": c.is_forward_starting,
                "ticks_to_expiry": c.ticks_to_expiry,
                "is_atm": c.is_atm,
                "barrier_category": category.value if category is not None else None,
                "supplied_barrier_type": c.supplied_barrier_type,
                "time_in_days": str(c.time_in_days),
            }
        case Ok(SpreadParameters() as s):
            return {
                "shortcode": shortcode,
                "kind": "spread",
                "contract_type": s.contract_type,
                "underlying": s.underlying_symbol,
                "date_start": s.date_start.epoch,
            }
        case _:
            return {"shortcode": shortcode, "kind": "legacy"}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    match FincontractConfig.from_env():
        case Err(e):
            print(json.dumps(e.to_dict()), file=sys.stderr)
            return EXIT_CONFIG
        case Ok(config):
            pass
    setup_logging(config.log_level, args.log_file)

    match ContractFactory.from_config(
        config, underlyings=InMemoryUnderlyingRegistry(), strikes=ShortcodeStrikeResolver(),
    ):
        case Err(e):
            logger.error("Cannot load reference tables: %s", e.message)
            return EXIT_CONFIG
        case Ok(factory):
            pass

    date_pricing = Instant(epoch=args.pricing_time) if args.pricing_time is not None else None
    results = factory.from_shortcodes(
        [(shortcode, args.currency) for shortcode in args.shortcodes], date_pricing,
    )
    for shortcode, result in zip(args.shortcodes, results, strict=True):
        print(json.dumps(describe(shortcode, result)))
    return EXIT_FAILURES if any(isinstance(r, Err) for r in results) else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
