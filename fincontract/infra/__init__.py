"""fincontract.infra — collaborator protocols, in-memory adapters, configuration."""

from fincontract.infra.config import FincontractConfig as FincontractConfig
from fincontract.infra.logging_setup import setup_logging as setup_logging
from fincontract.infra.memory_adapter import InMemoryUnderlyingRegistry as InMemoryUnderlyingRegistry
from fincontract.infra.memory_adapter import ShortcodeStrikeResolver as ShortcodeStrikeResolver
from fincontract.infra.memory_adapter import SimpleUnderlying as SimpleUnderlying
from fincontract.infra.protocols import StrikeResolver as StrikeResolver
from fincontract.infra.protocols import TradingCalendar as TradingCalendar
from fincontract.infra.protocols import Underlying as Underlying
from fincontract.infra.protocols import UnderlyingRegistry as UnderlyingRegistry
