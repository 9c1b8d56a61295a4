"""Runtime configuration for fincontract.

Pure configuration data. Values come from defaults or FINCONTRACT_* environment
variables; reference tables are loaded once from the configured paths.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import final

from fincontract.core.errors import FieldViolation, ValidationError
from fincontract.core.result import Err, Ok
from fincontract.core.types import UtcDatetime, is_epoch_digits

ENV_CONTRACT_TYPES = "FINCONTRACT_CONTRACT_TYPES"
ENV_CATEGORIES = "FINCONTRACT_CATEGORIES"
ENV_TICK_INTERVAL = "FINCONTRACT_TICK_INTERVAL"
ENV_LOG_LEVEL = "FINCONTRACT_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@final
@dataclass(frozen=True, slots=True)
class FincontractConfig:
    """Paths of the reference tables (None = packaged defaults) and runtime knobs."""

    contract_types_path: Path | None = None
    categories_path: Path | None = None
    tick_interval_seconds: int = 2
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.tick_interval_seconds <= 0:
            raise TypeError(
                f"tick_interval_seconds must be > 0, got {self.tick_interval_seconds}"
            )
        if self.log_level not in _LOG_LEVELS:
            raise TypeError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")

    @staticmethod
    def from_env(
        environ: Mapping[str, str] | None = None,
    ) -> Ok[FincontractConfig] | Err[ValidationError]:
        """Read FINCONTRACT_* variables, collecting every invalid value."""
        env = os.environ if environ is None else environ
        violations: list[FieldViolation] = []

        types_path = env.get(ENV_CONTRACT_TYPES)
        categories_path = env.get(ENV_CATEGORIES)

        tick_interval = 2
        raw_interval = env.get(ENV_TICK_INTERVAL)
        if raw_interval is not None:
            if is_epoch_digits(raw_interval) and int(raw_interval) > 0:
                tick_interval = int(raw_interval)
            else:
                violations.append(FieldViolation(
                    path=ENV_TICK_INTERVAL, constraint="must be a positive integer",
                    actual_value=repr(raw_interval),
                ))

        log_level = env.get(ENV_LOG_LEVEL, "INFO").upper()
        if log_level not in _LOG_LEVELS:
            violations.append(FieldViolation(
                path=ENV_LOG_LEVEL, constraint=f"must be one of {', '.join(_LOG_LEVELS)}",
                actual_value=repr(log_level),
            ))

        if violations:
            return Err(ValidationError(
                message=f"Invalid configuration: {len(violations)} violation(s)",
                code="CONFIG",
                timestamp=UtcDatetime.now(),
                source="infra.config.FincontractConfig.from_env",
                fields=tuple(violations),
            ))
        return Ok(FincontractConfig(
            contract_types_path=Path(types_path) if types_path else None,
            categories_path=Path(categories_path) if categories_path else None,
            tick_interval_seconds=tick_interval,
            log_level=log_level,
        ))
