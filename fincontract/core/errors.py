"""Error values for contract construction, decoding and encoding.

Every error is a frozen dataclass value that can be pattern-matched and
logged. An unrecognized shortcode is NOT an error: it decodes to a
LegacyPlaceholder.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final

from fincontract.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class ContractError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> ContractError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "date_expiry"
    constraint: str  # e.g. "must be >= date_start"
    actual_value: str


@final
@dataclass(frozen=True, slots=True)
class ValidationError(ContractError):
    """One or more construction fields failed validation."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **ContractError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class MissingCurrencyError(ContractError):
    """A shortcode was decoded without a settlement currency."""

    shortcode: str

    def to_dict(self) -> dict[str, object]:
        return {**ContractError.to_dict(self), "shortcode": self.shortcode}


@final
@dataclass(frozen=True, slots=True)
class MissingFieldError(ContractError):
    """Encoding needs fields the parameters do not carry."""

    fields: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {**ContractError.to_dict(self), "fields": list(self.fields)}


@final
@dataclass(frozen=True, slots=True)
class ReferenceDataError(ContractError):
    """A reference table or calendar had no entry for the requested key."""

    table: str
    key: str

    def to_dict(self) -> dict[str, object]:
        return {**ContractError.to_dict(self), "table": self.table, "key": self.key}
