"""fincontract.core — public API for all core types."""

from fincontract.core.calendar import (
    WeekdayTradingCalendar as WeekdayTradingCalendar,
)
from fincontract.core.errors import (
    ContractError as ContractError,
)
from fincontract.core.errors import (
    FieldViolation as FieldViolation,
)
from fincontract.core.errors import (
    MissingCurrencyError as MissingCurrencyError,
)
from fincontract.core.errors import (
    MissingFieldError as MissingFieldError,
)
from fincontract.core.errors import (
    ReferenceDataError as ReferenceDataError,
)
from fincontract.core.errors import (
    ValidationError as ValidationError,
)
from fincontract.core.result import (
    Err as Err,
)
from fincontract.core.result import (
    Ok as Ok,
)
from fincontract.core.result import (
    Result as Result,
)
from fincontract.core.result import (
    unwrap as unwrap,
)
from fincontract.core.types import (
    BoundedValue as BoundedValue,
)
from fincontract.core.types import (
    ContractDuration as ContractDuration,
)
from fincontract.core.types import (
    Duration as Duration,
)
from fincontract.core.types import (
    FrozenMap as FrozenMap,
)
from fincontract.core.types import (
    Instant as Instant,
)
from fincontract.core.types import (
    UtcDatetime as UtcDatetime,
)
from fincontract.core.types import (
    is_ddmmmyy as is_ddmmmyy,
)
from fincontract.core.types import (
    is_epoch_digits as is_epoch_digits,
)
