"""fincontract.contract — the Contract value and its derived attributes."""

from fincontract.contract.barriers import (
    barrier_category as barrier_category,
)
from fincontract.contract.barriers import (
    is_atm as is_atm,
)
from fincontract.contract.barriers import (
    supplied_barrier_type as supplied_barrier_type,
)
from fincontract.contract.contract import (
    Contract as Contract,
)
from fincontract.contract.factory import (
    Bet as Bet,
)
from fincontract.contract.factory import (
    ContractFactory as ContractFactory,
)
from fincontract.contract.temporal import (
    effective_start as effective_start,
)
from fincontract.contract.temporal import (
    is_forward_starting as is_forward_starting,
)
from fincontract.contract.temporal import (
    remaining_time as remaining_time,
)
from fincontract.contract.temporal import (
    ticks_to_expiry as ticks_to_expiry,
)
from fincontract.contract.temporal import (
    time_in_days as time_in_days,
)
from fincontract.contract.temporal import (
    time_in_years as time_in_years,
)
from fincontract.contract.temporal import (
    time_to_expiry as time_to_expiry,
)
