"""fincontract.reference — contract type and category reference tables."""

from fincontract.reference.tables import (
    CategoryTable as CategoryTable,
)
from fincontract.reference.tables import (
    ContractTypeTable as ContractTypeTable,
)
from fincontract.reference.tables import (
    load_categories as load_categories,
)
from fincontract.reference.tables import (
    load_contract_types as load_contract_types,
)
from fincontract.reference.types import (
    BarrierCategory as BarrierCategory,
)
from fincontract.reference.types import (
    CategoryFacts as CategoryFacts,
)
from fincontract.reference.types import (
    TypeFacts as TypeFacts,
)
from fincontract.reference.types import (
    all_barrier_categories as all_barrier_categories,
)
