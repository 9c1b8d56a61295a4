"""fincontract.codec — shortcode decoding and encoding."""

from fincontract.codec.decoder import (
    ShortcodeDecoder as ShortcodeDecoder,
)
from fincontract.codec.encoder import (
    encode as encode,
)
from fincontract.codec.types import (
    ContractParameters as ContractParameters,
)
from fincontract.codec.types import (
    DecodedShortcode as DecodedShortcode,
)
from fincontract.codec.types import (
    LegacyPlaceholder as LegacyPlaceholder,
)
from fincontract.codec.types import (
    SpreadParameters as SpreadParameters,
)
