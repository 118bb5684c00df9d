"""
Kernel - KSUID value type, codec and generation

The kernel holds everything needed to mint, parse, compare and project
KSUIDs. Adapters for serialization, databases and command lines build on
top of it without adding behavior of their own.
"""

from ksuid_kit.kernel.base62 import ALPHABET, convert_radix, decode, encode
from ksuid_kit.kernel.entropy import (
    EntropySource,
    SystemEntropySource,
    get_entropy_source,
    read_entropy,
    set_entropy_source,
    use_entropy_source,
)
from ksuid_kit.kernel.errors import (
    EntropyUnavailable,
    InvalidCharacter,
    KsuidError,
    ParseError,
    PayloadSizeMismatch,
    SizeMismatch,
    UnrecoverableEntropyError,
    UnsupportedType,
    ValueOutOfRange,
)
from ksuid_kit.kernel.ksuid import (
    BYTE_LENGTH,
    EPOCH_OFFSET,
    MAX,
    MAX_STRING_ENCODED,
    NIL,
    PAYLOAD_LENGTH,
    STRING_LENGTH,
    Ksuid,
    compare,
    new,
    new_random,
)
from ksuid_kit.kernel.time import FrozenTimeProvider, RealTimeProvider, TimeProvider

__all__ = [
    # Value type
    "Ksuid",
    "NIL",
    "MAX",
    "compare",
    "new",
    "new_random",
    "EPOCH_OFFSET",
    "BYTE_LENGTH",
    "PAYLOAD_LENGTH",
    "STRING_LENGTH",
    "MAX_STRING_ENCODED",
    # Codec
    "ALPHABET",
    "convert_radix",
    "encode",
    "decode",
    # Entropy
    "EntropySource",
    "SystemEntropySource",
    "get_entropy_source",
    "set_entropy_source",
    "use_entropy_source",
    "read_entropy",
    # Time
    "TimeProvider",
    "RealTimeProvider",
    "FrozenTimeProvider",
    # Errors
    "KsuidError",
    "SizeMismatch",
    "PayloadSizeMismatch",
    "ParseError",
    "InvalidCharacter",
    "ValueOutOfRange",
    "EntropyUnavailable",
    "UnsupportedType",
    "UnrecoverableEntropyError",
]
