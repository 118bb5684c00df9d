"""
KSUID Kit - K-Sortable Unique Identifiers

20-byte identifiers made of a 32-bit timestamp and 128 bits of entropy,
written as fixed-width 27-character base-62 strings that sort in the same
order as the raw bytes - and therefore by creation time.

Fun fact: A KSUID payload has 2^128 possible values per second, so even a
billion IDs minted in the same second have a collision chance far below
one in a hundred billion billion.
"""

from ksuid_kit.kernel.errors import (
    EntropyUnavailable,
    InvalidCharacter,
    KsuidError,
    ParseError,
    PayloadSizeMismatch,
    SizeMismatch,
    UnrecoverableEntropyError,
    ValueOutOfRange,
)
from ksuid_kit.kernel.entropy import set_entropy_source
from ksuid_kit.kernel.ksuid import MAX, NIL, Ksuid, compare, new, new_random

__version__ = "0.1.0"
__all__ = [
    "Ksuid",
    "NIL",
    "MAX",
    "compare",
    "new",
    "new_random",
    "set_entropy_source",
    "KsuidError",
    "SizeMismatch",
    "PayloadSizeMismatch",
    "ParseError",
    "InvalidCharacter",
    "ValueOutOfRange",
    "EntropyUnavailable",
    "UnrecoverableEntropyError",
    "__version__",
]
