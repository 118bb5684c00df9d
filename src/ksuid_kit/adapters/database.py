"""
Database parameter binding

KSUIDs are bound as their 27-character text form, which keeps ORDER BY on
the column chronological. Reading accepts the text form, the 20-byte binary
form, or an empty/NULL value, which maps to the nil KSUID.

Fun fact: sqlite3 converters always receive bytes, even for TEXT columns,
which is why scan() dispatches on length rather than on type!
"""

import sqlite3
from typing import Any

from ksuid_kit.kernel.errors import SizeMismatch, UnsupportedType
from ksuid_kit.kernel.ksuid import BYTE_LENGTH, NIL, STRING_LENGTH, Ksuid
from ksuid_kit.kernel.logging import get_logger

logger = get_logger(__name__)


def to_sql(ksuid: Ksuid) -> str:
    """Value bound for a KSUID query parameter"""
    return str(ksuid)


def scan(src: Any) -> Ksuid:
    """
    Convert a value read from the database into a KSUID

    Args:
        src: None, str, or bytes-like value from a result row

    Returns:
        NIL for None or empty input, otherwise the decoded KSUID

    Raises:
        SizeMismatch: If the value is neither 0, 20 nor 27 long
        ParseError: If a 27-long value is not valid base-62
        UnsupportedType: For any other Python type
    """
    if src is None:
        return NIL

    if isinstance(src, str):
        # Length in characters, so non-ASCII text is a character error
        if len(src) == STRING_LENGTH:
            return Ksuid.parse(src)
        data = src.encode("utf-8")
    elif isinstance(src, (bytes, bytearray, memoryview)):
        data = bytes(src)
    else:
        raise UnsupportedType(type(src), "Scan")

    size = len(data)
    if size == 0:
        return NIL
    if size == BYTE_LENGTH:
        return Ksuid.from_bytes(data)
    if size == STRING_LENGTH:
        return Ksuid.parse(data.decode("ascii", errors="replace"))
    raise SizeMismatch(BYTE_LENGTH, size, "bytes")


def register_sqlite(type_name: str = "KSUID") -> None:
    """
    Register sqlite3 adapter and converter for Ksuid

    After registration, Ksuid values can be passed directly as query
    parameters, and columns declared with ``type_name`` are converted back
    to Ksuid on connections opened with ``detect_types=PARSE_DECLTYPES``.
    Declare such columns as ``KSUID TEXT`` so SQLite gives them text
    affinity and never reinterprets an all-digit KSUID as a number.

    Args:
        type_name: Declared column type that triggers conversion
    """
    sqlite3.register_adapter(Ksuid, to_sql)
    sqlite3.register_converter(type_name, scan)
    logger.debug("Registered sqlite3 KSUID adapter", type_name=type_name)
