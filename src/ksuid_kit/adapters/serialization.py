"""
Marshalling hooks for serialization frameworks

Pass-throughs to the core codec: text marshalling uses the 27-character
form, binary marshalling the raw 20 bytes. coerce() is the single entry
point used by the pydantic integration on Ksuid.
"""

from typing import Any

from ksuid_kit.kernel.errors import SizeMismatch, UnsupportedType
from ksuid_kit.kernel.ksuid import BYTE_LENGTH, STRING_LENGTH, Ksuid


def marshal_text(ksuid: Ksuid) -> bytes:
    """Text form as ASCII bytes"""
    return str(ksuid).encode("ascii")


def marshal_binary(ksuid: Ksuid) -> bytes:
    """Raw 20-byte form"""
    return bytes(ksuid)


def unmarshal_text(data: bytes | str) -> Ksuid:
    """
    Parse the text form from str or ASCII bytes

    Raises:
        SizeMismatch: If data is not 27 characters
        ParseError: If data is not valid base-62
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        data = bytes(data).decode("ascii", errors="replace")
    return Ksuid.parse(data)


def unmarshal_binary(data: bytes | bytearray | memoryview) -> Ksuid:
    """
    Load the raw 20-byte form

    Raises:
        SizeMismatch: If data is not 20 bytes
    """
    return Ksuid.from_bytes(data)


def coerce(value: Any) -> Ksuid:
    """
    Convert a Ksuid, its text form or its binary form into a Ksuid

    Strings must be 27 characters. Bytes-like values must be 20 bytes
    (binary form) or 27 bytes (ASCII text form).

    Raises:
        SizeMismatch: If the length matches neither form
        ParseError: If a text form is not valid base-62
        UnsupportedType: For any other type
    """
    if isinstance(value, Ksuid):
        return value

    if isinstance(value, str):
        return Ksuid.parse(value)

    if isinstance(value, (bytes, bytearray, memoryview)):
        size = len(bytes(value))
        if size == BYTE_LENGTH:
            return unmarshal_binary(value)
        if size == STRING_LENGTH:
            return unmarshal_text(value)
        raise SizeMismatch(BYTE_LENGTH, size, "bytes")

    raise UnsupportedType(type(value))
