"""
KSUID - K-Sortable Unique Identifier

A KSUID is 20 bytes:
    00-03: uint32 big-endian timestamp, seconds since the KSUID epoch
    04-19: 16 random payload bytes

The timestamp leads, so sorting the raw bytes (or the base-62 strings)
sorts identifiers by creation second regardless of which machine or
entropy source minted them.

Fun fact: The epoch is 1.4 billion seconds after the Unix epoch - picked
because it is easy to remember - which moves the 136-year range of a
32-bit counter forward to start in 2014 rather than wasting it on 1970.
"""

from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from ksuid_kit.kernel import base62
from ksuid_kit.kernel.entropy import EntropySource, read_entropy
from ksuid_kit.kernel.errors import (
    EntropyUnavailable,
    InvalidCharacter,
    PayloadSizeMismatch,
    SizeMismatch,
    UnrecoverableEntropyError,
    ValueOutOfRange,
)
from ksuid_kit.kernel.logging import get_logger
from ksuid_kit.kernel.metrics import ksuids_generated_total, parse_failures_total
from ksuid_kit.kernel.time import TimeProvider, default_time_provider

logger = get_logger(__name__)

# Seconds between the Unix epoch and the KSUID epoch (2014-05-13T16:53:20Z)
EPOCH_OFFSET = 1_400_000_000

TIMESTAMP_LENGTH = 4
PAYLOAD_LENGTH = 16
BYTE_LENGTH = TIMESTAMP_LENGTH + PAYLOAD_LENGTH
STRING_LENGTH = base62.STRING_LENGTH

# Encoding of the largest possible KSUID (all bytes 0xFF)
MAX_STRING_ENCODED = "aWgEPTl1tmebfsQzFP4bxwgy80V"

_UINT32_MASK = 0xFFFFFFFF
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)
_NIL_BYTES = bytes(BYTE_LENGTH)


def _to_corrected_timestamp(t: datetime) -> int:
    """Whole seconds since the KSUID epoch, wrapped into a uint32"""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    unix_seconds = (t - _UNIX_EPOCH) // _ONE_SECOND
    # Out-of-range times wrap silently, matching the 32-bit on-disk field
    return (unix_seconds - EPOCH_OFFSET) & _UINT32_MASK


def _from_corrected_timestamp(ts: int) -> datetime:
    return _UNIX_EPOCH + timedelta(seconds=ts + EPOCH_OFFSET)


@total_ordering
class Ksuid:
    """
    Immutable 20-byte KSUID value

    Instances own a private copy of their bytes and are hashable, so they
    can be used as dict keys and set members. Ordering is unsigned byte
    order, which is also timestamp-then-payload order and the order of the
    string encodings.
    """

    __slots__ = ("_bytes",)

    _bytes: bytes

    def __init__(self, data: bytes | bytearray | memoryview = _NIL_BYTES) -> None:
        raw = bytes(data)
        if len(raw) != BYTE_LENGTH:
            raise SizeMismatch(BYTE_LENGTH, len(raw), "bytes")
        object.__setattr__(self, "_bytes", raw)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "Ksuid":
        """
        Construct a KSUID from its 20-byte binary form

        Any 20 bytes are a valid KSUID; the timestamp and payload are not
        inspected.

        Raises:
            SizeMismatch: If data is not exactly 20 bytes
        """
        return cls(data)

    @classmethod
    def from_parts(cls, time: datetime, payload: bytes | bytearray | memoryview) -> "Ksuid":
        """
        Construct a KSUID from a timestamp and a 16-byte payload

        Sub-second precision is discarded. Naive datetimes are read as UTC.
        Times before the KSUID epoch, or more than ~136 years after it, wrap
        around the 32-bit timestamp field instead of raising.

        Args:
            time: Creation instant
            payload: Exactly 16 bytes

        Raises:
            PayloadSizeMismatch: If payload is not exactly 16 bytes
        """
        payload = bytes(payload)
        if len(payload) != PAYLOAD_LENGTH:
            raise PayloadSizeMismatch(len(payload), PAYLOAD_LENGTH)

        timestamp = _to_corrected_timestamp(time)
        return cls(timestamp.to_bytes(TIMESTAMP_LENGTH, "big") + payload)

    @classmethod
    def parse(cls, text: str) -> "Ksuid":
        """
        Decode the 27-character base-62 form

        Raises:
            SizeMismatch: If text is not exactly 27 characters
            InvalidCharacter: If text has a character outside [0-9A-Za-z]
            ValueOutOfRange: If text encodes a value above MAX_STRING_ENCODED
        """
        if len(text) != STRING_LENGTH:
            parse_failures_total.labels(reason="size").inc()
            raise SizeMismatch(STRING_LENGTH, len(text), "characters")

        try:
            raw = base62.decode(text)
        except InvalidCharacter:
            parse_failures_total.labels(reason="character").inc()
            raise
        except ValueOutOfRange:
            parse_failures_total.labels(reason="range").inc()
            raise

        return cls(raw)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    @property
    def timestamp(self) -> int:
        """Raw corrected timestamp (seconds since the KSUID epoch)"""
        return int.from_bytes(self._bytes[:TIMESTAMP_LENGTH], "big")

    @property
    def time(self) -> datetime:
        """Creation second as a UTC datetime"""
        return _from_corrected_timestamp(self.timestamp)

    @property
    def payload(self) -> bytes:
        """The 16 random bytes following the timestamp"""
        return self._bytes[TIMESTAMP_LENGTH:]

    @property
    def is_nil(self) -> bool:
        """True for the all-zero KSUID"""
        return self._bytes == _NIL_BYTES

    def __bytes__(self) -> bytes:
        return self._bytes

    def __str__(self) -> str:
        return base62.encode(self._bytes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self._bytes < other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type["Ksuid"], tuple[bytes]]:
        return (type(self), (self._bytes,))

    # ------------------------------------------------------------------
    # Pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from ksuid_kit.adapters.serialization import coerce

        return core_schema.no_info_plain_validator_function(
            coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "format": "ksuid",
            "minLength": STRING_LENGTH,
            "maxLength": STRING_LENGTH,
            "pattern": "^[0-9A-Za-z]{27}$",
        }


NIL = Ksuid(_NIL_BYTES)
MAX = Ksuid(b"\xff" * BYTE_LENGTH)


def compare(a: Ksuid, b: Ksuid) -> int:
    """
    Compare two KSUIDs by unsigned byte order

    Returns:
        -1 if a sorts first, 1 if b sorts first, 0 if they are equal
    """
    left, right = bytes(a), bytes(b)
    return (left > right) - (left < right)


def new_random(
    source: EntropySource | None = None,
    clock: TimeProvider | None = None,
) -> Ksuid:
    """
    Generate a KSUID from the current time and 16 bytes of entropy

    Args:
        source: Entropy source (defaults to the process-wide source)
        clock: Time provider (defaults to the system clock)

    Raises:
        EntropyUnavailable: If the entropy source cannot supply 16 bytes
    """
    payload = read_entropy(PAYLOAD_LENGTH, source)
    now = (clock or default_time_provider).now()
    ksuid = Ksuid.from_parts(now, payload)
    ksuids_generated_total.inc()
    return ksuid


def new(
    source: EntropySource | None = None,
    clock: TimeProvider | None = None,
) -> Ksuid:
    """
    Generate a KSUID, treating entropy failure as fatal

    Raises:
        UnrecoverableEntropyError: If no entropy could be read. This is a
            BaseException; use new_random() to handle the failure instead.
    """
    try:
        return new_random(source, clock)
    except EntropyUnavailable as e:
        logger.critical("Couldn't generate KSUID without entropy", error=str(e))
        raise UnrecoverableEntropyError(f"Couldn't generate KSUID: {e}") from e
