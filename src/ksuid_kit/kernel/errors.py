"""
Custom exceptions for KSUID Kit

Every malformed input is reported to the immediate caller as a typed error.
Nothing is truncated, re-padded or coerced to make it fit.

Fun fact: The ValueError bases are what let pydantic turn these errors
into regular ValidationErrors when a Ksuid is used as a model field!
"""


class KsuidError(Exception):
    """Base exception for all KSUID Kit errors"""

    pass


class SizeMismatch(KsuidError, ValueError):
    """
    Raised when an input is not the fixed length required by the operation

    Binary KSUIDs are exactly 20 bytes, encoded KSUIDs exactly 27 characters.
    """

    def __init__(self, expected: int, actual: int, unit: str = "bytes") -> None:
        self.expected = expected
        self.actual = actual
        self.unit = unit
        super().__init__(f"Valid KSUIDs are {expected} {unit}, got {actual} {unit}")


class PayloadSizeMismatch(KsuidError, ValueError):
    """Raised when a payload passed to from_parts is not exactly 16 bytes"""

    def __init__(self, actual: int, expected: int = 16) -> None:
        self.actual = actual
        self.expected = expected
        super().__init__(f"Valid KSUID payloads are {expected} bytes, got {actual} bytes")


class ParseError(KsuidError, ValueError):
    """Base class for failures while decoding the base-62 text form"""

    pass


class InvalidCharacter(ParseError):
    """Raised when a character outside [0-9A-Za-z] appears in an encoded KSUID"""

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(
            f"Invalid base62 character {character!r} at position {position}"
        )


class ValueOutOfRange(ParseError):
    """
    Raised when a well-formed base-62 string decodes to more than 160 bits

    27 base-62 digits can express values up to 62^27 - 1, which is larger
    than the biggest 20-byte number. Those strings are rejected instead of
    being silently truncated.
    """

    def __init__(self, width: int, base: int) -> None:
        self.width = width
        self.base = base
        super().__init__(
            f"Decoded value does not fit in {width} base-{base} digits"
        )


class EntropyUnavailable(KsuidError):
    """
    Raised when the configured entropy source cannot supply enough bytes

    The original exception (if any) is chained as __cause__.
    """

    def __init__(self, requested: int, received: int | None = None, message: str = "") -> None:
        self.requested = requested
        self.received = received
        if not message:
            if received is None:
                message = f"Entropy source failed while reading {requested} bytes"
            else:
                message = f"Entropy source returned {received} of {requested} bytes"
        super().__init__(message)


class UnsupportedType(KsuidError, TypeError, ValueError):
    """
    Raised when a value of an unsupported Python type is converted to a KSUID

    Also a ValueError so pydantic reports it as a validation failure.
    """

    def __init__(self, value_type: type, operation: str = "Convert") -> None:
        self.value_type = value_type
        self.operation = operation
        super().__init__(
            f"{operation}: unable to {operation.lower()} type {value_type.__name__} into KSUID"
        )


class UnrecoverableEntropyError(BaseException):
    """
    Raised by new() when no entropy could be read

    Derives from BaseException so that ordinary ``except Exception`` blocks
    do not swallow it. Generating an identifier without real entropy would
    quietly break uniqueness, so this is meant to stop the calling context.
    """

    pass
