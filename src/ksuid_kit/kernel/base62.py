"""
Base-62 big-number codec

Converts the 20-byte big-endian binary form of a KSUID to and from its
27-character text form. The alphabet is in ASCII order, so the lexicographic
order of the encoded strings matches the numeric order of the raw bytes.

The conversion is long division over an explicit digit array. The value
space is 160 bits, far outside a machine word, and the same routine handles
both directions.

Fun fact: 62^27 is roughly 2^160.76, so 27 characters are the fewest that
can hold every 20-byte value - with a little room to spare at the top.
"""

from collections.abc import Sequence

from ksuid_kit.kernel.errors import InvalidCharacter, SizeMismatch, ValueOutOfRange

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

# Fixed widths of the two representations
BYTE_LENGTH = 20
STRING_LENGTH = 27

_DIGIT_VALUES = {char: value for value, char in enumerate(ALPHABET)}


def convert_radix(
    digits: Sequence[int],
    from_base: int,
    to_base: int,
    width: int,
) -> list[int]:
    """
    Convert a big number between bases using long division

    Repeatedly divides the digit array by ``to_base``; each pass yields one
    target digit (the remainder) and a shorter quotient. Digits are produced
    least significant first, then reversed and left-padded with zeros.

    Args:
        digits: Source digits, most significant first
        from_base: Base of the source digits
        to_base: Base of the produced digits
        width: Exact number of target digits to return

    Returns:
        ``width`` digits in ``to_base``, most significant first

    Raises:
        ValueOutOfRange: If the value needs more than ``width`` target digits
        ValueError: If a source digit is not valid in ``from_base``
    """
    quotient = list(digits)
    for digit in quotient:
        if not 0 <= digit < from_base:
            raise ValueError(f"Digit {digit} is out of range for base {from_base}")

    produced: list[int] = []
    while quotient:
        remainder = 0
        next_quotient: list[int] = []
        for digit in quotient:
            accumulator = remainder * from_base + digit
            value, remainder = divmod(accumulator, to_base)
            # Leading zeros of the quotient are dropped so the loop terminates
            if next_quotient or value:
                next_quotient.append(value)
        produced.append(remainder)
        quotient = next_quotient

    if len(produced) > width:
        raise ValueOutOfRange(width, to_base)

    produced.extend([0] * (width - len(produced)))
    produced.reverse()
    return produced


def encode(data: bytes) -> str:
    """
    Encode 20 raw bytes as a 27-character base-62 string

    Args:
        data: Big-endian unsigned value, exactly 20 bytes

    Returns:
        Fixed-width base-62 string, left-padded with '0'

    Raises:
        SizeMismatch: If data is not exactly 20 bytes
    """
    if len(data) != BYTE_LENGTH:
        raise SizeMismatch(BYTE_LENGTH, len(data), "bytes")

    digits = convert_radix(bytes(data), 256, BASE, STRING_LENGTH)
    return "".join(ALPHABET[digit] for digit in digits)


def decode(text: str) -> bytes:
    """
    Decode a 27-character base-62 string into 20 raw bytes

    Args:
        text: Encoded KSUID

    Returns:
        Big-endian unsigned value, left-padded with zero bytes to 20 bytes

    Raises:
        SizeMismatch: If text is not exactly 27 characters
        InvalidCharacter: If text contains a character outside the alphabet
        ValueOutOfRange: If the value does not fit in 20 bytes
    """
    if len(text) != STRING_LENGTH:
        raise SizeMismatch(STRING_LENGTH, len(text), "characters")

    values = []
    for position, char in enumerate(text):
        try:
            values.append(_DIGIT_VALUES[char])
        except KeyError as e:
            raise InvalidCharacter(char, position) from e

    return bytes(convert_radix(values, BASE, 256, BYTE_LENGTH))
