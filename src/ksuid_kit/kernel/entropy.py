"""
Entropy source handle

KSUID payloads are drawn from a single process-wide source of random bytes.
It defaults to the operating system CSPRNG and can be swapped, typically
once at startup or inside tests that need deterministic payloads.

Replacing the source is one reference assignment. Concurrent generation
sees either the old or the new source, never a mix, but there is no
ordering guarantee against calls already in flight. Callers that need a
strict cutover must synchronize the swap themselves.
"""

import secrets
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from ksuid_kit.kernel.errors import EntropyUnavailable
from ksuid_kit.kernel.logging import get_logger
from ksuid_kit.kernel.metrics import entropy_failures_total

logger = get_logger(__name__)


class EntropySource(Protocol):
    """
    Anything with a file-like read(n) method

    io.BytesIO, an opened /dev/urandom and SystemEntropySource all qualify.
    A read may return fewer bytes than requested; an empty result means the
    source is exhausted.
    """

    def read(self, n: int) -> bytes:
        """Return up to n random bytes"""
        ...


class SystemEntropySource:
    """Default source backed by the operating system CSPRNG"""

    def read(self, n: int) -> bytes:
        return secrets.token_bytes(n)


def describe_source(source: Any) -> str:
    """Short, log-friendly name for an entropy source"""
    return type(source).__qualname__


_default_source: EntropySource = SystemEntropySource()
_source: EntropySource = _default_source


def get_entropy_source() -> EntropySource:
    """Return the entropy source currently used for generation"""
    return _source


def set_entropy_source(source: EntropySource | None) -> None:
    """
    Replace the process-wide entropy source

    Args:
        source: New source, or None to restore the system CSPRNG
    """
    global _source
    _source = _default_source if source is None else source
    logger.info("Entropy source replaced", source=describe_source(_source))


@contextmanager
def use_entropy_source(source: EntropySource | None) -> Iterator[EntropySource]:
    """
    Temporarily swap the entropy source, restoring the previous one on exit

    Example:
        with use_entropy_source(io.BytesIO(bytes(16))):
            ksuid = new_random()
    """
    previous = get_entropy_source()
    set_entropy_source(source)
    try:
        yield get_entropy_source()
    finally:
        set_entropy_source(previous)


def read_entropy(n: int, source: EntropySource | None = None) -> bytes:
    """
    Read exactly n bytes from an entropy source

    Short reads are retried until the source either fills the buffer or
    reports exhaustion with an empty read.

    Args:
        n: Number of bytes required
        source: Source to read (defaults to the process-wide source)

    Returns:
        Exactly n bytes

    Raises:
        EntropyUnavailable: If the source raises or runs dry before n bytes
    """
    src = _source if source is None else source
    buffer = bytearray()

    while len(buffer) < n:
        try:
            chunk = src.read(n - len(buffer))
        except Exception as e:
            entropy_failures_total.inc()
            logger.error(
                "Entropy source read failed",
                source=describe_source(src),
                requested=n,
                error=str(e),
            )
            raise EntropyUnavailable(n) from e

        if not chunk:
            entropy_failures_total.inc()
            logger.error(
                "Entropy source exhausted",
                source=describe_source(src),
                requested=n,
                received=len(buffer),
            )
            raise EntropyUnavailable(n, len(buffer))

        buffer.extend(chunk)

    return bytes(buffer[:n])
