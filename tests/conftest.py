"""
Pytest configuration and shared fixtures

Fun fact: The name "conftest" comes from pytest's configuration testing
framework. Files named conftest.py are automatically discovered and their
fixtures are available to all tests in the same directory and subdirectories!
"""

import io
from datetime import datetime, timezone
from typing import Iterator

import pytest

from ksuid_kit.kernel.entropy import set_entropy_source
from ksuid_kit.kernel.time import FrozenTimeProvider


@pytest.fixture(autouse=True)
def restore_entropy_source() -> Iterator[None]:
    """Put the system CSPRNG back after every test that swaps the source"""
    yield
    set_entropy_source(None)


@pytest.fixture
def test_time() -> FrozenTimeProvider:
    """
    Provide a controllable time provider for deterministic tests

    Default time: 2025-01-15 12:00:00 UTC, corrected timestamp 336942400.
    """
    return FrozenTimeProvider(datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def deterministic_entropy() -> io.BytesIO:
    """
    Provide a byte stream with predictable payloads

    The first payload read is 00 01 02 ... 0F, the second 10 11 ... 1F.
    """
    return io.BytesIO(bytes(range(256)))


class FailingEntropySource:
    """Entropy source whose reads always fail"""

    def __init__(self) -> None:
        self.calls = 0

    def read(self, n: int) -> bytes:
        self.calls += 1
        raise OSError("entropy device unavailable")


@pytest.fixture
def failing_entropy() -> FailingEntropySource:
    """Provide an entropy source that raises on every read"""
    return FailingEntropySource()


@pytest.fixture
def known_vector() -> dict:
    """
    Provide a KSUID whose string, binary form and components are all known

    Minted 2017-10-10 04:00:47 UTC.
    """
    return {
        "string": "0ujtsYcgvSTl8PAuAdqWYSMnLOv",
        "raw_hex": "0669F7EFB5A1CD34B5F99D1154FB6853345C9735",
        "timestamp": 107608047,
        "time": datetime(2017, 10, 10, 4, 0, 47, tzinfo=timezone.utc),
        "payload_hex": "B5A1CD34B5F99D1154FB6853345C9735",
    }
