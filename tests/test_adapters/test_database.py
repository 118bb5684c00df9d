"""
Tests for database parameter binding

Fun fact: Storing KSUIDs in their text form means a plain ORDER BY on the
column returns rows in creation order - no timestamp column needed!
"""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from ksuid_kit.adapters.database import register_sqlite, scan, to_sql
from ksuid_kit.kernel.errors import InvalidCharacter, SizeMismatch, UnsupportedType
from ksuid_kit.kernel.ksuid import NIL, Ksuid


def test_to_sql_emits_text_form(known_vector: dict) -> None:
    """Test KSUIDs are bound as their 27-character string"""
    assert to_sql(Ksuid.parse(known_vector["string"])) == known_vector["string"]


@pytest.mark.parametrize("empty", [None, b"", "", bytearray()])
def test_scan_empty_values_are_nil(empty) -> None:
    """Test NULL and zero-length values map to the nil KSUID"""
    assert scan(empty) == NIL


def test_scan_text_and_binary_forms(known_vector: dict) -> None:
    """Test scan accepts str, text bytes and binary bytes"""
    expected = Ksuid.parse(known_vector["string"])
    raw = bytes.fromhex(known_vector["raw_hex"])

    assert scan(known_vector["string"]) == expected
    assert scan(known_vector["string"].encode("ascii")) == expected
    assert scan(raw) == expected
    assert scan(memoryview(raw)) == expected


def test_scan_rejects_other_lengths() -> None:
    """Test lengths other than 0, 20 and 27 are size mismatches"""
    with pytest.raises(SizeMismatch):
        scan(bytes(19))
    with pytest.raises(SizeMismatch):
        scan("short")


def test_scan_rejects_bad_text() -> None:
    """Test a 27-byte value must still be valid base-62"""
    with pytest.raises(InvalidCharacter):
        scan("!" * 27)


def test_scan_non_ascii_text_is_character_error() -> None:
    """Test a 27-character str is measured in characters, not UTF-8 bytes"""
    with pytest.raises(InvalidCharacter) as exc_info:
        scan("é" + "0" * 26)
    assert exc_info.value.position == 0


def test_scan_rejects_unsupported_types() -> None:
    """Test types other than str, bytes and None are refused"""
    with pytest.raises(UnsupportedType) as exc_info:
        scan(42)
    assert "Scan" in str(exc_info.value)
    assert exc_info.value.value_type is int


def test_sqlite_round_trip_and_ordering() -> None:
    """Test registered adapters store text and load Ksuid values in order"""
    register_sqlite()
    start = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    ids = [
        Ksuid.from_parts(start + timedelta(seconds=offset), bytes([offset]) * 16)
        for offset in (5, 1, 3)
    ]

    conn = sqlite3.connect(":memory:", detect_types=sqlite3.PARSE_DECLTYPES)
    try:
        conn.execute("CREATE TABLE orders (id KSUID TEXT PRIMARY KEY, note TEXT)")
        conn.executemany(
            "INSERT INTO orders (id, note) VALUES (?, ?)",
            [(ksuid, f"order {i}") for i, ksuid in enumerate(ids)],
        )
        conn.execute("INSERT INTO orders (id, note) VALUES (NULL, 'missing')")

        stored = conn.execute(
            "SELECT CAST(id AS TEXT) FROM orders WHERE id IS NOT NULL ORDER BY id"
        ).fetchall()
        loaded = conn.execute(
            "SELECT id FROM orders WHERE id IS NOT NULL ORDER BY id"
        ).fetchall()
    finally:
        conn.close()

    assert [row[0] for row in stored] == sorted(str(k) for k in ids)
    assert [row[0] for row in loaded] == sorted(ids)
