"""Tests for utility functions."""

from __future__ import annotations

import pytest

from schooldesk.util import format_identifier, normalize_identifier


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("123.456.789-00", "12345678900"),
        ("12345678900", "12345678900"),
        (" 987 654 321 / 00 ", "98765432100"),
        ("a1b2c3", "123"),
        ("___.___.___-__", ""),
        ("", ""),
    ],
)
def test_normalize_identifier(raw: str, expected: str) -> None:
    assert normalize_identifier(raw) == expected


def test_normalize_keeps_digit_order() -> None:
    raw = "9-8.7/6 5x4(3)2#1_0"
    assert normalize_identifier(raw) == "9876543210"
    assert normalize_identifier(raw) == "".join(c for c in raw if c.isdigit())


def test_normalize_only_ascii_digits() -> None:
    # Arabic-Indic digits are not identifier digits.
    assert normalize_identifier("12٣٤4") == "124"


def test_format_identifier() -> None:
    assert format_identifier("12345678900") == "123.456.789-00"
    assert format_identifier("123.456.789-00") == "123.456.789-00"

    # Anything but a full identifier is only normalized.
    assert format_identifier("1234") == "1234"
    assert format_identifier("123.456.789-001") == "123456789001"
