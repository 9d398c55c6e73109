from __future__ import annotations

from datetime import date

import pytest

from disklog.naming import log_file_name, sanitize_prefix


def test_file_name_with_prefix() -> None:
    assert log_file_name(date(2024, 1, 15), "app") == "app_2024-01-15.log"


def test_file_name_without_prefix() -> None:
    assert log_file_name(date(2024, 1, 15)) == "2024-01-15.log"
    assert log_file_name(date(2024, 1, 15), "") == "2024-01-15.log"


def test_file_name_zero_pads_date() -> None:
    assert log_file_name(date(999, 2, 3), "x") == "x_0999-02-03.log"


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [
        ("a/b", "a_b"),
        ("a\0b", "a_b"),
        ("//", "__"),
        ("plain-name.v2", "plain-name.v2"),
    ],
)
def test_sanitize_prefix_replaces_illegal_chars(prefix: str, expected: str) -> None:
    assert sanitize_prefix(prefix) == expected


def test_file_name_sanitizes_prefix() -> None:
    assert log_file_name(date(2024, 1, 15), "a/b") == "a_b_2024-01-15.log"
