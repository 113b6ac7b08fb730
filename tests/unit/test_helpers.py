import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from kb_export.helpers import (
    format_archive_timestamp,
    format_dir_timestamp,
    safe_output_path,
    sanitize_file_name,
)


@pytest.mark.parametrize("name, expected", [
    ("Simple", "simple"),
    ("My FAQ (v2).pdf", "my_faq__v2__pdf"),
    ("../../etc/passwd", "______etc_passwd"),
    (".hidden", "_hidden"),
    ("Ünïcode näme", "_n_code_n_me"),
    ("", ""),
])
def test_sanitize_file_name(name, expected):
    assert sanitize_file_name(name) == expected


@pytest.mark.parametrize("name", ["...", "a/b\\c", "Tab\there", "日本語", "UPPER lower 123", ".env"])
def test_sanitize_file_name_output_alphabet(name):
    result = sanitize_file_name(name)
    assert re.fullmatch(r"[a-z0-9_]*", result)
    assert not result.startswith(".")


def test_safe_output_path_joins_and_normalizes():
    path = safe_output_path("./exports/2024-03-05-07-08-09", "faq", ".txt")
    assert path == Path("exports/2024-03-05-07-08-09/faq.txt")


def test_safe_output_path_strips_leading_parent_references():
    path = safe_output_path("../../outside", "faq", ".json")
    assert path.as_posix() == "outside/faq.json"


def test_format_dir_timestamp_drops_fraction():
    now = datetime(2024, 3, 5, 7, 8, 9, 999999, tzinfo=timezone.utc)
    assert format_dir_timestamp(now) == "2024-03-05-07-08-09"


def test_format_dir_timestamp_converts_to_utc():
    now = datetime(2024, 3, 5, 9, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_dir_timestamp(now) == "2024-03-05-07-00-00"


def test_format_archive_timestamp_replaces_colons_and_dots():
    now = datetime(2024, 3, 5, 7, 8, 9, 45000, tzinfo=timezone.utc)
    assert format_archive_timestamp(now) == "2024-03-05T07-08-09-045Z"


def test_format_timestamps_default_to_now():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}", format_dir_timestamp())
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z", format_archive_timestamp())
