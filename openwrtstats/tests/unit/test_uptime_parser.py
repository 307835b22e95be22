import pytest

from openwrtstats.parsers import parse_uptime


def test_header_then_proc_uptime():
    text = "=== uptime router1 ===\n350735.47 234388.90\n"
    assert parse_uptime(text) == 350735

def test_header_skips_non_numeric_following_line():
    text = "=== uptime router1 ===\nnot available\n=== uptime router2 ===\n42.9 10.0\n"
    assert parse_uptime(text) == 42

def test_header_not_on_first_line():
    text = "some banner\n=== uptime router7 ===\n  1234.99 55.0\nphy#0\n"
    assert parse_uptime(text) == 1234

def test_leading_number():
    assert parse_uptime("98765.43 12345.67") == 98765

def test_leading_integer_with_whitespace():
    assert parse_uptime("  \n 120 60\n") == 120

def test_up_hours_minutes_seconds():
    assert parse_uptime("12:01:33 up 1:02:03, load average: 0.00") == 1 * 3600 + 2 * 60 + 3

def test_up_hours_minutes_only():
    # seconds default to 0
    assert parse_uptime(" 12:01:33 up  5:07,  load average: 0.00") == 5 * 3600 + 7 * 60

def test_up_with_days():
    text = "12:01:33 up 4 days,  1:02:03,  load average: 0.00, 0.01, 0.05"
    assert parse_uptime(text) == 4 * 86400 + 1 * 3600 + 2 * 60 + 3

def test_up_with_single_day():
    assert parse_uptime("up 1 day, 00:00:10") == 86400 + 10

@pytest.mark.parametrize("text", [
    "",
    None,
    "no uptime here",
    "=== uptime router1 ===",
    "=== uptime router1 ===\nN/A\n",
    "up 42 min",
    "-5 12",
])
def test_unrecognised_returns_none(text):
    assert parse_uptime(text) is None

@pytest.mark.parametrize("hours,minutes,seconds,days", [
    (0, 0, 0, 0),
    (23, 59, 59, 0),
    (7, 5, 1, 3),
    (0, 1, 0, 365),
])
def test_up_pattern_arithmetic(hours, minutes, seconds, days):
    day_clause = f"{days} days, " if days else ""
    text = f"10:00:00 up {day_clause}{hours}:{minutes:02d}:{seconds:02d}, load average: 0.1"
    result = parse_uptime(text)
    assert result == days * 86400 + hours * 3600 + minutes * 60 + seconds
    assert result >= 0
