from datetime import datetime

import pytest

from cyberdom.scriptutils import evaluate_condition, random_in_range


def check(expr, strings=None, counters=None, times=None):
    return evaluate_condition(expr, strings or {}, counters or {}, times or {})


@pytest.mark.parametrize(
    "expr, expected",
    [
        ("#a = 5", True),
        ("#a <> 5", False),
        ("#a < 6", True),
        ("#a <= 5", True),
        ("#a > 5", False),
        ("#a >= 5", True),
        ("#missing = 0", True),
        ("#a = #b", False),
    ],
)
def test_counter_comparisons(expr, expected):
    assert check(expr, counters={"#a": 5, "#b": 7}) is expected


def test_counter_double_equals_is_not_numeric():
    assert check("#a == 5", counters={"#a": 5}) is False


def test_non_numeric_literal_counts_as_zero():
    assert check("#a = abc", counters={"#a": 0}) is True
    assert check("#a = 1_0", counters={"#a": 10}) is False


def test_string_equality_is_case_insensitive():
    strings = {"$name": "Alice"}
    assert check("$name = alice", strings) is True
    assert check("$name == alice", strings) is False
    assert check("$name == Alice", strings) is True
    assert check("$name <> ALICE", strings) is False


def test_string_contains():
    strings = {"$text": "Hello World"}
    assert check("$text [ world", strings) is True
    assert check("$text [[ world", strings) is False
    assert check("$text [[ World", strings) is True


def test_unknown_string_variable_is_empty():
    assert check("$nothing = $other") is True


def test_time_comparisons():
    times = {"!start": datetime(2024, 1, 1, 12, 0)}
    assert check("!start < 2024-01-02T00:00:00", times=times) is True
    assert check("!start = 2024-01-01T12:00:00", times=times) is True
    assert check("!start > 2024-01-02T00:00:00", times=times) is False


def test_missing_time_orders_first():
    times = {"!start": datetime(2024, 1, 1)}
    assert check("!unset < !start", times=times) is True
    assert check("!unset = !other", times=times) is True


def test_malformed_expressions_are_false():
    assert check("no operator here") is False
    assert check("= 5") is False
    assert check("#a >") is False


@pytest.mark.parametrize("center", [False, True])
def test_random_in_range_stays_in_bounds(center):
    values = {random_in_range(-3, 4, center) for _ in range(500)}
    assert all(-3 <= v <= 4 for v in values)


def test_random_in_range_single_value():
    assert random_in_range(7, 7, True) == 7
    assert random_in_range(7, 7, False) == 7


def test_random_in_range_rejects_empty_range():
    with pytest.raises(ValueError):
        random_in_range(5, 4, False)