from datetime import datetime, timedelta, timezone

import pytest

from src.volunteer_duty.volunteer_duty.stats.calculator.standard_calculator import StandardWorkHoursCalculator

BASE = datetime(2024, 5, 1, 1, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(hours=8), 8.0),
        (timedelta(minutes=90), 1.5),
        (timedelta(hours=24), 24.0),
        (timedelta(hours=24, seconds=1), 0.0),
        (timedelta(0), 0.0),
    ],
)
def test_session_hours_window(delta, expected):
    calc = StandardWorkHoursCalculator()
    assert calc.session_hours(BASE, BASE + delta) == pytest.approx(expected)


def test_reversed_pair_counts_absolute_difference():
    calc = StandardWorkHoursCalculator()
    assert calc.session_hours(BASE + timedelta(hours=3), BASE) == pytest.approx(3.0)


def test_naive_values_are_read_as_utc():
    calc = StandardWorkHoursCalculator()
    naive = BASE.replace(tzinfo=None)
    assert calc.session_hours(naive, BASE + timedelta(hours=2)) == pytest.approx(2.0)
