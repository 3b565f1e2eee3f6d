from __future__ import annotations

from src.volunteer_duty.volunteer_duty.activities.model import Activity
from src.volunteer_duty.volunteer_duty.activities.monthly import MonthlyAggregator
from src.volunteer_duty.volunteer_duty.core.enums import ActivityType, MonthlyRecordType
from src.volunteer_duty.volunteer_duty.stats.calculator.standard_calculator import StandardWorkHoursCalculator


class _Events:
    def __init__(self):
        self.items = []

    def add(self, type, ts):
        self.items.append(Activity(activity_id=len(self.items) + 1, user_id=1, type=type, timestamp=ts))
        return self.items[-1]


def test_latest_pair_plus_orphan_duplicate(clock, at):
    ev = _Events()
    early = ev.add(ActivityType.SIGNIN, at(2024, 5, 10, 9, 0))
    late = ev.add(ActivityType.SIGNIN, at(2024, 5, 10, 10, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 10, 18, 0))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert [r.activity_type for r in rows] == [MonthlyRecordType.PAIR, MonthlyRecordType.SIGNIN]
    pair, orphan = rows
    assert (pair.sign_in_time, pair.sign_out_time, pair.duration) == ("10:00", "18:00", 8.0)
    assert pair.activity_id == late.activity_id
    assert pair.is_time_error is False
    assert (orphan.sign_in_time, orphan.sign_out_time, orphan.duration) == ("09:00", None, 0.0)
    assert orphan.activity_id == early.activity_id


def test_backwards_pair_is_flagged_with_absolute_duration(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNIN, at(2024, 5, 11, 18, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 11, 9, 0))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert len(rows) == 1
    assert rows[0].activity_type == MonthlyRecordType.PAIR
    assert rows[0].is_time_error is True
    assert rows[0].duration == 9.0


def test_out_of_range_duration_is_zeroed_but_kept(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNIN, at(2024, 5, 12, 8, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 12, 16, 0))

    aggregator = MonthlyAggregator(clock, calculator=StandardWorkHoursCalculator(max_hours=5))
    rows = aggregator.build(ev.items)

    assert len(rows) == 1
    assert rows[0].activity_type == MonthlyRecordType.PAIR
    assert rows[0].duration == 0


def test_zero_length_pair_has_zero_duration(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNIN, at(2024, 5, 12, 8, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 12, 8, 0))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert rows[0].duration == 0
    assert rows[0].is_time_error is False


def test_day_with_only_signin_yields_one_orphan(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNIN, at(2024, 5, 13, 9, 0))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert len(rows) == 1
    assert rows[0].activity_type == MonthlyRecordType.SIGNIN
    assert rows[0].duration == 0
    assert rows[0].sign_out_time is None


def test_day_with_only_signouts_lists_each_one(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 14, 12, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 14, 17, 0))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert [r.activity_type for r in rows] == [MonthlyRecordType.SIGNOUT, MonthlyRecordType.SIGNOUT]
    assert [r.sign_out_time for r in rows] == ["17:00", "12:00"]
    assert all(r.sign_in_time is None for r in rows)


def test_rows_sorted_by_date_desc_with_pair_first(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 2, 20, 0))
    ev.add(ActivityType.SIGNIN, at(2024, 5, 3, 8, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 3, 11, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 3, 12, 0))
    ev.add(ActivityType.SIGNIN, at(2024, 5, 1, 7, 0))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert [(r.date, r.activity_type) for r in rows] == [
        ("2024-05-03", MonthlyRecordType.PAIR),
        ("2024-05-03", MonthlyRecordType.SIGNOUT),
        ("2024-05-02", MonthlyRecordType.SIGNOUT),
        ("2024-05-01", MonthlyRecordType.SIGNIN),
    ]
    assert rows[0].sign_out_time == "12:00"
    assert rows[1].sign_out_time == "11:00"


def test_grouping_uses_civil_date(clock, at):
    ev = _Events()
    # 00:30 Taipei on the 20th is still the 19th in UTC
    ev.add(ActivityType.SIGNIN, at(2024, 5, 20, 0, 30))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 20, 6, 45))

    rows = MonthlyAggregator(clock).build(ev.items)

    assert len(rows) == 1
    assert rows[0].date == "2024-05-20"
    assert rows[0].duration == 6.3


def test_duration_rounds_half_up(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNIN, at(2024, 5, 21, 9, 0))
    ev.add(ActivityType.SIGNOUT, at(2024, 5, 21, 10, 15))

    assert MonthlyAggregator(clock).build(ev.items)[0].duration == 1.3


def test_to_dict_uses_client_field_names(clock, at):
    ev = _Events()
    ev.add(ActivityType.SIGNIN, at(2024, 5, 22, 9, 0))

    row = MonthlyAggregator(clock).build(ev.items)[0].to_dict()

    assert row == {
        "date": "2024-05-22",
        "signInTime": "09:00",
        "signOutTime": None,
        "duration": 0.0,
        "isTimeError": False,
        "activityId": 1,
        "activityType": "signin",
    }
