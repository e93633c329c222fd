"""
Unit tests for date resolution of year-less record text.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from cardiolog.core.date_resolver import parse_record_date, resolve_record_date, sort_newest_first

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class TestYearInference:
    """Most recent plausible past date."""

    NOW = datetime(2026, 1, 31, 12, 0)

    def test_past_date_in_current_year(self):
        resolved = resolve_record_date("Thu 01 Jan 10:00 - 11:00", self.NOW)
        assert resolved == datetime(2026, 1, 1, 10, 0)

    def test_later_month_rolls_back_a_year(self):
        resolved = resolve_record_date("Thu 25 Dec 10:00 - 11:00", self.NOW)
        assert resolved == datetime(2025, 12, 25, 10, 0)

    def test_tomorrow_rolls_back_a_year(self):
        resolved = resolve_record_date("Sun 01 Feb 10:00", self.NOW)
        assert resolved == datetime(2025, 2, 1, 10, 0)

    def test_today_exactly_is_not_rolled_back(self):
        assert resolve_record_date("Sat 31 Jan 12:00", self.NOW) == self.NOW

    def test_later_today_rolls_back(self):
        assert resolve_record_date("Sat 31 Jan 12:01", self.NOW).year == 2025

    def test_missing_time_is_midnight(self):
        assert resolve_record_date("Fri 30 Jan", self.NOW) == datetime(2026, 1, 30)

    def test_weekday_is_optional(self):
        assert resolve_record_date("18 Nov", self.NOW) == datetime(2025, 11, 18)

    def test_range_without_spaces(self):
        assert resolve_record_date("Thu 20 Nov 20:00-20:32", self.NOW) == datetime(2025, 11, 20, 20, 0)

    def test_long_month_name_any_case(self):
        assert resolve_record_date("thu 20 NOVEMBER 08:30", self.NOW) == datetime(2025, 11, 20, 8, 30)

    def test_leap_day_in_current_year(self):
        now = datetime(2024, 3, 10, 12, 0)
        assert resolve_record_date("Thu 29 Feb 09:00", now) == datetime(2024, 2, 29, 9, 0)

    def test_leap_day_of_previous_year_within_a_year(self):
        now = datetime(2025, 2, 28, 23, 0)
        assert resolve_record_date("Thu 29 Feb 22:00", now) == datetime(2024, 2, 29, 22, 0)

    def test_leap_day_older_than_a_year_falls_back_to_now(self):
        assert resolve_record_date("Sun 29 Feb 09:00", self.NOW) == self.NOW
        assert parse_record_date("Sun 29 Feb 09:00", self.NOW) is None

    def test_leap_day_later_on_the_day_itself_falls_back_to_now(self):
        now = datetime(2024, 2, 29, 7, 0)
        assert resolve_record_date("Thu 29 Feb 08:00", now) == now

    @pytest.mark.parametrize("now", [
        datetime(2026, 1, 31, 12, 0),
        datetime(2024, 2, 29, 0, 0),
        datetime(2024, 3, 1, 0, 0),
        datetime(2025, 2, 28, 23, 0),
        datetime(2025, 12, 31, 23, 59),
        datetime(2026, 1, 1, 0, 0),
    ])
    def test_never_future_and_within_a_year(self, now):
        # 2024 is a leap year, so 29 Feb is included
        day = date(2024, 1, 1)
        while day.year == 2024:
            text = f"Mon {day.day:02d} {MONTHS[day.month - 1]} 12:00"
            resolved = resolve_record_date(text, now)
            assert resolved <= now, text
            assert now - resolved <= timedelta(days=366), text
            if parse_record_date(text, now) is not None:
                assert (resolved.month, resolved.day) == (day.month, day.day), text
            else:
                assert (day.month, day.day) == (2, 29), text
            day += timedelta(days=1)


class TestRelativeAndIsoText:

    NOW = datetime(2026, 1, 31, 12, 0)

    @pytest.mark.parametrize("text", ["Today", "today", "TODAY"])
    def test_today(self, text):
        assert resolve_record_date(text, self.NOW) == datetime(2026, 1, 31)

    def test_yesterday_with_time(self):
        assert resolve_record_date("Yesterday 21:15", self.NOW) == datetime(2026, 1, 30, 21, 15)

    def test_iso_date_time_keeps_its_year(self):
        assert resolve_record_date("2025-03-04 16:12", self.NOW) == datetime(2025, 3, 4, 16, 12)

    def test_iso_date_only(self):
        assert resolve_record_date("2024-12-25", self.NOW) == datetime(2024, 12, 25)

    def test_aware_iso_with_naive_now_keeps_wall_clock(self):
        assert resolve_record_date("2025-11-20T20:05:00Z", self.NOW) == datetime(2025, 11, 20, 20, 5)

    def test_aware_now_converts_iso(self):
        now = datetime(2026, 1, 31, 12, 0, tzinfo=timezone(timedelta(hours=1)))
        resolved = resolve_record_date("2025-11-20T20:05:00Z", now)
        assert resolved.utcoffset() == timedelta(hours=1)
        assert resolved.hour == 21

    def test_aware_now_is_attached_to_year_less_text(self):
        now = datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)
        assert resolve_record_date("Fri 30 Jan 08:00", now) == datetime(2026, 1, 30, 8, 0, tzinfo=timezone.utc)


class TestMalformedInput:
    """Unparseable text falls back to the reference time."""

    NOW = datetime(2026, 1, 31, 12, 0)

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "Thu",
        "Thu 20 Foo 20:00",
        "Thu 31 Feb 10:00",
        "Thu 20 Nov 25:00",
        "Thu 20 Nov noon",
        "2025-13-45 10:00",
        "garbage text here",
    ])
    def test_returns_now(self, text):
        assert resolve_record_date(text, self.NOW) == self.NOW

    def test_parse_reports_failure_as_none(self):
        assert parse_record_date("unknown time", self.NOW) is None
        assert parse_record_date("Fri 30 Jan 08:00", self.NOW) == datetime(2026, 1, 30, 8, 0)


def test_sort_newest_first(record_factory):
    now = datetime(2026, 1, 31, 12, 0)
    older = record_factory(full_date_text="Thu 25 Dec 10:00")
    newer = record_factory(full_date_text="Fri 30 Jan 08:00")
    iso = record_factory(full_date_text="2026-01-15 09:00")
    assert sort_newest_first([older, iso, newer], now) == [newer, iso, older]
