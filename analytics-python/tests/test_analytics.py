"""Tests for lifetime averages, streak detection and per-type analytics."""

from datetime import date, datetime, timedelta, timezone

import numpy as np

from services import (
    Activity,
    ByTag,
    ByType,
    FrequencyAnalyzer,
    OffTimePeriod,
    analytics_response,
    find_longest_streak,
)
from services.analytics import current_streak_start, lifetime_average, longest_streak_window
from services.dates import date_to_day

DAY0 = date_to_day(date(2025, 1, 1))


def activities_first_iso(activities):
    return min(activity.date for activity in activities).isoformat()


def days(*offsets):
    return np.array([DAY0 + offset for offset in offsets], dtype=np.int64)


class TestLifetimeAverage:
    def test_even_spacing(self):
        assert lifetime_average(days(0, 3, 6, 9)) == 3.0

    def test_uneven_spacing(self):
        assert lifetime_average(days(0, 1, 3)) == 1.5

    def test_excludes_gap_after_last_activity(self):
        # Same history regardless of how long ago it ended
        assert lifetime_average(days(0, 2, 4)) == lifetime_average(days(100, 102, 104))

    def test_fewer_than_two_activities(self):
        assert lifetime_average(days(0)) == 0.0
        assert lifetime_average(days()) == 0.0


class TestLongestStreak:
    def test_regular_spacing(self):
        streak = find_longest_streak(days(0, 3, 6, 9), 3)

        assert streak.longest_streak == 9
        assert streak.average_frequency == 3.0
        assert streak.streak_start == date(2025, 1, 1)
        assert streak.streak_end == date(2025, 1, 10)

    def test_outlier_gap_does_not_extend_streak(self):
        streak = find_longest_streak(days(0, 3, 6, 9, 29), 3)

        assert streak.longest_streak == 9
        assert streak.average_frequency == 3.0
        assert streak.streak_start == date(2025, 1, 1)
        assert streak.streak_end == date(2025, 1, 10)

    def test_average_may_absorb_one_long_gap(self):
        # intervals 1, 1, 4 average exactly 2
        streak = find_longest_streak(days(0, 1, 2, 6), 2)
        assert streak.longest_streak == 6
        assert streak.average_frequency == 2.0

    def test_ties_keep_earliest_window(self):
        assert longest_streak_window(days(0, 2, 4, 10, 12, 14), 2) == (0, 2)

    def test_fewer_than_two_activities(self):
        streak = find_longest_streak(days(0), 3)
        assert streak.longest_streak == 0
        assert streak.average_frequency == 0.0
        assert streak.streak_start is None
        assert streak.streak_end is None

    def test_same_day_activities_make_no_streak(self):
        assert find_longest_streak(days(5, 5), 3).longest_streak == 0

    def test_no_window_meets_target(self):
        assert find_longest_streak(days(0, 10, 20), 3).longest_streak == 0

    def test_average_is_rounded(self):
        # 10 days over 3 intervals
        streak = find_longest_streak(days(0, 3, 7, 10), 3.5)
        assert streak.longest_streak == 10
        assert streak.average_frequency == 3.3


class TestCurrentStreakStart:
    def test_earliest_qualifying_start(self):
        assert current_streak_start(days(0, 40, 43, 46, 49), 3) == 1

    def test_single_activity(self):
        assert current_streak_start(days(0), 3) is None

    def test_latest_gap_too_wide(self):
        assert current_streak_start(days(0, 1, 2, 30), 3) is None


def _activity(type_id, day, hour=12):
    return Activity(
        id=f"{type_id}-{day.isoformat()}",
        type_id=type_id,
        date=datetime.combine(day, datetime.min.time(), tzinfo=timezone.utc) + timedelta(hours=hour),
    )


class TestFrequencyAnalyzer:
    NOW = datetime(2025, 2, 1, 17, 0, tzinfo=timezone.utc)
    OFF_START = date(2025, 1, 10)
    OFF_END = date(2025, 1, 20)

    def _history(self, type_id):
        return [
            _activity(type_id, date(2025, 1, 25)),
            _activity(type_id, date(2025, 1, 15)),
            _activity(type_id, date(2025, 1, 5)),
        ]

    def test_off_time_activity_is_excluded(self, tz, make_type):
        run = make_type("Run", 10)
        activities = self._history(run.id)
        period = OffTimePeriod(self.OFF_START, self.OFF_END, ByType(run.id))

        result = FrequencyAnalyzer(tz, off_times=[period], now=self.NOW).analyze_type(run, activities)

        assert result.number_of_activities == 2
        assert result.excluded_activities == 1
        assert result.total_avg_frequency == 20.0
        assert result.date_of_first_activity == activities[-1].date
        # The raw listing is untouched
        assert len(activities) == 3

    def test_off_time_changes_streak(self, tz, make_type):
        run = make_type("Run", 10)
        activities = self._history(run.id)
        period = OffTimePeriod(self.OFF_START, self.OFF_END, ByType(run.id))

        without = FrequencyAnalyzer(tz, now=self.NOW).analyze_type(run, activities)
        with_off = FrequencyAnalyzer(tz, off_times=[period], now=self.NOW).analyze_type(run, activities)

        assert without.streak.longest_streak == 20
        assert without.streak.average_frequency == 10.0
        assert with_off.streak.longest_streak == 0

    def test_tag_scope_fans_out_to_members(self, tz, make_type):
        run = make_type("Run", 10, tag_id="cardio")
        yoga = make_type("Yoga", 10)
        period = OffTimePeriod(self.OFF_START, self.OFF_END, ByTag("cardio", frozenset({run.id})))
        analyzer = FrequencyAnalyzer(tz, off_times=[period], now=self.NOW)

        results = analyzer.analyze(
            [run, yoga],
            {run.id: self._history(run.id), yoga.id: self._history(yoga.id)},
        )

        assert [r.number_of_activities for r in results] == [2, 3]
        assert results[1].total_avg_frequency == 10.0

    def test_type_without_activities(self, tz, make_type):
        swim = make_type("Swim", 7)
        result = FrequencyAnalyzer(tz, now=self.NOW).analyze([swim], {})[0]

        assert result.number_of_activities == 0
        assert result.total_avg_frequency == 0.0
        assert result.date_of_first_activity is None
        assert result.streak.longest_streak == 0

    def test_response_has_parallel_arrays(self, tz, make_type):
        run, yoga = make_type("Run", 10), make_type("Yoga", 5)
        results = FrequencyAnalyzer(tz, now=self.NOW).analyze(
            [run, yoga], {run.id: self._history(run.id)})
        response = analytics_response(results)

        assert [a["activityType"] for a in response["analytics"]] == ["Run", "Yoga"]
        assert [s["activityType"] for s in response["streaks"]] == ["Run", "Yoga"]
        assert response["analytics"][0] == {
            "activityType": "Run",
            "desiredFrequency": 10.0,
            "totalAvgFrequency": 10.0,
            "dateOfFirstActivity": activities_first_iso(self._history(run.id)),
            "numberOfActivities": 3,
            "excludedActivities": 0,
        }
        assert response["streaks"][0] == {
            "activityType": "Run",
            "longestStreak": 20,
            "averageFrequency": 10.0,
            "streakStart": "2025-01-05",
            "streakEnd": "2025-01-25",
        }
