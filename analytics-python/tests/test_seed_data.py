"""Tests for the seed data date generator."""

import random
from datetime import datetime, timedelta, timezone

from seed_test_data import SAMPLE_TYPES, SEED_USER_ID, generate_activity_dates, seed_user_row

START = datetime(2025, 1, 1, tzinfo=timezone.utc)
END = datetime(2025, 4, 1, tzinfo=timezone.utc)


class TestGenerateActivityDates:
    def test_dates_within_range_and_ascending(self):
        dates = generate_activity_dates(START, END, 3.0, random.Random(1))

        assert dates
        assert dates == sorted(dates)
        assert all(START < d <= END + timedelta(days=1) for d in dates)

    def test_at_least_one_calendar_day_apart(self):
        dates = generate_activity_dates(START, END, 1.0, random.Random(2))
        day_numbers = [d.date() for d in dates]
        assert len(set(day_numbers)) == len(day_numbers)

    def test_daytime_hours(self):
        dates = generate_activity_dates(START, END, 2.0, random.Random(3))
        assert all(6 <= d.hour <= 20 for d in dates)

    def test_deterministic_with_seeded_rng(self):
        first = generate_activity_dates(START, END, 4.0, random.Random(42))
        second = generate_activity_dates(START, END, 4.0, random.Random(42))
        assert first == second

    def test_mean_spacing_is_close_to_target(self):
        dates = generate_activity_dates(START, START + timedelta(days=400), 5.0, random.Random(7))
        gaps = [(b.date() - a.date()).days for a, b in zip(dates, dates[1:])]
        assert 4.0 <= sum(gaps) / len(gaps) <= 6.0

    def test_sample_types_have_four_seasons(self):
        assert all(len(freqs) == 4 for _, freqs, _, _ in SAMPLE_TYPES)


class TestSeedUserRow:
    def test_fills_required_user_columns(self):
        user_id, email, password, name, tz_name = seed_user_row()

        assert user_id == SEED_USER_ID
        assert "@" in email
        assert password and name
        assert tz_name == "America/New_York"
