"""
Test Data Generator for Frequency Tracker
Populates the database with a sample user, activity types, activity history
and one off-time period

Expects the seasonal schema: users (id, email, password, name, timezone),
activity_types with "freqWinter".."freqFall" (no "desiredFrequency"), tags,
activities and off_times keyed by "userId".

Run with: python seed_test_data.py
"""

import os
import random
import sys
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from dotenv import load_dotenv
import psycopg2

# Load environment variables
load_dotenv()

SEED_USER_ID = "seed-user"
SEED_TIMEZONE = "America/New_York"
SEED_EMAIL = "seed-user@example.com"

# name, (winter, spring, summer, fall) desired days, actual mean spacing, tag
SAMPLE_TYPES = [
    ("Run", (3, 2, 2, 3), 2.5, "cardio"),
    ("Bike", (7, 4, 3, 4), 4.0, "cardio"),
    ("Strength", (3, 3, 3, 3), 3.5, None),
    ("Yoga", (5, 5, 5, 5), 6.0, None),
    ("Swim", (14, 10, 5, 10), 9.0, "cardio"),
]


def generate_activity_dates(start: datetime,
                            end: datetime,
                            mean_interval: float,
                            rng: Optional[random.Random] = None) -> List[datetime]:
    """
    Activity instants between start and end, roughly `mean_interval` days apart.

    Gaps are drawn around the mean (at least one day) and each activity gets
    a random time of day between 06:00 and 21:00.
    """
    rng = rng or random.Random()
    dates = []
    day = start.replace(hour=0, minute=0, second=0, microsecond=0)

    while True:
        gap = max(1, round(rng.gauss(mean_interval, mean_interval / 3)))
        day = day + timedelta(days=gap)
        if day > end:
            break
        dates.append(day + timedelta(hours=rng.randint(6, 20), minutes=rng.randint(0, 59)))

    return dates


def seed_user_row() -> tuple:
    """
    Values for the users insert: id, email, password, name, timezone.

    email and password are NOT NULL in the users table. The password is not
    a bcrypt hash, so the seed user can't sign in through the API.
    """
    return (SEED_USER_ID, SEED_EMAIL, "!", "Seed User", SEED_TIMEZONE)


# Database connection
def get_connection():
    return psycopg2.connect(
        host=os.getenv('DB_HOST', 'localhost'),
        port=os.getenv('DB_PORT', '5432'),
        database=os.getenv('DB_NAME', 'frequency_tracker'),
        user=os.getenv('DB_USER', 'postgres'),
        password=os.getenv('DB_PASSWORD')
    )


def clear_existing_data(conn):
    """Remove everything owned by the seed user"""
    with conn.cursor() as cur:
        print("Clearing existing seed data...")
        for table in ("off_times", "activities", "activity_types", "tags"):
            cur.execute(f'DELETE FROM {table} WHERE "userId" = %s', (SEED_USER_ID,))
        cur.execute('DELETE FROM users WHERE id = %s', (SEED_USER_ID,))
        conn.commit()
        print("✓ Existing data cleared")


def seed(conn, num_weeks: int = 16) -> int:
    """Insert the sample user and history; returns number of activities"""
    rng = random.Random(42)
    now = datetime.now(timezone.utc)
    start = now - timedelta(weeks=num_weeks)
    tag_ids = {}
    total = 0

    with conn.cursor() as cur:
        cur.execute(
            'INSERT INTO users (id, email, password, name, timezone) VALUES (%s, %s, %s, %s, %s)',
            seed_user_row()
        )

        for name, (winter, spring, summer, fall), mean_interval, tag in SAMPLE_TYPES:
            if tag and tag not in tag_ids:
                tag_ids[tag] = str(uuid.uuid4())
                cur.execute(
                    'INSERT INTO tags (id, "userId", name) VALUES (%s, %s, %s)',
                    (tag_ids[tag], SEED_USER_ID, tag)
                )

            type_id = str(uuid.uuid4())
            cur.execute(
                '''INSERT INTO activity_types
                   (id, "userId", name, "tagId", "freqWinter", "freqSpring", "freqSummer", "freqFall")
                   VALUES (%s, %s, %s, %s, %s, %s, %s, %s)''',
                (type_id, SEED_USER_ID, name, tag_ids.get(tag), winter, spring, summer, fall)
            )

            for instant in generate_activity_dates(start, now, mean_interval, rng):
                cur.execute(
                    'INSERT INTO activities (id, "userId", "typeId", date) VALUES (%s, %s, %s, %s)',
                    (str(uuid.uuid4()), SEED_USER_ID, type_id, instant)
                )
                total += 1

        # A week off for all cardio activities, halfway through the period
        off_start = (start + timedelta(weeks=num_weeks // 2)).date()
        cur.execute(
            '''INSERT INTO off_times (id, "userId", "tagId", "startDate", "endDate")
               VALUES (%s, %s, %s, %s, %s)''',
            (str(uuid.uuid4()), SEED_USER_ID, tag_ids["cardio"],
             off_start, off_start + timedelta(days=6))
        )

    conn.commit()
    return total


def main():
    print("\n📅 Frequency Tracker - Test Data Generator")
    print("=" * 50)

    if not os.getenv('DB_PASSWORD'):
        print("❌ Error: DB_PASSWORD not found in .env file")
        print("   Make sure you have a .env file with your database credentials")
        sys.exit(1)

    try:
        conn = get_connection()
        print("✓ Connected to database")
    except psycopg2.Error as e:
        print(f"❌ Database connection failed: {e}")
        sys.exit(1)

    try:
        print(f"\n⚠️  This will DELETE data for user '{SEED_USER_ID}' and create new test data.")
        response = input("Continue? (y/n): ").strip().lower()

        if response != 'y':
            print("Cancelled.")
            sys.exit(0)

        clear_existing_data(conn)

        print("\nGenerating 16 weeks of activity data...")
        total = seed(conn, num_weeks=16)
        print(f"✓ Created {len(SAMPLE_TYPES)} activity types with {total} activities")

        print("\n✅ Test data generated successfully!")
        print("\nYou can now test:")
        print("  • http://localhost:8000/docs (Swagger UI)")
        print(f"  • http://localhost:8000/recommendations?user_id={SEED_USER_ID}")
        print(f"  • http://localhost:8000/analytics?user_id={SEED_USER_ID}")

    except psycopg2.Error as e:
        conn.rollback()
        print(f"\n❌ Error: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
