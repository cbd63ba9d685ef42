"""Session ids are {profileId}-{YYYYMMDD} on the UTC calendar."""

import re
from datetime import datetime, timedelta, timezone

from core.session import generate_session_id


def test_format():
    assert re.fullmatch(r"user123-\d{8}", generate_session_id("user123"))


def test_same_day_is_stable():
    morning = datetime(2024, 3, 9, 0, 5, tzinfo=timezone.utc)
    night = datetime(2024, 3, 9, 23, 55, tzinfo=timezone.utc)
    assert generate_session_id("user123", morning) == generate_session_id("user123", night)
    assert generate_session_id("user123", morning) == "user123-20240309"


def test_different_days_differ():
    day = datetime(2024, 3, 9, 12, tzinfo=timezone.utc)
    first = generate_session_id("user123", day)
    second = generate_session_id("user123", day + timedelta(days=1))
    assert first != second
    assert second == "user123-20240310"


def test_uses_utc_date_not_local():
    # 22:00 in UTC-5 is already the next day in UTC.
    eastern = timezone(timedelta(hours=-5))
    local = datetime(2024, 12, 31, 22, 0, tzinfo=eastern)
    assert generate_session_id("p", local) == "p-20250101"


def test_two_calls_now_agree():
    assert generate_session_id("user123") == generate_session_id("user123")
