# =============================================================================
# core/session.py  —  Session Identifiers
# =============================================================================
#
# Unomi groups events into sessions.  We derive the session id from the
# profile id and the UTC calendar date, so every call for the same profile on
# the same day lands in the same session: one logical session per profile
# per day.
# =============================================================================

from datetime import datetime, timezone
from typing import Optional


def generate_session_id(profile_id: str, now: Optional[datetime] = None) -> str:
    """Return ``{profile_id}-{YYYYMMDD}`` for the current UTC date.

    Args:
        profile_id: The profile the session belongs to.
        now: Override for the current time.  Naive datetimes are taken as UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{profile_id}-{now.strftime('%Y%m%d')}"
