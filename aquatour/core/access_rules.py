"""Access Rules — pure helpers for login sessions.

Invariants:
    - Durations are truncated to whole minutes
    - Naive timestamps are read as UTC
"""

from datetime import datetime, timezone


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_session_duration(logged_in_at: datetime, logged_out_at: datetime) -> str:
    """'2h 5m', '42m', or 'Less than 1m' for sessions under a minute."""
    seconds = (as_utc(logged_out_at) - as_utc(logged_in_at)).total_seconds()
    total_minutes = max(int(seconds // 60), 0)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return "Less than 1m"
