import math
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo
from typing import Optional

INDIA_TZ = ZoneInfo("Asia/Kolkata")

# A tournament counts as live for this long after its start time
LIVE_DURATION = timedelta(hours=4)
LIVE_DURATION_MS = LIVE_DURATION.total_seconds() * 1000
MS_PER_DAY = 24 * 60 * 60 * 1000

# Browser re-evaluation cadence (list/detail status, detail countdown)
STATUS_REFRESH_SECONDS = 30
COUNTDOWN_TICK_SECONDS = 1

UPCOMING = "Upcoming"
LIVE = "Live"
COMPLETED = "Completed"


def utc_to_india(dt: Optional[datetime]) -> Optional[datetime]:
    if not dt:
        return None

    # Treat naive DB values as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(INDIA_TZ)


def india_now() -> datetime:
    return datetime.now(INDIA_TZ)


def india_today() -> date:
    return india_now().date()


def parse_time(time_str) -> tuple[int, int]:
    """
    "07:00 PM" -> (19, 0), "12:30 AM" -> (0, 30), "12:00 PM" -> (12, 0).

    Anything without both a ':' and a ' ' (or with non-numeric parts)
    degrades to (0, 0) instead of raising.
    """
    if not time_str or ":" not in time_str or " " not in time_str:
        return 0, 0

    clock, ampm = time_str.split(" ")[:2]
    try:
        pieces = clock.split(":")
        hours = int(pieces[0])
        minutes = int(pieces[1])
    except (ValueError, IndexError):
        return 0, 0

    ampm = ampm.lower()
    if ampm == "pm" and hours < 12:
        hours += 12
    if ampm == "am" and hours == 12:
        hours = 0
    return hours, minutes


def parse_date(value) -> Optional[date]:
    """Accept a date, a datetime or an ISO "YYYY-MM-DD" string."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def format_time(hour: str, minute: str, ampm: str) -> str:
    """Build the stored "HH:MM AM" string from the three form selects."""
    return f"{int(hour):02d}:{int(minute):02d} {ampm.upper()}"


def tournament_start(date_value, time_str) -> Optional[datetime]:
    """Start instant (IST) for a stored date + "H:MM AM/PM" string."""
    day = parse_date(date_value)
    if day is None or not time_str:
        return None

    hours, minutes = parse_time(time_str)
    midnight = datetime.combine(day, time(0, 0), tzinfo=INDIA_TZ)
    # Added as a delta so out-of-range hours roll into the next day
    return midnight + timedelta(hours=hours, minutes=minutes)


def _as_india(now: Optional[datetime]) -> datetime:
    if now is None:
        return india_now()
    # Naive "now" is wall-clock time in India
    if now.tzinfo is None:
        return now.replace(tzinfo=INDIA_TZ)
    return now.astimezone(INDIA_TZ)


def _status(status: str, message: str, time_diff_ms: float) -> dict:
    return {
        "status": status,
        "message": message,
        "is_live": status == LIVE,
        "is_upcoming": status == UPCOMING,
        "is_completed": status == COMPLETED,
        "time_diff_ms": time_diff_ms,
    }


def get_tournament_status(date_value, time_str, now: Optional[datetime] = None) -> dict:
    """
    Classify a tournament as Upcoming / Live / Completed relative to `now`.

    Pure: nothing is cached or stored, so the same inputs and the same `now`
    always give the same dict. Upcoming -> Live -> Completed only moves
    forward with the clock and Completed is terminal.
    """
    start = tournament_start(date_value, time_str)
    if start is None:
        return _status(UPCOMING, "Date & Time TBA", math.inf)

    time_diff_ms = (start - _as_india(now)).total_seconds() * 1000

    if time_diff_ms > 0:
        days = math.floor(time_diff_ms / MS_PER_DAY)
        if days > 1:
            message = f"Starts in {days} days"
        elif days == 1:
            message = "Starts in 1 day"
        else:
            message = "Starts soon"
        return _status(UPCOMING, message, time_diff_ms)

    if time_diff_ms > -LIVE_DURATION_MS:
        return _status(LIVE, "LIVE NOW", time_diff_ms)

    return _status(COMPLETED, "Completed", time_diff_ms)


def status_for(tournament, now: Optional[datetime] = None) -> dict:
    return get_tournament_status(tournament.date, tournament.time, now=now)


def countdown_parts(date_value, time_str, now: Optional[datetime] = None) -> Optional[dict]:
    """
    Days/hours/minutes/seconds until start for the detail page countdown.
    All zero once the tournament has started; None when date/time is TBA.
    """
    start = tournament_start(date_value, time_str)
    if start is None:
        return None

    remaining = int(max(0, (start - _as_india(now)).total_seconds()))
    days, rest = divmod(remaining, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return {"days": days, "hours": hours, "minutes": minutes, "seconds": seconds}
