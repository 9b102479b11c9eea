from datetime import datetime, tzinfo
from typing import Optional


def _local_tzinfo() -> Optional[tzinfo]:
    return datetime.now().astimezone().tzinfo


def now_local() -> datetime:
    return datetime.now().astimezone()


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp, resolving naive values to local time.

    Accepts a trailing ``Z`` for UTC and a space instead of ``T``. Raises
    ``ValueError`` when the text is not a timestamp.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty timestamp")
    if raw[-1] in ("Z", "z"):
        raw = raw[:-1] + "+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=_local_tzinfo())
    return parsed


def format_timestamp(dt: datetime) -> str:
    return dt.isoformat()


def seconds_between(start: datetime, end: datetime) -> int:
    # int() truncates toward zero for both signs
    return int((end - start).total_seconds())


def format_remaining(seconds: int) -> str:
    total = abs(int(seconds))
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    sign = "-" if seconds < 0 else ""
    return f"{sign}{days}d {hours:02d}:{minutes:02d}:{secs:02d}"
