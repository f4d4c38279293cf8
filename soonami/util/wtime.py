import time
from datetime import datetime


def get_human_timestamp() -> str:
    now = int(time.time())
    dt = datetime.fromtimestamp(now)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def format_event_time(time_ms: int) -> str:
    """
    Take a Unix timestamp in milliseconds and render it in the local
    timezone, e.g., "Tue, 25 Feb 2014 at 01:02:21 UTC". Timestamps outside
    the platform's datetime range come back blank.
    """
    try:
        dt = datetime.fromtimestamp(time_ms / 1000).astimezone()
    except (ValueError, OverflowError, OSError):
        return ""
    # strftime has no portable unpadded day
    return dt.strftime(f"%a, {dt.day} %b %Y at %H:%M:%S %Z")
