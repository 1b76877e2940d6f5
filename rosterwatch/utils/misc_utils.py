# rosterwatch/utils/misc_utils.py
import re
from datetime import datetime, timezone
from typing import Optional


def generate_canonical_id(*args: str) -> str:
    """Generates a consistent, filename-safe key from one or more strings."""
    combined = "_".join(str(arg).lower() for arg in args if arg)
    # Remove non-alphanumeric characters (except underscore and dash)
    return re.sub(r"[^\w-]+", "", combined.replace(" ", "_"))


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )
