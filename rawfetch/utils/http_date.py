import logging
from datetime import datetime, timezone
from email.utils import formatdate
from typing import Optional, Union

logger = logging.getLogger(__name__)


def to_epoch_seconds(value: Union[int, float, str, datetime, None]) -> Optional[float]:
    """Normalize a previous-fetch hint to POSIX seconds.

    Accepts epoch seconds, a datetime (naive values are taken as UTC) or an
    ISO datetime string. Returns None if the value is missing, unparsable or
    not positive.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        logger.debug("Ignoring boolean fetch time: %r", value)
        return None
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        if isinstance(value, datetime):
            dt = value
        else:
            try:
                dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except (AttributeError, ValueError):
                logger.debug("Could not parse datetime string: %s", value)
                return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        seconds = dt.timestamp()
    return seconds if seconds > 0 else None


def format_http_date(seconds: float) -> str:
    """RFC 1123 date in GMT, e.g. 'Sun, 06 Nov 1994 08:49:37 GMT'."""
    return formatdate(seconds, usegmt=True)
