import re
from datetime import datetime, timezone

from .constants import TIME_FORMAT

# Alertmanager sends nanosecond precision; datetime keeps microseconds
_FRACTION_RE = re.compile(r'\.(\d+)')


def _is_meaningful(value):
    if value is None:
        return False
    return str(value).strip() != ""


def parse_timestamp(value):
    """Parse an Alertmanager RFC3339 timestamp.

    Returns None for empty values and for Go's zero time, which Alertmanager
    uses as ``endsAt`` of alerts that are still firing.
    """
    if not _is_meaningful(value):
        return None
    text = str(value).strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    text = _FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if dt.year <= 1:
        return None
    return dt


def format_timestamp(dt):
    if dt is None:
        return 'N/A'
    return dt.astimezone().strftime(TIME_FORMAT)
