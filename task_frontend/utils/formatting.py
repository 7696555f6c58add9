# utils/formatting.py
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from markupsafe import Markup, escape

DEFAULT_DATE_PATTERN = "DD/MM/YYYY HH:mm"
LONG_DATE_PATTERN = "DD MMMM YYYY [at] HH:mm"
UNIX_SECONDS_PATTERN = "X"

FRACTION_RE = re.compile(r"(?<=:\d\d)\.(\d+)")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


# -----------------------------
# Text
# -----------------------------
def truncate(text: Optional[str], length: int = 100) -> str:
    if not text:
        return ""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def nl2br(text: Optional[str]) -> Markup:
    """
    Escape the text and turn newlines into <br> tags so multi-line
    descriptions keep their shape in HTML.
    """
    if not text:
        return Markup("")
    return escape(text).replace("\n", Markup("<br>"))


# -----------------------------
# Dates
# -----------------------------
def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string (a trailing 'Z' is accepted), a datetime or a
    date. Returns None when the value cannot be read as a point in time.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits.
    raw = FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), raw, count=1)

    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _to_local(dt: datetime) -> datetime:
    # Naive values are already local wall-clock time.
    if dt.tzinfo is None:
        return dt
    return dt.astimezone()


def format_date(value: Any, pattern: str = DEFAULT_DATE_PATTERN) -> Any:
    if value is None or value == "":
        return ""

    dt = parse_datetime(value)
    if dt is None:
        return value

    if pattern == UNIX_SECONDS_PATTERN:
        return str(math.floor(dt.timestamp()))

    local = _to_local(dt)
    day = f"{local.day:02d}"
    month = f"{local.month:02d}"
    clock = f"{local.hour:02d}:{local.minute:02d}"

    if pattern == LONG_DATE_PATTERN:
        return f"{day} {MONTH_NAMES[local.month - 1]} {local.year} at {clock}"

    if pattern == DEFAULT_DATE_PATTERN:
        return f"{day}/{month}/{local.year} {clock}"

    return f"{day}/{month}/{local.year}"


def is_overdue(value: Any, now: Optional[datetime] = None) -> bool:
    if not value:
        return False

    dt = parse_datetime(value)
    if dt is None:
        return False

    # Compare naive with naive (local) and aware with aware.
    if dt.tzinfo is None:
        reference = now or datetime.now()
        if reference.tzinfo is not None:
            reference = reference.astimezone().replace(tzinfo=None)
    else:
        reference = now or datetime.now(timezone.utc)
        if reference.tzinfo is None:
            reference = reference.astimezone()
    return dt < reference


def to_backend_datetime(value: Optional[str]) -> Optional[str]:
    """
    Convert a form value (e.g. an <input type="datetime-local"> string) to the
    UTC ISO-8601 form the backend expects, or None when it cannot be parsed.
    """
    dt = parse_datetime(value)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
