from datetime import datetime, timezone

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"


def current_iso_datetime(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return now.strftime(ISO_FORMAT)


def normalize_datetime(value: object, fallback: str) -> str:
    """Normalize an ISO-like date/time to YYYY-MM-DDTHH:MM:SS (UTC)."""
    if not value or not isinstance(value, str):
        return fallback
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return fallback
    return current_iso_datetime(parsed)


def format_duration(seconds: float) -> str:
    if seconds <= 0:
        return "0 ms"
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    if seconds < 60:
        return f"{seconds:.2f} s"
    return f"{seconds / 60:.2f} min"
