from pathlib import Path
from datetime import datetime, timezone

from .errors import ConfigurationError

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def from_timestamp(ts: float) -> datetime:
    """POSIX timestamp -> aware UTC datetime."""
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def to_iso_utc(moment: datetime) -> str:
    """
    Format as an ISO-8601 instant, e.g. 2024-05-01T12:00:00Z.
    Fractional seconds are only printed when present.
    """
    text = moment.astimezone(timezone.utc).replace(tzinfo=None).isoformat()
    return text + "Z"


def ensure_directory(path: Path) -> Path:
    """Create the directory (and parents) if missing; return the resolved path."""
    p = Path(path).expanduser().resolve()
    if p.exists() and not p.is_dir():
        raise ConfigurationError(f"Not a directory: {p}")
    p.mkdir(parents=True, exist_ok=True)
    return p
