from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import json

from .defaults import DEFAULT_COPY_REPORT, DEFAULT_INVENTORY_REPORT, DEFAULT_RETENTION_DAYS
from .errors import ConfigurationError

@dataclass(frozen=True)
class JobConfig:
    source: Path
    destination: Path
    log_dir: Path
    retention_days: int = DEFAULT_RETENTION_DAYS
    dry_run: bool = False
    inventory_report: str = DEFAULT_INVENTORY_REPORT
    copy_report: str = DEFAULT_COPY_REPORT

    def validate(self) -> None:
        if not self.source.exists() or not self.source.is_dir():
            raise ConfigurationError(f"Source folder invalid: {self.source}")
        if isinstance(self.retention_days, bool) or not isinstance(self.retention_days, int):
            raise ConfigurationError(f"retention_days must be an integer, got {self.retention_days!r}")
        if self.retention_days < 0:
            raise ConfigurationError("retention_days must be >= 0")
        if not isinstance(self.dry_run, bool):
            raise ConfigurationError(f"dry_run must be true or false, got {self.dry_run!r}")
        if self.destination.exists() and self.destination.resolve() == self.source.resolve():
            raise ConfigurationError("Destination cannot be the source folder.")
        for name in (self.inventory_report, self.copy_report):
            if not isinstance(name, str) or not name or Path(name).name != name:
                raise ConfigurationError(f"Report name must be a plain file name: {name!r}")
        if self.inventory_report == self.copy_report:
            raise ConfigurationError("Inventory and copy reports need different names.")


PATH_KEYS = ("source", "destination", "log_dir")


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """
    Read overrides from a JSON file. Keys are JobConfig field names;
    path values are expanded relative to the user's home.
    """
    if path is None:
        return {}
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must hold a JSON object: {path}")

    known = {f.name for f in fields(JobConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")

    out: Dict[str, Any] = dict(data)
    for key in PATH_KEYS:
        value = out.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigurationError(f"{key} must be a path string, got {value!r}")
        out[key] = Path(value).expanduser()
    return out
