from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .defaults import STATUS_ERROR
from .errors import FileOperationError
from .utils import to_iso_utc

class Age(Enum):
    OLD = "old"
    RECENT = "recent"


@dataclass(frozen=True)
class FileRecord:
    path: Path
    name: str
    size: int
    created_at: datetime  # best-effort, falls back to modified_at
    modified_at: datetime

    def columns(self) -> List[str]:
        return [
            self.name,
            str(self.size),
            to_iso_utc(self.created_at),
            to_iso_utc(self.modified_at),
        ]


@dataclass(frozen=True)
class RemovalResult:
    path: Path
    name: str
    age: Optional[Age]  # None if attributes could not be read
    performed: bool  # False for recent files, dry-run and failures
    error: Optional[FileOperationError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class CopyResult:
    name: str
    action: str  # "copy", "skip" or "" when the file could not be classified
    status: str
    record: Optional[FileRecord] = None
    error: Optional[FileOperationError] = None

    @property
    def failed(self) -> bool:
        return self.status == STATUS_ERROR

    def row(self) -> List[str]:
        if self.record is not None:
            cols = self.record.columns()
        else:
            cols = [self.name, "", "", ""]
        cols += [self.action, self.status]
        if self.error is not None:
            cols.append(self.error.detail)
        return cols
