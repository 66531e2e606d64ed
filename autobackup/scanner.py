import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .errors import AttributeReadError
from .models import FileRecord
from .utils import from_timestamp

logger = logging.getLogger(__name__)


def native_creation_time(st: os.stat_result) -> Optional[float]:
    """Birth time if the platform exposes one through stat()."""
    return getattr(st, "st_birthtime", None)


def creation_timestamp(st: os.stat_result) -> float:
    """
    Best-effort creation time. Filesystems without birth times either
    don't report one or report something at/before the epoch; in both
    cases the modification time stands in.
    """
    born = native_creation_time(st)
    if born is None or born <= 0:
        return st.st_mtime
    return born


def resolve_attributes(path: Path) -> FileRecord:
    try:
        st = path.stat()
        created_at = from_timestamp(creation_timestamp(st))
        modified_at = from_timestamp(st.st_mtime)
    except (OSError, OverflowError, ValueError) as e:
        # stat() failed, or a timestamp outside what datetime can hold
        raise AttributeReadError(path.name, str(e)) from e
    return FileRecord(
        path=path,
        name=path.name,
        size=st.st_size,
        created_at=created_at,
        modified_at=modified_at,
    )


ScanItem = Tuple[Path, Union[FileRecord, AttributeReadError]]


class FolderScanner:
    """Lists the regular files directly inside a folder, sorted by name."""

    def __init__(self, root: Path):
        self.root = root

    def list_files(self) -> List[Path]:
        files = [p for p in self.root.iterdir() if p.is_file()]
        files.sort(key=lambda p: p.name)
        return files

    def scan(self) -> Iterator[ScanItem]:
        """Yield (path, record) pairs, or (path, error) when stat() fails."""
        for p in self.list_files():
            try:
                yield p, resolve_attributes(p)
            except AttributeReadError as e:
                logger.warning("Cannot read attributes of %s: %s", p, e.detail)
                yield p, e
