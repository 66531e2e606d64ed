import csv
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from .errors import ReportCommitError

logger = logging.getLogger(__name__)


def tmp_path_for(target: Path) -> Path:
    return target.with_name(target.name + ".tmp")


def _fsync_directory(directory: Path) -> None:
    # Directories cannot be opened on Windows; the rename is already done.
    try:
        fd = os.open(str(directory), os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


class CsvReportWriter:
    """
    Writes a CSV report next to its target as <target>.tmp and makes it
    visible with a single os.replace() on commit. Readers see either the
    previous report or the complete new one.

    Usable as a context manager: a clean exit commits, an exception leaves
    the target untouched.
    """

    def __init__(self, target: Path, header: List[str]):
        self.target = Path(target)
        self.tmp = tmp_path_for(self.target)
        self.header = list(header)
        self.rows_written = 0
        self._fh: Optional[TextIO] = None
        self._writer = None

    def open(self) -> "CsvReportWriter":
        try:
            self._fh = self.tmp.open("w", newline="", encoding="utf-8")
        except OSError as e:
            raise ReportCommitError(f"Cannot create {self.tmp}: {e}") from e
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._write(self.header)
        return self

    def _write(self, row: List[str]) -> None:
        try:
            self._writer.writerow(row)
        except OSError as e:
            self.abandon()
            raise ReportCommitError(f"Cannot write {self.tmp}: {e}") from e

    def write_row(self, row: Iterable[str]) -> None:
        if self._writer is None:
            raise RuntimeError("report is not open")
        self._write(list(row))
        self.rows_written += 1

    def commit(self) -> Path:
        if self._fh is None:
            raise RuntimeError("report is not open")
        fh, self._fh, self._writer = self._fh, None, None
        try:
            fh.flush()
            os.fsync(fh.fileno())
        except OSError as e:
            raise ReportCommitError(f"Cannot flush {self.tmp}: {e}") from e
        finally:
            fh.close()
        try:
            os.replace(self.tmp, self.target)
        except OSError as e:
            raise ReportCommitError(f"Cannot move {self.tmp} over {self.target}: {e}") from e
        _fsync_directory(self.target.parent)
        logger.debug("Committed %s (%d rows)", self.target, self.rows_written)
        return self.target

    def abandon(self) -> None:
        """Close without committing; the .tmp file is overwritten by the next run."""
        if self._fh is None:
            return
        fh, self._fh, self._writer = self._fh, None, None
        try:
            fh.close()
        except OSError as e:
            logger.warning("Discarding unfinished %s: %s", self.tmp, e)

    def __enter__(self) -> "CsvReportWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.abandon()
