from pathlib import Path
import logging
import shutil

from .errors import CopyError, DeletionError
from .models import FileRecord

logger = logging.getLogger(__name__)


class SafeRemover:
    def __init__(self, dry_run: bool = True):
        self.dry_run = dry_run

    def remove(self, rec: FileRecord) -> bool:
        """Delete one file. Returns True if something was (or already was) removed."""
        if self.dry_run:
            logger.info("[dry-run] would remove: %s", rec.path)
            return False
        try:
            # Someone else deleting it first is fine.
            rec.path.unlink(missing_ok=True)
        except OSError as e:
            raise DeletionError(rec.name, str(e)) from e
        logger.info("removed: %s", rec.path)
        return True


class SafeCopier:
    def __init__(self, dest_dir: Path, dry_run: bool = True):
        self.dest_dir = dest_dir
        self.dry_run = dry_run

    def copy(self, rec: FileRecord) -> Path:
        target = self.dest_dir / rec.name
        if self.dry_run:
            logger.info("[dry-run] would copy: %s -> %s", rec.path, target)
            return target
        if target.is_dir():
            raise CopyError(rec.name, f"destination is a directory: {target}")
        try:
            # copy2 overwrites and keeps timestamps/permissions where possible
            shutil.copy2(rec.path, target)
        except OSError as e:
            raise CopyError(rec.name, str(e)) from e
        logger.info("copied: %s -> %s", rec.path, target)
        return target
