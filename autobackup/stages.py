"""
The three passes of a backup run. Each pass takes its own listing of the
source folder, so files changed by someone else between passes are seen
as they are at that moment.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Union

from .classifier import CutoffPolicy
from .defaults import (
    ACTION_COPY, ACTION_SKIP, COPY_HEADER, INVENTORY_HEADER,
    STATUS_COPIED, STATUS_COPIED_DRY_RUN, STATUS_ERROR, STATUS_SKIPPED,
)
from .errors import AttributeReadError, FileOperationError
from .logger import CsvReportWriter
from .models import Age, CopyResult, FileRecord, RemovalResult
from .mover import SafeCopier, SafeRemover
from .scanner import FolderScanner

logger = logging.getLogger(__name__)


class InventoryStage:
    """Writes name/size/created/modified for every file. Read-only."""

    def run(self, source_dir: Path, report_path: Path) -> List[Union[FileRecord, AttributeReadError]]:
        logger.info("Inventory of %s", source_dir)
        items = list(FolderScanner(source_dir).scan())
        results: List[Union[FileRecord, AttributeReadError]] = []
        with CsvReportWriter(report_path, INVENTORY_HEADER) as report:
            for p, item in items:
                if isinstance(item, AttributeReadError):
                    report.write_row([p.name, "", "", "", ""])
                else:
                    report.write_row(item.columns())
                results.append(item)
        logger.info("Inventory: %d files -> %s", len(results), report_path)
        return results


class RetentionStage:
    def __init__(self, dry_run: bool = False):
        self.remover = SafeRemover(dry_run=dry_run)

    def process(self, p: Path, item: Union[FileRecord, AttributeReadError],
                policy: CutoffPolicy) -> RemovalResult:
        if isinstance(item, AttributeReadError):
            return RemovalResult(p, p.name, age=None, performed=False, error=item)
        age = policy.classify(item)
        if age is Age.RECENT:
            logger.debug("keep: %s", p)
            return RemovalResult(p, item.name, age, performed=False)
        try:
            performed = self.remover.remove(item)
        except FileOperationError as e:
            logger.warning("Cannot remove %s: %s", p, e.detail)
            return RemovalResult(p, item.name, age, performed=False, error=e)
        return RemovalResult(p, item.name, age, performed=performed)

    def run(self, source_dir: Path, retention_days: int, now: datetime) -> List[RemovalResult]:
        policy = CutoffPolicy(retention_days, now)
        logger.info("Removing files in %s created before %s", source_dir, policy.cutoff)
        results = [self.process(p, item, policy) for p, item in FolderScanner(source_dir).scan()]
        logger.info(
            "Retention: %d old, %d removed, %d failed",
            sum(1 for r in results if r.age is Age.OLD),
            sum(1 for r in results if r.performed),
            sum(1 for r in results if r.failed),
        )
        return results


class CopyStage:
    def __init__(self, dest_dir: Path, dry_run: bool = False):
        self.dry_run = dry_run
        self.copier = SafeCopier(dest_dir, dry_run=dry_run)

    def process(self, p: Path, item: Union[FileRecord, AttributeReadError],
                policy: CutoffPolicy) -> CopyResult:
        if isinstance(item, AttributeReadError):
            # Never classified, so neither copy nor skip: the action column stays empty.
            return CopyResult(p.name, "", STATUS_ERROR, error=item)
        if policy.classify(item) is Age.OLD:
            return CopyResult(item.name, ACTION_SKIP, STATUS_SKIPPED, record=item)
        try:
            self.copier.copy(item)
        except FileOperationError as e:
            logger.warning("Cannot copy %s: %s", p, e.detail)
            return CopyResult(item.name, ACTION_COPY, STATUS_ERROR, record=item, error=e)
        status = STATUS_COPIED_DRY_RUN if self.dry_run else STATUS_COPIED
        return CopyResult(item.name, ACTION_COPY, status, record=item)

    def run(self, source_dir: Path, retention_days: int, now: datetime,
            report_path: Path) -> List[CopyResult]:
        policy = CutoffPolicy(retention_days, now)
        logger.info("Copying files of %s created since %s to %s",
                    source_dir, policy.cutoff, self.copier.dest_dir)
        items = list(FolderScanner(source_dir).scan())
        results: List[CopyResult] = []
        with CsvReportWriter(report_path, COPY_HEADER) as report:
            for p, item in items:
                res = self.process(p, item, policy)
                report.write_row(res.row())
                results.append(res)
        logger.info("Copy: %d files -> %s", len(results), report_path)
        return results
