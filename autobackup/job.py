from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Union
import logging

from .config import JobConfig
from .defaults import ACTION_COPY
from .errors import AttributeReadError
from .models import CopyResult, FileRecord, RemovalResult
from .stages import CopyStage, InventoryStage, RetentionStage
from .utils import ensure_directory, utc_now

logger = logging.getLogger(__name__)


@dataclass
class JobSummary:
    inventory_path: Path
    copy_path: Path
    dry_run: bool
    inventory: List[Union[FileRecord, AttributeReadError]] = field(default_factory=list)
    removals: List[RemovalResult] = field(default_factory=list)
    copies: List[CopyResult] = field(default_factory=list)

    @property
    def removed(self) -> int:
        return sum(1 for r in self.removals if r.performed)

    @property
    def copied(self) -> int:
        return sum(1 for c in self.copies if c.action == ACTION_COPY and not c.failed)

    @property
    def failures(self) -> int:
        return (
            sum(1 for i in self.inventory if isinstance(i, AttributeReadError))
            + sum(1 for r in self.removals if r.failed)
            + sum(1 for c in self.copies if c.failed)
        )


class BackupJob:
    """Inventory, then purge old files, then copy the recent ones."""

    def __init__(self, config: JobConfig, clock: Callable[[], datetime] = utc_now):
        self.config = config
        self.clock = clock

    def run(self) -> JobSummary:
        cfg = self.config
        cfg.validate()
        source = cfg.source.resolve()
        log_dir = ensure_directory(cfg.log_dir)
        dest = ensure_directory(cfg.destination)

        summary = JobSummary(
            inventory_path=log_dir / cfg.inventory_report,
            copy_path=log_dir / cfg.copy_report,
            dry_run=cfg.dry_run,
        )
        if cfg.dry_run:
            logger.info("Dry run: nothing will be removed or copied")

        summary.inventory = InventoryStage().run(source, summary.inventory_path)
        summary.removals = RetentionStage(cfg.dry_run).run(
            source, cfg.retention_days, self.clock()
        )
        summary.copies = CopyStage(dest, cfg.dry_run).run(
            source, cfg.retention_days, self.clock(), summary.copy_path
        )
        logger.info(
            "Done: %d removed, %d copied, %d per-file failures",
            summary.removed, summary.copied, summary.failures,
        )
        return summary
