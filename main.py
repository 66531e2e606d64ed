import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from autobackup.config import JobConfig, load_config
from autobackup.defaults import DEFAULT_RETENTION_DAYS
from autobackup.errors import AutoBackupError, ConfigurationError
from autobackup.job import BackupJob

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List a folder, purge files older than N days and back up the rest."
    )
    parser.add_argument("--from", dest="source", type=Path, help="Source folder")
    parser.add_argument("--to", dest="destination", type=Path, help="Backup destination folder")
    parser.add_argument("--log-dir", type=Path, help="Folder for the CSV reports")
    parser.add_argument("--days", dest="retention_days", type=int, default=None,
                        help=f"Keep files created within this many days (default: {DEFAULT_RETENTION_DAYS})")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="Classify and report only; remove and copy nothing")
    parser.add_argument("--config", type=Path, help="JSON file with default settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def make_config(args: argparse.Namespace) -> JobConfig:
    settings = load_config(args.config)
    overrides = {
        "source": args.source,
        "destination": args.destination,
        "log_dir": args.log_dir,
        "retention_days": args.retention_days,
        "dry_run": args.dry_run,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})

    missing = [k for k in ("source", "destination", "log_dir") if settings.get(k) is None]
    if missing:
        flags = {"source": "--from", "destination": "--to", "log_dir": "--log-dir"}
        raise ConfigurationError("Required: " + ", ".join(flags[k] for k in missing))
    cfg = JobConfig(**settings)
    cfg.validate()
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        cfg = make_config(args)
        summary = BackupJob(cfg).run()
    except ConfigurationError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except AutoBackupError as e:
        logging.getLogger(__name__).exception("Run aborted")
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print("[OK] Done.")
    print(f" - Inventory: {summary.inventory_path}")
    print(f" - Copy log: {summary.copy_path}")
    print(f" - Removed {summary.removed}, copied {summary.copied}, failures {summary.failures}")
    if summary.dry_run:
        print(" (NOTE) --dry-run: nothing was removed or copied.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
