# Defaults for a run when neither the config file nor the CLI says otherwise.
DEFAULT_RETENTION_DAYS = 3
DEFAULT_INVENTORY_REPORT = "backupsFrom.log"
DEFAULT_COPY_REPORT = "backupsTo.log"

INVENTORY_HEADER = ["name", "size_bytes", "created_at_utc", "modified_at_utc"]
COPY_HEADER = INVENTORY_HEADER + ["action", "status"]

ACTION_COPY = "copy"
ACTION_SKIP = "skip"

STATUS_COPIED = "copied"
STATUS_COPIED_DRY_RUN = "copied(dry-run)"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"
