class AutoBackupError(Exception):
    """Base error for the project."""


class ConfigurationError(AutoBackupError):
    pass


class ReportCommitError(AutoBackupError):
    pass


class FileOperationError(AutoBackupError):
    """A failure confined to a single file of the source directory."""
    def __init__(self, name: str, detail: str):
        super().__init__(f"{name}: {detail}")
        self.name = name
        self.detail = detail


class AttributeReadError(FileOperationError):
    pass


class DeletionError(FileOperationError):
    pass


class CopyError(FileOperationError):
    pass
