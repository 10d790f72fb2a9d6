from pathlib import Path
from typing import Any

from ammsync.exceptions.base import AmmSyncError


class CheckpointError(AmmSyncError):
    """
    Raised when a checkpoint cannot be written or read.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(message=f"Checkpoint {path}: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.path, self.reason)
