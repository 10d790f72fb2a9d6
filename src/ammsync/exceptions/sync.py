from typing import Any

from ammsync.exceptions.base import AmmSyncError


class WorkerFault(AmmSyncError):
    """
    Raised when a worker task fails with an exception that is not an `AmmSyncError`.

    A fault is distinct from a reported infrastructure or item error: it indicates a bug or an
    unexpected condition, so the enclosing call is terminated instead of returning a partial result.
    The original exception is available at `.fault` and as `__cause__`.
    """

    def __init__(self, fault: BaseException) -> None:
        self.fault = fault
        super().__init__(message=f"Worker task failed unexpectedly: {fault!r}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.fault,)
