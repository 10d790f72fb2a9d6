class AmmSyncError(Exception):
    """
    Base exception used as the parent class for all exceptions raised by this package.

    Calling code should catch `AmmSyncError` and derived classes separately before general
    exceptions, e.g.:

    ```
    try:
        await ammsync.sync_pools(...)
    except InfrastructureError:
        ... # the endpoint failed, retry the whole run later
    except WorkerFault:
        ... # a bug or unexpected condition inside a worker task
    except AmmSyncError:
        ... # handle non-specific ammsync exception
    except Exception:
        ... # handle exceptions raised by 3rd party dependencies or Python built-ins
    ```

    An optional string-formatted message may be attached to the exception and retrieved by accessing
    the `.message` attribute.
    """

    message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
            super().__init__(message)


class AmmSyncValueError(AmmSyncError): ...


class InfrastructureError(AmmSyncError):
    """
    Raised when the chain endpoint fails: unreachable, timed out, or returned a malformed response.

    These failures are fatal to the enclosing synchronization call and are never retried
    internally. Callers own retry and backoff of the whole run.
    """


class ItemError(AmmSyncError):
    """
    Raised when a single item (one creation log, or one pool) cannot be decoded or refreshed.

    During a state refresh the offending pool is dropped and the batch continues. During a crawl
    the error fails the block window that produced it.
    """
