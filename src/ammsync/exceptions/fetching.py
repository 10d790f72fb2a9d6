"""
Data fetching exceptions for the ammsync package.

These are raised by the chain client when a request to the endpoint fails. All of them are
infrastructure-class errors.
"""

from typing import Any

from eth_typing import ChecksumAddress

from ammsync.exceptions.base import InfrastructureError
from ammsync.types.aliases import BlockNumber


class FetchingError(InfrastructureError):
    """
    Base exception for data fetching errors.
    """


class BlockHeightFetchingError(FetchingError):
    """
    Raised when the current block height cannot be retrieved.
    """

    def __init__(self) -> None:
        super().__init__(message="Could not fetch the current block height.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class LogFetchingError(FetchingError):
    """
    Raised when event logs cannot be retrieved for a block range.
    """

    def __init__(self, from_block: BlockNumber, to_block: BlockNumber) -> None:
        self.from_block = from_block
        self.to_block = to_block
        super().__init__(message=f"Could not fetch logs for block range {from_block}-{to_block}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.from_block, self.to_block)


class ContractCallError(FetchingError):
    """
    Raised when an eth_call fails at the transport level.
    """

    def __init__(self, address: ChecksumAddress) -> None:
        self.address = address
        super().__init__(message=f"Call to {address} failed.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.address,)
