from typing import Any

from eth_typing import ChecksumAddress

from ammsync.exceptions.base import ItemError


class LiquidityPoolError(ItemError):
    """
    Exception raised inside liquidity pool helpers.
    """


class ContractCallReverted(LiquidityPoolError):
    """
    Raised when an eth_call against a pool or token contract reverts.
    """

    def __init__(self, address: ChecksumAddress) -> None:
        self.address = address
        super().__init__(message=f"Call to {address} reverted.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.address,)


class PoolStateError(LiquidityPoolError):
    """
    Raised when the state returned for a pool cannot be decoded.
    """

    def __init__(self, pool: ChecksumAddress) -> None:
        self.pool = pool
        super().__init__(message=f"Could not decode contract data for pool {pool}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.pool,)
