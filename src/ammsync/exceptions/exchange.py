from typing import Any

from ammsync.exceptions.base import AmmSyncValueError, ItemError


class PoolDecodeError(ItemError):
    """
    Raised when a pool creation log cannot be decoded into a pool.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(message=f"Could not decode pool creation log: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.reason,)


class UnknownExchange(AmmSyncValueError):
    """
    Raised when an exchange name is not registered for the requested chain.
    """

    def __init__(self, chain_id: int, name: str) -> None:
        self.chain_id = chain_id
        self.name = name
        super().__init__(message=f"No exchange named {name!r} is registered on chain {chain_id}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.chain_id, self.name)


class ExchangeAlreadyRegistered(AmmSyncValueError):
    """
    Raised when registering an exchange whose name or factory is already known.
    """
