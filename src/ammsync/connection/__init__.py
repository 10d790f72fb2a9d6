from web3 import AsyncBaseProvider, AsyncWeb3

from ammsync.exceptions import AmmSyncValueError
from ammsync.types.aliases import ChainId

from .async_connection_manager import AsyncConnectionManager
from .client import Web3ChainClient


def get_async_web3(chain_id: ChainId | None = None) -> AsyncWeb3[AsyncBaseProvider]:
    if chain_id is not None:
        return async_connection_manager.get_web3(chain_id=chain_id)
    if async_connection_manager._default_chain_id is None:  # noqa:SLF001
        raise AmmSyncValueError(message="A default Web3 instance has not been registered.")
    return async_connection_manager.get_web3(chain_id=async_connection_manager.default_chain_id)


async def set_async_web3(
    w3: AsyncWeb3[AsyncBaseProvider],
    *,
    optimize: bool = True,
) -> None:
    """
    Register the Web3 instance and make its chain the default. The connection is checked with
    retries before registering.
    """

    chain_id = await async_connection_manager.register_web3(w3, optimize=optimize)
    async_connection_manager.set_default_chain(chain_id)


def get_chain_client(chain_id: ChainId | None = None) -> Web3ChainClient:
    return Web3ChainClient(get_async_web3(chain_id))


async_connection_manager = AsyncConnectionManager()


__all__ = (
    "AsyncConnectionManager",
    "Web3ChainClient",
    "async_connection_manager",
    "get_async_web3",
    "get_chain_client",
    "set_async_web3",
)
