from pathlib import Path

import click
from pydantic import HttpUrl, WebsocketUrl
from web3 import (
    AsyncBaseProvider,
    AsyncHTTPProvider,
    AsyncIPCProvider,
    AsyncWeb3,
    WebSocketProvider,
)

from ammsync.config import CONFIG_FILE, settings
from ammsync.connection import Web3ChainClient, set_async_web3
from ammsync.types.aliases import ChainId


async def get_async_web3_from_config(
    *, chain_id: ChainId, optimize: bool = True
) -> AsyncWeb3[AsyncBaseProvider]:
    match endpoint := settings.rpc.get(chain_id):
        case HttpUrl():
            w3 = AsyncWeb3(AsyncHTTPProvider(str(endpoint)))
        case WebsocketUrl():
            w3 = await AsyncWeb3(WebSocketProvider(str(endpoint)))
        case Path():
            w3 = await AsyncWeb3(AsyncIPCProvider(str(endpoint)))
        case None:
            msg = f"Chain ID {chain_id} does not have an RPC defined in config file {CONFIG_FILE}"
            raise click.ClickException(msg)

    if (endpoint_chain_id := await w3.eth.chain_id) != chain_id:
        msg = (
            f"The chain ID ({endpoint_chain_id}) at endpoint {endpoint} does not match "
            f"the chain ID ({chain_id}) defined in the config file."
        )
        raise click.ClickException(msg)

    await set_async_web3(w3, optimize=optimize)
    return w3


async def get_chain_client_from_config(*, chain_id: ChainId) -> Web3ChainClient:
    return Web3ChainClient(await get_async_web3_from_config(chain_id=chain_id))
