from collections.abc import Sequence

import aiohttp
from eth_typing import BlockIdentifier, ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncBaseProvider, AsyncWeb3
from web3._utils.threads import Timeout
from web3.exceptions import ContractLogicError, Web3Exception
from web3.types import FilterParams, LogReceipt, TxParams

from ammsync.exceptions import (
    BlockHeightFetchingError,
    ContractCallError,
    ContractCallReverted,
    LogFetchingError,
)
from ammsync.logging import logger
from ammsync.types.aliases import BlockNumber

TRANSPORT_ERRORS = (aiohttp.ClientError, Timeout, TimeoutError, OSError, Web3Exception)


class Web3ChainClient:
    """
    A `ChainClient` backed by an `AsyncWeb3` instance.

    Transport failures are raised as `InfrastructureError` subclasses. A reverting call is raised as
    `ContractCallReverted`, which only affects the pool being queried.
    """

    def __init__(self, w3: AsyncWeb3[AsyncBaseProvider]) -> None:
        self.w3 = w3

    async def current_height(self) -> BlockNumber:
        try:
            return await self.w3.eth.get_block_number()
        except TRANSPORT_ERRORS as exc:
            logger.debug(f"Block height request failed: {exc!r}")
            raise BlockHeightFetchingError from exc

    async def get_logs(
        self,
        address: ChecksumAddress,
        topic: HexBytes,
        from_block: BlockNumber,
        to_block: BlockNumber,
    ) -> Sequence[LogReceipt]:
        try:
            return await self.w3.eth.get_logs(
                FilterParams(
                    address=address,
                    fromBlock=from_block,
                    toBlock=to_block,
                    topics=[topic],
                )
            )
        except TRANSPORT_ERRORS as exc:
            logger.debug(f"Log request for {from_block}-{to_block} failed: {exc!r}")
            raise LogFetchingError(from_block=from_block, to_block=to_block) from exc

    async def call(
        self,
        address: ChecksumAddress,
        calldata: bytes,
        block_identifier: BlockIdentifier | None = None,
    ) -> bytes:
        try:
            return await self.w3.eth.call(
                transaction=TxParams(to=address, data=calldata),
                block_identifier=block_identifier,
            )
        except ContractLogicError as exc:
            raise ContractCallReverted(address=address) from exc
        except TRANSPORT_ERRORS as exc:
            logger.debug(f"Call to {address} failed: {exc!r}")
            raise ContractCallError(address=address) from exc
