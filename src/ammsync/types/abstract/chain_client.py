from collections.abc import Sequence
from typing import Protocol

from eth_typing import BlockIdentifier, ChecksumAddress
from hexbytes import HexBytes
from web3.types import LogReceipt

from ammsync.types.aliases import BlockNumber


class ChainClient(Protocol):
    """
    The subset of chain RPC used by the synchronizer.

    Implementations raise an `InfrastructureError` subclass on transport failures. The crawler
    never requests logs past the height returned by `current_height`.
    """

    async def current_height(self) -> BlockNumber: ...

    async def get_logs(
        self,
        address: ChecksumAddress,
        topic: HexBytes,
        from_block: BlockNumber,
        to_block: BlockNumber,
    ) -> Sequence[LogReceipt]: ...

    async def call(
        self,
        address: ChecksumAddress,
        calldata: bytes,
        block_identifier: BlockIdentifier | None = None,
    ) -> bytes: ...
