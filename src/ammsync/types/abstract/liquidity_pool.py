from typing import TYPE_CHECKING

from eth_typing import BlockIdentifier, ChecksumAddress
from hexbytes import HexBytes

from ammsync.types.aliases import ChainId

if TYPE_CHECKING:
    from ammsync.types.abstract.chain_client import ChainClient


class AbstractLiquidityPool:
    """
    A liquidity pool tracked by address. Two pools are equal if they share an address, so pools
    collected from different block windows or different runs can be compared as sets.
    """

    address: ChecksumAddress
    chain_id: ChainId
    factory: ChecksumAddress
    name: str

    async def refresh_state(
        self,
        client: "ChainClient",
        block_identifier: BlockIdentifier | None = None,
    ) -> None:
        """
        Retrieve the current on-chain state for the pool and record it.

        Raises an `ItemError` if the pool returns malformed data or reverts, and an
        `InfrastructureError` if the endpoint fails.
        """
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        match other:
            case AbstractLiquidityPool():
                return self.address == other.address
            case HexBytes():
                return self.address.lower() == other.to_0x_hex().lower()
            case bytes():
                return self.address.lower() == "0x" + other.hex().lower()
            case str():
                return self.address.lower() == other.lower()
            case _:
                return NotImplemented

    def __lt__(self, other: object) -> bool:
        match other:
            case AbstractLiquidityPool():
                return self.address < other.address
            case str():
                return self.address.lower() < other.lower()
            case _:
                return NotImplemented

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self) -> str:
        return self.name
