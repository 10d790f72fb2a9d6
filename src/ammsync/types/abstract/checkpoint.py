from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ammsync.types.aliases import BlockNumber

if TYPE_CHECKING:
    from ammsync.types.abstract.deployment import AbstractExchangeDeployment
    from ammsync.types.abstract.liquidity_pool import AbstractLiquidityPool


class CheckpointSink(Protocol):
    """
    Persists the result of a completed synchronization run.
    """

    def write(
        self,
        exchanges: Sequence["AbstractExchangeDeployment"],
        pools: Sequence["AbstractLiquidityPool"],
        block_number: BlockNumber,
        destination: Path | str,
    ) -> None: ...
