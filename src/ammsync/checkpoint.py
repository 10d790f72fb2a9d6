import time
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Literal

import pydantic

from ammsync.checksum_cache import get_checksum_address
from ammsync.exceptions import CheckpointError
from ammsync.logging import logger
from ammsync.types.aliases import BlockNumber
from ammsync.uniswap.exchange import Exchange, Pool
from ammsync.uniswap.types import ExchangeVariant
from ammsync.uniswap.v2_liquidity_pool import UniswapV2Pool
from ammsync.uniswap.v2_types import UniswapV2PoolState
from ammsync.uniswap.v3_liquidity_pool import UniswapV3Pool
from ammsync.uniswap.v3_types import UniswapV3PoolState


class ExchangeRecord(pydantic.BaseModel, frozen=True):
    name: str
    chain_id: int
    factory_address: str
    creation_block: BlockNumber
    variant: ExchangeVariant


class UniswapV2PoolRecord(pydantic.BaseModel, frozen=True):
    variant: Literal["uniswap_v2"] = "uniswap_v2"
    address: str
    token0: str
    token1: str
    factory: str
    chain_id: int
    fee: int
    token0_decimals: int | None
    token1_decimals: int | None
    reserves_token0: int
    reserves_token1: int
    block: BlockNumber | None


class UniswapV3PoolRecord(pydantic.BaseModel, frozen=True):
    variant: Literal["uniswap_v3"] = "uniswap_v3"
    address: str
    token0: str
    token1: str
    factory: str
    chain_id: int
    fee: int
    tick_spacing: int
    token0_decimals: int | None
    token1_decimals: int | None
    liquidity: int
    sqrt_price_x96: int
    tick: int
    block: BlockNumber | None


PoolRecord = Annotated[
    UniswapV2PoolRecord | UniswapV3PoolRecord,
    pydantic.Field(discriminator="variant"),
]


class Checkpoint(pydantic.BaseModel, frozen=True):
    """
    A snapshot of a completed synchronization run.

    `timestamp` is the Unix time at which the snapshot was taken, and `block_number` is the chain
    height observed after the run finished.
    """

    timestamp: int
    block_number: BlockNumber
    exchanges: list[ExchangeRecord]
    pools: list[PoolRecord]


def _exchange_to_record(exchange: Exchange) -> ExchangeRecord:
    return ExchangeRecord(
        name=exchange.name,
        chain_id=exchange.chain_id,
        factory_address=exchange.factory_address,
        creation_block=exchange.creation_block,
        variant=exchange.variant,
    )


def _pool_to_record(pool: Pool) -> UniswapV2PoolRecord | UniswapV3PoolRecord:
    match pool:
        case UniswapV2Pool():
            return UniswapV2PoolRecord(
                address=pool.address,
                token0=pool.token0,
                token1=pool.token1,
                factory=pool.factory,
                chain_id=pool.chain_id,
                fee=pool.fee,
                token0_decimals=pool.token0_decimals,
                token1_decimals=pool.token1_decimals,
                reserves_token0=pool.reserves_token0,
                reserves_token1=pool.reserves_token1,
                block=pool.update_block,
            )
        case UniswapV3Pool():
            return UniswapV3PoolRecord(
                address=pool.address,
                token0=pool.token0,
                token1=pool.token1,
                factory=pool.factory,
                chain_id=pool.chain_id,
                fee=pool.fee,
                tick_spacing=pool.tick_spacing,
                token0_decimals=pool.token0_decimals,
                token1_decimals=pool.token1_decimals,
                liquidity=pool.liquidity,
                sqrt_price_x96=pool.sqrt_price_x96,
                tick=pool.tick,
                block=pool.update_block,
            )


def _record_to_pool(record: UniswapV2PoolRecord | UniswapV3PoolRecord) -> Pool:
    match record:
        case UniswapV2PoolRecord():
            return UniswapV2Pool(
                address=record.address,
                token0=record.token0,
                token1=record.token1,
                factory=record.factory,
                chain_id=record.chain_id,
                fee=record.fee,
                token0_decimals=record.token0_decimals,
                token1_decimals=record.token1_decimals,
                state=UniswapV2PoolState(
                    address=record.address,
                    block=record.block,
                    reserves_token0=record.reserves_token0,
                    reserves_token1=record.reserves_token1,
                ),
            )
        case UniswapV3PoolRecord():
            return UniswapV3Pool(
                address=record.address,
                token0=record.token0,
                token1=record.token1,
                factory=record.factory,
                chain_id=record.chain_id,
                fee=record.fee,
                tick_spacing=record.tick_spacing,
                token0_decimals=record.token0_decimals,
                token1_decimals=record.token1_decimals,
                state=UniswapV3PoolState(
                    address=record.address,
                    block=record.block,
                    liquidity=record.liquidity,
                    sqrt_price_x96=record.sqrt_price_x96,
                    tick=record.tick,
                ),
            )


def construct_checkpoint(
    exchanges: Sequence[Exchange],
    pools: Sequence[Pool],
    block_number: BlockNumber,
    checkpoint_path: Path | str,
) -> Checkpoint:
    """
    Build a checkpoint from the exchanges and pools of a completed run, and write it as JSON to
    `checkpoint_path`.
    """

    checkpoint_path = Path(checkpoint_path)
    checkpoint = Checkpoint(
        timestamp=int(time.time()),
        block_number=block_number,
        exchanges=[_exchange_to_record(exchange) for exchange in exchanges],
        pools=[_pool_to_record(pool) for pool in pools],
    )

    try:
        checkpoint_path.write_text(checkpoint.model_dump_json(indent=2))
    except OSError as exc:
        raise CheckpointError(path=checkpoint_path, reason=str(exc)) from exc

    logger.info(
        f"Wrote checkpoint with {len(checkpoint.pools)} pools at block {block_number} "
        f"to {checkpoint_path}"
    )
    return checkpoint


def load_checkpoint(
    checkpoint_path: Path | str,
) -> tuple[list[Exchange], list[Pool], BlockNumber]:
    """
    Read a checkpoint written by `construct_checkpoint`, returning the exchanges, the pools with
    their recorded state, and the block number.
    """

    checkpoint_path = Path(checkpoint_path)
    try:
        checkpoint = Checkpoint.model_validate_json(checkpoint_path.read_bytes())
    except OSError as exc:
        raise CheckpointError(path=checkpoint_path, reason=str(exc)) from exc
    except pydantic.ValidationError as exc:
        raise CheckpointError(path=checkpoint_path, reason="invalid checkpoint data") from exc

    exchanges = [
        Exchange(
            name=record.name,
            chain_id=record.chain_id,
            factory_address=get_checksum_address(record.factory_address),
            creation_block=record.creation_block,
            variant=record.variant,
        )
        for record in checkpoint.exchanges
    ]
    pools = [_record_to_pool(record) for record in checkpoint.pools]
    return exchanges, pools, checkpoint.block_number


class JsonCheckpointSink:
    """
    Writes checkpoints as JSON files using `construct_checkpoint`.
    """

    def write(
        self,
        exchanges: Sequence[Exchange],
        pools: Sequence[Pool],
        block_number: BlockNumber,
        destination: Path | str,
    ) -> None:
        construct_checkpoint(
            exchanges=exchanges,
            pools=pools,
            block_number=block_number,
            checkpoint_path=destination,
        )
