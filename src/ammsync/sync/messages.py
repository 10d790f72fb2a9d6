from dataclasses import dataclass
from pathlib import Path

from eth_typing import ChecksumAddress

from ammsync.types.aliases import BlockNumber
from ammsync.types.concrete import AbstractPublisherMessage
from ammsync.uniswap.exchange import Exchange


@dataclass(slots=True, frozen=True)
class CrawlStarted(AbstractPublisherMessage):
    exchange: Exchange
    from_block: BlockNumber
    to_block: BlockNumber
    window_count: int


@dataclass(slots=True, frozen=True)
class BlockWindowFetched(AbstractPublisherMessage):
    exchange: Exchange
    from_block: BlockNumber
    to_block: BlockNumber
    pool_count: int


@dataclass(slots=True, frozen=True)
class PoolDataFetchStarted(AbstractPublisherMessage):
    exchange: Exchange
    pool_count: int


@dataclass(slots=True, frozen=True)
class PoolStateRefreshed(AbstractPublisherMessage):
    exchange: Exchange
    pool: ChecksumAddress


@dataclass(slots=True, frozen=True)
class PoolSkipped(AbstractPublisherMessage):
    exchange: Exchange
    pool: ChecksumAddress
    reason: str


@dataclass(slots=True, frozen=True)
class ExchangeSynced(AbstractPublisherMessage):
    exchange: Exchange
    pool_count: int


@dataclass(slots=True, frozen=True)
class CheckpointWritten(AbstractPublisherMessage):
    path: Path
    block_number: BlockNumber
    pool_count: int
