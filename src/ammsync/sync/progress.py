import tqdm

from ammsync.sync.messages import (
    BlockWindowFetched,
    CrawlStarted,
    ExchangeSynced,
    PoolDataFetchStarted,
    PoolSkipped,
    PoolStateRefreshed,
)
from ammsync.types.concrete import AbstractPublisherMessage, Publisher

BAR_FORMAT = "{desc}: {percentage:3.1f}% |{bar}| {n_fmt}/{total_fmt}"


class TqdmProgressSubscriber:
    """
    Renders one progress bar per exchange, first counting fetched block windows and then
    refreshed pools.
    """

    def __init__(self, leave: bool = False) -> None:
        self.leave = leave
        self._bars: dict[str, tqdm.tqdm] = {}

    def _replace_bar(self, key: str, total: int, desc: str) -> None:
        if (bar := self._bars.pop(key, None)) is not None:
            bar.close()
        self._bars[key] = tqdm.tqdm(
            total=total,
            desc=desc,
            bar_format=BAR_FORMAT,
            leave=self.leave,
        )

    def notify(self, publisher: Publisher, message: AbstractPublisherMessage) -> None:  # noqa:ARG002
        match message:
            case CrawlStarted(exchange=exchange, window_count=window_count):
                self._replace_bar(
                    exchange.name, total=window_count, desc=f"{exchange.name}: fetching logs"
                )
            case PoolDataFetchStarted(exchange=exchange, pool_count=pool_count):
                self._replace_bar(
                    exchange.name, total=pool_count, desc=f"{exchange.name}: fetching pool data"
                )
            case (
                BlockWindowFetched(exchange=exchange)
                | PoolStateRefreshed(exchange=exchange)
                | PoolSkipped(exchange=exchange)
            ):
                if (bar := self._bars.get(exchange.name)) is not None:
                    bar.update(1)
            case ExchangeSynced(exchange=exchange):
                if (bar := self._bars.pop(exchange.name, None)) is not None:
                    bar.close()
            case _:
                pass

    def close(self) -> None:
        for bar in self._bars.values():
            bar.close()
        self._bars.clear()
