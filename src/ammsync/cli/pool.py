import asyncio
from pathlib import Path

import click
import eth_typing

from ammsync.cli import cli
from ammsync.cli.utils import get_chain_client_from_config
from ammsync.config import settings
from ammsync.exceptions import AmmSyncError
from ammsync.sync import PoolSynchronizer, TqdmProgressSubscriber
from ammsync.types.aliases import ChainId
from ammsync.uniswap.deployments import EXCHANGE_DEPLOYMENTS, get_exchange
from ammsync.uniswap.exchange import Exchange, Pool


def _select_exchanges(chain_id: ChainId, names: tuple[str, ...]) -> list[Exchange]:
    if not names:
        return list(EXCHANGE_DEPLOYMENTS.get(chain_id, {}).values())
    try:
        return [get_exchange(chain_id=chain_id, name=name) for name in names]
    except AmmSyncError as exc:
        raise click.BadParameter(str(exc), param_hint="--exchange") from exc


def _report(exchanges: list[Exchange], pools: list[Pool]) -> None:
    for exchange in exchanges:
        count = sum(1 for pool in pools if pool.factory == exchange.factory_address)
        click.echo(f"{exchange.name}: {count} pools")
    click.echo(f"Total: {len(pools)} pools")


async def _run(
    *,
    chain_id: ChainId,
    exchanges: list[Exchange],
    rate_limit: int,
    refresh: bool,
    save_checkpoint: bool = False,
    checkpoint_path: Path | None = None,
) -> list[Pool]:
    client = await get_chain_client_from_config(chain_id=chain_id)
    synchronizer = PoolSynchronizer(
        client=client,
        requests_per_second_limit=rate_limit,
        block_step=settings.sync.block_step,
    )
    progress = TqdmProgressSubscriber()
    synchronizer.subscribe(progress)
    if checkpoint_path is None:
        checkpoint_path = settings.sync.checkpoint_path
    try:
        if refresh:
            return await synchronizer.sync(
                exchanges,
                save_checkpoint=save_checkpoint,
                checkpoint_path=checkpoint_path,
            )
        return await synchronizer.discover(exchanges)
    finally:
        progress.close()


chain_id_option = click.option(
    "--chain-id",
    "chain_id",
    type=int,
    default=eth_typing.ChainId.ETH,
    show_default=True,
    help="The chain ID to synchronize. An RPC for it must be defined in the config file.",
)
exchange_option = click.option(
    "--exchange",
    "exchange_names",
    multiple=True,
    help="Name of an exchange to include. Repeat for multiple exchanges (default: all known "
    "exchanges on the chain).",
)
rate_limit_option = click.option(
    "--rate-limit",
    "rate_limit",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum request weight per second, 0 for unlimited (default: from config).",
)


@cli.command("discover")
@chain_id_option
@exchange_option
@rate_limit_option
def pool_discover(chain_id: int, exchange_names: tuple[str, ...], rate_limit: int | None) -> None:
    """
    Find all pools created by the selected exchanges, without fetching their state.
    """

    exchanges = _select_exchanges(chain_id, exchange_names)
    try:
        pools = asyncio.run(
            _run(
                chain_id=chain_id,
                exchanges=exchanges,
                rate_limit=(
                    rate_limit
                    if rate_limit is not None
                    else settings.sync.requests_per_second_limit
                ),
                refresh=False,
            )
        )
    except AmmSyncError as exc:
        raise click.ClickException(str(exc)) from exc

    _report(exchanges, pools)


@cli.command("sync")
@chain_id_option
@exchange_option
@rate_limit_option
@click.option(
    "--checkpoint/--no-checkpoint",
    "save_checkpoint",
    default=False,
    help="Write a checkpoint after a successful run.",
)
@click.option(
    "--checkpoint-path",
    "checkpoint_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Destination of the checkpoint file (default: from config).",
)
def pool_sync(
    chain_id: int,
    exchange_names: tuple[str, ...],
    rate_limit: int | None,
    checkpoint_path: Path | None,
    *,
    save_checkpoint: bool,
) -> None:
    """
    Find all pools created by the selected exchanges and fetch their current state.
    """

    exchanges = _select_exchanges(chain_id, exchange_names)
    try:
        pools = asyncio.run(
            _run(
                chain_id=chain_id,
                exchanges=exchanges,
                rate_limit=(
                    rate_limit
                    if rate_limit is not None
                    else settings.sync.requests_per_second_limit
                ),
                refresh=True,
                save_checkpoint=save_checkpoint,
                checkpoint_path=checkpoint_path,
            )
        )
    except AmmSyncError as exc:
        raise click.ClickException(str(exc)) from exc

    _report(exchanges, pools)
    if save_checkpoint:
        click.echo(
            "Checkpoint written to "
            f"{checkpoint_path if checkpoint_path is not None else settings.sync.checkpoint_path}"
        )
