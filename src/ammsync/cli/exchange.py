import click
import eth_typing

from ammsync.cli import cli
from ammsync.uniswap.deployments import EXCHANGE_DEPLOYMENTS


@cli.command("exchanges")
@click.option(
    "--chain-id",
    "chain_id",
    type=int,
    default=None,
    help="Only list exchanges deployed to this chain ID.",
)
def exchanges_list(chain_id: int | None) -> None:
    """
    List the known exchanges.
    """

    for exchange_chain_id, exchanges in sorted(EXCHANGE_DEPLOYMENTS.items()):
        if chain_id is not None and exchange_chain_id != chain_id:
            continue
        try:
            chain_name = eth_typing.ChainId(exchange_chain_id).name
        except ValueError:
            chain_name = str(exchange_chain_id)

        click.echo(f"Chain {exchange_chain_id} ({chain_name})")
        for exchange in sorted(exchanges.values(), key=lambda exchange: exchange.name):
            click.echo(
                f"  {exchange.name}: factory {exchange.factory_address}, "
                f"created at block {exchange.creation_block}, {exchange.variant.value}"
            )
