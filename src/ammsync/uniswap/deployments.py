import eth_typing

from ammsync.checksum_cache import get_checksum_address
from ammsync.exceptions import ExchangeAlreadyRegistered, UnknownExchange
from ammsync.types.aliases import ChainId
from ammsync.uniswap.exchange import Exchange
from ammsync.uniswap.types import ExchangeVariant

# Mainnet DEX --------------- START
EthereumMainnetUniswapV2 = Exchange(
    name="Ethereum Mainnet Uniswap V2",
    chain_id=eth_typing.ChainId.ETH,
    factory_address=get_checksum_address("0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"),
    creation_block=10_000_835,
    variant=ExchangeVariant.UNISWAP_V2,
)
EthereumMainnetSushiswapV2 = Exchange(
    name="Ethereum Mainnet Sushiswap V2",
    chain_id=eth_typing.ChainId.ETH,
    factory_address=get_checksum_address("0xC0AEe478e3658e2610c5F7A4A2E1777cE9e4f2Ac"),
    creation_block=10_794_229,
    variant=ExchangeVariant.UNISWAP_V2,
)
EthereumMainnetPancakeswapV2 = Exchange(
    name="Ethereum Mainnet Pancakeswap V2",
    chain_id=eth_typing.ChainId.ETH,
    factory_address=get_checksum_address("0x1097053Fd2ea711dad45caCcc45EfF7548fCB362"),
    creation_block=15_614_590,
    variant=ExchangeVariant.UNISWAP_V2,
)
EthereumMainnetUniswapV3 = Exchange(
    name="Ethereum Mainnet Uniswap V3",
    chain_id=eth_typing.ChainId.ETH,
    factory_address=get_checksum_address("0x1F98431c8aD98523631AE4a59f267346ea31F984"),
    creation_block=12_369_621,
    variant=ExchangeVariant.UNISWAP_V3,
)
EthereumMainnetSushiswapV3 = Exchange(
    name="Ethereum Mainnet Sushiswap V3",
    chain_id=eth_typing.ChainId.ETH,
    factory_address=get_checksum_address("0xbACEB8eC6b9355Dfc0269C18bac9d6E2Bdc29C4F"),
    creation_block=16_955_547,
    variant=ExchangeVariant.UNISWAP_V3,
)
EthereumMainnetPancakeswapV3 = Exchange(
    name="Ethereum Mainnet Pancakeswap V3",
    chain_id=eth_typing.ChainId.ETH,
    factory_address=get_checksum_address("0x0BFbCF9fa4f9C56B0F40a671Ad40E0805A091865"),
    creation_block=16_950_686,
    variant=ExchangeVariant.UNISWAP_V3,
)
# ----------------------------- END


# Base DEX ------------------ START
BaseUniswapV2 = Exchange(
    name="Base Uniswap V2",
    chain_id=eth_typing.ChainId.BASE,
    factory_address=get_checksum_address("0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6"),
    creation_block=6_601_915,
    variant=ExchangeVariant.UNISWAP_V2,
)
BaseUniswapV3 = Exchange(
    name="Base Uniswap V3",
    chain_id=eth_typing.ChainId.BASE,
    factory_address=get_checksum_address("0x33128a8fC17869897dcE68Ed026d694621f6FDfD"),
    creation_block=1_371_680,
    variant=ExchangeVariant.UNISWAP_V3,
)
# ----------------------------- END


EXCHANGE_DEPLOYMENTS: dict[
    int,  # chain ID
    dict[str, Exchange],  # exchange name
] = {
    eth_typing.ChainId.ETH: {
        EthereumMainnetPancakeswapV2.name: EthereumMainnetPancakeswapV2,
        EthereumMainnetPancakeswapV3.name: EthereumMainnetPancakeswapV3,
        EthereumMainnetSushiswapV2.name: EthereumMainnetSushiswapV2,
        EthereumMainnetSushiswapV3.name: EthereumMainnetSushiswapV3,
        EthereumMainnetUniswapV2.name: EthereumMainnetUniswapV2,
        EthereumMainnetUniswapV3.name: EthereumMainnetUniswapV3,
    },
    eth_typing.ChainId.BASE: {
        BaseUniswapV2.name: BaseUniswapV2,
        BaseUniswapV3.name: BaseUniswapV3,
    },
}

_KNOWN_EXCHANGES = {
    chain_id: dict(exchanges) for chain_id, exchanges in EXCHANGE_DEPLOYMENTS.items()
}


def register_exchange(exchange: Exchange) -> None:
    if exchange.chain_id not in EXCHANGE_DEPLOYMENTS:
        EXCHANGE_DEPLOYMENTS[exchange.chain_id] = {}

    known = EXCHANGE_DEPLOYMENTS[exchange.chain_id]
    if exchange.name in known or any(
        deployment.factory_address == exchange.factory_address for deployment in known.values()
    ):
        raise ExchangeAlreadyRegistered(message="Exchange is already registered.")

    known[exchange.name] = exchange


def get_exchange(chain_id: ChainId, name: str) -> Exchange:
    """
    Look up a registered exchange by name. The match is case-insensitive.
    """

    for exchange_name, exchange in EXCHANGE_DEPLOYMENTS.get(chain_id, {}).items():
        if exchange_name.lower() == name.lower():
            return exchange
    raise UnknownExchange(chain_id=chain_id, name=name)


def reset_exchanges() -> None:
    """
    Remove all custom exchanges added by `register_exchange`.
    """

    EXCHANGE_DEPLOYMENTS.clear()
    EXCHANGE_DEPLOYMENTS.update({
        chain_id: dict(exchanges) for chain_id, exchanges in _KNOWN_EXCHANGES.items()
    })
