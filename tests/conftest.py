import logging

import pytest

from ammsync.connection import async_connection_manager
from ammsync.logging import logger
from ammsync.types.concrete import AbstractPublisherMessage, Publisher
from ammsync.uniswap.deployments import reset_exchanges
from ammsync.uniswap.exchange import Exchange
from ammsync.uniswap.types import ExchangeVariant

from .fakes import make_address

V2_FACTORY = make_address(0xFAC2)
V3_FACTORY = make_address(0xFAC3)


@pytest.fixture(autouse=True)
def _initialize_and_reset_after_each_test():
    """
    Before each test, clear/reset global values and singletons
    """
    async_connection_manager.reset()
    reset_exchanges()


@pytest.fixture(scope="session", autouse=True)
def _set_ammsync_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def v2_exchange() -> Exchange:
    return Exchange(
        name="Test V2",
        chain_id=1,
        factory_address=V2_FACTORY,
        creation_block=0,
        variant=ExchangeVariant.UNISWAP_V2,
    )


@pytest.fixture
def v3_exchange() -> Exchange:
    return Exchange(
        name="Test V3",
        chain_id=1,
        factory_address=V3_FACTORY,
        creation_block=0,
        variant=ExchangeVariant.UNISWAP_V3,
    )


class FakeSubscriber:
    """
    This subscriber class provides a record of received messages, and can be used to test that
    publisher/subscriber methods operate as expected.
    """

    def __init__(self) -> None:
        self.inbox: list[dict[str, object]] = []

    def notify(self, publisher: Publisher, message: AbstractPublisherMessage) -> None:
        self.inbox.append(
            {
                "from": publisher,
                "message": message,
            }
        )

    def subscribe(self, publisher: Publisher) -> None:
        publisher.subscribe(self)

    def messages_of_type[T](self, message_type: type[T]) -> list[T]:
        return [
            entry["message"] for entry in self.inbox if isinstance(entry["message"], message_type)
        ]
