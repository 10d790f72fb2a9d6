from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import eth_abi.abi
from eth_typing import BlockIdentifier, ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from ammsync.checksum_cache import get_checksum_address
from ammsync.exceptions import AmmSyncValueError

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient


def encode_function_calldata(
    function_prototype: str, function_arguments: Sequence[Any] | None
) -> bytes:
    """
    Encode the calldata to execute a call to the given function prototype, with ordered arguments.
    The resulting bytes array will include the 4-byte function selector, followed by the
    ABI-encoded arguments.
    """

    if function_arguments is None:
        function_arguments = ()

    return keccak(text=function_prototype)[:4] + eth_abi.abi.encode(
        types=extract_argument_types_from_function_prototype(function_prototype),
        args=function_arguments,
    )


def extract_argument_types_from_function_prototype(function_prototype: str) -> list[str]:
    """
    Extract the argument types from the function prototype.

    e.g. the argument types for the prototype 'function(address,uint256)' are ['address','uint256']
    """

    if function_args := function_prototype[
        function_prototype.find("(") + 1 : function_prototype.find(")") :
    ]:
        return function_args.split(",")

    return []


def event_topic(event_prototype: str) -> HexBytes:
    """
    Get the topic0 value for an event prototype, e.g. 'Transfer(address,address,uint256)'.
    """

    return HexBytes(keccak(text=event_prototype))


def topic_to_address(topic: bytes | str) -> ChecksumAddress:
    """
    Extract the address stored in an indexed event topic. Addresses occupy the least significant 20
    bytes of the 32 byte topic.
    """

    topic = HexBytes(topic)
    if len(topic) != 32:
        raise AmmSyncValueError(message=f"Expected a 32 byte topic, got {len(topic)} bytes.")
    return get_checksum_address(topic[-20:])


async def raw_call(
    client: "ChainClient",
    address: ChecksumAddress,
    calldata: bytes,
    return_types: list[str],
    block_identifier: BlockIdentifier | None = None,
) -> tuple[Any, ...]:
    """
    Perform an eth_call at the given address and return the decoded response.
    """

    return eth_abi.abi.decode(
        types=return_types,
        data=await client.call(
            address=address,
            calldata=calldata,
            block_identifier=block_identifier,
        ),
    )
