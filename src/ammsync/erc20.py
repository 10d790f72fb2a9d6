from typing import TYPE_CHECKING

from eth_typing import BlockIdentifier, ChecksumAddress

from ammsync.functions import encode_function_calldata, raw_call

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient


async def get_token_decimals(
    client: "ChainClient",
    token: ChecksumAddress,
    block_identifier: BlockIdentifier | None = None,
) -> int:
    """
    Retrieve the `decimals` value of an ERC-20 token. Tokens returning a value that does not fit a
    uint8 raise an `eth_abi` decoding error.
    """

    (decimals,) = await raw_call(
        client=client,
        address=token,
        calldata=encode_function_calldata(
            function_prototype="decimals()",
            function_arguments=None,
        ),
        return_types=["uint8"],
        block_identifier=block_identifier,
    )
    return decimals
