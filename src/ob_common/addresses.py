"""Well-known chain addresses and address normalization."""

from src.ob_common.errors import UnsupportedChainError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Wrapped ether per chain id; pool orders settle in WETH.
_WETH_BY_CHAIN: dict[int, str] = {
    1: "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    5: "0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6",
}


def normalize_address(address: str) -> str:
    """Lower-case hex address; addresses are compared and stored lower-cased."""
    return address.strip().lower()


def weth_address(chain_id: int) -> str:
    try:
        return _WETH_BY_CHAIN[chain_id]
    except KeyError:
        raise UnsupportedChainError(chain_id) from None
