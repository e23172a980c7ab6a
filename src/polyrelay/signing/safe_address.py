"""
Deterministic Safe wallet address derivation.

The Safe proxy factory deploys each owner's wallet with CREATE2, so the
address is known before deployment:

    salt    = keccak256(abi.encode(owner))                  # 12 zero bytes + 20-byte owner
    address = keccak256(0xff ++ factory ++ salt ++ initCodeHash)[12:]

The result must match the factory's own computation byte for byte;
otherwise signed transactions would target a wallet the owner does not
control.
"""

from __future__ import annotations

from typing import Optional, Union

from eth_abi import encode
from eth_abi.packed import encode_packed
from eth_utils import keccak

from polyrelay.constants import SAFE_INIT_CODE_HASH
from polyrelay.encoding.abi import bytes32_word, normalize_address, to_hex


def compute_create2_address(
    deployer: str,
    salt: Union[str, bytes],
    init_code_hash: Union[str, bytes],
) -> str:
    """
    Compute a CREATE2 contract address.

    Args:
        deployer: Deploying contract (factory) address
        salt: 32-byte salt (hex or bytes)
        init_code_hash: keccak256 of the init code (hex or bytes)

    Returns:
        Lowercase 0x-prefixed 20-byte address
    """
    digest = keccak(
        encode_packed(
            ["bytes1", "address", "bytes32", "bytes32"],
            [
                b"\xff",
                normalize_address(deployer),
                bytes32_word(salt),
                bytes32_word(init_code_hash),
            ],
        )
    )
    return to_hex(digest[12:])


def safe_salt(owner: str) -> bytes:
    """Salt the factory uses for ``owner``: keccak256 of the owner as an ABI word."""
    return keccak(encode(["address"], [normalize_address(owner)]))


def derive_safe_address(
    owner: str,
    safe_factory: str,
    init_code_hash: Optional[str] = None,
) -> str:
    """
    Derive the Safe wallet address owned by ``owner``.

    Args:
        owner: Owner (signer EOA) address, any case
        safe_factory: Safe proxy factory address
        init_code_hash: Override for the proxy init code hash

    Returns:
        Lowercase 0x-prefixed wallet address

    Example:
        >>> derive_safe_address(
        ...     "0xAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA1111",
        ...     "0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b",
        ... )
        '0x40e8e5fd316a68c4e704d7f2e2a5b20b309e61b1'
    """
    return compute_create2_address(
        safe_factory,
        safe_salt(owner),
        init_code_hash or SAFE_INIT_CODE_HASH,
    )


__all__ = ["compute_create2_address", "safe_salt", "derive_safe_address"]
