"""
EIP-712 typed-data hashing for Safe creation and Safe execution.

Two domain schemes are in play and must not be mixed:

- The proxy factory signs ``CreateProxy`` under
  ``EIP712Domain(string name,uint256 chainId,address verifyingContract)``.
- The Safe itself signs ``SafeTx`` under
  ``EIP712Domain(uint256 chainId,address verifyingContract)`` (no name),
  with the wallet as verifying contract.

Gas fields are always zero because the relayer sponsors gas. The final
digest is ``keccak256(0x19 0x01 ++ domainSeparator ++ structHash)``.
"""

from __future__ import annotations

from typing import Union

from eth_abi import encode
from eth_utils import keccak

from polyrelay.constants import (
    CREATE_PROXY_TYPE,
    FACTORY_DOMAIN_TYPE,
    SAFE_DOMAIN_TYPE,
    SAFE_FACTORY_NAME,
    SAFE_TX_TYPE,
    ZERO_ADDRESS,
)
from polyrelay.encoding.abi import (
    UintLike,
    hex_to_bytes,
    normalize_address,
    parse_uint,
)
from polyrelay.types.relayer import OperationType

FACTORY_DOMAIN_TYPEHASH = keccak(text=FACTORY_DOMAIN_TYPE)
SAFE_DOMAIN_TYPEHASH = keccak(text=SAFE_DOMAIN_TYPE)
CREATE_PROXY_TYPEHASH = keccak(text=CREATE_PROXY_TYPE)
SAFE_TX_TYPEHASH = keccak(text=SAFE_TX_TYPE)

EIP712_PREFIX = b"\x19\x01"

# Encoded member types of SafeTx, led by its typehash; ``data`` is hashed first
_SAFE_TX_FIELD_TYPES = [
    "bytes32",
    "address",
    "uint256",
    "bytes32",
    "uint8",
    "uint256",
    "uint256",
    "uint256",
    "address",
    "address",
    "uint256",
]


def eip712_digest(domain_separator: bytes, struct_hash: bytes) -> bytes:
    """Final typed-data digest for a domain separator and struct hash."""
    return keccak(EIP712_PREFIX + domain_separator + struct_hash)


# ----------------------------------------------------------------------------
# Domain separators
# ----------------------------------------------------------------------------

def factory_domain_separator(
    safe_factory: str,
    chain_id: int,
    name: str = SAFE_FACTORY_NAME,
) -> bytes:
    return keccak(
        encode(
            ["bytes32", "bytes32", "uint256", "address"],
            [
                FACTORY_DOMAIN_TYPEHASH,
                keccak(text=name),
                parse_uint(chain_id),
                normalize_address(safe_factory),
            ],
        )
    )


def safe_domain_separator(safe_address: str, chain_id: int) -> bytes:
    return keccak(
        encode(
            ["bytes32", "uint256", "address"],
            [SAFE_DOMAIN_TYPEHASH, parse_uint(chain_id), normalize_address(safe_address)],
        )
    )


# ----------------------------------------------------------------------------
# Struct hashes
# ----------------------------------------------------------------------------

def create_proxy_struct_hash(
    payment_token: str = ZERO_ADDRESS,
    payment: UintLike = 0,
    payment_receiver: str = ZERO_ADDRESS,
) -> bytes:
    return keccak(
        encode(
            ["bytes32", "address", "uint256", "address"],
            [
                CREATE_PROXY_TYPEHASH,
                normalize_address(payment_token),
                parse_uint(payment),
                normalize_address(payment_receiver),
            ],
        )
    )


def safe_tx_struct_hash(
    to: str,
    value: UintLike,
    data: Union[str, bytes],
    operation: Union[OperationType, int],
    nonce: UintLike,
    safe_tx_gas: UintLike = 0,
    base_gas: UintLike = 0,
    gas_price: UintLike = 0,
    gas_token: str = ZERO_ADDRESS,
    refund_receiver: str = ZERO_ADDRESS,
) -> bytes:
    """
    Hash a ``SafeTx`` struct.

    ``data`` is hashed with keccak256 before being placed in the struct,
    as EIP-712 requires for dynamic ``bytes`` members.
    """
    return keccak(
        encode(
            _SAFE_TX_FIELD_TYPES,
            [
                SAFE_TX_TYPEHASH,
                normalize_address(to),
                parse_uint(value),
                keccak(hex_to_bytes(data)),
                int(operation) & 0xFF,
                parse_uint(safe_tx_gas),
                parse_uint(base_gas),
                parse_uint(gas_price),
                normalize_address(gas_token),
                normalize_address(refund_receiver),
                parse_uint(nonce),
            ],
        )
    )


# ----------------------------------------------------------------------------
# Digests
# ----------------------------------------------------------------------------

def create_safe_create_hash(
    safe_factory: str,
    chain_id: int,
    payment_token: str = ZERO_ADDRESS,
    payment: UintLike = 0,
    payment_receiver: str = ZERO_ADDRESS,
) -> bytes:
    """
    Digest the owner signs to have the factory deploy their Safe.

    Args:
        safe_factory: Safe proxy factory address (verifying contract)
        chain_id: Chain id
        payment_token: Creation fee token (zero address: no fee)
        payment: Creation fee amount (zero: no fee)
        payment_receiver: Creation fee receiver (zero address: no fee)

    Returns:
        32-byte digest
    """
    return eip712_digest(
        factory_domain_separator(safe_factory, chain_id),
        create_proxy_struct_hash(payment_token, payment, payment_receiver),
    )


def create_safe_tx_hash(
    chain_id: int,
    safe_address: str,
    to: str,
    value: UintLike,
    data: Union[str, bytes],
    operation: Union[OperationType, int],
    nonce: UintLike,
) -> bytes:
    """
    Digest the owner signs to have the Safe execute one call.

    Args:
        chain_id: Chain id
        safe_address: Safe wallet address (verifying contract)
        to: Call destination
        value: Native value in wei
        data: Calldata
        operation: CALL or DELEGATE_CALL
        nonce: Current Safe nonce

    Returns:
        32-byte digest
    """
    return eip712_digest(
        safe_domain_separator(safe_address, chain_id),
        safe_tx_struct_hash(to, value, data, operation, nonce),
    )


__all__ = [
    "FACTORY_DOMAIN_TYPEHASH",
    "SAFE_DOMAIN_TYPEHASH",
    "CREATE_PROXY_TYPEHASH",
    "SAFE_TX_TYPEHASH",
    "eip712_digest",
    "factory_domain_separator",
    "safe_domain_separator",
    "create_proxy_struct_hash",
    "safe_tx_struct_hash",
    "create_safe_create_hash",
    "create_safe_tx_hash",
]
