"""
ABI encoding for relayer transactions.

- ``abi``: lenient normalization of addresses, integers and bytes32 values for eth_abi
- ``ctf``: calldata for CTF redeem/split/merge and ERC20 approve
- ``multisend``: aggregation of several wallet calls into one multiSend call
"""

from polyrelay.encoding.abi import (
    address_word,
    bytes32_word,
    encode_address,
    encode_bytes32,
    encode_uint8,
    encode_uint256,
    hex_to_bytes,
    normalize_address,
    parse_uint,
    uint8_word,
    uint256_word,
)
from polyrelay.encoding.ctf import (
    CtfEncoder,
    encode_approve,
    encode_approve_max,
    encode_merge_positions,
    encode_redeem_positions,
    encode_split_position,
)
from polyrelay.encoding.multisend import (
    aggregate_transactions,
    encode_multisend,
    pack_call,
)

__all__ = [
    # Primitives
    "address_word",
    "bytes32_word",
    "uint256_word",
    "uint8_word",
    "encode_address",
    "encode_bytes32",
    "encode_uint256",
    "encode_uint8",
    "hex_to_bytes",
    "normalize_address",
    "parse_uint",
    # CTF
    "CtfEncoder",
    "encode_redeem_positions",
    "encode_split_position",
    "encode_merge_positions",
    "encode_approve",
    "encode_approve_max",
    # Multisend
    "pack_call",
    "encode_multisend",
    "aggregate_transactions",
]
