"""
Multi-call aggregation for Safe wallets.

Several wallet calls are packed into one ``multiSend(bytes)`` call that
the Safe executes through DELEGATECALL, so they succeed or revert
together. Each call is packed without padding as::

    operation (1 byte) | to (20 bytes) | value (32 bytes) | data length (32 bytes) | data

and the concatenation is ABI-encoded as the single dynamic ``bytes``
argument of ``multiSend``.
"""

from __future__ import annotations

from typing import Sequence

from eth_abi import encode
from eth_abi.packed import encode_packed

from polyrelay.constants import MULTISEND_SELECTOR
from polyrelay.encoding.abi import (
    hex_to_bytes,
    normalize_address,
    parse_uint,
    to_hex,
)
from polyrelay.types.relayer import OperationType, WalletCall

_PACKED_CALL_TYPES = ["uint8", "address", "uint256", "uint256", "bytes"]


def pack_call(call: WalletCall) -> bytes:
    """Pack one wallet call in the multiSend transaction format."""
    data = hex_to_bytes(call.data)
    return encode_packed(
        _PACKED_CALL_TYPES,
        [
            int(call.operation),
            normalize_address(call.to),
            parse_uint(call.value),
            len(data),
            data,
        ],
    )


def encode_multisend(calls: Sequence[WalletCall]) -> str:
    """
    Encode ``multiSend(bytes transactions)`` calldata for ``calls``.

    Returns:
        Lowercase 0x-prefixed calldata
    """
    packed = b"".join(pack_call(call) for call in calls)
    return to_hex(bytes.fromhex(MULTISEND_SELECTOR) + encode(["bytes"], [packed]))


def aggregate_transactions(
    calls: Sequence[WalletCall],
    multisend_address: str,
) -> WalletCall:
    """
    Collapse ``calls`` into the single call the Safe will execute.

    A single call is returned unchanged, keeping its own operation.
    Two or more become one DELEGATECALL to the multisend contract
    carrying zero value.

    Args:
        calls: Non-empty sequence of wallet calls
        multisend_address: Safe multisend contract for the chain

    Returns:
        The call to sign and submit
    """
    if len(calls) == 1:
        return calls[0]
    return WalletCall(
        to=multisend_address,
        data=encode_multisend(calls),
        operation=OperationType.DELEGATE_CALL,
        value="0",
    )


__all__ = ["pack_call", "encode_multisend", "aggregate_transactions"]
