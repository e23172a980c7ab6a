"""
Conditional Token Framework (CTF) call encoding.

Builds complete calldata for the CTF contract (redeem, split, merge)
and for the ERC20 ``approve`` call on the collateral token. Parameters
are normalized by polyrelay.encoding.abi and then ABI-encoded with
``eth_abi`` against the argument types the contracts declare.

Encoding never rejects input; malformed values become zero words.

Example:
    >>> data = CtfEncoder.encode_redeem_positions(
    ...     "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174",
    ...     "0x" + "ab" * 32,
    ...     [1, 2],
    ... )
    >>> data[:10]
    '0x01b7037c'
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

from eth_abi import encode

from polyrelay.constants import (
    APPROVE_SELECTOR,
    BINARY_PARTITION,
    MAX_UINT256,
    MERGE_POSITIONS_SELECTOR,
    REDEEM_POSITIONS_SELECTOR,
    SPLIT_POSITION_SELECTOR,
    ZERO_BYTES32,
)
from polyrelay.encoding.abi import (
    UintLike,
    bytes32_word,
    normalize_address,
    parse_uint,
)

_REDEEM_TYPES = ["address", "bytes32", "bytes32", "uint256[]"]
_PARTITION_TYPES = ["address", "bytes32", "bytes32", "uint256[]", "uint256"]
_APPROVE_TYPES = ["address", "uint256"]


def _calldata(selector: str, types: Sequence[str], args: Sequence[Any]) -> str:
    return "0x" + selector + encode(types, args).hex()


def _position_args(
    collateral_token: str,
    condition_id: str,
    index_sets: Iterable[UintLike],
) -> List[Any]:
    # Parent collection is always the root (zero) collection
    return [
        normalize_address(collateral_token),
        bytes32_word(ZERO_BYTES32),
        bytes32_word(condition_id),
        [parse_uint(index_set) for index_set in index_sets],
    ]


def _encode_partition_call(
    selector: str,
    collateral_token: str,
    condition_id: str,
    amount: UintLike,
) -> str:
    args = _position_args(collateral_token, condition_id, BINARY_PARTITION)
    return _calldata(selector, _PARTITION_TYPES, args + [parse_uint(amount)])


class CtfEncoder:
    """Encoder for CTF and collateral-token function calls."""

    @staticmethod
    def encode_redeem_positions(
        collateral_token: str,
        condition_id: str,
        index_sets: Iterable[UintLike],
    ) -> str:
        """
        Encode ``redeemPositions(address,bytes32,bytes32,uint256[])``.

        The parent collection id is always zero (root collection).

        Args:
            collateral_token: Collateral token address (USDC)
            condition_id: Condition id of the resolved market (bytes32 hex)
            index_sets: Index sets to redeem, ``[1, 2]`` for both outcomes

        Returns:
            Lowercase 0x-prefixed calldata
        """
        return _calldata(
            REDEEM_POSITIONS_SELECTOR,
            _REDEEM_TYPES,
            _position_args(collateral_token, condition_id, index_sets),
        )

    @staticmethod
    def encode_split_position(
        collateral_token: str,
        condition_id: str,
        amount: UintLike,
    ) -> str:
        """
        Encode ``splitPosition(address,bytes32,bytes32,uint256[],uint256)``
        over the binary partition ``[1, 2]``.

        Args:
            collateral_token: Collateral token address (USDC)
            condition_id: Condition id (bytes32 hex)
            amount: Collateral amount in base units (decimal string or int)
        """
        return _encode_partition_call(
            SPLIT_POSITION_SELECTOR, collateral_token, condition_id, amount
        )

    @staticmethod
    def encode_merge_positions(
        collateral_token: str,
        condition_id: str,
        amount: UintLike,
    ) -> str:
        """
        Encode ``mergePositions(address,bytes32,bytes32,uint256[],uint256)``
        over the binary partition ``[1, 2]``.
        """
        return _encode_partition_call(
            MERGE_POSITIONS_SELECTOR, collateral_token, condition_id, amount
        )

    @staticmethod
    def encode_approve(spender: str, amount: UintLike) -> str:
        """Encode ERC20 ``approve(address,uint256)``."""
        return _calldata(
            APPROVE_SELECTOR,
            _APPROVE_TYPES,
            [normalize_address(spender), parse_uint(amount)],
        )

    @staticmethod
    def encode_approve_max(spender: str) -> str:
        """Encode ERC20 ``approve`` for the maximum uint256 allowance."""
        return CtfEncoder.encode_approve(spender, MAX_UINT256)


encode_redeem_positions = CtfEncoder.encode_redeem_positions
encode_split_position = CtfEncoder.encode_split_position
encode_merge_positions = CtfEncoder.encode_merge_positions
encode_approve = CtfEncoder.encode_approve
encode_approve_max = CtfEncoder.encode_approve_max


def encode_approve_or_max(spender: str, amount: Optional[UintLike] = None) -> str:
    """Encode ``approve`` for ``amount``, or the maximum allowance when ``None``."""
    if amount is None:
        return encode_approve_max(spender)
    return encode_approve(spender, amount)


__all__ = [
    "CtfEncoder",
    "encode_redeem_positions",
    "encode_split_position",
    "encode_merge_positions",
    "encode_approve",
    "encode_approve_max",
    "encode_approve_or_max",
]
