"""
Validation utilities for the polyrelay SDK.

Provides input validation for arguments the relayer client accepts
from callers:
- Ethereum addresses
- Transaction metadata
- Wallet call lists

All validation functions raise InvalidParameterError on failure and run
before any network call is made. The ABI encoders deliberately do not
validate (see polyrelay.encoding.abi).
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, TypeVar

from polyrelay.constants import MAX_METADATA_LENGTH
from polyrelay.errors import InvalidParameterError

T = TypeVar("T")

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(address: str) -> bool:
    """
    Check if a string is a 0x-prefixed, 20-byte hex address.

    Example:
        >>> is_valid_address("0x742d35Cc6634C0532925a3b844Bc9e7595f0bBe0")
        True
        >>> is_valid_address("0xinvalid")
        False
    """
    if not address or not isinstance(address, str):
        return False
    return bool(ADDRESS_PATTERN.match(address))


def validate_address(address: str, field_name: str = "address") -> str:
    """
    Validate Ethereum address format.

    Args:
        address: Address to validate
        field_name: Field name for error messages

    Returns:
        Normalized (lowercase) address

    Raises:
        InvalidParameterError: If address is missing or malformed
    """
    if not address:
        raise InvalidParameterError(f"{field_name} is required", parameter=field_name)

    if not is_valid_address(address):
        raise InvalidParameterError(
            f"{field_name} must be 0x followed by 40 hex characters",
            parameter=field_name,
            details={"value": str(address)},
        )

    return address.lower()


def validate_metadata(metadata: Optional[str]) -> Optional[str]:
    """
    Validate optional transaction metadata.

    Raises:
        InvalidParameterError: If metadata exceeds MAX_METADATA_LENGTH characters
    """
    if metadata is not None and len(metadata) > MAX_METADATA_LENGTH:
        raise InvalidParameterError(
            f"metadata must be at most {MAX_METADATA_LENGTH} characters",
            parameter="metadata",
            details={"length": len(metadata)},
        )
    return metadata


def validate_calls(calls: Sequence[T]) -> Sequence[T]:
    """Ensure at least one wallet call was supplied."""
    if not calls:
        raise InvalidParameterError("No transactions provided", parameter="calls")
    return calls
