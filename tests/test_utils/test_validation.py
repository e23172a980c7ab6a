"""
Tests for input validation helpers.
"""

import pytest

from polyrelay.errors import InvalidParameterError
from polyrelay.utils.validation import (
    is_valid_address,
    validate_address,
    validate_calls,
    validate_metadata,
)


class TestAddressValidation:
    """Tests for address validation."""

    @pytest.mark.parametrize(
        "address",
        [
            "0x742d35Cc6634C0532925a3b844Bc9e7595f0bBe0",
            "0x" + "0" * 40,
            "0x" + "F" * 40,
        ],
    )
    def test_valid(self, address: str) -> None:
        assert is_valid_address(address)
        assert validate_address(address) == address.lower()

    @pytest.mark.parametrize("address", ["", "0x123", "742d35Cc6634C0532925a3b844Bc9e7595f0bBe0", "0x" + "g" * 40])
    def test_invalid(self, address: str) -> None:
        assert not is_valid_address(address)
        with pytest.raises(InvalidParameterError):
            validate_address(address, "spender")

    def test_error_names_field(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_address("0x123", "spender")
        assert exc_info.value.parameter == "spender"


class TestMetadataValidation:
    """Tests for metadata validation."""

    def test_none_and_limit(self) -> None:
        assert validate_metadata(None) is None
        assert validate_metadata("x" * 500) == "x" * 500

    def test_too_long(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_metadata("x" * 501)
        assert exc_info.value.details["length"] == 501


class TestCallsValidation:
    """Tests for call list validation."""

    def test_empty(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_calls([])
        assert exc_info.value.message == "No transactions provided"

    def test_non_empty(self) -> None:
        calls = [object()]
        assert validate_calls(calls) is calls
