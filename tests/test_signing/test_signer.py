"""
Tests for signature production.

Tests cover:
- Recovery-byte remapping into the Safe eth_sign range
- LocalSigner personal-message signatures
- Error wrapping for failing or malformed signer backends
"""

from typing import Optional

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from polyrelay.errors import SigningError
from polyrelay.signing.signer import LocalSigner, Signer, adjust_v, sign_safe_hash

from .conftest import PRIVATE_KEY_ADDRESS

DIGEST = bytes.fromhex("83f4c07a739d64f31a9101aad436b7fca02fd8810b5a0daae51ed109d1a32f99")


class StubSigner:
    """Signer returning a fixed signature."""

    def __init__(self, signature: bytes, error: Optional[Exception] = None):
        self._signature = signature
        self._error = error

    @property
    def address(self) -> str:
        return PRIVATE_KEY_ADDRESS

    def sign_message(self, message: bytes) -> bytes:
        if self._error is not None:
            raise self._error
        return self._signature


# =============================================================================
# adjust_v
# =============================================================================


class TestAdjustV:
    """Tests for the v-byte remap."""

    @pytest.mark.parametrize(
        "v,expected",
        [(0, 31), (1, 32), (27, 31), (28, 32), (5, 9), (35, 39)],
    )
    def test_remap(self, v: int, expected: int) -> None:
        assert adjust_v(v) == expected

    @pytest.mark.parametrize("v,expected", [(0, 31), (1, 32), (27, 31), (28, 32)])
    def test_sign_safe_hash_applies_remap(self, v: int, expected: int) -> None:
        raw = b"\x11" * 32 + b"\x22" * 32 + bytes([v])
        signature = sign_safe_hash(StubSigner(raw), DIGEST)
        assert signature == "0x" + "11" * 32 + "22" * 32 + format(expected, "02x")


# =============================================================================
# LocalSigner
# =============================================================================


class TestLocalSigner:
    """Tests for the eth_account-backed signer."""

    def test_address(self, local_signer: LocalSigner) -> None:
        assert local_signer.address == PRIVATE_KEY_ADDRESS

    def test_satisfies_protocol(self, local_signer: LocalSigner) -> None:
        assert isinstance(local_signer, Signer)

    def test_invalid_key(self) -> None:
        with pytest.raises(SigningError) as exc_info:
            LocalSigner("0x1234")
        assert "0x1234" not in str(exc_info.value)

    def test_from_account(self) -> None:
        account = Account.create()
        assert LocalSigner.from_account(account).address == account.address

    def test_repr_hides_key(self, local_signer: LocalSigner) -> None:
        assert "ac0974" not in repr(local_signer)
        assert PRIVATE_KEY_ADDRESS in repr(local_signer)

    def test_signature_recovers_signer(self, local_signer: LocalSigner) -> None:
        signature = bytes.fromhex(sign_safe_hash(local_signer, DIGEST)[2:])
        assert len(signature) == 65
        assert signature[64] in (31, 32)

        original = signature[:64] + bytes([signature[64] - 4])
        recovered = Account.recover_message(
            encode_defunct(primitive=DIGEST), signature=original
        )
        assert recovered == PRIVATE_KEY_ADDRESS

    def test_signatures_are_deterministic(self, local_signer: LocalSigner) -> None:
        assert sign_safe_hash(local_signer, DIGEST) == sign_safe_hash(local_signer, DIGEST)


# =============================================================================
# Errors
# =============================================================================


class TestSigningErrors:
    """Tests for signer failure handling."""

    def test_backend_failure_is_wrapped(self) -> None:
        cause = RuntimeError("device disconnected")
        with pytest.raises(SigningError) as exc_info:
            sign_safe_hash(StubSigner(b"", error=cause), DIGEST)
        assert exc_info.value.__cause__ is cause
        assert "device disconnected" in str(exc_info.value)

    def test_short_signature_rejected(self) -> None:
        with pytest.raises(SigningError) as exc_info:
            sign_safe_hash(StubSigner(b"\x00" * 64), DIGEST)
        assert exc_info.value.details["length"] == 64
