"""Signer capability and Safe signature production.

The relayer client only needs two things from a signer: its address and
the ability to sign an arbitrary digest as an EIP-191 personal message.
Any backend (local key, hardware wallet, remote KMS) that provides those
satisfies :class:`Signer`.

Safe contracts verify a personal-message signature when ``v > 30`` and
recover with ``v - 4``. The raw signature's recovery byte is therefore
shifted into that range before submission:

    0 -> 31, 1 -> 32, 27 -> 31, 28 -> 32, otherwise v + 4
"""

from typing import Protocol, runtime_checkable

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from polyrelay.errors import SigningError

SIGNATURE_LENGTH = 65

_V_REMAP = {0: 31, 1: 32, 27: 31, 28: 32}


@runtime_checkable
class Signer(Protocol):
    """Signing capability consumed by RelayerClient."""

    @property
    def address(self) -> str:
        """Signer EOA address."""
        ...

    def sign_message(self, message: bytes) -> bytes:
        """Sign ``message`` with the EIP-191 personal-message prefix.

        Returns:
            65-byte ``r || s || v`` signature
        """
        ...


class LocalSigner:
    """Signer backed by an in-process private key (eth_account)."""

    def __init__(self, private_key: str):
        """Initialize signer.

        Args:
            private_key: Private key (0x-prefixed hex string)

        Raises:
            SigningError: If the key is malformed
        """
        try:
            self._account: LocalAccount = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise SigningError("Invalid private key") from e

    @classmethod
    def from_account(cls, account: LocalAccount) -> "LocalSigner":
        signer = cls.__new__(cls)
        signer._account = account
        return signer

    @property
    def address(self) -> str:
        return self._account.address

    def sign_message(self, message: bytes) -> bytes:
        signed = self._account.sign_message(encode_defunct(primitive=message))
        return bytes(signed.signature)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address!r})"


def adjust_v(v: int) -> int:
    """Shift a recovery byte into the Safe's eth_sign range."""
    return _V_REMAP.get(v, v + 4)


def sign_safe_hash(signer: Signer, digest: bytes) -> str:
    """Sign an EIP-712 digest for a Safe and return the adjusted signature.

    Args:
        signer: Signing backend
        digest: 32-byte typed-data digest

    Returns:
        0x-prefixed 65-byte signature with the remapped ``v``

    Raises:
        SigningError: If the backend fails or returns a malformed signature
    """
    try:
        raw = bytes(signer.sign_message(digest))
    except Exception as e:
        raise SigningError(f"Signer failed: {e}") from e

    if len(raw) != SIGNATURE_LENGTH:
        raise SigningError(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}",
            details={"length": len(raw)},
        )

    return "0x" + (raw[:64] + bytes([adjust_v(raw[64]) & 0xFF])).hex()


__all__ = ["Signer", "LocalSigner", "SIGNATURE_LENGTH", "adjust_v", "sign_safe_hash"]
