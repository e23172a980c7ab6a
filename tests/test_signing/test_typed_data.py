"""
Tests for EIP-712 typed-data hashing.

Tests cover:
- Type hashes for both domain schemes and both structs
- Domain separators and digests against known values
- Agreement with eth_account's typed-data encoder
- Digest sensitivity to every signed field
"""

import pytest
from eth_account.messages import encode_typed_data
from eth_utils import keccak, to_checksum_address

from polyrelay.constants import SAFE_FACTORY_NAME, ZERO_ADDRESS
from polyrelay.encoding.abi import encode_address
from polyrelay.signing.typed_data import (
    SAFE_TX_TYPEHASH,
    create_proxy_struct_hash,
    create_safe_create_hash,
    create_safe_tx_hash,
    eip712_digest,
    factory_domain_separator,
    safe_domain_separator,
    safe_tx_struct_hash,
)
from polyrelay.types.relayer import OperationType

from .conftest import CHAIN_ID, CTF, OWNER_SAFE, SAFE_FACTORY

APPROVE_DATA = "0x095ea7b3" + encode_address(CTF) + "f" * 64

SAFE_TX_FIELDS = [
    {"name": "to", "type": "address"},
    {"name": "value", "type": "uint256"},
    {"name": "data", "type": "bytes"},
    {"name": "operation", "type": "uint8"},
    {"name": "safeTxGas", "type": "uint256"},
    {"name": "baseGas", "type": "uint256"},
    {"name": "gasPrice", "type": "uint256"},
    {"name": "gasToken", "type": "address"},
    {"name": "refundReceiver", "type": "address"},
    {"name": "nonce", "type": "uint256"},
]

CREATE_PROXY_FIELDS = [
    {"name": "paymentToken", "type": "address"},
    {"name": "payment", "type": "uint256"},
    {"name": "paymentReceiver", "type": "address"},
]


# =============================================================================
# Known values
# =============================================================================


class TestKnownValues:
    """Digests and separators against independently computed values."""

    def test_safe_tx_typehash(self) -> None:
        assert SAFE_TX_TYPEHASH.hex() == (
            "bb8310d486368db6bd6f849402fdd73ad53d316b5a4b2644ad6efe0f941286d8"
        )

    def test_safe_domain_separator(self) -> None:
        assert safe_domain_separator(OWNER_SAFE, CHAIN_ID).hex() == (
            "4d069da8407f2c193beb05770f0421e3a8b0ec523ec7fd3cc7161c5a50a33509"
        )

    def test_factory_domain_separator(self) -> None:
        assert factory_domain_separator(SAFE_FACTORY, CHAIN_ID).hex() == (
            "90ceade07f5d7357e2318a68cbe63334e9b333b455678f14083847d611c9c54b"
        )

    def test_safe_tx_digest(self) -> None:
        digest = create_safe_tx_hash(
            CHAIN_ID, OWNER_SAFE, CTF, "0", APPROVE_DATA, OperationType.CALL, "5"
        )
        assert digest.hex() == (
            "83f4c07a739d64f31a9101aad436b7fca02fd8810b5a0daae51ed109d1a32f99"
        )

    def test_safe_create_digest(self) -> None:
        assert create_safe_create_hash(SAFE_FACTORY, CHAIN_ID).hex() == (
            "563ac315294c5be01ab1f3b04a5abdfa39e8317a9d90679d4e63caf760b126a4"
        )


# =============================================================================
# eth_account cross-checks
# =============================================================================


class TestAgainstEthAccount:
    """The eth_abi-encoded struct and domain hashes match eth_account's EIP-712 encoder."""

    def test_safe_tx(self) -> None:
        signable = encode_typed_data(
            domain_data={
                "chainId": CHAIN_ID,
                "verifyingContract": to_checksum_address(OWNER_SAFE),
            },
            message_types={"SafeTx": SAFE_TX_FIELDS},
            message_data={
                "to": to_checksum_address(CTF),
                "value": 0,
                "data": bytes.fromhex(APPROVE_DATA[2:]),
                "operation": 0,
                "safeTxGas": 0,
                "baseGas": 0,
                "gasPrice": 0,
                "gasToken": ZERO_ADDRESS,
                "refundReceiver": ZERO_ADDRESS,
                "nonce": 5,
            },
        )
        assert signable.header == safe_domain_separator(OWNER_SAFE, CHAIN_ID)
        assert signable.body == safe_tx_struct_hash(CTF, 0, APPROVE_DATA, 0, 5)

    def test_create_proxy(self) -> None:
        signable = encode_typed_data(
            domain_data={
                "name": SAFE_FACTORY_NAME,
                "chainId": CHAIN_ID,
                "verifyingContract": to_checksum_address(SAFE_FACTORY),
            },
            message_types={"CreateProxy": CREATE_PROXY_FIELDS},
            message_data={
                "paymentToken": ZERO_ADDRESS,
                "payment": 0,
                "paymentReceiver": ZERO_ADDRESS,
            },
        )
        assert signable.header == factory_domain_separator(SAFE_FACTORY, CHAIN_ID)
        assert signable.body == create_proxy_struct_hash()


# =============================================================================
# Structure
# =============================================================================


class TestDigestStructure:
    """Tests for how the pieces combine."""

    def test_eip712_digest(self) -> None:
        domain = bytes(range(32))
        struct = bytes(range(32, 64))
        assert eip712_digest(domain, struct) == keccak(b"\x19\x01" + domain + struct)

    def test_safe_tx_hash_composition(self) -> None:
        digest = create_safe_tx_hash(CHAIN_ID, OWNER_SAFE, CTF, 0, "0x", 1, 0)
        assert digest == eip712_digest(
            safe_domain_separator(OWNER_SAFE, CHAIN_ID),
            safe_tx_struct_hash(CTF, 0, "0x", 1, 0),
        )

    def test_domains_differ(self) -> None:
        assert factory_domain_separator(SAFE_FACTORY, CHAIN_ID) != safe_domain_separator(
            SAFE_FACTORY, CHAIN_ID
        )

    def test_chain_id_changes_digest(self) -> None:
        assert create_safe_create_hash(SAFE_FACTORY, 137) != create_safe_create_hash(
            SAFE_FACTORY, 80002
        )

    def test_operation_changes_digest(self) -> None:
        call = create_safe_tx_hash(CHAIN_ID, OWNER_SAFE, CTF, 0, "0x", 0, 0)
        delegate = create_safe_tx_hash(CHAIN_ID, OWNER_SAFE, CTF, 0, "0x", 1, 0)
        assert call != delegate

    @pytest.mark.parametrize(
        "field,changed",
        [
            ("to", SAFE_FACTORY),
            ("value", "1"),
            ("data", APPROVE_DATA[:-2] + "fe"),
            ("nonce", "8"),
            ("safe_address", "0x" + "12" * 20),
            ("chain_id", 80002),
        ],
    )
    def test_each_field_changes_safe_tx_digest(self, field: str, changed) -> None:
        base = {
            "chain_id": CHAIN_ID,
            "safe_address": OWNER_SAFE,
            "to": CTF,
            "value": "0",
            "data": APPROVE_DATA,
            "operation": OperationType.CALL,
            "nonce": "7",
        }
        assert create_safe_tx_hash(**base) != create_safe_tx_hash(**{**base, field: changed})

    def test_nonce_string_and_int_agree(self) -> None:
        assert safe_tx_struct_hash(CTF, "0", "0x", 0, "12") == safe_tx_struct_hash(
            CTF, 0, "0x", 0, 12
        )
