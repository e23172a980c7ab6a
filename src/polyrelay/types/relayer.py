"""
Relayer Types

Type definitions for gas-sponsored Safe transactions:
- Wallet calls and their aggregation inputs
- Wire models for the relayer HTTP API (camelCase on the wire)
- Relayer transaction state machine
- Redeemable positions projected from the data API
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from polyrelay.constants import MAX_METADATA_LENGTH, ZERO_ADDRESS


# ============================================================================
# Wallet Calls
# ============================================================================

class OperationType(IntEnum):
    """Safe operation kind."""

    CALL = 0
    DELEGATE_CALL = 1


class TransactionType(str, Enum):
    """Type tag of a relayer transaction request."""

    SAFE = "SAFE"
    SAFE_CREATE = "SAFE-CREATE"
    PROXY = "PROXY"


@dataclass(frozen=True)
class WalletCall:
    """
    A single call executed by the Safe wallet.

    Attributes:
        to: Destination contract address
        data: Calldata (0x-prefixed hex)
        operation: CALL or DELEGATE_CALL
        value: Native value in wei, as a decimal string

    Example:
        >>> call = WalletCall(to=ctf, data=calldata).with_value("0")
    """

    to: str
    data: str
    operation: OperationType = OperationType.CALL
    value: str = "0"

    def with_operation(self, operation: Union[OperationType, int]) -> WalletCall:
        """Return a copy with a different operation."""
        return replace(self, operation=OperationType(operation))

    def with_value(self, value: Union[int, str]) -> WalletCall:
        """Return a copy carrying ``value`` wei."""
        return replace(self, value=str(value))


# ============================================================================
# Builder Credentials
# ============================================================================

class BuilderCredentials(BaseModel):
    """
    Builder API credentials for privileged relayer endpoints.

    These are NOT the CLOB trading API credentials. Create them under
    Builder Keys in the Polymarket settings page.

    Example:
        ```python
        creds = BuilderCredentials.from_env()
        ```
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Builder API key")
    secret: str = Field(..., repr=False, description="Base64-encoded HMAC secret")
    passphrase: str = Field(..., repr=False, description="Builder API passphrase")

    @classmethod
    def from_env(cls) -> Optional[BuilderCredentials]:
        """
        Read ``POLY_API_KEY``, ``POLY_API_SECRET`` and ``POLY_PASSPHRASE``.

        Returns:
            Credentials, or None if any variable is unset
        """
        key = os.environ.get("POLY_API_KEY")
        secret = os.environ.get("POLY_API_SECRET")
        passphrase = os.environ.get("POLY_PASSPHRASE")
        if not key or not secret or not passphrase:
            return None
        return cls(key=key, secret=secret, passphrase=passphrase)


# ============================================================================
# Relayer Wire Models
# ============================================================================

class SignatureParams(BaseModel):
    """Signature parameters echoed to the relayer alongside the signature."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    gas_price: Optional[str] = Field(default=None, alias="gasPrice")
    operation: Optional[str] = None
    safe_txn_gas: Optional[str] = Field(default=None, alias="safeTxnGas")
    base_gas: Optional[str] = Field(default=None, alias="baseGas")
    gas_token: Optional[str] = Field(default=None, alias="gasToken")
    refund_receiver: Optional[str] = Field(default=None, alias="refundReceiver")
    # SAFE-CREATE only
    payment_token: Optional[str] = Field(default=None, alias="paymentToken")
    payment: Optional[str] = None
    payment_receiver: Optional[str] = Field(default=None, alias="paymentReceiver")

    @classmethod
    def for_safe_execution(cls, operation: OperationType) -> SignatureParams:
        return cls(
            gas_price="0",
            operation=str(int(operation)),
            safe_txn_gas="0",
            base_gas="0",
            gas_token=ZERO_ADDRESS,
            refund_receiver=ZERO_ADDRESS,
        )

    @classmethod
    def for_safe_create(cls) -> SignatureParams:
        return cls(
            payment_token=ZERO_ADDRESS,
            payment="0",
            payment_receiver=ZERO_ADDRESS,
        )


class TransactionRequest(BaseModel):
    """
    Body of ``POST /submit``.

    Serialize with :meth:`to_json`; the exact string is also the body
    covered by the builder HMAC signature.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tx_type: TransactionType = Field(..., alias="type")
    from_address: str = Field(..., alias="from", description="Signer EOA address")
    to: str
    proxy_wallet: str = Field(..., alias="proxyWallet")
    data: str
    signature: str
    value: Optional[str] = None
    nonce: Optional[str] = None
    signature_params: Optional[SignatureParams] = Field(default=None, alias="signatureParams")
    metadata: Optional[str] = Field(default=None, max_length=MAX_METADATA_LENGTH)

    def to_json(self) -> str:
        """Compact camelCase JSON with unset optional fields omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class RelayerTransactionState(str, Enum):
    """
    Relayer-reported transaction state.

    States only move forward: NEW -> EXECUTED -> MINED -> CONFIRMED,
    or to FAILED / INVALID.
    """

    NEW = "STATE_NEW"
    EXECUTED = "STATE_EXECUTED"
    MINED = "STATE_MINED"
    CONFIRMED = "STATE_CONFIRMED"
    FAILED = "STATE_FAILED"
    INVALID = "STATE_INVALID"

    @property
    def is_success(self) -> bool:
        return self in _SUCCESS_STATES

    @property
    def is_failure(self) -> bool:
        return self in _FAILURE_STATES

    @property
    def is_terminal(self) -> bool:
        return self.is_success or self.is_failure

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[RelayerTransactionState]:
        """Map a wire state string to a member; unknown strings give None."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


_SUCCESS_STATES = frozenset({RelayerTransactionState.MINED, RelayerTransactionState.CONFIRMED})
_FAILURE_STATES = frozenset({RelayerTransactionState.FAILED, RelayerTransactionState.INVALID})


class RelayerSubmitResponse(BaseModel):
    """Response of ``POST /submit``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    transaction_id: str = Field(..., alias="transactionID")
    transaction_hash: Optional[str] = Field(default=None, alias="transactionHash")
    state: Optional[str] = None


class RelayerTransaction(BaseModel):
    """A transaction as reported by ``GET /transaction``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    transaction_id: str = Field(..., alias="transactionID")
    transaction_hash: Optional[str] = Field(default=None, alias="transactionHash")
    from_address: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    proxy_address: Optional[str] = Field(default=None, alias="proxyAddress")
    data: Optional[str] = None
    value: Optional[str] = None
    nonce: Optional[str] = None
    signature: Optional[str] = None
    state: Optional[str] = None
    tx_type: Optional[str] = Field(default=None, alias="type")
    metadata: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    def get_state(self) -> Optional[RelayerTransactionState]:
        return RelayerTransactionState.parse(self.state)


class NonceResponse(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    nonce: str


class DeployedResponse(BaseModel):
    deployed: bool


# ============================================================================
# Positions
# ============================================================================

class PositionRecord(BaseModel):
    """Raw position record from the data API ``/positions`` endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    proxy_wallet: Optional[str] = Field(default=None, alias="proxyWallet")
    asset: str
    condition_id: str = Field(..., alias="conditionId")
    size: str
    redeemable: bool = False
    mergeable: bool = False
    title: str = ""
    outcome: str = ""
    outcome_index: int = Field(default=0, alias="outcomeIndex")
    cur_price: Optional[float] = Field(default=None, alias="curPrice")
    current_value: float = Field(default=0.0, alias="currentValue")


class RedeemablePosition(BaseModel):
    """A resolved-market position worth redeeming (current value > 0)."""

    model_config = ConfigDict(frozen=True)

    condition_id: str
    asset: str
    size: str
    outcome: str
    outcome_index: int = Field(..., ge=0)
    title: str
    current_value: float

    @property
    def index_set(self) -> int:
        """Index-set bitmask for this outcome: 1 for index 0, 2 for index 1."""
        return 1 << self.outcome_index

    @classmethod
    def from_record(cls, record: PositionRecord) -> RedeemablePosition:
        return cls(
            condition_id=record.condition_id,
            asset=record.asset,
            size=record.size,
            outcome=record.outcome,
            outcome_index=record.outcome_index,
            title=record.title,
            current_value=record.current_value,
        )


@dataclass
class RedeemResult:
    """Outcome of redeeming one position in a batch."""

    position: RedeemablePosition
    response: Optional[RelayerSubmitResponse] = None
    error: Optional[Exception] = None

    @property
    def condition_id(self) -> str:
        return self.position.condition_id

    @property
    def success(self) -> bool:
        return self.response is not None and self.error is None
