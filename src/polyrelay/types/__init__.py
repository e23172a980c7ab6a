"""Data model for the polyrelay SDK."""

from polyrelay.types.relayer import (
    BuilderCredentials,
    DeployedResponse,
    NonceResponse,
    OperationType,
    PositionRecord,
    RedeemablePosition,
    RedeemResult,
    RelayerSubmitResponse,
    RelayerTransaction,
    RelayerTransactionState,
    SignatureParams,
    TransactionRequest,
    TransactionType,
    WalletCall,
)

__all__ = [
    "OperationType",
    "TransactionType",
    "WalletCall",
    "BuilderCredentials",
    "SignatureParams",
    "TransactionRequest",
    "RelayerTransactionState",
    "RelayerSubmitResponse",
    "RelayerTransaction",
    "NonceResponse",
    "DeployedResponse",
    "PositionRecord",
    "RedeemablePosition",
    "RedeemResult",
]
