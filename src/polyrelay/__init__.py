"""
polyrelay - gas-sponsored Safe transactions through the Polymarket relayer.

Quick Start:
    >>> import asyncio
    >>> from polyrelay import BuilderCredentials, LocalSigner, RelayerClient, RelayerConfig
    >>>
    >>> async def main():
    ...     client = RelayerClient.from_config(
    ...         RelayerConfig.for_chain(137),
    ...         signer=LocalSigner("0x..."),
    ...         builder_credentials=BuilderCredentials.from_env(),
    ...     )
    ...     response = await client.redeem_positions("0x...")
    ...     tx = await client.wait_for_transaction(response.transaction_id)
    ...     print(tx.transaction_hash if tx else "pending")
    ...
    >>> asyncio.run(main())

Modules:
- `encoding`: ABI words, CTF calldata, multisend aggregation
- `signing`: Safe address derivation, EIP-712 digests, signatures, builder HMAC
- `relayer`: RelayerClient (submit, poll, redeem)
- `types`: Wire models and enums
- `config`: Per-chain contract addresses and client settings
- `errors`: Exception hierarchy
- `utils`: Logging and validation helpers
"""

from polyrelay.version import __version__, __version_info__

# Client
from polyrelay.relayer import RelayerClient

# Configuration
from polyrelay.config import (
    AMOY,
    CONTRACT_CONFIGS,
    POLYGON,
    ContractConfig,
    RelayerConfig,
    get_contract_config,
)

# Types
from polyrelay.types import (
    BuilderCredentials,
    OperationType,
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

# Signing
from polyrelay.signing import (
    LocalSigner,
    Signer,
    derive_safe_address,
    generate_builder_headers,
)

# Encoding
from polyrelay.encoding import (
    CtfEncoder,
    aggregate_transactions,
    encode_multisend,
)

# Errors
from polyrelay.errors import (
    ApiError,
    AuthenticationRequiredError,
    ConfigurationError,
    InvalidParameterError,
    PolyRelayError,
    SigningError,
    TransactionFailedError,
    UnsupportedChainError,
    WalletStateError,
)

__all__ = [
    "__version__",
    "__version_info__",
    # Client
    "RelayerClient",
    # Configuration
    "POLYGON",
    "AMOY",
    "ContractConfig",
    "CONTRACT_CONFIGS",
    "RelayerConfig",
    "get_contract_config",
    # Types
    "BuilderCredentials",
    "OperationType",
    "TransactionType",
    "WalletCall",
    "SignatureParams",
    "TransactionRequest",
    "RelayerTransactionState",
    "RelayerSubmitResponse",
    "RelayerTransaction",
    "RedeemablePosition",
    "RedeemResult",
    # Signing
    "Signer",
    "LocalSigner",
    "derive_safe_address",
    "generate_builder_headers",
    # Encoding
    "CtfEncoder",
    "encode_multisend",
    "aggregate_transactions",
    # Errors
    "PolyRelayError",
    "ConfigurationError",
    "UnsupportedChainError",
    "AuthenticationRequiredError",
    "WalletStateError",
    "InvalidParameterError",
    "ApiError",
    "SigningError",
    "TransactionFailedError",
]
