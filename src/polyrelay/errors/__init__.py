"""
Exception hierarchy for the polyrelay SDK.

    PolyRelayError
    ├── ConfigurationError
    │   ├── UnsupportedChainError
    │   ├── AuthenticationRequiredError
    │   └── WalletStateError
    ├── InvalidParameterError
    ├── ApiError
    ├── SigningError
    └── TransactionFailedError
"""

from polyrelay.errors.base import PolyRelayError
from polyrelay.errors.relayer import (
    ApiError,
    AuthenticationRequiredError,
    ConfigurationError,
    InvalidParameterError,
    SigningError,
    TransactionFailedError,
    UnsupportedChainError,
    WalletStateError,
)

__all__ = [
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
