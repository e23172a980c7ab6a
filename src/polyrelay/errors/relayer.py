"""
Relayer-related exceptions.

Configuration and parameter errors are raised before any network call is
made. API errors carry the upstream status and body verbatim. Signing
errors wrap failures from the signer backend or the HMAC step.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from polyrelay.errors.base import PolyRelayError


class ConfigurationError(PolyRelayError):
    """
    Raised when the client is not configured for the requested operation.

    Example:
        >>> raise ConfigurationError("Relayer URL is empty")
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class UnsupportedChainError(ConfigurationError):
    """
    Raised when no contract configuration exists for a chain id.

    Example:
        >>> raise UnsupportedChainError(1)
    """

    def __init__(self, chain_id: int) -> None:
        super().__init__(
            f"Unsupported chain_id: {chain_id}",
            details={"chain_id": chain_id},
        )
        self.code = "UNSUPPORTED_CHAIN"
        self.chain_id = chain_id


class AuthenticationRequiredError(ConfigurationError):
    """
    Raised when an operation needs a signer or builder credentials
    that the client was constructed without.

    Example:
        >>> raise AuthenticationRequiredError("signer")
    """

    def __init__(self, requirement: str) -> None:
        super().__init__(
            f"Missing {requirement} for this operation",
            details={"requirement": requirement},
        )
        self.code = "AUTH_REQUIRED"
        self.requirement = requirement


class WalletStateError(ConfigurationError):
    """
    Raised when the Safe wallet deployment state does not allow the operation
    (deploying an existing wallet, executing through a missing one).
    """

    def __init__(self, message: str, *, safe_address: str, deployed: bool) -> None:
        super().__init__(
            message,
            details={"safe_address": safe_address, "deployed": deployed},
        )
        self.code = "WALLET_STATE"
        self.safe_address = safe_address
        self.deployed = deployed


class InvalidParameterError(PolyRelayError):
    """
    Raised when a caller-supplied argument is rejected.

    Example:
        >>> raise InvalidParameterError("No transactions provided", parameter="calls")
    """

    def __init__(
        self,
        message: str,
        *,
        parameter: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if parameter:
            details["parameter"] = parameter
        super().__init__(message, code="INVALID_PARAMETER", details=details)
        self.parameter = parameter


class ApiError(PolyRelayError):
    """
    Raised when the relayer or data API answers with a non-2xx status
    or an unparseable body.

    Attributes:
        status: HTTP status code returned by the service.
        body: Raw response body text.
        url: Request URL.
    """

    def __init__(
        self,
        status: int,
        body: str,
        *,
        url: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {"status": status, "body": body}
        if url:
            details["url"] = url
        super().__init__(
            message or f"HTTP {status}: {body}",
            code="API_ERROR",
            details=details,
        )
        self.status = status
        self.body = body
        self.url = url

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        """Rate limiting and server-side failures can clear on their own."""
        return self.status == 429 or self.status >= 500


class SigningError(PolyRelayError):
    """
    Raised when producing a signature fails (signer backend, secret
    decoding or HMAC computation).
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="SIGNING_ERROR", details=details)


class TransactionFailedError(PolyRelayError):
    """
    Raised by wait_for_transaction when the relayer reports a terminal
    failure state (STATE_FAILED or STATE_INVALID).

    Example:
        >>> raise TransactionFailedError("0190c6b2-...", "STATE_FAILED")
    """

    def __init__(
        self,
        transaction_id: str,
        state: str,
        *,
        transaction_hash: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {"state": state}
        if transaction_hash:
            details["transaction_hash"] = transaction_hash
        super().__init__(
            f"Transaction {transaction_id} failed with state {state}",
            code="TRANSACTION_FAILED",
            transaction_id=transaction_id,
            details=details,
        )
        self.state = state
        self.transaction_hash = transaction_hash
