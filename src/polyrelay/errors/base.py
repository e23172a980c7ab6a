"""
Root of the polyrelay exception tree.

Every error raised by the SDK is a PolyRelayError. ``code`` is the stable
identifier to branch on, ``details`` holds the relayer context as plain
JSON values (HTTP status, response body, transaction state, wallet
address), and ``retryable`` says whether submitting the same request
again can succeed without the caller changing anything.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PolyRelayError(Exception):
    """
    Base exception for relayer, data API, signing and encoding errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "API_ERROR").
        transaction_id: Relayer transaction id, once the relayer assigned one.
        details: Relayer context for logs and error reports.
        retryable: False unless a subclass knows the failure is transient.

    Example:
        >>> error = PolyRelayError("Relayer rejected request", code="API_ERROR")
        >>> error.to_dict()["code"]
        'API_ERROR'
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str = "POLYRELAY_ERROR",
        transaction_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.transaction_id = transaction_id
        self.details = details or {}

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.transaction_id:
            text += f" (transaction {self.transaction_id})"
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.code!r}, {self.message!r}, details={self.details!r})"

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten the error into one JSON-ready record.

        Relayer context from ``details`` sits at the top level next to the
        error identity, so a log line reads ``{"code": "API_ERROR",
        "status": 503, "retryable": true, ...}``. Identity keys win over
        detail keys of the same name; ``transaction_id`` appears only
        when known.
        """
        record: Dict[str, Any] = dict(self.details)
        record.update(
            error=self.__class__.__name__,
            code=self.code,
            message=self.message,
            retryable=self.retryable,
        )
        if self.transaction_id:
            record["transaction_id"] = self.transaction_id
        return record
