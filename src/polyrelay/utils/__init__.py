"""
polyrelay SDK Utilities.

This module provides logging and validation helpers for the SDK.
"""

from polyrelay.utils.logging import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from polyrelay.utils.validation import (
    is_valid_address,
    validate_address,
    validate_calls,
    validate_metadata,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "enable_debug",
    # Validation
    "is_valid_address",
    "validate_address",
    "validate_calls",
    "validate_metadata",
]
