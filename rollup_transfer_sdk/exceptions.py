"""
Exceptions for the rollup transfer SDK.
"""
from typing import Any, Optional


class TransferError(Exception):
    """Base exception for every failure of the transfer pipeline."""
    pass


class InvalidAddress(TransferError, ValueError):
    """Raised when a recipient address is not 20 bytes of hex."""

    def __init__(self, value: Any, reason: Optional[str] = None):
        self.value = value
        message = f"Invalid address: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidAmount(TransferError, ValueError):
    """Raised when a transfer amount is unparseable or not positive."""

    def __init__(self, value: Any, reason: Optional[str] = None):
        self.value = value
        message = f"Invalid amount: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidPrivateKey(TransferError, ValueError):
    """
    Raised when a private key is malformed or out of range.

    The message never contains the key itself.
    """
    pass


class ChainQueryFailed(TransferError):
    """Raised when reading chain state over RPC fails."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"Chain query failed: {operation}")


class InsufficientBalance(TransferError):
    """Raised when the sender cannot cover the required amount."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient balance. Required: {required} wei, Available: {available} wei"
        )


class SubmissionFailed(TransferError):
    """Raised when nonce/chain id reads, signing or broadcasting fail."""

    def __init__(self, stage: str, message: Optional[str] = None):
        self.stage = stage
        super().__init__(message or f"Submission failed during {stage}")


class TransferCancelled(TransferError):
    """Raised when the confirm callback declines the transfer."""
    pass


class ConfigError(TransferError, ValueError):
    """Raised for unknown networks, missing settings or unusable RPC URLs."""
    pass
