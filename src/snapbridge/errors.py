"""Exception hierarchy for the wallet-snap bridge.

Every failure the bridge reports derives from SnapBridgeError, which keeps
the underlying cause so it can be shown to the user unchanged.
"""

from typing import Any, Optional


class SnapBridgeError(Exception):
    """Base error carrying a display message and the original cause."""

    def __init__(self, message: str, cause: Optional[Any] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class ProviderError(SnapBridgeError):
    """Raised when the wallet rejects a request or returns an RPC error."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None,
        cause: Optional[Any] = None,
    ):
        self.code = code
        self.data = data
        super().__init__(message, cause)


class ProviderUnavailableError(ProviderError):
    """Raised when no compatible wallet can be reached."""


class DiscoveryError(SnapBridgeError):
    """Raised internally when the installed snaps cannot be listed."""


class SnapConnectionError(SnapBridgeError):
    """Raised when the wallet declines or fails to install the snap."""


class InvocationError(SnapBridgeError):
    """Raised when a remote snap method fails."""

    def __init__(self, message: str, method: str = "", cause: Optional[Any] = None):
        self.method = method
        super().__init__(message, cause)


class WrongNetworkError(SnapBridgeError):
    """Raised when the wallet is connected to a chain other than mainnet."""

    def __init__(self, chain_id: int, expected_chain_id: int, message: str):
        self.chain_id = chain_id
        self.expected_chain_id = expected_chain_id
        super().__init__(message)


class TransactionValidationError(SnapBridgeError):
    """Raised for malformed swap inputs, before any network call."""


class OperationInProgressError(SnapBridgeError):
    """Raised when an operation is started while another holds the lock."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot start '{operation}': another operation is in progress")


class ActionUnavailableError(SnapBridgeError):
    """Raised when an action is triggered while its preconditions are unmet."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cannot start '{operation}': {reason}")
