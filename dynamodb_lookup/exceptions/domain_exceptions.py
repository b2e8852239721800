"""
Domain-Specific Exceptions for DynamoDB Lookups

Two families of failure exist:
1. Validation errors - raised locally before any request is sent
2. Store errors - anything the DynamoDB service or botocore reports

Store errors are categorised by subclass, but the store's own message is
always kept verbatim in ``store_message``.
"""

from typing import Any, Dict, Optional

from .base import DynamoDBLookupError


# =============================================================================
# Input Validation Errors
# =============================================================================

class ValidationError(DynamoDBLookupError):
    """Raised when lookup input or configuration is malformed.

    Used for:
    - Empty table names
    - Empty keys or key values
    - Empty or duplicated projection lists
    - Invalid configuration values
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Field-level validation errors, already summarised in the message
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        super().__init__(message, original_error)


# =============================================================================
# Store Errors
# =============================================================================

class StoreError(DynamoDBLookupError):
    """Raised when the store reports a failure for a request.

    The fetcher does not interpret or retry these. Callers decide what to do
    based on the subclass or on ``error_code``.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table_name: Optional[str] = None,
        error_code: Optional[str] = None,
        store_message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize store error.

        Args:
            message: Human-readable error message
            operation: The DynamoDB operation that failed (e.g. "GetItem")
            table_name: Table the operation targeted
            error_code: Error code reported by the service, if any
            store_message: The message reported by the store, unmodified
            original_error: The original exception that caused this error
        """
        self.operation = operation
        self.table_name = table_name
        self.error_code = error_code
        self.store_message = store_message if store_message is not None else message
        super().__init__(message, original_error, error_code=error_code)


class AuthenticationError(StoreError):
    """Raised when credentials are missing, invalid, expired or denied."""


class TableNotFoundError(StoreError):
    """Raised when the requested table does not exist."""


class RetryableError(StoreError):
    """Raised for throttling, timeouts and temporary service unavailability.

    The lookup never retries on its own; botocore's configured retries have
    already been spent when this surfaces.
    """


class ConnectionError(StoreError):
    """Raised when the store cannot be reached or the client is unusable.

    Used for:
    - Network connectivity issues
    - Invalid endpoint configurations
    - Use of a closed client
    - Unknown service error codes
    """


# The lookup contract names the store failure ``FetchError``.
FetchError = StoreError
