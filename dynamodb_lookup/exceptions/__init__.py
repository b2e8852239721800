# Base exception class
from .base import DynamoDBLookupError

from .domain_exceptions import (
    ValidationError,
    StoreError,
    FetchError,
    AuthenticationError,
    TableNotFoundError,
    RetryableError,
    ConnectionError,
)

__all__ = [
    # Base exception
    "DynamoDBLookupError",

    # Domain exceptions (alphabetically ordered)
    "AuthenticationError",
    "ConnectionError",
    "FetchError",
    "RetryableError",
    "StoreError",
    "TableNotFoundError",
    "ValidationError",
]
