"""
DynamoDB Lookup

Single-item retrieval from DynamoDB by primary key, with optional attribute
projection, built on boto3 and Pydantic.

    from dynamodb_lookup import DynamoDBConfig, DynamoDBClient, ItemFetcher, Found

    with DynamoDBClient(DynamoDBConfig.from_env()) as client:
        result = ItemFetcher(client).fetch("HelloTable", {"Name": "World"})
        if isinstance(result, Found):
            print(result.item)
"""

from .config import DynamoDBConfig
from .exceptions import (
    AuthenticationError,
    ConnectionError,
    DynamoDBLookupError,
    FetchError,
    RetryableError,
    StoreError,
    TableNotFoundError,
    ValidationError,
)
from .models import (
    Found,
    ItemLookup,
    LookupResult,
    NotFound,
)
from .core import (
    DynamoDBClient,
    ItemFetcher,
    create_dynamodb_client,
)
from .utils import timed

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "AuthenticationError",
    "ConnectionError",
    "DynamoDBLookupError",
    "FetchError",
    "RetryableError",
    "StoreError",
    "TableNotFoundError",
    "ValidationError",

    # Models
    "Found",
    "ItemLookup",
    "LookupResult",
    "NotFound",

    # Core
    "DynamoDBClient",
    "ItemFetcher",
    "create_dynamodb_client",

    # Utilities
    "timed",
]
