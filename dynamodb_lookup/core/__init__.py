"""
Core components for DynamoDB lookups.

- DynamoDBClient: explicitly owned handle over a botocore DynamoDB client
- ItemFetcher: single-item lookup by primary key
- Factory function for creating clients
"""

from .client import DynamoDBClient, create_dynamodb_client, map_dynamodb_error
from .fetcher import ItemFetcher

__all__ = [
    "DynamoDBClient",
    "ItemFetcher",
    "create_dynamodb_client",
    "map_dynamodb_error",
]
