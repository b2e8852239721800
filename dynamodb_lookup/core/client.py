"""
DynamoDB Store Client

A thin, explicitly owned handle over a boto3 low-level DynamoDB client.
The handle is created once, shared by every lookup, and closed at shutdown:

    with DynamoDBClient(config) as client:
        fetcher = ItemFetcher(client)
        ...

Transport, retries, connection pooling and request signing stay with
botocore. This module only:
- Builds botocore clients from DynamoDBConfig (lazily, bounded in number)
- Serializes keys and deserializes items with boto3's type (de)serializers
- Maps botocore failures to StoreError subclasses

Low-level botocore clients are thread-safe, so one handle can serve
concurrent callers. Client creation itself is guarded by a lock because
boto3 sessions are not.
"""

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore import exceptions as botocore_exceptions
from botocore.config import Config

from ..config import DynamoDBConfig
from ..exceptions import (
    AuthenticationError,
    ConnectionError,
    RetryableError,
    StoreError,
    TableNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Per-call deadline clients kept besides the default one
MAX_DEADLINE_CLIENTS = 4


AUTHENTICATION_ERROR_CODES = {
    'UnrecognizedClientException',
    'AccessDeniedException',
    'InvalidSignatureException',
    'IncompleteSignatureException',
    'MissingAuthenticationTokenException',
    'ExpiredTokenException',
    'TokenRefreshRequiredException',
}

RETRYABLE_ERROR_CODES = {
    'ProvisionedThroughputExceededException',
    'RequestLimitExceeded',
    'ThrottlingException',
    'InternalServerError',
    'ServiceUnavailable',
    'RequestTimeoutException',
}


def map_dynamodb_error(error: Exception, operation: str, table_name: str) -> StoreError:
    """Map a botocore failure to a StoreError subclass.

    The store's message is carried unmodified in ``store_message``; the
    subclass only categorises it.

    Args:
        error: ClientError or BotoCoreError raised by botocore
        operation: The operation that failed (e.g., "GetItem")
        table_name: The DynamoDB table name

    Returns:
        Appropriate StoreError
    """
    context = f"{operation} on {table_name}"

    if isinstance(error, botocore_exceptions.ClientError):
        error_info = error.response.get('Error', {})
        error_code = error_info.get('Code', 'Unknown')
        store_message = error_info.get('Message', str(error))
        full_message = f"{context}: {store_message}"
        details = dict(
            operation=operation,
            table_name=table_name,
            error_code=error_code,
            store_message=store_message,
            original_error=error,
        )

        if error_code == 'ResourceNotFoundException':
            return TableNotFoundError(f"Table not found - {full_message}", **details)

        elif error_code in AUTHENTICATION_ERROR_CODES:
            return AuthenticationError(f"Authentication/authorization failed - {full_message}", **details)

        elif error_code in RETRYABLE_ERROR_CODES:
            return RetryableError(f"Throttled or unavailable - {full_message}", **details)

        elif error_code == 'ValidationException':
            return StoreError(f"Request rejected - {full_message}", **details)

        logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
        return ConnectionError(f"DynamoDB operation failed - {full_message}", **details)

    store_message = str(error)
    full_message = f"{context}: {store_message}"
    details = dict(
        operation=operation,
        table_name=table_name,
        store_message=store_message,
        original_error=error,
    )

    if isinstance(error, (botocore_exceptions.NoCredentialsError, botocore_exceptions.PartialCredentialsError)):
        return AuthenticationError(f"Credentials unavailable - {full_message}", **details)

    # Timeouts subclass botocore's ConnectionError, so check them first
    elif isinstance(error, (botocore_exceptions.ConnectTimeoutError, botocore_exceptions.ReadTimeoutError)):
        return RetryableError(f"Request timeout - {full_message}", **details)

    elif isinstance(error, botocore_exceptions.ConnectionError):
        return ConnectionError(f"Could not reach DynamoDB - {full_message}", **details)

    return StoreError(f"DynamoDB request failed - {full_message}", **details)


class DynamoDBClient:
    """
    Explicitly owned DynamoDB client handle.

    Holds one botocore client for the configured timeouts and retries, plus
    a small LRU of clients built for per-call deadlines. A deadline client
    makes a single attempt and splits the deadline between connecting and
    reading, so one call cannot outlive it by retrying.
    """

    def __init__(self, config: DynamoDBConfig):
        """Initialize the handle. No connection is made until first use.

        Args:
            config: DynamoDB configuration
        """
        self.config = config
        self._session = None
        self._default_client = None
        self._deadline_clients: "OrderedDict[float, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self._closed = False
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cached_clients(self) -> int:
        """Number of botocore clients currently held."""
        with self._lock:
            return len(self._deadline_clients) + (self._default_client is not None)

    def client(self, timeout: Optional[float] = None):
        """Get the botocore client for the given deadline, creating it on first use."""
        with self._lock:
            if self._closed:
                raise ConnectionError("DynamoDB client is closed")

            if timeout is None:
                if self._default_client is None:
                    self._default_client = self._create_client(self._default_config())
                return self._default_client

            client = self._deadline_clients.get(timeout)
            if client is not None:
                self._deadline_clients.move_to_end(timeout)
                return client

            client = self._create_client(self._deadline_config(timeout))
            self._deadline_clients[timeout] = client
            if len(self._deadline_clients) > MAX_DEADLINE_CLIENTS:
                # In-flight calls keep their reference; the pool goes with the last one
                evicted, _ = self._deadline_clients.popitem(last=False)
                logger.debug(f"Dropped DynamoDB client for deadline {evicted}s")
            return client

    def _default_config(self) -> Config:
        return Config(
            retries={'max_attempts': self.config.retries},
            max_pool_connections=self.config.max_pool_connections,
            read_timeout=self.config.timeout_seconds,
            connect_timeout=self.config.timeout_seconds
        )

    def _deadline_config(self, timeout: float) -> Config:
        return Config(
            retries={'total_max_attempts': 1},
            max_pool_connections=self.config.max_pool_connections,
            read_timeout=timeout / 2,
            connect_timeout=timeout / 2
        )

    def _create_client(self, boto_config: Config):
        try:
            if self._session is None:
                self._session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    aws_session_token=self.config.aws_session_token,
                    region_name=self.config.region_name
                )

            client_kwargs = {
                'region_name': self.config.region_name,
                'config': boto_config
            }
            if self.config.endpoint_url:
                client_kwargs['endpoint_url'] = self.config.endpoint_url

            client = self._session.client('dynamodb', **client_kwargs)
            logger.debug(
                f"Created DynamoDB client for {self.config.region_name} "
                f"(connect/read timeout={boto_config.read_timeout}s)"
            )
            return client
        except Exception as e:
            logger.error(f"Failed to create DynamoDB client: {e}")
            raise ConnectionError(f"Failed to connect to DynamoDB: {e}", original_error=e) from e

    def get_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        projection_expression: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        consistent_read: bool = False,
        timeout: Optional[float] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Execute a single DynamoDB GetItem request.

        Args:
            table_name: Table to read from
            key: Primary key as plain Python values
            projection_expression: Optional ProjectionExpression
            expression_attribute_names: Placeholder names used by the projection
            consistent_read: Request a strongly consistent read
            timeout: Per-call deadline in seconds (one attempt, no retries),
                None for the configured timeouts and retries

        Returns:
            The item as plain Python values, or None when there is no item

        Raises:
            ValidationError: If the key holds values DynamoDB cannot represent
            StoreError: For any failure reported by DynamoDB or botocore
        """
        try:
            serialized_key = {name: self._serializer.serialize(value) for name, value in key.items()}
        except TypeError as e:
            raise ValidationError(f"Key cannot be serialized for DynamoDB: {e}", original_error=e) from e

        request = {
            'TableName': table_name,
            'Key': serialized_key
        }
        if projection_expression:
            request['ProjectionExpression'] = projection_expression
            if expression_attribute_names:
                request['ExpressionAttributeNames'] = expression_attribute_names
        if consistent_read:
            request['ConsistentRead'] = True

        client = self.client(timeout)
        logger.debug(f"GetItem on {table_name}: {key}")
        try:
            response = client.get_item(**request)
        except (botocore_exceptions.ClientError, botocore_exceptions.BotoCoreError) as e:
            raise map_dynamodb_error(e, "GetItem", table_name) from e

        item = response.get('Item')
        if not item:
            return None
        return {name: self._deserializer.deserialize(value) for name, value in item.items()}

    def close(self) -> None:
        """Release every underlying botocore client. Safe to call twice."""
        with self._lock:
            clients = list(self._deadline_clients.values())
            if self._default_client is not None:
                clients.append(self._default_client)
            self._deadline_clients.clear()
            self._default_client = None
            self._closed = True
        for client in clients:
            client.close()
        logger.debug("DynamoDB client closed")

    def __enter__(self) -> 'DynamoDBClient':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def create_dynamodb_client(config: Optional[DynamoDBConfig] = None) -> DynamoDBClient:
    """
    Factory function to create a DynamoDBClient.

    Args:
        config: DynamoDB configuration, read from the environment if None

    Returns:
        DynamoDBClient instance (not yet connected)
    """
    return DynamoDBClient(config or DynamoDBConfig.from_env())
