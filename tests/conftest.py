"""
Test configuration and fixtures for DynamoDB lookups.

Provides an in-process DynamoDB (moto) with the two example tables:
- HelloTable: {'Name': 'World', 'Greeting': 'hi'}
- SiteColors: {'Name': 'text', 'default': 'black', 'bold': 'navy', 'italic': 'gray'}
"""

from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from dynamodb_lookup import DynamoDBClient, DynamoDBConfig, ItemFetcher


@pytest.fixture
def aws_env(monkeypatch):
    """Isolate tests from the developer's AWS environment."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in ("AWS_SESSION_TOKEN", "DYNAMODB_ENDPOINT_URL", "DYNAMODB_TABLE_PREFIX", "DYNAMODB_DEBUG_LOGGING"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_dynamodb_config(aws_env):
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_prefix=""
    )


@pytest.fixture
def mock_dynamodb_resource(aws_env):
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


def _create_name_keyed_table(resource, table_name):
    return resource.create_table(
        TableName=table_name,
        KeySchema=[
            {'AttributeName': 'Name', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'Name', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def hello_table(mock_dynamodb_resource):
    """Create HelloTable holding the 'World' item."""
    table = _create_name_keyed_table(mock_dynamodb_resource, 'HelloTable')
    table.put_item(Item={'Name': 'World', 'Greeting': 'hi'})
    return table


@pytest.fixture
def site_colors_table(mock_dynamodb_resource):
    """Create SiteColors holding the 'text' item."""
    table = _create_name_keyed_table(mock_dynamodb_resource, 'SiteColors')
    table.put_item(Item={'Name': 'text', 'default': 'black', 'bold': 'navy', 'italic': 'gray'})
    return table


@pytest.fixture
def dynamodb_client(mock_dynamodb_config, mock_dynamodb_resource):
    """DynamoDBClient talking to the mocked DynamoDB."""
    client = DynamoDBClient(mock_dynamodb_config)
    yield client
    client.close()


@pytest.fixture
def item_fetcher(dynamodb_client):
    """ItemFetcher over the mocked DynamoDB."""
    return ItemFetcher(dynamodb_client)


@pytest.fixture
def mock_store_client():
    """Collaborator double that records requests and finds nothing."""
    client = Mock(spec=DynamoDBClient)
    client.get_item.return_value = None
    return client
