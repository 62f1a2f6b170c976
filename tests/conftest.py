"""
Test configuration and fixtures for dynamodb_items.

Provides a moto-backed DynamoDB with a "users" table and helpers for
driving pending requests by hand.
"""

import sys
from pathlib import Path

# Add project root to path so we can import dynamodb_items without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from dynamodb_items import DynamoDBConfig, StoreContext, UserRepository

USERS_TABLE = "test_users"


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_names={"users": USERS_TABLE}
    )


@pytest.fixture
def mock_dynamodb_client():
    """Low-level DynamoDB client inside a moto mock."""
    with mock_aws():
        yield boto3.client(
            'dynamodb',
            region_name='us-east-1',
            aws_access_key_id='test_key',
            aws_secret_access_key='test_secret'
        )


@pytest.fixture
def users_table(mock_dynamodb_client):
    """Create the users table keyed by email_address."""
    mock_dynamodb_client.create_table(
        TableName=USERS_TABLE,
        KeySchema=[
            {'AttributeName': 'email_address', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'email_address', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return USERS_TABLE


@pytest.fixture
def store_context(mock_dynamodb_config, users_table):
    """Store context talking to the mocked DynamoDB."""
    return StoreContext(mock_dynamodb_config)


@pytest.fixture
def user_repository(store_context):
    """User repository with mocked DynamoDB."""
    return UserRepository(store_context)


@pytest.fixture
def sample_user():
    """Sample user record covering every supported value shape."""
    return {
        "email_address": "jelle@defekt.nl",
        "first_name": "Jelle",
        "last_name": "Herold",
        "logins": 12,
        "rating": 4.5,
        "roles": ["admin", "editor"],
        "scores": [3, 7.25],
    }


class FakeRequest:
    """Hand-driven pending request.

    ``on_send`` is called with the request when ``send()`` runs, so a test
    can emit events synchronously, from a thread, or not at all.
    """

    def __init__(self, on_send=None, operation="GetItem", params=None):
        self.handlers = {"error": [], "success": []}
        self.on_send = on_send
        self.operation = operation
        self.params = params or {"TableName": USERS_TABLE}
        self.send_calls = 0
        self.handlers_at_send = None

    def on(self, event, handler):
        self.handlers[event].append(handler)
        return self

    def send(self):
        self.send_calls += 1
        self.handlers_at_send = {event: len(h) for event, h in self.handlers.items()}
        if self.on_send:
            self.on_send(self)

    def emit(self, event, payload):
        for handler in self.handlers[event]:
            handler(payload)


@pytest.fixture
def fake_request_class():
    """The FakeRequest helper class."""
    return FakeRequest
