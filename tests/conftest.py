"""Shared test fixtures and helpers."""

import json
from collections.abc import Generator

import pytest
from moto import mock_aws

from gurtle.config import Settings
from gurtle.database import LeaderboardDatabase

TEST_SETTINGS = Settings(table_name="gurtle-test", collection="scores")


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def mocked_db(settings: Settings) -> Generator[LeaderboardDatabase, None, None]:
    """LeaderboardDatabase backed by an in-process moto table."""
    with mock_aws():
        db = LeaderboardDatabase(settings)
        db.create_table()
        yield db


@pytest.fixture
def lambda_context():
    """Mock Lambda context for testing."""

    class MockLambdaContext:
        def __init__(self):
            self.function_name = "gurtle-leaderboard-test"
            self.function_version = "$LATEST"
            self.invoked_function_arn = (
                "arn:aws:lambda:us-east-1:123456789012:function:gurtle-leaderboard-test"
            )
            self.memory_limit_in_mb = 128
            self.remaining_time_in_millis = lambda: 30000
            self.log_group_name = "/aws/lambda/gurtle-leaderboard-test"
            self.log_stream_name = "2024/01/01/[$LATEST]test"
            self.aws_request_id = "test-request-id"

    return MockLambdaContext()


def create_api_event(method: str, path: str, body: dict | str | None = None) -> dict:
    """Helper function to create API Gateway REST events."""
    if isinstance(body, dict):
        body = json.dumps(body)
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": {"Content-Type": "application/json"},
        "multiValueHeaders": {},
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": None,
        "body": body,
        "isBase64Encoded": False,
        "requestContext": {
            "httpMethod": method,
            "path": path,
            "stage": "test",
            "requestId": "test-request-id",
        },
    }
