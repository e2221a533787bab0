"""Integration test configuration and fixtures."""

import time
from collections.abc import Generator

import pytest
from testcontainers.localstack import LocalStackContainer

from gurtle.config import Settings
from gurtle.database import LeaderboardDatabase


@pytest.fixture(scope="session")
def localstack_container() -> Generator[LocalStackContainer, None, None]:
    """Start LocalStack container for integration tests."""
    with LocalStackContainer(image="localstack/localstack:3.0") as localstack:
        localstack.with_services("dynamodb")

        # Wait for LocalStack to be ready
        time.sleep(2)

        yield localstack


@pytest.fixture(scope="session")
def localstack_settings(localstack_container: LocalStackContainer) -> Settings:
    return Settings(
        table_name="gurtle-integration",
        endpoint_url=localstack_container.get_url(),
    )


@pytest.fixture
def localstack_db(
    localstack_settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> Generator[LeaderboardDatabase, None, None]:
    """LeaderboardDatabase with a fresh table on LocalStack."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test")  # noqa: S105

    db = LeaderboardDatabase(localstack_settings)
    db.create_table()

    yield db

    db.table.delete()
    db.table.wait_until_not_exists()
