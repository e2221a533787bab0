"""DynamoDB operations for the gurtle leaderboard."""

from collections.abc import Iterator
from typing import Any
from uuid import uuid4

import boto3
from boto3.dynamodb.conditions import Attr, ConditionBase, Key
from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings
from .models import Entry, EntryFilter


class StoreError(RuntimeError):
    """Raised when the entry store cannot serve a request."""


class LeaderboardDatabase:
    """Append-only entry store backed by a DynamoDB table.

    All entries of a collection share one partition, so every read is a
    single-partition query.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize database connection."""
        self.settings = settings or Settings.from_env()
        if not self.settings.table_name:
            raise ValueError("Table name must be provided")
        self.table_name = self.settings.table_name
        self.collection = self.settings.collection
        self.dynamodb = boto3.resource(
            "dynamodb",
            region_name=self.settings.region,
            endpoint_url=self.settings.endpoint_url,
        )
        self.table = self.dynamodb.Table(self.table_name)

    def ping(self) -> None:
        """Check that the table is reachable."""
        try:
            self.table.load()
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to reach table {self.table_name}: {e}") from e

    def create_table(self) -> None:
        """Create the backing table and wait until it exists."""
        try:
            self.table = self.dynamodb.create_table(
                TableName=self.table_name,
                KeySchema=[
                    {"AttributeName": "collection", "KeyType": "HASH"},
                    {"AttributeName": "entry_id", "KeyType": "RANGE"},
                ],
                AttributeDefinitions=[
                    {"AttributeName": "collection", "AttributeType": "S"},
                    {"AttributeName": "entry_id", "AttributeType": "S"},
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            self.table.wait_until_exists()
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to create table {self.table_name}: {e}") from e

    def insert_entry(self, entry: Entry) -> None:
        """Store a new entry."""
        item: dict[str, Any] = {
            "collection": self.collection,
            # Timestamp prefix keeps ids in insertion order, uuid keeps duplicates apart
            "entry_id": f"{entry.datetime}#{uuid4().hex}",
            "name": entry.name,
            "score": entry.score,
            "datetime": entry.datetime,
        }
        try:
            self.table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to insert entry: {e}") from e

    def find_entries(self, entry_filter: EntryFilter) -> list[Entry]:
        """Return every entry matching the filter, in insertion order."""
        try:
            items = self._query(entry_filter)
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to query entries: {e}") from e

        return [
            Entry(
                name=str(item["name"]),
                score=int(item["score"]),
                datetime=str(item["datetime"]),
            )
            for item in items
        ]

    def count_entries(self, entry_filter: EntryFilter) -> int:
        """Count entries matching the filter."""
        try:
            return sum(
                page["Count"] for page in self._pages(entry_filter, Select="COUNT")
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to count entries: {e}") from e

    def _query(self, entry_filter: EntryFilter) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        for page in self._pages(entry_filter):
            items.extend(page["Items"])
        return items

    def _pages(
        self, entry_filter: EntryFilter, **kwargs: Any
    ) -> Iterator[dict[str, Any]]:
        """Yield raw query pages, following LastEvaluatedKey."""
        query_kwargs: dict[str, Any] = {
            "KeyConditionExpression": Key("collection").eq(self.collection),
            **kwargs,
        }
        condition = self._filter_expression(entry_filter)
        if condition is not None:
            query_kwargs["FilterExpression"] = condition

        while True:
            page = self.table.query(**query_kwargs)
            yield page
            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                break
            query_kwargs["ExclusiveStartKey"] = last_key

    @staticmethod
    def _filter_expression(entry_filter: EntryFilter) -> ConditionBase | None:
        conditions: list[ConditionBase] = []
        if entry_filter.since is not None:
            conditions.append(Attr("datetime").gte(entry_filter.since))
        if entry_filter.min_score is not None:
            conditions.append(Attr("score").gte(entry_filter.min_score))

        if not conditions:
            return None
        expression = conditions[0]
        for condition in conditions[1:]:
            expression = expression & condition
        return expression
