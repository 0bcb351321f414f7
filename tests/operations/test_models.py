from __future__ import annotations

import dataclasses

import pytest
from bson.codec_options import DEFAULT_CODEC_OPTIONS
from bson.son import SON
from pymongo.write_concern import WriteConcern

from docfacade.operations.models import (
    CommandReadOperation,
    CommandWriteOperation,
    CreateCollectionOperation,
    DropCollectionOperation,
    DropDatabaseOperation,
    ListCollectionsOperation,
    OperationType,
)


def test_operations_are_immutable() -> None:
    operation = DropDatabaseOperation("db")

    with pytest.raises(dataclasses.FrozenInstanceError):
        operation.database_name = "other"


def test_equality_is_structural() -> None:
    assert CommandWriteOperation("db", {"ping": 1}, DEFAULT_CODEC_OPTIONS) == CommandWriteOperation(
        "db", {"ping": 1}, DEFAULT_CODEC_OPTIONS
    )
    assert DropDatabaseOperation("db") != DropDatabaseOperation("other")
    # Same fields, different variant.
    assert CommandWriteOperation("db", {"ping": 1}, DEFAULT_CODEC_OPTIONS) != CommandReadOperation(
        "db", {"ping": 1}, DEFAULT_CODEC_OPTIONS
    )


def test_write_concern_does_not_affect_equality() -> None:
    assert DropDatabaseOperation("db", write_concern=WriteConcern(w=1)) == DropDatabaseOperation("db")
    assert CreateCollectionOperation(
        "db", "c", write_concern=WriteConcern(w="majority")
    ) == CreateCollectionOperation("db", "c")
    assert DropCollectionOperation("db", "c", write_concern=WriteConcern(w=0)) == DropCollectionOperation(
        "db", "c"
    )


@pytest.mark.parametrize(
    "operation, op_type, is_write",
    [
        (CommandWriteOperation("db", {}, DEFAULT_CODEC_OPTIONS), OperationType.COMMAND_WRITE, True),
        (CommandReadOperation("db", {}, DEFAULT_CODEC_OPTIONS), OperationType.COMMAND_READ, False),
        (DropDatabaseOperation("db"), OperationType.DROP_DATABASE, True),
        (ListCollectionsOperation("db", DEFAULT_CODEC_OPTIONS), OperationType.LIST_COLLECTIONS, False),
        (CreateCollectionOperation("db", "c"), OperationType.CREATE_COLLECTION, True),
        (DropCollectionOperation("db", "c"), OperationType.DROP_COLLECTION, True),
    ],
)
def test_operation_type_and_path(operation, op_type: OperationType, is_write: bool) -> None:
    assert operation.operation_type is op_type
    assert operation.is_write is is_write


class TestCreateCollectionCommand:
    def test_minimal_command(self) -> None:
        command = CreateCollectionOperation("db", "events").as_command()

        assert list(command.items()) == [
            ("create", "events"),
            ("capped", False),
        ]

    def test_capped_command_includes_size_and_max(self) -> None:
        command = CreateCollectionOperation(
            "db",
            "events",
            auto_index=False,
            capped=True,
            use_power_of_2_sizes=True,
            max_documents=100,
            size_in_bytes=1000,
            storage_engine_options=SON([("wiredTiger", SON())]),
        ).as_command()

        assert command == SON(
            [
                ("create", "events"),
                ("autoIndexId", False),
                ("capped", True),
                ("size", 1000),
                ("max", 100),
                ("flags", 1),
                ("storageEngine", SON([("wiredTiger", SON())])),
            ]
        )

    def test_size_is_ignored_when_not_capped(self) -> None:
        command = CreateCollectionOperation(
            "db", "events", size_in_bytes=1000, use_power_of_2_sizes=False
        ).as_command()

        assert "size" not in command
        assert "max" not in command
        assert command["flags"] == 0


def test_drop_collection_full_name() -> None:
    assert DropCollectionOperation("db", "events").full_name == "db.events"
