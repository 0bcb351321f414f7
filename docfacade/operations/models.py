from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Mapping, Optional

from bson.codec_options import CodecOptions
from bson.son import SON
from pymongo.write_concern import WriteConcern


class OperationType(str, Enum):
    COMMAND_WRITE = "command_write"
    COMMAND_READ = "command_read"
    DROP_DATABASE = "drop_database"
    LIST_COLLECTIONS = "list_collections"
    CREATE_COLLECTION = "create_collection"
    DROP_COLLECTION = "drop_collection"


@dataclass(frozen=True)
class Operation:
    """
    A single request to be run by an operation executor.

    Operations are value objects: two operations with the same fields are equal.
    The write concern a write operation is submitted with is execution
    context and does not take part in equality.
    """
    database_name: str

    operation_type: ClassVar[OperationType]
    is_write: ClassVar[bool] = True


@dataclass(frozen=True)
class CommandWriteOperation(Operation):
    command: Mapping[str, Any]
    codec_options: CodecOptions

    operation_type = OperationType.COMMAND_WRITE


@dataclass(frozen=True)
class CommandReadOperation(Operation):
    command: Mapping[str, Any]
    codec_options: CodecOptions

    operation_type = OperationType.COMMAND_READ
    is_write = False


@dataclass(frozen=True)
class DropDatabaseOperation(Operation):
    write_concern: Optional[WriteConcern] = field(default=None, compare=False)

    operation_type = OperationType.DROP_DATABASE


@dataclass(frozen=True)
class ListCollectionsOperation(Operation):
    codec_options: CodecOptions
    filter: Optional[Mapping[str, Any]] = None

    operation_type = OperationType.LIST_COLLECTIONS
    is_write = False


@dataclass(frozen=True)
class CreateCollectionOperation(Operation):
    collection_name: str
    auto_index: bool = True
    capped: bool = False
    use_power_of_2_sizes: Optional[bool] = None
    max_documents: int = 0
    size_in_bytes: int = 0
    storage_engine_options: Optional[Mapping[str, Any]] = None
    write_concern: Optional[WriteConcern] = field(default=None, compare=False)

    operation_type = OperationType.CREATE_COLLECTION

    def as_command(self) -> SON:
        """
        Render the ``create`` command document.

        ``autoIndexId`` is only sent when the default index is disabled,
        ``size`` and ``max`` only for capped collections, and ``flags`` only
        when ``use_power_of_2_sizes`` was set explicitly.
        """
        command = SON([("create", self.collection_name)])
        if not self.auto_index:
            command["autoIndexId"] = False
        command["capped"] = self.capped
        if self.capped:
            command["size"] = self.size_in_bytes
            command["max"] = self.max_documents
        if self.use_power_of_2_sizes is not None:
            command["flags"] = 1 if self.use_power_of_2_sizes else 0
        if self.storage_engine_options is not None:
            command["storageEngine"] = self.storage_engine_options
        return command


@dataclass(frozen=True)
class DropCollectionOperation(Operation):
    collection_name: str
    write_concern: Optional[WriteConcern] = field(default=None, compare=False)

    operation_type = OperationType.DROP_COLLECTION

    @property
    def full_name(self) -> str:
        return f"{self.database_name}.{self.collection_name}"
