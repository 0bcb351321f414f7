from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bson.codec_options import CodecOptions
from pymongo.write_concern import WriteConcern

from .collection import CollectionHandle
from .config import (
    CollectionOptions,
    CreateCollectionOptions,
    DatabaseOptions,
    ReadPreferenceMode,
)
from .executor.base import OperationExecutor
from .executor.cursor import BatchCursorIterator, iter_batch_cursor
from .operations.helpers import require, require_document, require_name, to_document
from .operations.models import (
    CommandReadOperation,
    CommandWriteOperation,
    CreateCollectionOperation,
    DropDatabaseOperation,
    ListCollectionsOperation,
)

logger = logging.getLogger(__name__)


class DatabaseHandle:
    """
    High-level API for one database.

    Each call builds a single immutable operation carrying this handle's
    database name and submits it to the executor. The handle itself holds no
    mutable state, so it can be shared between threads.

    Usage:
        database = DatabaseHandle("orders", DatabaseOptions(), executor)
        database.create_collection("events", CreateCollectionOptions(capped=True, size_in_bytes=4096))
        names = database.get_collection_names()
        stats = database.execute_command({"dbStats": 1}, ReadPreference.SECONDARY_PREFERRED)
    """

    def __init__(self, name: str, options: DatabaseOptions, executor: OperationExecutor) -> None:
        self._name = require_name("name", name)
        self._options = require("options", options)
        self._executor = require("executor", executor)

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> DatabaseOptions:
        return self._options

    @property
    def executor(self) -> OperationExecutor:
        return self._executor

    def get_name(self) -> str:
        return self._name

    def get_options(self) -> DatabaseOptions:
        return self._options

    def execute_command(
        self,
        command: Mapping[str, Any],
        read_preference: Optional[ReadPreferenceMode] = None,
        result_class: Optional[type] = None,
    ) -> Any:
        """
        Run a database command.

        Without a read preference the command goes through the write path and
        runs on the primary. With one, it goes through the read path using
        exactly that read preference; the handle's default is not consulted.

        Args:
            command: The command document
            read_preference: Read preference for a read-only command
            result_class: Document class used to decode the reply, including
                nested documents. Defaults to the handle's codec options.
        """
        require_document("command", command)
        codec_options = self._codec_options_for(result_class)

        if read_preference is None:
            operation = CommandWriteOperation(self._name, command, codec_options)
            return self._executor.execute_write(operation)

        read_operation = CommandReadOperation(self._name, command, codec_options)
        return self._executor.execute_read(read_operation, read_preference)

    def drop_database(self) -> None:
        self._executor.execute_write(
            DropDatabaseOperation(self._name, write_concern=self._options.write_concern)
        )
        logger.debug("Dropped database %s", self._name)

    def list_collections(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        result_class: Optional[type] = None,
    ) -> BatchCursorIterator:
        """
        Return a lazy iterator over collection info documents.

        The operation is submitted immediately; documents are pulled from the
        returned cursor as the iterator is consumed. The iterator owns the
        cursor and closes it once exhausted, on close(), or when it is
        discarded unconsumed.
        """
        if filter is not None:
            require_document("filter", filter)
        operation = ListCollectionsOperation(
            self._name, self._codec_options_for(result_class), filter=filter
        )
        cursor = self._executor.execute_read(operation, self._options.read_preference)
        return iter_batch_cursor(cursor)

    def get_collection_names(self) -> list[str]:
        """
        Return the names of all collections, in the order the server lists them.

        Reads with the handle's default read preference and exhausts the cursor
        before returning.
        """
        return [document["name"] for document in self.list_collections()]

    def create_collection(
        self,
        collection_name: str,
        options: Optional[CreateCollectionOptions] = None,
    ) -> None:
        """
        Create a collection explicitly.

        Storage engine options are re-encoded into a BSON document before
        they are attached to the operation.

        Raises:
            InvalidArgumentError: If the name is missing or the storage engine
                options cannot be encoded
        """
        require_name("collection_name", collection_name)
        kwargs = (options or CreateCollectionOptions()).as_kwargs()
        if kwargs["storage_engine_options"] is not None:
            kwargs["storage_engine_options"] = to_document(
                "storage_engine_options", kwargs["storage_engine_options"]
            )

        operation = CreateCollectionOperation(
            self._name,
            collection_name,
            write_concern=self._options.write_concern,
            **kwargs,
        )
        self._executor.execute_write(operation)
        logger.debug("Created collection %s.%s", self._name, collection_name)

    def get_collection(
        self,
        collection_name: str,
        options: Optional[CollectionOptions] = None,
    ) -> CollectionHandle:
        """
        Return a handle for a collection in this database.

        Each of codec options, write concern and read preference is taken
        from ``options`` when set there, and from this database otherwise.
        No operation is submitted.
        """
        require_name("collection_name", collection_name)
        resolved = (options or CollectionOptions()).resolve(self._options)
        return CollectionHandle(self._name, collection_name, resolved, self._executor)

    def with_options(
        self,
        codec_options: Optional[CodecOptions] = None,
        read_preference: Optional[ReadPreferenceMode] = None,
        write_concern: Optional[WriteConcern] = None,
    ) -> "DatabaseHandle":
        """Return a handle on the same database with some options replaced."""
        options = self._options.replace(
            codec_options=codec_options,
            write_concern=write_concern,
            read_preference=read_preference,
        )
        return DatabaseHandle(self._name, options, self._executor)

    def _codec_options_for(self, result_class: Optional[type]) -> CodecOptions:
        codec_options = self._options.codec_options
        if result_class is None or codec_options.document_class is result_class:
            return codec_options
        return codec_options.with_options(document_class=result_class)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatabaseHandle):
            return NotImplemented
        return (
            self._name == other._name
            and self._options == other._options
            and self._executor is other._executor
        )

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"DatabaseHandle(name={self._name!r}, options={self._options!r})"
