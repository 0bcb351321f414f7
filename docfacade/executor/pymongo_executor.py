from __future__ import annotations

import logging
import time
from typing import Any, Optional

from bson.codec_options import CodecOptions
from bson.son import SON
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.write_concern import WriteConcern

from ..config import ReadPreferenceMode
from ..errors import InvalidArgumentError, UnsupportedOperationError
from ..operations.models import (
    CommandReadOperation,
    CommandWriteOperation,
    CreateCollectionOperation,
    DropCollectionOperation,
    DropDatabaseOperation,
    ListCollectionsOperation,
    Operation,
)
from .cursor import PyMongoBatchCursor
from .metrics import observe_operation

logger = logging.getLogger(__name__)

# Error code and message the server returns when dropping a missing collection.
_NS_NOT_FOUND = ["ns not found", 26]


def _with_write_concern(command: SON, write_concern: Optional[WriteConcern]) -> SON:
    if write_concern is not None and not write_concern.is_server_default:
        command["writeConcern"] = write_concern.document
    return command


class MongoClientExecutor:
    """
    OperationExecutor that runs operations through a pymongo MongoClient.

    Server selection, connection pooling and the wire protocol are left to
    pymongo. Errors raised by pymongo are not wrapped.

    Usage:
        executor = MongoClientExecutor(MongoClient("mongodb://localhost:27017"))
        database = DatabaseHandle("orders", DatabaseOptions(), executor)
        database.drop_database()
    """

    def __init__(self, client: MongoClient) -> None:
        self.client = client

    def execute_write(self, operation: Operation) -> Any:
        """
        Run a write operation.

        Raises:
            InvalidArgumentError: If a read operation is submitted
        """
        if not operation.is_write:
            raise InvalidArgumentError(
                f"{type(operation).__name__} is a read operation; use execute_read()"
            )
        return self._execute(operation, None)

    def execute_read(self, operation: Operation, read_preference: ReadPreferenceMode) -> Any:
        """
        Run a read operation with an explicit read preference.

        Raises:
            InvalidArgumentError: If a write operation is submitted
        """
        if operation.is_write:
            raise InvalidArgumentError(
                f"{type(operation).__name__} is a write operation; use execute_write()"
            )
        if read_preference is None:
            raise InvalidArgumentError("read_preference can not be None")
        return self._execute(operation, read_preference)

    def close(self) -> None:
        self.client.close()
        logger.info("MongoClientExecutor closed")

    def _execute(self, operation: Operation, read_preference: Optional[ReadPreferenceMode]) -> Any:
        start_time = time.monotonic()
        status = "success"
        op_type = operation.operation_type.value

        logger.debug(
            "Executing %s on database %s (read_preference=%s)",
            op_type,
            operation.database_name,
            read_preference,
        )
        try:
            return self._dispatch(operation, read_preference)
        except Exception:
            status = "error"
            raise
        finally:
            latency = time.monotonic() - start_time
            observe_operation(operation.database_name, op_type, status, latency)

    def _database(
        self,
        name: str,
        codec_options: Optional[CodecOptions] = None,
        read_preference: Optional[ReadPreferenceMode] = None,
    ) -> Database:
        return self.client.get_database(
            name, codec_options=codec_options, read_preference=read_preference
        )

    def _dispatch(self, op: Operation, read_preference: Optional[ReadPreferenceMode]) -> Any:
        if isinstance(op, CommandWriteOperation):
            db = self._database(op.database_name, op.codec_options)
            return db.command(op.command, codec_options=op.codec_options)

        if isinstance(op, CommandReadOperation):
            db = self._database(op.database_name, op.codec_options, read_preference)
            return db.command(
                op.command,
                read_preference=read_preference,
                codec_options=op.codec_options,
            )

        if isinstance(op, DropDatabaseOperation):
            command = _with_write_concern(SON([("dropDatabase", 1)]), op.write_concern)
            self._database(op.database_name).command(command)
            return None

        if isinstance(op, ListCollectionsOperation):
            db = self._database(op.database_name, op.codec_options, read_preference)
            return PyMongoBatchCursor(db.list_collections(filter=op.filter))

        if isinstance(op, CreateCollectionOperation):
            command = _with_write_concern(op.as_command(), op.write_concern)
            self._database(op.database_name).command(command)
            return None

        if isinstance(op, DropCollectionOperation):
            command = _with_write_concern(SON([("drop", op.collection_name)]), op.write_concern)
            self._database(op.database_name).command(command, allowable_errors=_NS_NOT_FOUND)
            logger.debug("Dropped collection %s", op.full_name)
            return None

        raise UnsupportedOperationError(f"Unsupported operation type: {type(op).__name__}")
