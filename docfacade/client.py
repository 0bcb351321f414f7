from __future__ import annotations

import logging
from typing import Any, Optional

from pymongo import MongoClient

from .config import DatabaseOptions
from .database import DatabaseHandle
from .executor.base import OperationExecutor
from .executor.pymongo_executor import MongoClientExecutor
from .operations.helpers import require

logger = logging.getLogger(__name__)


class DocumentClient:
    """
    Entry point that hands out database handles sharing one executor.

    Usage:
        with DocumentClient.from_uri("mongodb://localhost:27017") as client:
            database = client.get_database("orders")
            database.get_collection_names()
    """

    def __init__(self, executor: OperationExecutor, options: Optional[DatabaseOptions] = None) -> None:
        self._executor = require("executor", executor)
        self._options = options or DatabaseOptions()

    @classmethod
    def from_uri(cls, uri: str, **client_kwargs: Any) -> "DocumentClient":
        """
        Build a client backed by a new pymongo MongoClient.

        The MongoClient's codec options, read preference and write concern
        (from the URI or keyword arguments) become the client defaults.
        """
        mongo_client: MongoClient = MongoClient(uri, **client_kwargs)
        options = DatabaseOptions(
            codec_options=mongo_client.codec_options,
            write_concern=mongo_client.write_concern,
            read_preference=mongo_client.read_preference,
        )
        return cls(MongoClientExecutor(mongo_client), options)

    @property
    def options(self) -> DatabaseOptions:
        return self._options

    @property
    def executor(self) -> OperationExecutor:
        return self._executor

    def get_database(self, name: str, options: Optional[DatabaseOptions] = None) -> DatabaseHandle:
        """
        Return a handle for ``name``.

        ``options`` replaces the client defaults wholesale; use
        ``client.options.replace(...)`` to override single fields.
        """
        return DatabaseHandle(name, options or self._options, self._executor)

    def close(self) -> None:
        close = getattr(self._executor, "close", None)
        if close is not None:
            close()
        logger.info("DocumentClient closed")

    def __enter__(self) -> "DocumentClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
