from __future__ import annotations

import logging
from typing import Optional

from bson.codec_options import CodecOptions
from pymongo.write_concern import WriteConcern

from .config import CollectionOptions, ReadPreferenceMode
from .executor.base import OperationExecutor
from .operations.models import DropCollectionOperation

logger = logging.getLogger(__name__)


class CollectionHandle:
    """
    Handle for one collection, bound to fully resolved options.

    Obtained from DatabaseHandle.get_collection(); construction never talks
    to the server.
    """

    def __init__(
        self,
        database_name: str,
        name: str,
        options: CollectionOptions,
        executor: OperationExecutor,
    ) -> None:
        self._database_name = database_name
        self._name = name
        self._options = options
        self._executor = executor

    @property
    def name(self) -> str:
        return self._name

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def full_name(self) -> str:
        return f"{self._database_name}.{self._name}"

    @property
    def options(self) -> CollectionOptions:
        return self._options

    def get_options(self) -> CollectionOptions:
        return self._options

    def drop(self) -> None:
        """Drop the collection. Dropping a missing collection is not an error."""
        self._executor.execute_write(
            DropCollectionOperation(
                self._database_name,
                self._name,
                write_concern=self._options.write_concern,
            )
        )
        logger.debug("Dropped collection %s", self.full_name)

    def with_options(
        self,
        codec_options: Optional[CodecOptions] = None,
        read_preference: Optional[ReadPreferenceMode] = None,
        write_concern: Optional[WriteConcern] = None,
    ) -> "CollectionHandle":
        overrides = CollectionOptions(
            codec_options=codec_options,
            write_concern=write_concern,
            read_preference=read_preference,
        )
        return CollectionHandle(
            self._database_name,
            self._name,
            overrides.resolve(self._options),
            self._executor,
        )

    def __repr__(self) -> str:
        return f"CollectionHandle(full_name={self.full_name!r}, options={self._options!r})"
