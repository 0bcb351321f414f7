from __future__ import annotations

import os
from collections.abc import Callable, Iterator

import pytest
from bson.codec_options import CodecOptions
from pymongo import ReadPreference
from pymongo.write_concern import WriteConcern

from docfacade.client import DocumentClient
from docfacade.config import DatabaseOptions
from docfacade.database import DatabaseHandle

from tests._fakes import RecordingExecutor

DATABASE_NAME = "databaseName"


@pytest.fixture
def database_name() -> str:
    return DATABASE_NAME


@pytest.fixture
def database_options() -> DatabaseOptions:
    """
    Options with every field set away from the library defaults, so tests can
    tell inherited values from defaults.
    """
    return DatabaseOptions(
        codec_options=CodecOptions(tz_aware=True),
        write_concern=WriteConcern(w=1),
        read_preference=ReadPreference.PRIMARY,
    )


@pytest.fixture
def make_database(
    database_name: str, database_options: DatabaseOptions
) -> Callable[..., tuple[DatabaseHandle, RecordingExecutor]]:
    """
    Factory fixture returning a handle wired to a fresh RecordingExecutor.

    Usage:
        database, executor = make_database([None, None])
    """

    def _make(responses=(), options: DatabaseOptions | None = None):
        executor = RecordingExecutor(responses)
        database = DatabaseHandle(database_name, options or database_options, executor)
        return database, executor

    return _make


@pytest.fixture(scope="session")
def mongo_uri() -> str:
    """
    Connection URI for tests against a live server.

    Tests using it are skipped unless DOCFACADE_TEST_MONGO_URI is set.
    """
    uri = os.environ.get("DOCFACADE_TEST_MONGO_URI")
    if not uri:
        pytest.skip("DOCFACADE_TEST_MONGO_URI is not set")
    return uri


@pytest.fixture
def live_client(mongo_uri: str) -> Iterator[DocumentClient]:
    client = DocumentClient.from_uri(mongo_uri, serverSelectionTimeoutMS=5000)
    try:
        client.get_database("admin").execute_command({"ping": 1})
    except Exception as exc:  # pragma: no cover
        client.close()
        pytest.fail(
            "MongoDB test server is not reachable.\n"
            f"- DOCFACADE_TEST_MONGO_URI={mongo_uri!r}\n"
            f"- Underlying error: {exc}",
            pytrace=False,
        )

    yield client
    client.close()
