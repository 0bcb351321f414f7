from __future__ import annotations

import datetime

import pytest
from bson.son import SON

from docfacade.errors import InvalidArgumentError
from docfacade.operations.helpers import require, require_document, require_name, to_document


def test_require_returns_value() -> None:
    assert require("x", 0) == 0


def test_require_rejects_none() -> None:
    with pytest.raises(InvalidArgumentError, match="x can not be None"):
        require("x", None)


@pytest.mark.parametrize("value", [None, "", b"db", 1])
def test_require_name_rejects(value) -> None:
    with pytest.raises(InvalidArgumentError):
        require_name("name", value)


def test_require_document_rejects_non_mapping() -> None:
    with pytest.raises(InvalidArgumentError, match="must be a mapping"):
        require_document("command", [("ping", 1)])


def test_to_document_preserves_order_and_values() -> None:
    created = datetime.datetime(2020, 1, 1)
    document = to_document("doc", {"b": 1, "a": {"nested": [1, 2]}, "when": created})

    assert isinstance(document, SON)
    assert list(document.keys()) == ["b", "a", "when"]
    assert isinstance(document["a"], SON)
    assert document["a"]["nested"] == [1, 2]
    assert document["when"] == created


def test_to_document_rejects_unencodable_values() -> None:
    with pytest.raises(InvalidArgumentError, match="not a valid BSON document"):
        to_document("doc", {"value": {1, 2}})
