from __future__ import annotations

from typing import Any, Mapping

import bson
from bson.codec_options import CodecOptions
from bson.errors import InvalidDocument
from bson.son import SON

from ..errors import InvalidArgumentError

_SON_CODEC_OPTIONS = CodecOptions(document_class=SON)


def require(name: str, value: Any) -> Any:
    """
    Return ``value`` unchanged, raising InvalidArgumentError when it is None.
    """
    if value is None:
        raise InvalidArgumentError(f"{name} can not be None")
    return value


def require_name(name: str, value: Any) -> str:
    """
    Validate a database or collection name.

    Only presence and type are checked; naming rules are enforced by the server.
    """
    require(name, value)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidArgumentError(f"{name} cannot be empty")
    return value


def require_document(name: str, value: Any) -> Mapping[str, Any]:
    require(name, value)
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def to_document(name: str, value: Mapping[str, Any]) -> SON:
    """
    Re-encode a mapping through BSON and return it as a SON document.

    Nested mappings come back as SON too, so the result only contains types
    the wire format can carry.

    Raises:
        InvalidArgumentError: If the mapping cannot be encoded as BSON
    """
    require_document(name, value)
    try:
        return bson.decode(bson.encode(value), codec_options=_SON_CODEC_OPTIONS)
    except (InvalidDocument, TypeError) as exc:
        raise InvalidArgumentError(f"{name} is not a valid BSON document: {exc}") from exc
