from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from bson.codec_options import DEFAULT_CODEC_OPTIONS, CodecOptions
from pymongo import ReadPreference
# Common base class of the ReadPreference modes; pymongo exports no public name for it.
from pymongo.read_preferences import _ServerMode as ReadPreferenceMode
from pymongo.write_concern import WriteConcern

from .errors import InvalidArgumentError


def _check_type(name: str, value: Any, expected: type) -> None:
    if not isinstance(value, expected):
        raise InvalidArgumentError(
            f"{name} must be an instance of {expected.__name__}, got {type(value).__name__}"
        )


def _pick(override: Any, default: Any) -> Any:
    return default if override is None else override


@dataclass(frozen=True)
class DatabaseOptions:
    """
    Immutable option bundle attached to a database handle.

    Every field is required to be set; use ``replace()`` to derive a copy
    with some fields overridden.
    """
    codec_options: CodecOptions = field(default_factory=lambda: DEFAULT_CODEC_OPTIONS)
    write_concern: WriteConcern = field(default_factory=WriteConcern)
    read_preference: ReadPreferenceMode = field(default_factory=lambda: ReadPreference.PRIMARY)

    def __post_init__(self) -> None:
        """Validate option types."""
        _check_type("codec_options", self.codec_options, CodecOptions)
        _check_type("write_concern", self.write_concern, WriteConcern)
        _check_type("read_preference", self.read_preference, ReadPreferenceMode)

    def replace(
        self,
        codec_options: Optional[CodecOptions] = None,
        write_concern: Optional[WriteConcern] = None,
        read_preference: Optional[ReadPreferenceMode] = None,
    ) -> "DatabaseOptions":
        """
        Return a copy where every non-None argument replaces the current value.
        """
        return DatabaseOptions(
            codec_options=_pick(codec_options, self.codec_options),
            write_concern=_pick(write_concern, self.write_concern),
            read_preference=_pick(read_preference, self.read_preference),
        )


@dataclass(frozen=True)
class CollectionOptions:
    """
    Option bundle for a collection handle.

    Fields left as None are inherited from the owning database when the
    options are resolved.
    """
    codec_options: Optional[CodecOptions] = None
    write_concern: Optional[WriteConcern] = None
    read_preference: Optional[ReadPreferenceMode] = None

    def __post_init__(self) -> None:
        """Validate option types for the fields that are set."""
        if self.codec_options is not None:
            _check_type("codec_options", self.codec_options, CodecOptions)
        if self.write_concern is not None:
            _check_type("write_concern", self.write_concern, WriteConcern)
        if self.read_preference is not None:
            _check_type("read_preference", self.read_preference, ReadPreferenceMode)

    def resolve(self, defaults: DatabaseOptions | "CollectionOptions") -> "CollectionOptions":
        """
        Fill every unset field from ``defaults``.

        Each field is resolved independently, so a partial override keeps the
        defaults for the fields it leaves out.
        """
        return CollectionOptions(
            codec_options=_pick(self.codec_options, defaults.codec_options),
            write_concern=_pick(self.write_concern, defaults.write_concern),
            read_preference=_pick(self.read_preference, defaults.read_preference),
        )


@dataclass
class CreateCollectionOptions:
    """
    Options for creating a collection.

    ``use_power_of_2_sizes`` is tri-state: None leaves the server default
    untouched.
    """
    auto_index: bool = True
    capped: bool = False
    use_power_of_2_sizes: Optional[bool] = None
    max_documents: int = 0
    size_in_bytes: int = 0
    storage_engine_options: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        _check_type("max_documents", self.max_documents, int)
        _check_type("size_in_bytes", self.size_in_bytes, int)
        if self.max_documents < 0:
            raise InvalidArgumentError("max_documents must be >= 0")
        if self.size_in_bytes < 0:
            raise InvalidArgumentError("size_in_bytes must be >= 0")
        if self.storage_engine_options is not None and not isinstance(
            self.storage_engine_options, Mapping
        ):
            raise InvalidArgumentError("storage_engine_options must be a mapping")

    def as_kwargs(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
