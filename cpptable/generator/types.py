"""Type definitions for descriptor classification and schema generation."""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Literal

from dataclasses_json import DataClassJsonMixin


class FieldKind(StrEnum):
    """Wire-level kind of a protobuf field."""

    BOOL = auto()
    INT32 = auto()
    SINT32 = auto()
    SFIXED32 = auto()
    INT64 = auto()
    SINT64 = auto()
    SFIXED64 = auto()
    UINT32 = auto()
    FIXED32 = auto()
    UINT64 = auto()
    FIXED64 = auto()
    FLOAT = auto()
    DOUBLE = auto()
    STRING = auto()
    BYTES = auto()
    ENUM = auto()
    MESSAGE = auto()


class ScalarCategory(StrEnum):
    """Target scalar categories understood by the table engine.

    Message fields have no member here; their category is the name of the
    referenced message.
    """

    BOOL = auto()
    INT32 = auto()
    INT64 = auto()
    UINT32 = auto()
    UINT64 = auto()
    FLOAT = auto()
    DOUBLE = auto()
    STRING = auto()


@dataclass(frozen=True)
class NormalField(DataClassJsonMixin):
    """A singular field stored inline or behind a shared pointer."""

    name: str
    key: str
    tag: int
    size: int
    shared: bool
    type: Literal["normal"] = "normal"


@dataclass(frozen=True)
class ArrayField(DataClassJsonMixin):
    """A repeated (non-map) field.

    The container is always shared; key_size and key_shared describe a
    single element slot.
    """

    name: str
    key: str
    tag: int
    size: int
    key_size: int
    key_shared: bool
    shared: bool = True
    type: Literal["array"] = "array"


@dataclass(frozen=True)
class MapField(DataClassJsonMixin):
    """A map<key, value> field, always stored as a shared container."""

    name: str
    key: str
    value: str
    tag: int
    size: int
    shared: bool = True
    type: Literal["map"] = "map"


FieldSchema = NormalField | ArrayField | MapField


@dataclass(frozen=True)
class MessageSchema(DataClassJsonMixin):
    """Field entries of one message, in declaration order."""

    name: str
    fields: tuple[FieldSchema, ...]

    def field(self, name: str) -> FieldSchema:
        for entry in self.fields:
            if entry.name == name:
                return entry
        raise KeyError(name)


@dataclass(frozen=True)
class Schema(DataClassJsonMixin):
    """Generated schema for every message of a namespace."""

    namespace: str
    messages: tuple[MessageSchema, ...]

    def message(self, name: str) -> MessageSchema:
        for message in self.messages:
            if message.name == name:
                return message
        raise KeyError(name)

    @property
    def names(self) -> list[str]:
        return [message.name for message in self.messages]
