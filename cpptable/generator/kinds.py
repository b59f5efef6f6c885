"""Classification of protobuf field kinds into table categories."""

from dataclasses import dataclass

from google.protobuf.descriptor import FieldDescriptor

from .errors import UnsupportedKindError
from .types import FieldKind, ScalarCategory

# Worst case size in bytes: payload plus one tag/length byte
CATEGORY_SIZES: dict[str, int] = {
    ScalarCategory.BOOL: 2,
    ScalarCategory.INT32: 5,
    ScalarCategory.UINT32: 5,
    ScalarCategory.FLOAT: 5,
    ScalarCategory.INT64: 9,
    ScalarCategory.UINT64: 9,
    ScalarCategory.DOUBLE: 9,
    ScalarCategory.STRING: 9,
}

# Size of anything held by reference (nested messages)
POINTER_SIZE = 9

# Size of the array/map container itself
CONTAINER_SIZE = 9


@dataclass(frozen=True)
class KindInfo:
    """Static classification of one field kind."""

    category: ScalarCategory | None  # None for messages, named after the type
    shared: bool


KIND_TABLE: dict[FieldKind, KindInfo] = {
    FieldKind.BOOL: KindInfo(ScalarCategory.BOOL, False),
    FieldKind.INT32: KindInfo(ScalarCategory.INT32, False),
    FieldKind.SINT32: KindInfo(ScalarCategory.INT32, False),
    FieldKind.SFIXED32: KindInfo(ScalarCategory.INT32, False),
    FieldKind.ENUM: KindInfo(ScalarCategory.INT32, False),
    FieldKind.INT64: KindInfo(ScalarCategory.INT64, False),
    FieldKind.SINT64: KindInfo(ScalarCategory.INT64, False),
    FieldKind.SFIXED64: KindInfo(ScalarCategory.INT64, False),
    FieldKind.UINT32: KindInfo(ScalarCategory.UINT32, False),
    FieldKind.FIXED32: KindInfo(ScalarCategory.UINT32, False),
    FieldKind.UINT64: KindInfo(ScalarCategory.UINT64, False),
    FieldKind.FIXED64: KindInfo(ScalarCategory.UINT64, False),
    FieldKind.FLOAT: KindInfo(ScalarCategory.FLOAT, False),
    FieldKind.DOUBLE: KindInfo(ScalarCategory.DOUBLE, False),
    FieldKind.STRING: KindInfo(ScalarCategory.STRING, True),
    FieldKind.BYTES: KindInfo(ScalarCategory.STRING, True),
    FieldKind.MESSAGE: KindInfo(None, True),
}

DESCRIPTOR_KINDS: dict[int, FieldKind] = {
    FieldDescriptor.TYPE_BOOL: FieldKind.BOOL,
    FieldDescriptor.TYPE_INT32: FieldKind.INT32,
    FieldDescriptor.TYPE_SINT32: FieldKind.SINT32,
    FieldDescriptor.TYPE_SFIXED32: FieldKind.SFIXED32,
    FieldDescriptor.TYPE_INT64: FieldKind.INT64,
    FieldDescriptor.TYPE_SINT64: FieldKind.SINT64,
    FieldDescriptor.TYPE_SFIXED64: FieldKind.SFIXED64,
    FieldDescriptor.TYPE_UINT32: FieldKind.UINT32,
    FieldDescriptor.TYPE_FIXED32: FieldKind.FIXED32,
    FieldDescriptor.TYPE_UINT64: FieldKind.UINT64,
    FieldDescriptor.TYPE_FIXED64: FieldKind.FIXED64,
    FieldDescriptor.TYPE_FLOAT: FieldKind.FLOAT,
    FieldDescriptor.TYPE_DOUBLE: FieldKind.DOUBLE,
    FieldDescriptor.TYPE_STRING: FieldKind.STRING,
    FieldDescriptor.TYPE_BYTES: FieldKind.BYTES,
    FieldDescriptor.TYPE_ENUM: FieldKind.ENUM,
    FieldDescriptor.TYPE_MESSAGE: FieldKind.MESSAGE,
}


@dataclass(frozen=True)
class FieldClass:
    """Classification of a single field or element."""

    kind: FieldKind
    category: str
    size: int
    shared: bool


def kind_of(field: FieldDescriptor) -> FieldKind:
    """Return the wire kind of a field descriptor."""
    try:
        return DESCRIPTOR_KINDS[field.type]
    except KeyError:
        raise UnsupportedKindError(
            f"field {field.full_name!r} has unsupported protobuf type {field.type}"
        ) from None


def category(kind: FieldKind, type_name: str | None = None) -> str:
    """Return the table category for a kind.

    Message kinds are referenced by the message name, which must be given as
    ``type_name``.
    """
    info = KIND_TABLE[kind]
    if info.category is not None:
        return info.category.value
    if type_name is None:
        raise ValueError(f"{kind} fields need the referenced type name")
    return type_name


def size(category_name: str) -> int:
    """Return the worst case size estimate for a category."""
    return CATEGORY_SIZES.get(category_name, POINTER_SIZE)


def shared(kind: FieldKind) -> bool:
    """Check if values of this kind live behind a shared pointer."""
    return KIND_TABLE[kind].shared


def classify(field: FieldDescriptor) -> FieldClass:
    """Classify a field descriptor (or map key/value, or array element)."""
    kind = kind_of(field)
    type_name = field.message_type.name if kind == FieldKind.MESSAGE else None
    name = category(kind, type_name)
    return FieldClass(kind=kind, category=name, size=size(name), shared=shared(kind))
