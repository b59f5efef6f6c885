"""Assemble per-message field schemas from resolved descriptors."""

from google.protobuf.descriptor import Descriptor, FieldDescriptor, FileDescriptor

from .kinds import CONTAINER_SIZE, classify
from .resolver import DEFAULT_NAMESPACE, namespace_messages
from .types import ArrayField, FieldSchema, MapField, MessageSchema, NormalField, Schema


def _is_repeated(field: FieldDescriptor) -> bool:
    # Newer protobuf releases expose is_repeated and deprecate label
    is_repeated = getattr(field, "is_repeated", None)
    if is_repeated is not None:
        return bool(is_repeated)
    return field.label == FieldDescriptor.LABEL_REPEATED


def _is_map(field: FieldDescriptor) -> bool:
    message = field.message_type
    return message is not None and message.GetOptions().map_entry


def field_entry(field: FieldDescriptor) -> FieldSchema:
    """Build the schema entry for one field."""
    if not _is_repeated(field):
        info = classify(field)
        return NormalField(
            name=field.name,
            key=info.category,
            tag=field.number,
            size=info.size,
            shared=info.shared,
        )

    if _is_map(field):
        entry = field.message_type
        return MapField(
            name=field.name,
            key=classify(entry.fields_by_name["key"]).category,
            value=classify(entry.fields_by_name["value"]).category,
            tag=field.number,
            size=CONTAINER_SIZE,
        )

    element = classify(field)
    return ArrayField(
        name=field.name,
        key=element.category,
        tag=field.number,
        size=CONTAINER_SIZE,
        key_size=element.size,
        key_shared=element.shared,
    )


def message_schema(message: Descriptor) -> MessageSchema:
    """Build the schema of one message, fields in declaration order."""
    return MessageSchema(
        name=message.name,
        fields=tuple(field_entry(field) for field in message.fields),
    )


def build_schema(files: list[FileDescriptor], namespace: str = DEFAULT_NAMESPACE) -> Schema:
    """Build the schema for every message declared in the namespace."""
    messages = namespace_messages(files, namespace)
    return Schema(
        namespace=namespace,
        messages=tuple(message_schema(message) for message in messages),
    )
