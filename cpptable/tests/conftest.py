"""Unit tests configuration file."""

import pytest
from google.protobuf.descriptor_pb2 import DescriptorProto, FieldDescriptorProto, FileDescriptorProto

from cpptable.generator.resolver import DescriptorRegistry

LABEL_OPTIONAL = FieldDescriptorProto.LABEL_OPTIONAL
LABEL_REPEATED = FieldDescriptorProto.LABEL_REPEATED


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


class ProtoFile:
    """Builds a FileDescriptorProto the way protoc would emit it."""

    def __init__(self, name="input.proto", package="cpp_table", syntax="proto3", imports=()):
        self.proto = FileDescriptorProto(name=name, package=package, syntax=syntax)
        self.proto.dependency.extend(imports)

    def message(self, name, parent=None) -> DescriptorProto:
        container = parent.nested_type if parent is not None else self.proto.message_type
        message = container.add()
        message.name = name
        return message

    def enum(self, name, *values):
        enum = self.proto.enum_type.add()
        enum.name = name
        for number, value in enumerate(values):
            enum.value.add(name=value, number=number)
        return enum

    def field(self, message, name, number, kind, label=LABEL_OPTIONAL, type_name=None):
        field = message.field.add(name=name, number=number, label=label, type=kind)
        if type_name is not None:
            field.type_name = type_name
        return field

    def map_field(self, message, name, number, key, value, value_type_name=None):
        entry = self.message(f"{name.title().replace('_', '')}Entry", parent=message)
        entry.options.map_entry = True
        self.field(entry, "key", 1, key)
        self.field(entry, "value", 2, value, type_name=value_type_name)
        return self.field(
            message,
            name,
            number,
            FieldDescriptorProto.TYPE_MESSAGE,
            label=LABEL_REPEATED,
            type_name=f".{self.proto.package}.{message.name}.{entry.name}",
        )


@pytest.fixture
def proto_file():
    """Factory for in-memory definition files."""
    return ProtoFile


@pytest.fixture
def resolve_files():
    """Register files in a fresh registry and return the resolved descriptors."""

    def _resolve(*files):
        registry = DescriptorRegistry()
        for f in files:
            registry.register(f.proto)
        return registry.files()

    return _resolve
