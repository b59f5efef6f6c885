"""Compile protobuf definitions and resolve them into descriptors."""

import os
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from google.protobuf.descriptor import Descriptor, FileDescriptor
from google.protobuf.descriptor_pb2 import FileDescriptorProto, FileDescriptorSet
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.message import DecodeError

from .errors import DescriptorReadError, DescriptorRegistrationError, ExternalToolError

DEFAULT_NAMESPACE = "cpp_table"


class DescriptorRegistry:
    """Append-only registry of protobuf file descriptors.

    Files may be registered in any order. They are built into a private
    descriptor pool, dependencies first, when ``files()`` is called; every
    import must have been registered by then.
    """

    def __init__(self) -> None:
        self._pool = DescriptorPool()
        self._protos: dict[str, FileDescriptorProto] = {}
        self._built: dict[str, FileDescriptor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._protos

    def __len__(self) -> int:
        return len(self._protos)

    def register(self, file_proto: FileDescriptorProto) -> None:
        """Register one file. Registering the same file name twice is an error."""
        if file_proto.name in self._protos:
            raise DescriptorRegistrationError(f"file {file_proto.name!r} is already registered")
        self._protos[file_proto.name] = file_proto

    def register_set(self, descriptor_set: FileDescriptorSet) -> None:
        """Register every file of a descriptor set."""
        for file_proto in descriptor_set.file:
            self.register(file_proto)

    def files(self) -> list[FileDescriptor]:
        """Return all registered files as descriptors, in registration order."""
        return [self._build(name, ()) for name in self._protos]

    def _build(self, name: str, importers: tuple[str, ...]) -> FileDescriptor:
        if name in self._built:
            return self._built[name]

        if name in importers:
            cycle = " -> ".join((*importers, name))
            raise DescriptorRegistrationError(f"import cycle: {cycle}")

        file_proto = self._protos.get(name)
        if file_proto is None:
            raise DescriptorRegistrationError(
                f"{importers[-1]!r} imports {name!r}, which is not registered"
            )

        for dependency in file_proto.dependency:
            self._build(dependency, (*importers, name))

        try:
            self._pool.Add(file_proto)
            descriptor = self._pool.FindFileByName(name)
        except (TypeError, KeyError, ValueError) as err:
            raise DescriptorRegistrationError(f"{name!r}: {err}") from err

        self._built[name] = descriptor
        return descriptor


@contextmanager
def descriptor_set_file() -> Iterator[str]:
    """Yield a temporary path for protoc output, removed on exit."""
    with tempfile.NamedTemporaryFile(suffix=".pb", delete=False) as f:
        path = f.name
    try:
        yield path
    finally:
        if os.path.exists(path):
            os.unlink(path)


def load_descriptor_set(path: str) -> FileDescriptorSet:
    """Read a serialized FileDescriptorSet."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as err:
        raise DescriptorReadError(f"cannot read {path}: {err}") from err

    descriptor_set = FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(data)
    except DecodeError as err:
        raise DescriptorReadError(f"{path} is not a descriptor set: {err}") from err

    if not descriptor_set.file:
        raise DescriptorReadError(f"{path} contains no files")
    return descriptor_set


def compile_descriptor_set(src_dir: str, filename: str, protoc: str = "protoc") -> FileDescriptorSet:
    """Run protoc on one definition file and return its descriptor set.

    Imported files are included, dependencies before the files that import
    them.
    """
    with descriptor_set_file() as out_path:
        cmd = [
            protoc,
            "--include_source_info",
            "--include_imports",
            f"--descriptor_set_out={out_path}",
            f"--proto_path={src_dir}",
            os.path.join(src_dir, filename),
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as err:
            raise ExternalToolError(f"cannot run {protoc}: {err}") from err

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise ExternalToolError(f"{filename}: {detail}")

        return load_descriptor_set(out_path)


def resolve(
    src_dir: str,
    filename: str,
    registry: DescriptorRegistry,
    protoc: str = "protoc",
) -> list[FileDescriptor]:
    """Compile a definition file, register it and return the resolved files."""
    registry.register_set(compile_descriptor_set(src_dir, filename, protoc=protoc))
    return registry.files()


def namespace_messages(
    files: list[FileDescriptor], namespace: str = DEFAULT_NAMESPACE
) -> list[Descriptor]:
    """Return the top-level messages of every file in the namespace."""
    messages: list[Descriptor] = []
    for file in files:
        if file.package != namespace:
            continue
        # message_types_by_name keeps declaration order
        messages.extend(file.message_types_by_name.values())
    return messages
