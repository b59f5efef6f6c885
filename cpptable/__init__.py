"""cpptable - protobuf schema table generator."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cpptable")
except PackageNotFoundError:
    __version__ = "(local)"
