"""cpptable schema generator."""

from .assembler import build_schema as build_schema
from .assembler import field_entry as field_entry
from .assembler import message_schema as message_schema
from .errors import *
from .kinds import CONTAINER_SIZE as CONTAINER_SIZE
from .kinds import POINTER_SIZE as POINTER_SIZE
from .kinds import category as category
from .kinds import classify as classify
from .kinds import shared as shared
from .kinds import size as size
from .resolver import DEFAULT_NAMESPACE as DEFAULT_NAMESPACE
from .resolver import DescriptorRegistry as DescriptorRegistry
from .resolver import compile_descriptor_set as compile_descriptor_set
from .resolver import namespace_messages as namespace_messages
from .resolver import resolve as resolve
from .types import *
