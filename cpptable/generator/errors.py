"""Errors raised while generating a schema table."""


class SchemaGenError(RuntimeError):
    """Base class for fatal generator errors.

    ``stage`` names the pipeline step that failed and is used as the prefix of
    the diagnostic printed by the command line.
    """

    stage = "generate"


class ExternalToolError(SchemaGenError):
    """Raised when protoc cannot be launched or exits non-zero."""

    stage = "protoc"


class DescriptorReadError(SchemaGenError):
    """Raised when the descriptor set blob cannot be read or decoded."""

    stage = "read descriptor set"


class DescriptorRegistrationError(SchemaGenError):
    """Raised when a file conflicts with the registry or cannot be resolved."""

    stage = "register"


class UnsupportedKindError(SchemaGenError):
    """Raised when a field uses a protobuf type the classifier does not know."""

    stage = "classify"


class OutputWriteError(SchemaGenError):
    """Raised when the generated table cannot be written to disk."""

    stage = "write output"
