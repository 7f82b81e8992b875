class DumperError(Exception):
    """Base exception for schemadump errors."""


class OutputError(DumperError):
    """Raised when an artifact cannot be rendered or written."""

    def __init__(self, file_name: str, cause: BaseException):
        super().__init__(f"failed to dump {file_name}: {cause}")
        self.file_name = file_name
        self.cause = cause


class SerializationError(DumperError):
    """Raised when a record cannot be encoded as structured data."""


class ModuleLookupError(DumperError):
    """Raised when a module is not loaded in the target process."""


class MemoryReadError(DumperError):
    """Raised when target memory is unmapped or unreadable."""


class UnsupportedPlatformError(DumperError):
    """Raised when the host platform has no known module suffix."""


class UnreachableFormatError(DumperError):
    """Raised when a generator is asked for a format outside the fixed set."""
