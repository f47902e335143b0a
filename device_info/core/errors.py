# device_info/core/errors.py

"""
The error taxonomy for the device information pipeline.

Every failure the package raises on purpose derives from `DeviceInfoError`, so
a caller (our CLI, for example) can catch the whole family in one place while
still telling a missing file apart from a malformed document.
"""

from pathlib import Path


class DeviceInfoError(Exception):
    """Base class for all device information errors."""


class DocumentReadError(DeviceInfoError, OSError):
    """The property list file could not be opened, read, or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read property list '{self.path}': {reason}")


class SchemaError(DeviceInfoError):
    """
    A required key is missing or holds a value of the wrong type.

    Attributes:
        key: The name of the offending key (e.g. 'UTExportedTypeDeclarations').
        path: The full key path inside the document, for diagnostics.
        expected: The name of the expected value type, if a type was wrong.
    """

    def __init__(self, key: str, path: str | None = None, expected: str | None = None, found: str | None = None):
        self.key = key
        self.path = path or key
        self.expected = expected
        self.found = found
        if found is None:
            message = f"Missing required key '{self.path}'"
        else:
            message = f"Key '{self.path}' should be {expected}, found {found}"
        super().__init__(message)


class KnowledgeBaseError(DeviceInfoError):
    """The colour-name knowledge base is unreadable or unsupported."""
