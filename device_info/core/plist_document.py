# device_info/core/plist_document.py

"""
Reads the system property list into a typed, read-only document tree.

The raw tree produced by `plistlib` is a nest of plain Python values. Rather
than casting those values wherever they are used, every access goes through a
`PlistNode`, which checks the type at the point of access and raises a
`SchemaError` carrying the exact key path that failed.
"""

import logging
import plistlib
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union
from xml.parsers.expat import ExpatError

from .errors import DocumentReadError, SchemaError

logger = logging.getLogger(__name__)

# The value shapes a property list can hold.
Value = Union[str, int, float, bool, bytes, datetime, List["Value"], Dict[str, "Value"]]

ROOT_KEY = "<root>"


def _type_name(value: Any) -> str:
    """Describes a raw value's shape the way our error messages do."""
    if isinstance(value, dict):
        return "a mapping"
    if isinstance(value, list):
        return "a sequence"
    if isinstance(value, str):
        return "a string"
    return type(value).__name__


class PlistNode:
    """A read-only view of one value in the document, remembering where it lives."""

    def __init__(self, value: Value, path: str = "", key: str = ROOT_KEY):
        self.value = value
        self.path = path
        # The last key on the path; keys may contain dots, so it is kept apart.
        self.key = key

    def __repr__(self) -> str:
        return f"PlistNode(path={self.path or ROOT_KEY!r}, type={_type_name(self.value)!r})"

    def _child_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def _lookup(self, key: str, expected: type, expected_name: str, required: bool):
        """Fetches `key` from this mapping node and validates the value's type."""
        if not isinstance(self.value, dict):
            raise SchemaError(self.key, self.path or ROOT_KEY, "a mapping", _type_name(self.value))

        child_path = self._child_path(key)
        if key not in self.value:
            if required:
                raise SchemaError(key, child_path, expected_name)
            return None

        raw = self.value[key]
        if not isinstance(raw, expected):
            raise SchemaError(key, child_path, expected_name, _type_name(raw))
        return PlistNode(raw, child_path, key)

    # --- Required accessors ---
    def mapping(self, key: str) -> "PlistNode":
        return self._lookup(key, dict, "a mapping", required=True)

    def sequence(self, key: str) -> "PlistNode":
        return self._lookup(key, list, "a sequence", required=True)

    def string(self, key: str) -> str:
        return self._lookup(key, str, "a string", required=True).value

    # --- Optional accessors: a missing key is fine, a mistyped one is not ---
    def optional_mapping(self, key: str) -> "PlistNode | None":
        return self._lookup(key, dict, "a mapping", required=False)

    def optional_sequence(self, key: str) -> "PlistNode | None":
        return self._lookup(key, list, "a sequence", required=False)

    def optional_string(self, key: str) -> str | None:
        node = self._lookup(key, str, "a string", required=False)
        return node.value if node is not None else None

    # --- Sequence helpers ---
    def items(self) -> Iterator["PlistNode"]:
        """Yields the entries of a sequence node in document order."""
        if not isinstance(self.value, list):
            raise SchemaError(self.key, self.path, "a sequence", _type_name(self.value))
        for index, raw in enumerate(self.value):
            yield PlistNode(raw, f"{self.path}[{index}]", f"{self.key}[{index}]")

    def strings(self) -> List[str]:
        """Returns a sequence node's entries, insisting every one is a string."""
        result = []
        for item in self.items():
            if not isinstance(item.value, str):
                raise SchemaError(self.key, item.path, "a string", _type_name(item.value))
            result.append(item.value)
        return result


def load_document(path: Path) -> PlistNode:
    """
    Loads a property list file (XML or binary) and returns its root node.

    Args:
        path: Location of the property list.

    Returns:
        The root `PlistNode`, guaranteed to wrap a string-keyed mapping.

    Raises:
        DocumentReadError: The file is missing, unreadable, or malformed.
        SchemaError: The document's root is not a mapping.
    """
    path = Path(path)
    logger.debug(f"Reading property list: {path}")
    try:
        with open(path, 'rb') as f:
            data = plistlib.load(f)
    except OSError as e:
        logger.error(f"Cannot open property list '{path}': {e}")
        raise DocumentReadError(path, e.strerror or str(e)) from e
    except (plistlib.InvalidFileException, ValueError, ExpatError, AttributeError) as e:
        # The XML backend raises expat errors for broken markup, and an
        # AttributeError for a <date> it cannot match.
        logger.error(f"Property list '{path}' is malformed: {e}")
        raise DocumentReadError(path, f"malformed property list ({e})") from e

    if not isinstance(data, dict) or not all(isinstance(k, str) for k in data):
        raise SchemaError(ROOT_KEY, ROOT_KEY, "a mapping", _type_name(data))

    logger.debug(f"Loaded property list with {len(data)} top-level keys.")
    return PlistNode(data)
