# device_info/core/device_catalog.py

"""
Turns the scanned device declarations into the ordered device catalog.

The pipeline is a single pass: read the property list, scan its declarations,
group type identifiers by device, derive each device's colour suffixes, and
assemble the final records with the Simulator pseudo-device appended last.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .config_manager import DEFAULT_PLIST_PATH
from .device_scanner import DeviceDeclaration, scan_declarations
from .plist_document import load_document

logger = logging.getLogger(__name__)

# The Simulator reports the host architecture instead of a device model.
SIMULATOR_IDENTIFIER = "x86_64"


@dataclass(frozen=True)
class DeviceDescription:
    """A device identifier and its colour suffixes (empty means one default variant)."""
    identifier: str
    colors: Tuple[str, ...] = ()


class DeviceGroup:
    """
    Type identifiers grouped by device identifier, in first-seen device order.

    The order is kept in an explicit list, with a set for membership tests, so
    a device seen again later never moves from its original position.
    """

    def __init__(self):
        self.order: List[str] = []
        self._seen: Set[str] = set()
        self.type_identifiers: Dict[str, List[str]] = {}

    def add(self, device_identifier: str, type_identifier: str):
        if device_identifier not in self._seen:
            self._seen.add(device_identifier)
            self.order.append(device_identifier)
            self.type_identifiers[device_identifier] = []
        self.type_identifiers[device_identifier].append(type_identifier)

    def __contains__(self, device_identifier: str) -> bool:
        return device_identifier in self._seen

    def __len__(self) -> int:
        return len(self.order)

    @classmethod
    def from_declarations(cls, declarations: Iterable[DeviceDeclaration]) -> "DeviceGroup":
        group = cls()
        for declaration in declarations:
            group.add(declaration.device_identifier, declaration.type_identifier)
        return group


def common_prefix(strings: Sequence[str]) -> str:
    """Returns the longest prefix shared by every string, compared character by character."""
    if not strings:
        return ""
    shortest = min(strings, key=len)
    for index, char in enumerate(shortest):
        if any(s[index] != char for s in strings):
            return shortest[:index]
    return shortest


def extract_color_suffixes(type_identifiers: Sequence[str]) -> List[str]:
    """
    Strips the shared prefix from a device's type identifiers, leaving the colour codes.

    A device with fewer than two type identifiers has a single default variant,
    so it gets no colours. Suffixes keep the source order and are neither
    deduplicated nor sorted; an identifier equal to the prefix yields "".

    Example:
        ["com.apple.device-type-blue", "com.apple.device-type-red"] -> ["blue", "red"]
    """
    if len(type_identifiers) < 2:
        return []
    prefix_length = len(common_prefix(type_identifiers))
    return [identifier[prefix_length:] for identifier in type_identifiers]


def assemble_descriptions(group: DeviceGroup) -> List[DeviceDescription]:
    """Builds one record per device in first-seen order, then the Simulator entry."""
    descriptions = [
        DeviceDescription(identifier, tuple(extract_color_suffixes(group.type_identifiers[identifier])))
        for identifier in group.order
    ]
    descriptions.append(DeviceDescription(SIMULATOR_IDENTIFIER, ()))
    return descriptions


def resolve_devices(plist_path: Path = DEFAULT_PLIST_PATH) -> List[DeviceDescription]:
    """
    Runs the whole resolution pipeline against a property list.

    Raises:
        DocumentReadError: The file cannot be read.
        SchemaError: The document does not have the expected shape.
    """
    logger.info(f"Resolving known devices from: {plist_path}")
    document = load_document(plist_path)
    group = DeviceGroup.from_declarations(scan_declarations(document))
    descriptions = assemble_descriptions(group)
    logger.info(f"Resolved {len(group)} devices (plus Simulator).")
    return descriptions
