# device_info/core/device_info_manager.py

import logging
import re
from pathlib import Path
from typing import Dict, Tuple

from .config_manager import DEFAULT_PLIST_PATH
from .device_catalog import DeviceDescription, DeviceGroup, assemble_descriptions, common_prefix, SIMULATOR_IDENTIFIER
from .device_scanner import DeviceDeclaration, scan_declarations
from .plist_document import load_document

logger = logging.getLogger(__name__)

# Identifiers reported by the Simulator, which runs on the host's architecture.
SIMULATOR_ARCHITECTURES = (SIMULATOR_IDENTIFIER, "i386", "arm64")
SIMULATOR_NAME = "Simulator"

# Devices running in the Simulator can be reported as e.g. "iPhone8,1;Simulator".
SIMULATOR_SUFFIX = ";Simulator"

# Matches a parenthesised detail such as " (Model A1549)" or " (GSM)".
_PARENTHESISED = re.compile(r"\s*\([^)]*\)")


class DeviceInfoManager:
    """
    Answers questions about iOS, watchOS and tvOS devices using the Launch
    Services type database.

    The database is read once, when the manager is created; any read or schema
    error propagates from the constructor and no manager is produced. After
    that the manager never changes, so one instance can be shared freely.

    The data source is undocumented, so this is meant for debugging tools
    rather than production use. Systems that predate a device won't know it.
    """

    def __init__(self, plist_path: Path = DEFAULT_PLIST_PATH):
        self.plist_path = Path(plist_path)
        # Icon files live in the bundle's Resources folder, next to Info.plist's folder.
        self.resources_path = self.plist_path.parent / "Resources"

        document = load_document(self.plist_path)
        declarations = scan_declarations(document)

        self._group = DeviceGroup.from_declarations(declarations)
        self.descriptions: Tuple[DeviceDescription, ...] = tuple(assemble_descriptions(self._group))
        self._colors: Dict[str, Tuple[str, ...]] = {d.identifier: d.colors for d in self.descriptions}

        # The first declaration of a device is its default (colourless) variant.
        self._primary: Dict[str, DeviceDeclaration] = {}
        self._by_type_identifier: Dict[str, DeviceDeclaration] = {}
        for declaration in declarations:
            self._primary.setdefault(declaration.device_identifier, declaration)
            self._by_type_identifier.setdefault(declaration.type_identifier, declaration)

        logger.info(f"Device info manager ready with {len(self._group)} known devices.")

    @property
    def known_devices(self) -> Tuple[str, ...]:
        """Device identifiers in the order the system lists them (Simulator excluded)."""
        return tuple(self._group.order)

    def known_colors(self, device_identifier: str) -> Tuple[str, ...]:
        """Colour codes for a device; empty when it has a single variant or is unknown."""
        base, _ = self._split_simulator(device_identifier)
        return self._colors.get(base, ())

    @staticmethod
    def _split_simulator(device_identifier: str) -> Tuple[str, bool]:
        if device_identifier.endswith(SIMULATOR_SUFFIX):
            return device_identifier[:-len(SIMULATOR_SUFFIX)], True
        return device_identifier, False

    def name_for_device(self, device_identifier: str) -> str:
        """
        Returns a descriptive name for a device identifier such as "iPhone2,1".

        The name usually includes model numbers and cellular details. An
        identifier with a ";Simulator" suffix gets " Simulator" appended to its
        name. Unknown identifiers are returned unchanged.
        """
        base, simulated = self._split_simulator(device_identifier)
        if base in SIMULATOR_ARCHITECTURES:
            return SIMULATOR_NAME

        declaration = self._primary.get(base)
        if declaration is None or not declaration.description:
            logger.debug(f"No name known for device '{device_identifier}'.")
            return device_identifier

        if simulated:
            return f"{declaration.description} {SIMULATOR_NAME}"
        return declaration.description

    def short_name_for_device(self, device_identifier: str) -> str:
        """Like `name_for_device`, with parenthesised model and network details removed."""
        name = self.name_for_device(device_identifier)
        short = " ".join(_PARENTHESISED.sub("", name).split())
        return short or name

    def icon_path_for_device(self, device_identifier: str, color: str | None = None) -> Path | None:
        """
        Locates the icon file the system declares for a device and colour.

        Args:
            device_identifier: A model identifier such as "iPod5,1".
            color: An optional colour code as returned by `known_colors`.
                Unknown colours fall back to the device's default icon.

        Returns:
            The path of the icon file, or None if the device is unknown or
            declares no icon. The file is not opened or checked for existence.
        """
        base, _ = self._split_simulator(device_identifier)
        type_identifiers = self._group.type_identifiers.get(base)
        if not type_identifiers:
            return None

        declaration = None
        if color and len(type_identifiers) > 1:
            wanted = common_prefix(type_identifiers) + color
            if wanted in type_identifiers:
                declaration = self._by_type_identifier.get(wanted)
            else:
                logger.debug(f"Unknown colour '{color}' for '{base}'; using the default icon.")

        if declaration is None:
            declaration = self._primary[base]
        if not declaration.icon_file:
            return None
        return self.resources_path / declaration.icon_file
