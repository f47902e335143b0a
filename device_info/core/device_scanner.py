# device_info/core/device_scanner.py

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .plist_document import PlistNode

logger = logging.getLogger(__name__)

# Keys of the Launch Services type declarations we read.
DECLARATIONS_KEY = "UTExportedTypeDeclarations"
TYPE_IDENTIFIER_KEY = "UTTypeIdentifier"
TAG_SPECIFICATION_KEY = "UTTypeTagSpecification"
MODEL_CODE_KEY = "com.apple.device-model-code"
DESCRIPTION_KEY = "UTTypeDescription"
ICON_FILE_KEY = "UTTypeIconFile"

# Only model codes from these families are device identifiers; everything
# else in the model-code list is a board name or SKU (e.g. "N61AP", "MG4H2").
DEVICE_FAMILY_PREFIXES = ("iPhone", "iPod", "iPad", "AppleTV", "Watch")


@dataclass(frozen=True)
class DeviceDeclaration:
    """One device-related type declaration, reduced to the fields we use."""
    device_identifier: str
    type_identifier: str
    description: str | None = None
    icon_file: str | None = None


def match_device_identifier(model_codes: Iterable[str]) -> str | None:
    """Returns the first model code that belongs to a known device family."""
    for code in model_codes:
        if code.startswith(DEVICE_FAMILY_PREFIXES):
            return code
    return None


def _model_codes(declaration: PlistNode) -> List[str]:
    """Returns the declaration's model codes, or an empty list when it has none."""
    tags = declaration.optional_mapping(TAG_SPECIFICATION_KEY)
    if tags is None:
        return []
    # Some system versions store a lone code as a plain string.
    single = tags.value.get(MODEL_CODE_KEY)
    if isinstance(single, str):
        return [single]
    codes = tags.optional_sequence(MODEL_CODE_KEY)
    return codes.strings() if codes is not None else []


def scan_declarations(document: PlistNode) -> List[DeviceDeclaration]:
    """
    Walks the document's exported type declarations in order and extracts
    every declaration that names a device model.

    Declarations without a tag specification, without model codes, or whose
    model codes match no device family are unrelated UTIs and are skipped.

    Raises:
        SchemaError: The declaration list, a declaration, or its type
            identifier is missing or has the wrong type.
    """
    declarations = document.sequence(DECLARATIONS_KEY)
    found = []
    skipped = 0

    for declaration in declarations.items():
        # Read the identifier first: it is required for every declaration,
        # device or not.
        type_identifier = declaration.string(TYPE_IDENTIFIER_KEY)

        model_codes = _model_codes(declaration)
        if not model_codes:
            skipped += 1
            continue

        device_identifier = match_device_identifier(model_codes)
        if device_identifier is None:
            logger.debug(f"No device model code in '{type_identifier}'; skipping.")
            skipped += 1
            continue

        found.append(DeviceDeclaration(
            device_identifier=device_identifier,
            type_identifier=type_identifier,
            description=declaration.optional_string(DESCRIPTION_KEY),
            icon_file=declaration.optional_string(ICON_FILE_KEY),
        ))

    logger.info(f"Scan complete. Found {len(found)} device declarations ({skipped} unrelated skipped).")
    return found
