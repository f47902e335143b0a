# device_info/core/config_manager.py

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .errors import KnowledgeBaseError

# A dedicated logger for the module that owns our configuration and knowledge base.
logger = logging.getLogger(__name__)

# The Launch Services type database that ships with macOS. It lists every
# device UTI the system knows about, which makes it our only data source.
DEFAULT_PLIST_PATH = Path("/System/Library/CoreServices/CoreTypes.bundle/Contents/Info.plist")

# The bundled knowledge base that maps colour names ("slate", "silver") to hex codes.
DEFAULT_COLOR_NAMES_PATH = Path(__file__).resolve().parents[1] / "data" / "color_names.json"

SUPPORTED_KNOWLEDGE_BASE_VERSION = "1.0"


def load_knowledge_base(path: Path) -> Dict[str, Any]:
    """
    Loads a JSON knowledge base and verifies that its version is supported.

    Args:
        path: The path to the knowledge base file.

    Returns:
        The decoded JSON document, including its `_metadata` section.

    Raises:
        KnowledgeBaseError: The file is unreadable, is not valid JSON, or is too old.
    """
    logger.info(f"Loading knowledge base from: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.critical(f"Error reading knowledge base '{path}': {e}", exc_info=True)
        raise KnowledgeBaseError(f"Could not load knowledge base '{path}': {e}") from e

    if not isinstance(data, dict):
        raise KnowledgeBaseError(f"Knowledge base '{path}' must contain a JSON object.")

    metadata = data.get("_metadata", {})
    if not isinstance(metadata, dict):
        raise KnowledgeBaseError(f"'_metadata' in knowledge base '{path}' must be a JSON object.")
    version_str = str(metadata.get("version", "0.0"))

    # Same forward-compatible check as the rest of our versioned files:
    # anything at or above the supported version is accepted.
    try:
        version = float(version_str)
    except ValueError:
        raise KnowledgeBaseError(f"Knowledge base '{path}' has an invalid version: '{version_str}'.")
    if version < float(SUPPORTED_KNOWLEDGE_BASE_VERSION):
        raise KnowledgeBaseError(
            f"Unsupported knowledge base version: '{version_str}'. "
            f"This application requires version {SUPPORTED_KNOWLEDGE_BASE_VERSION} or newer.")

    logger.debug(f"Knowledge base version {version_str} loaded with {len(data) - 1} sections.")
    return data
