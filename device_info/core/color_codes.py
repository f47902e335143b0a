# device_info/core/color_codes.py

import logging
import string
from pathlib import Path
from typing import Dict, Tuple

from .config_manager import DEFAULT_COLOR_NAMES_PATH, load_knowledge_base
from .errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class ColorCodeResolver:
    """
    Converts device colour codes into RGB values.

    Older devices use colour names such as "white" or "slate"; newer ones use
    hex codes like "#d6c8b9". Apple Watch colours are plain numbers, which
    carry no colour information and therefore resolve to nothing.
    """

    def __init__(self, knowledge_base_path: Path | None = None):
        self.knowledge_base_path = knowledge_base_path or DEFAULT_COLOR_NAMES_PATH
        self.named_colors: Dict[str, str] = {}
        self._load_named_colors()

    def _load_named_colors(self):
        data = load_knowledge_base(self.knowledge_base_path)
        named = data.get("named_colors", {})
        if not isinstance(named, dict):
            raise KnowledgeBaseError(f"'named_colors' in '{self.knowledge_base_path}' must be an object.")
        self.named_colors = {str(name).lower(): str(code) for name, code in named.items()}
        logger.debug(f"Loaded {len(self.named_colors)} named colours.")

    def rgb_for_color_code(self, color_code: str) -> RGB | None:
        """Returns the (red, green, blue) bytes for a colour code, or None if it isn't a colour."""
        code = self.named_colors.get(color_code.lower(), color_code)
        if code.startswith("#"):
            code = code[1:]

        if len(code) != 6 or any(c not in string.hexdigits for c in code):
            logger.debug(f"Colour code '{color_code}' is not a six-digit hex colour.")
            return None
        return int(code[0:2], 16), int(code[2:4], 16), int(code[4:6], 16)

    def hex_for_color_code(self, color_code: str) -> str | None:
        rgb = self.rgb_for_color_code(color_code)
        if rgb is None:
            return None
        return "#{:02x}{:02x}{:02x}".format(*rgb)
