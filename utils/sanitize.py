"""
Inbound text sanitization.
"""

import re
from typing import Optional

from config.settings import settings

_UNSAFE_CHARS = re.compile(r"[';\\<>]")


def sanitize_input(text: str, max_length: Optional[int] = None) -> str:
    """
    Strip quote, semicolon, backslash and angle-bracket characters, cap the
    length and trim surrounding whitespace.

    Args:
        text: Raw user text
        max_length: Length cap, defaults to MAX_MESSAGE_LENGTH
    """
    max_length = max_length or settings.MAX_MESSAGE_LENGTH
    cleaned = _UNSAFE_CHARS.sub("", text or "")
    return cleaned[:max_length].strip()
