"""
Scheme Search Agent — Input Sanitization
Cleans free-text search criteria before they are typed into a live site.
"""

import re

MAX_FIELD_LENGTH = 200


def sanitize_input(text: str, max_length: int = MAX_FIELD_LENGTH) -> str:
    """
    Clean user input before it reaches the browser.
    Removes HTML tags and control characters, trims whitespace, limits length.
    """
    if not text:
        return ""
    # Remove HTML tags
    text = re.sub(r"<[^>]+>", "", text)
    # Remove control characters
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    return text.strip()[:max_length]
