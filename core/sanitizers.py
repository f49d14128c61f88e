# togethr-backend/core/sanitizers.py
"""
Input sanitization for user-generated text.

Serializers pass free text through these before it is stored.
"""
import re
from typing import Iterable, List, Optional


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_title(title: Optional[str], max_length: int = 255) -> str:
    """
    Single-line text (names, titles): no newlines, collapsed spaces.
    """
    text = sanitize_text(title, max_length=max_length)
    text = re.sub(r'[\r\n]+', ' ', text)
    text = re.sub(r'\s+', ' ', text)
    return text


def normalize_tags(values: Optional[Iterable[str]]) -> List[str]:
    """
    Lowercase, trim and de-duplicate a list of skills/tags, keeping order.
    Empty entries are dropped.
    """
    seen = []
    for value in values or []:
        tag = sanitize_title(str(value), max_length=64).lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def parse_csv(value: Optional[str]) -> List[str]:
    """`"react, Django,,"` -> `["react", "django"]` (query-string lists)."""
    if not value:
        return []
    return normalize_tags(value.split(","))
