"""Case-insensitive field extraction from loosely structured markup.

DXLog broadcasts look like XML but are not guaranteed to be well formed, so
no parser is involved. A field is the text between the first ``<tag>`` and
the first ``</tag>`` that follows it, compared without regard to ASCII case.
Anything else (attributes, nesting, repeated tags) is ignored.
"""

import re
import logging
from functools import lru_cache
from typing import Dict, Iterable, Optional, Tuple

from ..models.contact import ContactField

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"


@lru_cache(maxsize=64)
def _tag_patterns(tag: str) -> Tuple[re.Pattern, re.Pattern]:
    """Compile opening and closing patterns for a tag name."""
    if not tag:
        raise ValueError("Tag name must not be empty")
    escaped = re.escape(tag)
    flags = re.IGNORECASE | re.ASCII
    return re.compile(f"<{escaped}>", flags), re.compile(f"</{escaped}>", flags)


def extract_field(text: str, tag: str, max_length: Optional[int] = None) -> Optional[str]:
    """Extract the value of the first ``<tag>...</tag>`` in text.

    Args:
        text: Decoded datagram payload
        tag: Tag name without angle brackets
        max_length: Maximum number of characters kept from the inner text.
            Longer values are truncated before trimming.

    Returns:
        Trimmed inner text, or None if the opening tag is missing or has no
        closing tag after it
    """
    open_pattern, close_pattern = _tag_patterns(tag)

    opening = open_pattern.search(text)
    if opening is None:
        return None

    start = opening.end()
    closing = close_pattern.search(text, start)
    if closing is None:
        return None

    end = closing.start()
    if max_length is not None and end - start > max_length:
        logger.debug(f"Truncating <{tag}> value from {end - start} to {max_length} characters")
        end = start + max(max_length, 0)

    return text[start:end].strip(WHITESPACE)


def extract_fields(
    text: str,
    fields: Iterable[ContactField] = ContactField,
) -> Dict[ContactField, Optional[str]]:
    """Extract each field independently, applying its maximum length."""
    return {
        field: extract_field(text, field.value, field.max_length)
        for field in fields
    }
