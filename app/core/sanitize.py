"""Strip markup from free-text input before it reaches the service layer."""

import re
from typing import Annotated

from pydantic import AfterValidator

# Script/style blocks are dropped with their content; other tags keep their text.
_BLOCK_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"</?[a-zA-Z!][^>]*>")


def strip_tags(value: str) -> str:
    """
    Remove HTML tags and surrounding whitespace from a string.

    Angle brackets left over after stripping (unclosed tags, stray operators)
    are escaped, so the result never contains a raw '<' or '>'.
    """
    value = _BLOCK_RE.sub("", value)
    value = _TAG_RE.sub("", value)
    return value.replace("<", "&lt;").replace(">", "&gt;").strip()


SanitizedStr = Annotated[str, AfterValidator(strip_tags)]
