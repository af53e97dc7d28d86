"""
Input validation and classification for plagiarism checks
Decides whether an input is a URL or free text before it reaches the cache
"""

import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

from .errors import InvalidInput

CHECK_TYPES = ("url", "text")
MAX_INPUT_CHARS = 50_000

# RFC 3986 scheme
_SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')
_WHITESPACE_RE = re.compile(r'\s')


@dataclass(frozen=True)
class CheckInput:
    """Validated check input"""
    text: str
    check_type: str


def is_valid_url(value: Any) -> bool:
    """
    Strict URL check

    Args:
        value: Candidate string

    Returns:
        True when the value parses as an absolute URL with a host
    """
    if not isinstance(value, str) or not value:
        return False

    # Embedded whitespace means free text, even if it starts like a URL
    if _WHITESPACE_RE.search(value):
        return False

    try:
        parts = urlsplit(value)
        # Accessing .port validates it
        parts.port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False

    return bool(parts.hostname)


def classify_input(value: str) -> str:
    """Return "url" for parseable URLs, "text" otherwise"""
    return "url" if is_valid_url(value) else "text"


def url_hostname(value: str) -> str:
    return urlsplit(value).hostname or ""


def validate_check_input(
    raw_input: Any,
    check_type: Optional[Any] = None,
    max_chars: int = MAX_INPUT_CHARS,
) -> CheckInput:
    """
    Validate a raw check request

    Args:
        raw_input: The "input" field as received
        check_type: Optional explicit "url" / "text" hint
        max_chars: Inputs of this length or more are rejected

    Returns:
        CheckInput with trimmed text and resolved type

    Raises:
        InvalidInput: If the input is empty, not a string, too large,
            or the type hint is unknown
    """
    if not raw_input or not isinstance(raw_input, str):
        raise InvalidInput()

    if len(raw_input) >= max_chars:
        raise InvalidInput(
            f"Input must be less than {max_chars:,} characters",
            error="Input too large",
        )

    if check_type is not None and check_type not in CHECK_TYPES:
        raise InvalidInput('Type must be either "url" or "text"', error="Invalid type")

    text = raw_input.strip()
    if not text:
        raise InvalidInput()

    return CheckInput(text=text, check_type=check_type or classify_input(text))
