"""Validation utilities for the link service."""

import re
from typing import Pattern, Tuple

MAX_URL_LENGTH = 2048
CODE_LENGTH = 10

_SAFE_CHAR = r"[\w\-._~:/?#\[\]@!$&'()*+,;=]"

# Every character of an accepted URL, scheme included, is in this set.
URL_CHARSET_PATTERN: Pattern[str] = re.compile(_SAFE_CHAR + "+", re.ASCII)

# Optional http(s) scheme, a host with at least one dot-separated label,
# then a run of URL-safe characters. Schemeless bare domains are accepted.
# "[\w.-]+\.[\w.-]+" accepts the same hosts as "[\w.-]+(?:\.[\w.-]+)+"
# without the nested quantifier.
URL_PATTERN: Pattern[str] = re.compile(
    r"(?:https?://)?[\w.-]+\.[\w.-]+" + _SAFE_CHAR + "+",
    re.ASCII,
)

CODE_PATTERN: Pattern[str] = re.compile(r"[0-9a-zA-Z_]{%d}" % CODE_LENGTH)


def is_valid_url(url: str, pattern: Pattern[str] = URL_PATTERN) -> Tuple[bool, str]:
    """Validate a URL.

    Purely syntactic: no network lookup and no normalization.

    Args:
        url: The URL to validate
        pattern: Compiled URL pattern (defaults to URL_PATTERN)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    # Rejecting foreign characters first keeps the structural match linear.
    if not URL_CHARSET_PATTERN.fullmatch(url):
        return False, "URL contains characters that are not allowed"

    if not pattern.fullmatch(url):
        return False, "URL has an invalid format"

    return True, ""


def is_valid_code(code: str, pattern: Pattern[str] = CODE_PATTERN) -> Tuple[bool, str]:
    """Validate a short code.

    Args:
        code: The short code to validate
        pattern: Compiled code pattern (defaults to CODE_PATTERN)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not code or not isinstance(code, str):
        return False, "Short code is required"

    if not pattern.fullmatch(code):
        return False, (
            f"Short code must be exactly {CODE_LENGTH} characters "
            "of letters, numbers, and underscores"
        )

    return True, ""
