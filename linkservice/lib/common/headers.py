"""Forwarded header handling for building public short URLs."""

from typing import Dict, Mapping, Optional

FORWARDED_HEADERS = {
    "forwarded_proto": "x-forwarded-proto",
    "forwarded_host": "x-forwarded-host",
    "forwarded_for": "x-forwarded-for",
    "forwarded_prefix": "x-forwarded-prefix",
}


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers, matching names case-insensitively.

    Args:
        headers: Request headers

    Returns:
        Dictionary keyed by the names in FORWARDED_HEADERS
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    return {key: lowered.get(header) for key, header in FORWARDED_HEADERS.items()}


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the public base URL of the service.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)

    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        return f"{forwarded['forwarded_proto']}://{forwarded['forwarded_host']}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_forwarded_path_prefix(headers: Mapping[str, str]) -> str:
    """Path prefix a proxy stripped before forwarding (X-Forwarded-Prefix).

    Returns:
        Prefix with a leading slash and no trailing slash (e.g. '/s'),
        or '' if the header is missing or empty
    """
    prefix = (extract_forwarded_headers(headers)["forwarded_prefix"] or "").strip().strip("/")
    return "/" + prefix if prefix else ""
