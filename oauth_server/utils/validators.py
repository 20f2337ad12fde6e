"""Input validation utilities"""

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

BEARER_PATTERN = re.compile(r"^Bearer\s+(\S+)\s*$")


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Extract the token from an Authorization header value

    Args:
        authorization: Raw header value, may be None

    Returns:
        Token, or None when the header is absent or not "Bearer <token>"
    """
    if not authorization:
        return None

    match = BEARER_PATTERN.match(authorization)
    if not match:
        return None

    return match.group(1)


def validate_redirect_uri(redirect_uri: str) -> tuple[bool, str | None]:
    """
    Validate that a redirect URI is an absolute http(s) URL without fragment

    Args:
        redirect_uri: URI to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not redirect_uri:
        return False, "Redirect URI is required"

    parts = urlsplit(redirect_uri)
    if parts.scheme not in ("http", "https"):
        return False, "Redirect URI must use http or https"

    if not parts.netloc:
        return False, "Redirect URI must be absolute"

    if parts.fragment:
        return False, "Redirect URI must not contain a fragment"

    return True, None


def add_query_params(url: str, params: dict[str, str | None]) -> str:
    """
    Append query parameters to a URL, keeping the ones already present

    Parameters with a None value are skipped.
    """
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.extend((key, value) for key, value in params.items() if value is not None)
    return urlunsplit(parts._replace(query=urlencode(query)))
