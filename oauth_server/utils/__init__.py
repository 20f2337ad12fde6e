"""Utility modules"""

from oauth_server.utils.crypto import (
    RandomTokenGenerator,
    constant_time_compare,
    create_secret_context,
    hash_secret,
    hash_token,
    verify_secret,
)
from oauth_server.utils.validators import (
    add_query_params,
    extract_bearer_token,
    validate_redirect_uri,
)

__all__ = [
    "RandomTokenGenerator",
    "create_secret_context",
    "hash_secret",
    "verify_secret",
    "hash_token",
    "constant_time_compare",
    "extract_bearer_token",
    "validate_redirect_uri",
    "add_query_params",
]
