"""OAuth2 protocol errors"""


class OAuthError(Exception):
    """
    Base class for errors reported to the caller in the OAuth2 error vocabulary

    Attributes:
        error: OAuth2 error code (RFC 6749 section 5.2)
        description: Human-readable description, optional
        status_code: HTTP status code of the error response
    """

    error: str = "server_error"
    status_code: int = 500

    def __init__(self, description: str | None = None):
        super().__init__(description or self.error)
        self.description = description


class InvalidRequestError(OAuthError):
    error = "invalid_request"
    status_code = 400


class InvalidClientError(OAuthError):
    error = "invalid_client"
    status_code = 401


class InvalidGrantError(OAuthError):
    error = "invalid_grant"
    status_code = 400


class UnsupportedGrantTypeError(OAuthError):
    error = "unsupported_grant_type"
    status_code = 400


class InvalidTokenError(OAuthError):
    error = "invalid_token"
    status_code = 401


class ServerError(OAuthError):
    error = "server_error"
    status_code = 500
