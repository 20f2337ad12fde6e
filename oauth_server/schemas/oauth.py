"""OAuth schemas"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from oauth_server.utils.validators import validate_redirect_uri


class GrantType(str, Enum):
    """OAuth2 grant types"""

    AUTHORIZATION_CODE = "authorization_code"


class TokenType(str, Enum):
    """OAuth2 token types"""

    BEARER = "Bearer"


class TokenRequest(BaseModel):
    """OAuth2 token request (form body of the token endpoint)"""

    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1)
    # Kept as plain string: unsupported values are reported after client authentication
    grant_type: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)

    @property
    def is_authorization_code_grant(self) -> bool:
        return self.grant_type == GrantType.AUTHORIZATION_CODE.value


class TokenResponse(BaseModel):
    """OAuth2 token response"""

    access_token: str
    token_type: TokenType = TokenType.BEARER
    expires_in: int


class TokenErrorResponse(BaseModel):
    """OAuth2 error response"""

    error: str
    error_description: str | None = None


class AuthorizationView(BaseModel):
    """Client metadata handed to the external login UI"""

    client_id: str
    redirect_uri: str
    login_title: str | None = None
    login_form: str | None = None
    state: str = ""


class AuthorizationCodeRequest(BaseModel):
    """Request from the login UI to issue a code for an authenticated user"""

    user_id: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    redirect_uri: str = Field(..., min_length=1)
    state: str | None = None


class AuthorizationCodeResponse(BaseModel):
    """Issued authorization code and where to send the user agent with it"""

    code: str
    redirect_to: str
    expires_in: int


class OAuthClientCreate(BaseModel):
    """Schema for registering an OAuth client"""

    client_id: str = Field(..., min_length=3, max_length=255, pattern=r"^[a-zA-Z0-9_-]+$")
    client_secret: str = Field(..., min_length=8, max_length=72)  # bcrypt limit
    name: str = Field(..., min_length=1, max_length=255)
    redirect_uri: str
    login_title: str | None = Field(None, max_length=255)
    login_form: str | None = None
    enabled: bool = True

    @field_validator("redirect_uri")
    @classmethod
    def check_redirect_uri(cls, v: str) -> str:
        is_valid, error = validate_redirect_uri(v)
        if not is_valid:
            raise ValueError(error)
        return v


class OAuthClientResponse(BaseModel):
    """Schema for OAuth client response"""

    id: str
    client_id: str
    name: str
    redirect_uri: str
    login_title: str | None
    login_form: str | None
    enabled: bool

    model_config = {"from_attributes": True}
