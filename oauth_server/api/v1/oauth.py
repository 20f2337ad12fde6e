"""OAuth2 endpoints"""

from fastapi import APIRouter, Form, Header, Request
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from oauth_server.core.config import logger
from oauth_server.core.dependencies import (
    AuthorizationServiceDep,
    InternalAuth,
    SettingsDep,
    TokenExchangeServiceDep,
    UserInfoServiceDep,
)
from oauth_server.core.exceptions import InvalidRequestError, OAuthError
from oauth_server.schemas.oauth import (
    AuthorizationCodeRequest,
    AuthorizationView,
    TokenErrorResponse,
    TokenRequest,
    TokenResponse,
)
from oauth_server.schemas.user import UserInfoResponse
from oauth_server.utils.validators import add_query_params, extract_bearer_token

router = APIRouter()

NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


@router.get("/authorize", response_model=AuthorizationView)
async def authorize_endpoint(
    settings: SettingsDep,
    auth_svc: AuthorizationServiceDep,
    client_id: str = "",
    state: str = "",
):
    """
    OAuth2 Authorization Endpoint

    Resolves the client and hands its metadata to the external login UI.
    Unknown clients are redirected to the error page with error=invalid_client.
    """
    try:
        view = await auth_svc.begin_authorization(client_id, state)
    except OAuthError as e:
        return RedirectResponse(
            url=add_query_params(settings.authorize_error_url, {"error": e.error}),
            status_code=302,
        )

    return JSONResponse(content=view.model_dump(), status_code=200)


@router.post(
    "/internal/authorization-codes",
    status_code=201,
    dependencies=[InternalAuth],
)
async def issue_code_endpoint(
    request: Request,
    auth_svc: AuthorizationServiceDep,
    code_request: AuthorizationCodeRequest,
):
    """
    Issue an authorization code for a user the login UI has authenticated

    Internal: requires the X-Internal-Auth header.
    """
    try:
        response = await auth_svc.issue_authorization_code(
            user_id=code_request.user_id,
            client_id=code_request.client_id,
            redirect_uri=code_request.redirect_uri,
            state=code_request.state,
            ip_address=_client_ip(request),
        )
    except OAuthError as e:
        return _error_response(e)

    return JSONResponse(content=response.model_dump(), status_code=201)


@router.post("/token", response_model=TokenResponse)
async def token_endpoint(
    request: Request,
    token_svc: TokenExchangeServiceDep,
    client_id: str | None = Form(None),
    client_secret: str | None = Form(None),
    grant_type: str | None = Form(None),
    code: str | None = Form(None),
):
    """
    OAuth2 Token Endpoint

    Exchanges an authorization code for an access token.

    Args:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        grant_type: Must be authorization_code
        code: Authorization code

    Returns:
        TokenResponse, or an OAuth2 error response
    """
    ip_address = _client_ip(request)

    logger.info(
        f"Token endpoint called: grant_type={grant_type}, client_id={client_id}, ip={ip_address}",
        extra={
            "trace_point": "token_endpoint_start",
            "grant_type": grant_type,
            "client_id": client_id,
            "ip_address": ip_address,
            "has_code": bool(code),
        },
    )

    try:
        try:
            token_request = TokenRequest(
                client_id=client_id,
                client_secret=client_secret,
                grant_type=grant_type,
                code=code,
            )
        except ValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors()})
            raise InvalidRequestError(
                f"Missing or empty required parameters: {', '.join(missing)}"
            ) from e

        token_response = await token_svc.exchange(token_request, ip_address=ip_address)

    except OAuthError as e:
        return _error_response(e, headers=NO_STORE_HEADERS)

    except Exception as e:
        logger.error(
            f"Token endpoint error: {e}",
            exc_info=True,
            extra={
                "trace_point": "token_endpoint_error",
                "error_type": type(e).__name__,
                "client_id": client_id,
            },
        )
        return _error_response(
            OAuthError("An internal error occurred"),
            headers=NO_STORE_HEADERS,
        )

    logger.info(
        f"Token endpoint completed successfully: client={client_id}",
        extra={"trace_point": "token_endpoint_complete", "client_id": client_id},
    )

    return JSONResponse(
        content=token_response.model_dump(mode="json"),
        status_code=200,
        headers=NO_STORE_HEADERS,
    )


@router.get("/userinfo", response_model=UserInfoResponse)
async def userinfo_endpoint(
    request: Request,
    userinfo_svc: UserInfoServiceDep,
    authorization: str | None = Header(None),
):
    """
    OAuth2 Userinfo Endpoint

    Requires an Authorization: Bearer <token> header.
    """
    access_token = extract_bearer_token(authorization)

    try:
        user_info = await userinfo_svc.get_user_info(
            access_token,
            ip_address=_client_ip(request),
        )
    except OAuthError as e:
        return _error_response(
            e,
            headers={"WWW-Authenticate": f'Bearer error="{e.error}"'},
        )

    return JSONResponse(content=user_info.model_dump(), status_code=200)


def _error_response(
    error: OAuthError,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """
    Create OAuth2 error response

    Args:
        error: Raised OAuth2 error
        headers: Extra response headers

    Returns:
        JSONResponse with error
    """
    error_response = TokenErrorResponse(
        error=error.error,
        error_description=error.description,
    )

    return JSONResponse(
        content=error_response.model_dump(exclude_none=True),
        status_code=error.status_code,
        headers=headers,
    )


def _client_ip(request: Request) -> str | None:
    """Get client IP address"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    return request.client.host if request.client else None
