"""Login callback and JSAPI config endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel

from src.identity_gateway.api.http.deps import (
    get_app_config,
    get_jsapi_builder,
    get_login_service,
)
from src.identity_gateway.core.errors import (
    AccountDisabledError,
    InternalLookupError,
    MissingJoinKeyError,
    NoRecordError,
    PlatformGatewayError,
)
from src.identity_gateway.core.models import AuthenticatedUser, JsapiAuthConfig
from src.identity_gateway.core.security import decode_login_state, encode_login_state
from src.identity_gateway.core.services import (
    JsapiAuthorizationBuilder,
    PlatformLoginService,
)
from src.identity_gateway.core.services.platform import build_authorize_url
from src.identity_gateway.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/api/auth", tags=["auth"])

CALLBACK_PATH = "/api/auth/authorization"


class AuthorizeUrlResponse(BaseModel):
    url: str


class LoginResponse(BaseModel):
    """Resolved user for the login callback; session issuance is left to the caller."""

    user: AuthenticatedUser
    return_url: str | None = None


@router.get("/authorize-url", response_model=AuthorizeUrlResponse)
async def authorize_url(
    return_url: str = Query(..., description="Where to send the user after login"),
    config: ConfigData = Depends(get_app_config),
) -> AuthorizeUrlResponse:
    redirect_uri = f"{config.app.base_url}{CALLBACK_PATH}"
    url = build_authorize_url(config.platform, redirect_uri, encode_login_state(return_url))
    return AuthorizeUrlResponse(url=url)


@router.get("/authorization", response_model=LoginResponse)
async def authorization_callback(
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    error_description: str | None = None,
    login_service: PlatformLoginService = Depends(get_login_service),
) -> LoginResponse:
    if error:
        logger.error(f"OAuth authorization error: {error} ({error_description})")
        raise HTTPException(status_code=400, detail=error_description or error)

    if not code:
        raise HTTPException(status_code=400, detail="Missing authorization code")

    return_url = None
    if state:
        try:
            return_url = decode_login_state(state)
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Invalid state parameter") from e

    try:
        user = await login_service.authenticate(code)
    except (MissingJoinKeyError, NoRecordError) as e:
        raise HTTPException(status_code=401, detail=e.detail) from e
    except AccountDisabledError as e:
        raise HTTPException(status_code=403, detail=e.detail) from e
    except (PlatformGatewayError, InternalLookupError) as e:
        logger.error(f"Login failed: {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Login temporarily unavailable") from e

    return LoginResponse(user=user, return_url=return_url)


@router.get("/jsapi-config", response_model=JsapiAuthConfig)
async def jsapi_config(
    url: str = Query(..., description="Exact URL of the page embedding the client SDK"),
    builder: JsapiAuthorizationBuilder = Depends(get_jsapi_builder),
) -> JsapiAuthConfig:
    try:
        return await builder.build_auth_config(url)
    except PlatformGatewayError as e:
        logger.error(f"JSAPI config failed: {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="JSAPI config temporarily unavailable") from e
