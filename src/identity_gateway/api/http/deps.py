"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.identity_gateway.api.http.app_data import ApplicationDependencies
from src.identity_gateway.core.services import (
    IdentityResolver,
    JsapiAuthorizationBuilder,
    PlatformLoginService,
)
from src.identity_gateway.entities.core.contact import ContactRepository
from src.identity_gateway.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_app_config(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> ConfigData:
    return app_deps.config


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Request-scoped database session."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_identity_resolver(
    db: Session = Depends(get_db_session),
    config: ConfigData = Depends(get_app_config),
) -> IdentityResolver:
    return IdentityResolver(ContactRepository(db), config.identity)


def get_login_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> PlatformLoginService:
    return PlatformLoginService(app_deps.token_client, app_deps.user_info_client, resolver)


def get_jsapi_builder(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> JsapiAuthorizationBuilder:
    return app_deps.jsapi_builder
