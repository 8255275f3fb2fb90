from dataclasses import dataclass

from src.identity_gateway.core.services import (
    DbSessionService,
    JsapiAuthorizationBuilder,
    RequestSigner,
    ServerCredentialClient,
    TicketClient,
    TokenExchangeClient,
    UserInfoClient,
)
from src.identity_gateway.runtime.config.config_data import ConfigData


@dataclass(frozen=True)
class ApplicationDependencies:
    """Process-wide service instances, built once by the application lifespan."""

    config: ConfigData
    database_service: DbSessionService
    token_client: TokenExchangeClient
    user_info_client: UserInfoClient
    jsapi_builder: JsapiAuthorizationBuilder


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    platform = config.platform
    signer = RequestSigner(platform.signature_scheme)
    return ApplicationDependencies(
        config=config,
        database_service=DbSessionService(config.database),
        token_client=TokenExchangeClient(platform),
        user_info_client=UserInfoClient(platform),
        jsapi_builder=JsapiAuthorizationBuilder(
            ServerCredentialClient(platform, signer),
            TicketClient(platform, signer),
        ),
    )
