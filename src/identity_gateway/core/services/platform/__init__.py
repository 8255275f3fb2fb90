from .jsapi_authorization import JsapiAuthorizationBuilder, compute_jsapi_signature
from .jsapi_client import ServerCredentialClient, TicketClient
from .oauth_client import TokenExchangeClient, UserInfoClient, build_authorize_url
from .request_signer import RequestSigner

__all__ = [
    "JsapiAuthorizationBuilder",
    "RequestSigner",
    "ServerCredentialClient",
    "TicketClient",
    "TokenExchangeClient",
    "UserInfoClient",
    "build_authorize_url",
    "compute_jsapi_signature",
]
