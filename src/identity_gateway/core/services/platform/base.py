"""Shared transport and envelope handling for platform API clients."""

from typing import Any, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from src.identity_gateway.core.errors import (
    HttpError,
    MalformedResponseError,
    PlatformConfigurationError,
    PlatformError,
)
from src.identity_gateway.runtime.config.config_data import PlatformConfig

ModelT = TypeVar("ModelT", bound=BaseModel)


class PlatformApiClient:
    """Base class for clients issuing GET requests to the platform.

    Holds only immutable configuration; every call opens its own HTTP client,
    so instances can be shared across concurrent requests. Nothing is retried.
    """

    def __init__(self, platform: PlatformConfig) -> None:
        self._platform = platform

    @property
    def app_id(self) -> str:
        return self._platform.app_id

    def _require_credentials(self) -> None:
        if not self._platform.is_configured:
            raise PlatformConfigurationError(
                "platform app_id and app_secret must be configured"
            )

    async def _get_json(
        self,
        path_and_query: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Issue a GET and return the decoded envelope of a successful call.

        Raises:
            HttpError: Transport failure or non-2xx status.
            PlatformError: The envelope carries ``error`` or a non-zero ``result``.
            MalformedResponseError: The body is not a JSON object.
        """
        url = self._platform.url_for(path_and_query)
        log_path = path_and_query.split("?", 1)[0]
        logger.debug(f"Platform request: GET {log_path}")

        try:
            async with httpx.AsyncClient(timeout=self._platform.request_timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Platform request to {log_path} failed: {type(e).__name__}: {e}")
            raise HttpError(0, str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Platform request to {log_path} returned HTTP {response.status_code}")
            raise HttpError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Platform response from {log_path} is not JSON")
            raise MalformedResponseError(f"response from {log_path} is not JSON") from e

        if not isinstance(payload, dict):
            raise MalformedResponseError(f"response from {log_path} is not a JSON object")

        if payload.get("error"):
            logger.warning(f"Platform error from {log_path}: {payload['error']}")
            raise PlatformError(payload["error"], payload.get("error_description"))

        result = payload.get("result")
        if result is not None and result != 0:
            logger.warning(f"Platform error from {log_path}: result={result}")
            raise PlatformError(result, payload.get("msg"))

        return payload

    @staticmethod
    def _parse(model: type[ModelT], payload: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected platform response shape for {model.__name__}: {e}")
            raise MalformedResponseError(
                f"unexpected {model.__name__} shape: {e.error_count()} validation error(s)"
            ) from e
