"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from src.identity_gateway.api.http.app_data import build_dependencies
from src.identity_gateway.api.http.routers.auth import router as auth_router
from src.identity_gateway.api.utils.app_startup import configure_logging
from src.identity_gateway.runtime.config.config_data import ConfigData
from src.identity_gateway.runtime.context import get_config


def create_app(config: ConfigData | None = None) -> FastAPI:
    app_config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(app_config)
        app.state.app_dependencies = build_dependencies(app_config)
        logger.info("Application dependencies initialised")
        try:
            yield
        finally:
            app.state.app_dependencies.database_service.dispose()

    is_production = app_config.app.environment == "production"
    app = FastAPI(
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    if is_production and "*" in app_config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.app.cors.origins,
        allow_credentials=app_config.app.cors.allow_credentials,
        allow_methods=app_config.app.cors.allow_methods,
        allow_headers=app_config.app.cors.allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        # Query strings carry codes and page URLs; only the path is logged
        with logger.contextualize(
            request_id=request_id, method=request.method, path=request.url.path
        ):
            start = time.perf_counter()
            logger.info("request.start")
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code, duration_ms=round(duration_ms, 1)
            ).info("request.end")
            response.headers.setdefault("X-Request-ID", request_id)
            return response

    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness check endpoint."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def readiness(request: Request) -> JSONResponse:
        """Readiness check: the contact store must answer."""
        database = request.app.state.app_dependencies.database_service
        if not database.health_check():
            return JSONResponse(status_code=503, content={"status": "unavailable"})
        return JSONResponse(content={"status": "ready"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # Access logging is done by the middleware
    )
