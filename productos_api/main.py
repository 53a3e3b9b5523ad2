# main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, configure_logging, load_settings
from .controllers import hello, productos
from .errors import METHOD_NOT_ALLOWED, ProductoError, producto_error_handler
from .store import ProductoStore, build_store

logger = logging.getLogger(__name__)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        logger.warning(f"{request.method} {request.url.path} not allowed")
        return JSONResponse(status_code=405, content={"message": METHOD_NOT_ALLOWED}, headers=exc.headers)
    return await http_exception_handler(request, exc)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductoStore] = None) -> FastAPI:
    """Build the productos application.

    Settings are validated here, before anything is served; a missing store
    credential raises ConfigurationError. Pass ``store`` to skip building one
    from settings (tests, local scripts).
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = build_store(settings)

    app = FastAPI(title="Productos API")
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProductoError, producto_error_handler)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

    # Include routers
    app.include_router(productos.router, prefix="/api", tags=["productos"])
    app.include_router(hello.router, prefix="/api", tags=["health"])
    return app


def create_hello_app() -> FastAPI:
    """Health-check application; needs no configuration and no store."""
    app = FastAPI(title="Productos API health")
    app.include_router(hello.router, prefix="/api", tags=["health"])
    return app
