"""
Application factory.

``create_app`` wires an explicitly owned repository into a
``UserService`` and hangs it on ``app.state`` so route handlers can reach
it through ``Depends``. Tests build a fresh app per test; uvicorn serves
the module-level ``app``::

    uvicorn users_api.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.api.routes import health_router
from users_api.api.routes import router as user_router
from users_api.core.config import Settings, get_settings
from users_api.core.errors import DomainError
from users_api.core.logging_config import setup_logging
from users_api.middleware.request_logging import RequestLoggingMiddleware
from users_api.repositories.interface import UserRepository
from users_api.repositories.user_repo import InMemoryUserRepository
from users_api.services.user_service import UserService

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"message": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return JSONResponse({"message": message}, status_code=status.HTTP_400_BAD_REQUEST)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[UserRepository] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.user_service = UserService(repository or InMemoryUserRepository())

    app.include_router(user_router, prefix=settings.api_prefix)
    app.include_router(health_router)

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.add_middleware(RequestLoggingMiddleware)

    logger.info("Application %s configured (prefix %s)", settings.app_name, settings.api_prefix)
    return app


app = create_app()
