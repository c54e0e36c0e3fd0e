from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cocktail_api.core.auth_code_store import AuthCodeStore
from cocktail_api.core.config import Settings, configure_logging, get_settings
from cocktail_api.core.errors import BusinessLogicError
from cocktail_api.core.mailer import MailSender
from cocktail_api.core.rate_limiter import RateLimiter
from cocktail_api.core.tokens import TokenService
from cocktail_api.db.create_tables import create_all
from cocktail_api.routers import members as members_router
from cocktail_api.services.member_service import MemberService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers for a JSON-only API."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def business_error_handler(request: Request, exc: BusinessLogicError):
    return JSONResponse(status_code=exc.status, content={"code": exc.code.name, "message": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"code": "INTERNAL_ERROR", "message": "Internal server error"})


def create_app(
    settings: Settings | None = None,
    *,
    mailer: MailSender | None = None,
    create_schema: bool = True,
) -> FastAPI:
    """Build the API with its own code store, mailer, token service and member service."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    code_store = AuthCodeStore(ttl_seconds=settings.auth_code_ttl_seconds)
    member_service = MemberService(
        code_store=code_store,
        mailer=mailer or MailSender(settings),
        tokens=TokenService.from_settings(settings),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_schema:
            create_all()
        logger.info("Member API started (env=%s, code ttl=%ss)", settings.app_env, code_store.ttl_seconds)
        yield
        code_store.clear()
        app.state.rate_limiter.reset()
        logger.info("Member API stopped")

    app = FastAPI(title="luvCocktail Member API", lifespan=lifespan)
    app.state.settings = settings
    app.state.auth_code_store = code_store
    app.state.member_service = member_service
    app.state.rate_limiter = RateLimiter()

    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(BusinessLogicError, business_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(members_router.router)
    return app
