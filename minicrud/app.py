import logging
import os

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from minicrud.core.config import get_settings
from minicrud.core.responses import failure
from minicrud.routers import pages as pages_router
from minicrud.routers import users_api as users_api_router
from minicrud.services.user_service import UserError, UserService

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
WEB = os.path.join(BASE, "web")
TEMPLATES = os.path.join(BASE, "templates")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; style-src 'self' 'unsafe-inline'; script-src 'self'; connect-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def user_error_handler(request: Request, exc: UserError):
    return failure(exc.message, exc.status_code)


async def api_http_error_handler(request: Request, exc: StarletteHTTPException):
    """Methods the /api route does not register still get the JSON envelope."""
    if exc.status_code == 405 and request.url.path == "/api":
        action = users_api_router.resolve_action(request, {})
        try:
            users_api_router.check_action(request.method.upper(), action)
        except UserError as err:
            return failure(err.message, err.status_code)
    return await http_exception_handler(request, exc)


def create_app() -> FastAPI:
    """Factory compatível com uvicorn/gunicorn (uvicorn minicrud.app:create_app --factory)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title="Mini CRUD de usuarios")
    application.mount("/static", StaticFiles(directory=WEB), name="static")
    application.state.templates = Jinja2Templates(directory=TEMPLATES)

    application.state.user_service = UserService(settings.data_file)
    logger.info("Store at %s (env=%s)", settings.data_file, settings.app_env)

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:8000", "http://127.0.0.1:8000"})
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    application.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    application.add_exception_handler(UserError, user_error_handler)
    application.add_exception_handler(StarletteHTTPException, api_http_error_handler)

    application.include_router(users_api_router.router)
    application.include_router(pages_router.router)
    return application


app = create_app()
