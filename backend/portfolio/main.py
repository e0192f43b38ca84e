# portfolio/main.py
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.core.mailer import NotificationSender, SmtpSender
from portfolio.core.profile import PACKAGE_DIR, Profile, get_profile
from portfolio.core.rate_limit import RateLimiter
from portfolio.core.rendering import page_template, templates
from portfolio.core.settings import Settings, settings as default_settings
from portfolio.lib.pipeline import SubmissionPipeline
from portfolio.routers.api_contact import API_PREFIX, router as api_contact_router
from portfolio.routers.contact import router as contact_router
from portfolio.routers.health import router as health_router
from portfolio.routers.pages import router as pages_router

log = logging.getLogger("uvicorn.error")

CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "style-src 'self' 'unsafe-inline'",
    "script-src 'self'",
    "img-src 'self' data: https:",
    "connect-src 'self'",
    "font-src 'self'",
    "object-src 'none'",
    "media-src 'self'",
    "frame-src 'none'",
])

SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def create_app(
    settings: Optional[Settings] = None,
    profile: Optional[Profile] = None,
    sender: Optional[NotificationSender] = None,
    limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    settings = settings if settings is not None else default_settings
    app = FastAPI(title=settings.api_title, docs_url=None, redoc_url=None, openapi_url=None)

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # unmatched paths and methods get the not-found page; the JSON api keeps JSON errors
    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException):
        if request.url.path.startswith(API_PREFIX + "/"):
            return await http_exception_handler(request, exc)
        return templates.TemplateResponse(
            request,
            page_template("404"),
            {"profile": app.state.profile},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    # static assets; if unset we use the copy packaged with the code
    static_root = Path(settings.static_root).resolve() if settings.static_root else (PACKAGE_DIR / "static")
    app.mount("/static", StaticFiles(directory=str(static_root)), name="static")

    app.state.settings = settings
    app.state.static_root = static_root
    app.state.profile = profile if profile is not None else get_profile()
    app.state.pipeline = SubmissionPipeline(
        sender=sender if sender is not None else SmtpSender(settings),
        limiter=limiter if limiter is not None else RateLimiter.from_settings(settings),
    )

    log.info(f"[main] static_root = {static_root}")

    app.include_router(pages_router)
    app.include_router(contact_router)
    app.include_router(api_contact_router)
    app.include_router(health_router)
    return app


app = create_app()
