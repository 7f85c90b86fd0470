from pathlib import Path
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from core.config import settings, Settings
from core.errors import validation_exception_handler
from core.logger import init_logger
from core.middleware import (
    RateLimiter,
    RateLimitMiddleware,
    ForwardedProtoRedirectMiddleware,
    SecurityHeadersMiddleware,
)
from database import create_db_and_tables

from api import contact, users

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

app_logger = init_logger("portfolio")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_logger.info("🚀 App starting up...")
    create_db_and_tables()
    yield
    app_logger.info("🛑 App shutting down...")


def create_app(app_settings: Settings = settings) -> FastAPI:
    app = FastAPI(lifespan=lifespan, title="Portfolio Contact Backend")
    app.state.settings = app_settings
    app.state.rate_limiter = RateLimiter(
        max_requests=app_settings.RATE_LIMIT_MAX,
        window_seconds=app_settings.RATE_LIMIT_WINDOW_SECONDS,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Middlewares, the last one added runs first:
    # security headers -> CORS -> https redirect (production) -> rate limit -> routes
    app.add_middleware(
        RateLimitMiddleware,
        limiter=app.state.rate_limiter,
        trust_forwarded=app_settings.RATE_LIMIT_TRUST_FORWARDED,
    )

    if app_settings.is_production:
        app.add_middleware(ForwardedProtoRedirectMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.FRONTEND_ORIGIN],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=app_settings.CONTENT_SECURITY_POLICY,
        strict_transport_security=app_settings.is_production,
    )

    # Routers
    app.include_router(contact.router)
    app.include_router(users.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Static page, mounted last so the API routes take precedence
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

    return app


app = create_app()


if __name__ == "__main__":
    scheme = "https" if settings.is_production else "http"
    app_logger.info(f"Server running at {scheme}://{settings.HOST}:{settings.PORT}")
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=not settings.is_production, workers=1)
