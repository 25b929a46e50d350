"""FastAPI application — entry point, middleware, and health endpoint.

Creates the Mana tutor backend API with:
- API versioning via router prefix (/api/v1/)
- CORS middleware (origins from settings)
- Request logging middleware (raw ASGI — no response body buffering)
- Global exception handlers (HTTPException, validation, unknown topic,
  catch-all)
- Health endpoint reporting whether AI is configured

Run with: uvicorn mana.main:app --reload
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from mana.config import get_settings
from mana.schemas import ApiError, ApiResponse
from mana.tutor.topics import UnknownTopicError

logger = logging.getLogger("mana")


# ---------------------------------------------------------------------------
# Request logging middleware (raw ASGI)
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware:
    """Logs method, path, status code, and duration for every request.

    Uses raw ASGI to avoid response body buffering. Does NOT log
    request/response bodies or query params: answers are free text
    written by learners.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Wraps the ASGI call to measure timing and capture status code."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "?")
        path = scope.get("path", "?")
        start = time.monotonic()
        status_code = 0

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, logging_send)
        finally:
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(
                "%s %s %d %.1fms", method, path, status_code, duration_ms
            )


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


def _http_exception_response(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wraps HTTPException in ApiResponse envelope.

    If the detail is already an ApiResponse dict (from deps.py or a router),
    returns it directly. Otherwise wraps in a generic error.
    """
    if isinstance(exc.detail, dict) and "ok" in exc.detail:
        return JSONResponse(status_code=exc.status_code, content=exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse(
            ok=False,
            error=ApiError(code="HTTP_ERROR", message=str(exc.detail)),
        ).model_dump(),
    )


def _validation_error_response(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Wraps Pydantic validation errors in ApiResponse envelope.

    Returns a human-readable summary without leaking internal details.
    """
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = " -> ".join(str(part) for part in first.get("loc", []))
        msg = first.get("msg", "Validation error")
        detail = f"{loc}: {msg}" if loc else msg
    else:
        detail = "Request validation failed."

    return JSONResponse(
        status_code=422,
        content=ApiResponse(
            ok=False,
            error=ApiError(code="VALIDATION_ERROR", message=detail),
        ).model_dump(),
    )


def _unhandled_exception_response(request: Request, exc: Exception) -> JSONResponse:
    """Catches all unhandled exceptions — never leaks internals to client.

    Logs the full traceback server-side. Returns a generic 500 response.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=500,
        content=ApiResponse(
            ok=False,
            error=ApiError(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred.",
            ),
        ).model_dump(),
    )


def _unknown_topic_response(request: Request, exc: UnknownTopicError) -> JSONResponse:
    """Maps a topic outside the catalogue to 400 UNKNOWN_TOPIC."""
    return JSONResponse(
        status_code=400,
        content=ApiResponse(
            ok=False,
            error=ApiError(code="UNKNOWN_TOPIC", message=str(exc)),
        ).model_dump(),
    )


# ---------------------------------------------------------------------------
# App creation
# ---------------------------------------------------------------------------


def _init_services() -> None:
    """Initializes the tutor service singleton during app startup.

    Creates the composer, and when an AI backend is configured, the prompt
    loader, provider, gateway and context manager. Logs warnings but never
    prevents startup: without AI the tutor runs on its rule-based path.

    Uses local imports to avoid circular imports during module loading.
    """
    from mana.ai.context import ContextManager
    from mana.ai.gateway import AIGateway
    from mana.ai.prompts import PromptLoader
    from mana.api import deps
    from mana.config import PROJECT_ROOT
    from mana.tutor.composer import ResponseComposer
    from mana.tutor.service import TutorService

    settings = get_settings()
    composer = ResponseComposer(language=settings.default_language)

    # 1. Create PromptLoader and check every supported language has its prompts
    prompt_loader = PromptLoader(PROJECT_ROOT / "prompts")
    deps._prompt_loader = prompt_loader
    for language in settings.supported_languages:
        for error in prompt_loader.validate_language(language):
            logger.error("Prompt check: %s", error)

    # 2. Without a configured backend, run rule-based only
    if not settings.ai_enabled:
        if settings.ai_backend != "none":
            logger.warning(
                "AI_BACKEND=%s but no API key is configured. "
                "Running with rule-based replies only.",
                settings.ai_backend,
            )
        deps._tutor_service = TutorService(composer)
        logger.info("Tutor service initialized without AI")
        return

    # 3. Create provider, gateway and context manager
    model_config = settings.tutor_model
    try:
        provider = deps.create_provider(model_config, settings)
    except Exception:
        logger.warning(
            "Failed to create AI provider (%s). Running with rule-based replies only.",
            model_config.provider,
            exc_info=True,
        )
        deps._tutor_service = TutorService(composer)
        return

    gateway = AIGateway(provider, model_config, timeout=settings.ai_timeout_seconds)
    context_manager = ContextManager(
        prompt_loader,
        provider=model_config.provider,
        language=settings.default_language,
        history_window=settings.history_window,
    )
    deps._tutor_service = TutorService(composer, gateway, context_manager)

    logger.info(
        "AI services initialized: provider=%s, model=%s, timeout=%ss",
        model_config.provider,
        model_config.model_id,
        settings.ai_timeout_seconds,
    )


def create_app() -> FastAPI:
    """Creates and configures the FastAPI application."""
    settings = get_settings()

    # Configure logging level
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    application = FastAPI(
        title="Mana",
        description="Adaptive math tutor: teach Mana, and she learns",
        version="0.1.0",
    )

    # -- Middleware (order matters: last added = first executed) --

    # CORS — must be outermost to handle preflight
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging — raw ASGI
    application.add_middleware(RequestLoggingMiddleware)

    # -- Exception handlers --
    application.add_exception_handler(StarletteHTTPException, _http_exception_response)
    application.add_exception_handler(RequestValidationError, _validation_error_response)
    application.add_exception_handler(UnknownTopicError, _unknown_topic_response)
    application.add_exception_handler(Exception, _unhandled_exception_response)

    # -- Routers --
    _register_routes(application)

    # -- Services --
    _init_services()

    return application


def _register_routes(application: FastAPI) -> None:
    """Registers all API routers on the application."""
    from fastapi import APIRouter

    v1 = APIRouter(prefix="/api/v1")

    @v1.get("/health")
    async def health() -> dict[str, Any]:
        from mana.api import deps

        service = deps._tutor_service
        return ApiResponse(
            ok=True,
            data={
                "status": "healthy",
                "ai_enabled": service is not None and service.ai_enabled,
            },
        ).model_dump()

    # Sub-routers (BEFORE including v1 into the app):
    from mana.api.chat import router as chat_router

    v1.include_router(chat_router, prefix="/chat", tags=["chat"])

    from mana.api.learning import router as learning_router

    v1.include_router(learning_router, prefix="/learning", tags=["learning"])

    from mana.api.users import router as users_router

    v1.include_router(users_router, prefix="/users", tags=["users"])

    application.include_router(v1)


app = create_app()
