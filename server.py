"""
TramPLAR HTTP server

FastAPI application exposing the multi-provider fallback chain:

- ``POST /api/chat``: ask the chain, always 200 with diagnostics
- ``GET /health``: liveness plus the configured provider order
- ``GET /``: minimal browser UI
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

import config
from providers.configuration import build_dispatcher, load_dispatcher_config
from providers.dispatcher import FallbackDispatcher
from utils.env import get_env
from web import load_index_html

logger = logging.getLogger(__name__)


# ============================================================================
# Response Models
# ============================================================================


class AttemptErrorResponse(BaseModel):
    """One failed provider attempt."""

    provider: str = Field(..., description="Provider identifier")
    error: str = Field(..., description="Why the attempt failed")


class ChatResponse(BaseModel):
    """Outcome of one pass over the fallback chain."""

    provider: Optional[str] = Field(default=None, description="Provider that answered, null if none did")
    model: Optional[str] = Field(default=None, description="Model that produced the answer")
    text: str = Field(..., description="Answer text, or the fallback message")
    tried: list[str] = Field(default_factory=list, description="Configured provider order")
    errors: list[AttemptErrorResponse] = Field(default_factory=list, description="Failed attempts in order")


# ============================================================================
# Logging
# ============================================================================


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Configure root logging and quiet the HTTP client libraries."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(numeric_level)

    noisy_level = max(numeric_level, logging.WARNING)
    for logger_name in ["httpx", "httpcore", "openai"]:
        logging.getLogger(logger_name).setLevel(noisy_level)


# ============================================================================
# Request helpers
# ============================================================================


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


async def _read_json_object(request: Request) -> dict:
    """Return the request body as a dict, or ``{}`` when it is not a JSON object."""
    try:
        payload = await request.json()
    except (ValueError, RecursionError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _body_too_large() -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={"error": f"request body exceeds {config.MAX_BODY_BYTES} bytes"},
    )


# ============================================================================
# Application factory
# ============================================================================


def create_app(dispatcher: Optional[FallbackDispatcher] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        dispatcher: Pre-built dispatcher (tests inject fakes here). When omitted,
            one is built from the environment when the app is created.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"TramPLAR {config.__version__} starting")
        yield
        logger.info("TramPLAR shutting down")

    app = FastAPI(
        title="TramPLAR",
        description="Multi-provider LLM fallback chat",
        version=config.__version__,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher or build_dispatcher(load_dispatcher_config(get_env))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > config.MAX_BODY_BYTES:
            return _body_too_large()
        return await call_next(request)

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat(request: Request):
        """Ask the provider chain and return the first answer plus diagnostics."""
        try:
            body = await request.body()
            if len(body) > config.MAX_BODY_BYTES:
                return _body_too_large()

            payload = await _read_json_object(request)
            prompt = payload.get("prompt")
            if not _is_non_empty_string(prompt):
                return JSONResponse(status_code=400, content={"error": "prompt is required"})

            system = payload.get("system")
            system_prompt = system if _is_non_empty_string(system) else None

            outcome = await request.app.state.dispatcher.dispatch(prompt, system_prompt)
        except Exception as e:
            logger.exception("Unexpected failure while handling chat request")
            return JSONResponse(status_code=500, content={"error": str(e) or e.__class__.__name__})

        return outcome.to_dict()

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint."""
        dispatcher = request.app.state.dispatcher
        return {"status": "healthy", "providers": [p.value for p in dispatcher.provider_order]}

    @app.get("/", response_class=HTMLResponse)
    async def index():
        """Minimal browser UI."""
        return HTMLResponse(load_index_html())

    return app


def main() -> None:
    configure_logging()
    application = create_app()
    logger.info(f"TramPLAR running on http://localhost:{config.PORT}")
    uvicorn.run(application, host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
