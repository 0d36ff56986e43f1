"""
ANiLab Chat Assistant - FastAPI Backend

Main entry point for the backend API server.
Serves the shop chat widget: POST /chat, GET /health and a plain GET / probe.
"""

import os
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.core.config import settings
from backend.api.routes import router
from backend.services.chat_service import get_chat_service
from assistant.logging_config import setup_logging, get_logger

setup_logging(
    service_name=os.environ.get("LOGFIRE_SERVICE_NAME", "anilab-chat-backend"),
    level="DEBUG" if settings.debug else "INFO",
)
logger = get_logger(__name__)

USE_LOGFIRE = os.environ.get("USE_LOGFIRE", "false").lower() in ("true", "1", "yes")


# =============================================================================
# Lifespan Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: load catalog and FAQ, wire collaborators
    - Shutdown: close the completion HTTP client
    """
    logger.info("Starting ANiLab Chat Assistant backend")
    logger.info(f"Debug mode: {settings.debug}")

    chat_service = get_chat_service()
    chat_service.initialize()

    yield

    await chat_service.close()
    logger.info("Shutting down backend")


# =============================================================================
# FastAPI App
# =============================================================================


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## ☕ ANiLab Chat Assistant API

Shop assistant for a functional-coffee e-shop.

### Features:
- 💬 Product recommendations by goal and coffee format
- 📦 Shipping, payment and returns answers
- 🤝 B2B lead collection with e-mail hand-off

### Endpoints:
- `POST /chat` - Send a message and get the reply
- `GET /health` - Catalog and FAQ status
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# =============================================================================
# CORS Middleware
# =============================================================================


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get a 400 with a short error text."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning("Rejected request body", path=request.url.path, error=message)
    return JSONResponse(
        status_code=400,
        content={"error": f"{location}: {message}" if location else message},
    )


# =============================================================================
# Include Routers
# =============================================================================


app.include_router(router, tags=["API"])


# =============================================================================
# Logfire FastAPI + HTTPX Instrumentation
# =============================================================================

if USE_LOGFIRE:
    logfire.instrument_fastapi(app)
    logfire.instrument_httpx()
    logger.info("Logfire: FastAPI + HTTPX instrumented")


# =============================================================================
# Main Entry Point
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
