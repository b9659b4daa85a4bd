import logging
import sys
from contextlib import asynccontextmanager

from anthropic import AsyncAnthropic
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from repowiki.api.router import api_router
from repowiki.config import settings
from repowiki.core.exceptions import UpstreamServiceError
from repowiki.services.analysis import create_analysis_client
from repowiki.services.github import close_github_client, create_github_client


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)

    # Requests are logged by the middleware below
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: create shared clients, close them on shutdown."""
    setup_logging()
    logger.info("RepoWiki API starting up")
    if not settings.github_authenticated:
        logger.warning("GITHUB_TOKEN not set, using unauthenticated GitHub rate limits")

    app.state.github_client = create_github_client()
    app.state.analysis_client = create_analysis_client()
    app.state.anthropic_client = AsyncAnthropic(api_key=settings.anthropic_api_key)
    yield
    await close_github_client(app.state.github_client)
    await app.state.analysis_client.aclose()
    await app.state.anthropic_client.close()
    logger.info("RepoWiki API shutting down")


app = FastAPI(
    title="RepoWiki API",
    description="Generates documentation and wikis for GitHub repositories",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render errors as ``{"error": ...}`` instead of FastAPI's ``{"detail": ...}``."""
    if isinstance(exc, UpstreamServiceError):
        body = {"success": False, "error": exc.detail}
    else:
        body = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed requests and generation endpoints, skipping OPTIONS preflight."""
    if request.method == "OPTIONS" or request.url.path == "/health":
        return await call_next(request)

    response = await call_next(request)

    path = request.url.path
    if response.status_code >= 400 or "generate" in path:
        logger.info(f"{request.method} {path} → {response.status_code}")

    return response


app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
