"""
FastAPI Application Setup

Main entry point for the NBN order pipeline API.

Responsibility:
    - FastAPI app initialization
    - Router registration (applications)
    - CORS middleware configuration
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint (reports Redis reachability)

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint: GET /health
"""

import logging
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# Import routers
from src.api.routers import applications

# Import shared schemas
from src.api.schemas.common import ErrorResponse

# Import domain exceptions for global handling
from src.domain.shared.exceptions import (
    ApplicationNotFoundError,
    CustomerNotFoundError,
    DomainException,
    InvalidStatusTransitionError,
    PlanNotFoundError,
)
from src.infrastructure.persistence.redis import connection as redis_connection

# Load environment variables from .env file
load_dotenv()

# Configure logger
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "ok" when Redis answers PING, "degraded" otherwise
        redis: Redis reachability
        version: API version
        timestamp: Unix timestamp of health check
    """

    status: str = "ok"
    redis: bool
    version: str = API_VERSION
    timestamp: float


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Request logging middleware.

    Logs every request with method, path, status code and duration.

    Logging Format:
        INFO: "Incoming request: GET /api/applications"
        INFO: "Request completed: GET /api/applications - 200 - 0.012s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )

    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


def _error_code(exc: Exception) -> str:
    """
    ErrorResponse code from the exception class name.

    Examples:
        >>> _error_code(ApplicationNotFoundError("x"))
        'APPLICATION_NOT_FOUND'
    """
    name = exc.__class__.__name__.removesuffix("Error")
    return "".join(
        f"_{char}" if char.isupper() and index else char
        for index, char in enumerate(name)
    ).upper()


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Global exception handler for domain layer exceptions.

    Mapping:
        - ApplicationNotFoundError, PlanNotFoundError,
          CustomerNotFoundError -> 404 Not Found
        - InvalidStatusTransitionError -> 409 Conflict
        - Other DomainException -> 400 Bad Request

    Returns:
        JSONResponse with ErrorResponse format and appropriate status code
    """
    if isinstance(
        exc, (ApplicationNotFoundError, PlanNotFoundError, CustomerNotFoundError)
    ):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidStatusTransitionError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    error_response = ErrorResponse(
        code=_error_code(exc),
        message=str(exc),
        details={"exception_type": exc.__class__.__name__},
    )

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unexpected exceptions.

    Converts unhandled exceptions to 500 Internal Server Error and logs the
    full stack trace.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# APP FACTORY
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the shared Redis pool on shutdown."""
    yield
    redis_connection.close_connections()


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - Title: NBN Order Pipeline API
        - CORS: Allow all origins (development mode)
        - Routers: /api/applications
        - Health: GET /health

    Returns:
        Configured FastAPI application instance

    Usage:
        >>> app = create_app()
        >>> # uvicorn src.api.main:app --reload
    """
    app = FastAPI(
        title="NBN Order Pipeline API",
        version=API_VERSION,
        description=(
            "Read-side API for telecom service applications. "
            "NBN orders are submitted to the B2B endpoint by background workers."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Add CORS middleware (allow all origins for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production: restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    # Register global exception handlers
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register routers with /api prefix
    app.include_router(applications.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        description="Health check for monitoring and load balancers, includes Redis PING",
        tags=["health"],
    )
    def health_check() -> HealthCheckResponse:
        """
        Health check endpoint.

        Examples:
            >>> curl http://localhost:8000/health
            {"status": "ok", "redis": true, "version": "0.1.0", "timestamp": 1704976800.123}
        """
        redis_ok = redis_connection.health_check()
        return HealthCheckResponse(
            status="ok" if redis_ok else "degraded",
            redis=redis_ok,
            timestamp=time.time(),
        )

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/applications")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn src.api.main:app --reload
app = create_app()
