"""
FastAPI Main Application
Entry point with all routers, middleware and error mapping
"""
from contextlib import asynccontextmanager
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from internhub import __version__
from internhub.application.services.bootstrap import load_working_set
from internhub.core.config import settings
from internhub.core.database import close_db, health_check as db_health_check, init_db
from internhub.core.exceptions import (
    ApplicationLimitException,
    AuthorizationException,
    CapacityExceededException,
    DomainException,
    DuplicateResourceException,
    InvalidTransitionException,
    PostingLimitException,
    RepositoryException,
    ResourceNotFoundException,
    ValidationException,
)
from internhub.core.logging_config import configure_logging
from internhub.presentation.api.v1.container import (
    get_record_gateway,
    get_registry,
    get_user_directory,
)
from internhub.presentation.api.v1.endpoints import (
    applications_router,
    internships_router,
    reports_router
)


# Most specific class wins; DomainException is the fallback
ERROR_STATUS: Dict[Type[DomainException], int] = {
    ResourceNotFoundException: status.HTTP_404_NOT_FOUND,
    AuthorizationException: status.HTTP_403_FORBIDDEN,
    ValidationException: 422,
    InvalidTransitionException: status.HTTP_409_CONFLICT,
    CapacityExceededException: status.HTTP_409_CONFLICT,
    ApplicationLimitException: status.HTTP_409_CONFLICT,
    PostingLimitException: status.HTTP_409_CONFLICT,
    DuplicateResourceException: status.HTTP_409_CONFLICT,
    RepositoryException: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the working set before serving, release connections after"""
    configure_logging()
    logger.info(f"Starting {settings.APP_NAME} v{__version__} ({settings.ENVIRONMENT})")

    await init_db()
    await load_working_set(get_record_gateway(), get_registry(), get_user_directory())

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Internship placement lifecycle: postings, applications, slots and withdrawals",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map engine errors to HTTP status codes"""
    code = status.HTTP_400_BAD_REQUEST
    for exc_type in type(exc).__mro__:
        if exc_type in ERROR_STATUS:
            code = ERROR_STATUS[exc_type]
            break

    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=code,
        content={"detail": str(exc), "error": type(exc).__name__}
    )


# Include API routers
app.include_router(internships_router, prefix="/api/v1", tags=["internships"])
app.include_router(applications_router, prefix="/api/v1", tags=["applications"])
app.include_router(reports_router, prefix="/api/v1", tags=["reports"])


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    database = await db_health_check()
    return {
        "status": "healthy" if database else "degraded",
        "version": __version__,
        "database": database
    }
