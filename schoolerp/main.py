# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schoolerp import __version__
from schoolerp.config import settings
from schoolerp.database import SessionLocal, engine
from schoolerp.exceptions import ServiceError
from schoolerp.models import Base
from schoolerp.schemas.common import ErrorResponse, HealthResponse
from schoolerp.services import rbac_seed_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    Base.metadata.create_all(bind=engine)

    if settings.seed_rbac_on_startup:
        logger.info("Seeding RBAC catalog...")
        db = SessionLocal()
        try:
            rbac_seed_service.seed_rbac_data(db)
        finally:
            db.close()

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="School ERP",
    description="Role-based access control and branch management for a multi-branch school",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Report service errors as ``{"detail", "code"}`` with the matching status."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.message, code=exc.code).model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Import and include API router after it's created
from schoolerp.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")


def run() -> None:
    """Serve the application with uvicorn (the ``schoolerp`` console script)."""
    uvicorn.run(
        "schoolerp.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
