"""
Job Board Service - Main Application
====================================

FastAPI application exposing the job board ledger contract actions:
post_job, apply, accept, list_jobs and get_applications.

Version: 0.1.0
"""

import uuid
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.job_board.routes import applications, jobs
from zkjobs.board import JobBoard
from zkjobs.config import Settings, get_settings
from zkjobs.errors import (
    JobBoardError,
    NotAuthorized,
    NotFoundError,
    ProofError,
    StateConflictError,
    ValidationError,
)
from zkjobs.logging import bind_context, clear_context, get_logger, setup_logging
from zkjobs.models.common import ErrorResponse, HealthResponse
from zkjobs.zk.circuit import SkillCircuit
from zkjobs.zk.gateway import VerificationGateway


logger = get_logger(__name__)

ERROR_STATUS: list[tuple[type[JobBoardError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ProofError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (StateConflictError, status.HTTP_409_CONFLICT),
    (NotAuthorized, status.HTTP_403_FORBIDDEN),
]


def status_for(exc: JobBoardError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def build_board(settings: Settings) -> JobBoard:
    """Wire the board to a gateway for the configured circuit."""
    circuit = SkillCircuit.from_settings(settings.circuit)
    return JobBoard(VerificationGateway(circuit), value_bits=settings.circuit.value_bits)


def create_app(
    settings: Settings | None = None,
    board: JobBoard | None = None,
) -> FastAPI:
    """
    Build the job board service.

    Args:
        settings: Application settings (defaults to the environment)
        board: Existing board to serve; a fresh in-memory board if omitted
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="ZK Jobs Board Service",
        description="Job postings with confidential, proof-gated eligibility",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.board = board or build_board(settings)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next: Any) -> Any:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        clear_context()
        bind_context(request_id=request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # ========================================================================
    # Health Check Endpoints
    # ========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        board_stats = app.state.board.stats()
        return HealthResponse(
            service="job_board",
            version="0.1.0",
            components={
                "ledger": {
                    "status": "healthy",
                    "network_id": settings.ledger.network_id,
                    "contract_address": settings.ledger.contract_address or None,
                    **board_stats,
                },
            },
        )

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        return {
            "service": "ZK Jobs Board Service",
            "version": "0.1.0",
            "docs": "/docs",
        }

    # ========================================================================
    # Include Routers
    # ========================================================================

    app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["Jobs"])
    app.include_router(applications.router, prefix="/api/v1/jobs", tags=["Applications"])

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.exception_handler(JobBoardError)
    async def job_board_exception_handler(request: Any, exc: JobBoardError) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning(
            "job_board_rejected",
            status_code=status_code,
            error_code=exc.code,
            error=exc.message,
            path=request.url.path,
        )
        body = ErrorResponse(
            error=exc.message,
            error_code=exc.code,
            details=exc.details or None,
        )
        return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        body = ErrorResponse(error=str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))

    return app


settings = get_settings()

setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="job_board",
    network_id=settings.ledger.network_id,
)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.job_board.main:app",
        host="0.0.0.0",
        port=settings.ports.job_board,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
