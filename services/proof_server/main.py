"""
Proof Server - Main Application
===============================

FastAPI application implementing the proof backend protocol:

    POST /prove  {circuit, inputs: {private: {skill_score}, public: {required_threshold}}}
        2xx      {proof, publicInputs: {required_threshold}}
        non-2xx  plain text error message

Version: 0.1.0
"""

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from services.proof_server.routes import prove
from zkjobs.config import Settings, get_settings
from zkjobs.logging import get_logger, setup_logging
from zkjobs.models.common import HealthResponse
from zkjobs.zk.circuit import SkillCircuit


logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the proof server around the configured circuit."""
    settings = settings or get_settings()

    app = FastAPI(
        title="ZK Jobs Proof Server",
        description="Reference proving backend for the SkillCircuit eligibility statement",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )
    app.state.circuit = SkillCircuit.from_settings(settings.circuit)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        circuit: SkillCircuit = app.state.circuit
        return HealthResponse(
            service="proof_server",
            version="0.1.0",
            components={
                "circuit": {
                    "status": "healthy",
                    "name": circuit.name,
                    "value_bits": circuit.value_bits,
                },
            },
        )

    app.include_router(prove.router, tags=["Proofs"])

    # Failures are plain text so clients can surface them verbatim.

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Any, exc: HTTPException) -> PlainTextResponse:
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Any,
        exc: RequestValidationError,
    ) -> PlainTextResponse:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        logger.warning("invalid_prove_request", path=request.url.path, errors=len(exc.errors()))
        return PlainTextResponse(f"Invalid prove request: {messages}", status_code=400)

    return app


settings = get_settings()

setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="proof_server",
)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.proof_server.main:app",
        host="0.0.0.0",
        port=settings.ports.proof_server,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
