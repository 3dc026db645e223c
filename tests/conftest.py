"""
Test Configuration
==================

Pytest fixtures for ZK Jobs tests.
"""

import hashlib
import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["CIRCUIT_KEY"] = "zkjobs-test-circuit-key"
os.environ["PROVER_URL"] = "http://prover.test"

from zkjobs.board import JobBoard  # noqa: E402
from zkjobs.config import Settings  # noqa: E402
from zkjobs.zk import ProofClient, SkillCircuit, VerificationGateway  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Settings loaded from the test environment."""
    return Settings()


@pytest.fixture
def circuit(settings: Settings) -> SkillCircuit:
    return SkillCircuit.from_settings(settings.circuit)


@pytest.fixture
def gateway(circuit: SkillCircuit) -> VerificationGateway:
    return VerificationGateway(circuit)


@pytest.fixture
def board(gateway: VerificationGateway, settings: Settings) -> JobBoard:
    """A fresh, empty job board."""
    return JobBoard(gateway, value_bits=settings.circuit.value_bits)


@pytest.fixture
def description_hash() -> str:
    """Digest of an off-chain job description."""
    return "0x" + hashlib.sha256(b"ZK Engineer: build privacy-preserving hiring").hexdigest()


@pytest.fixture
def proof_server_app(settings: Settings) -> FastAPI:
    """Reference proving backend sharing the test circuit key."""
    from services.proof_server.main import create_app

    return create_app(settings)


@pytest_asyncio.fixture
async def prover_http(proof_server_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client routed in process to the proof server."""
    async with AsyncClient(
        transport=ASGITransport(app=proof_server_app),
        base_url="http://prover.test",
    ) as client:
        yield client


@pytest.fixture
def proof_client(settings: Settings, prover_http: AsyncClient) -> ProofClient:
    """Proof client talking to the in-process proof server."""
    return ProofClient(
        settings.prover,
        circuit=settings.circuit.name,
        value_bits=settings.circuit.value_bits,
        http_client=prover_http,
    )
