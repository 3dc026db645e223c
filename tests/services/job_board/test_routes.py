"""Tests for the job board HTTP service."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from zkjobs.board import JobBoard, hash_applicant_id
from zkjobs.config import Settings
from zkjobs.errors import (
    DuplicateApplication,
    InvalidThreshold,
    JobBoardError,
    JobNotFound,
    NotAuthorized,
    ThresholdMismatch,
)
from zkjobs.zk.circuit import SkillCircuit
from zkjobs.zk.commitment import commit


JOBS = "/api/v1/jobs"
APPLICANT = hash_applicant_id("A1")


@pytest_asyncio.fixture
async def api(settings: Settings, board: JobBoard) -> AsyncGenerator[AsyncClient, None]:
    from services.job_board.main import create_app

    app = create_app(settings, board=board)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://board.test") as client:
        yield client


@pytest.fixture
def post_body(description_hash: str) -> dict:
    return {"employer_id": "E1", "required_threshold": 70, "description_hash": description_hash}


def apply_body(circuit: SkillCircuit, score: int, threshold: int, applicant: str = APPLICANT) -> dict:
    return {
        "applicant_id_hash": applicant,
        "proof": circuit.prove(score, threshold),
        "public_inputs": {"required_threshold": threshold},
    }


class TestJobRoutes:
    """Tests for posting and reading jobs."""

    @pytest.mark.asyncio
    async def test_post_and_read(self, api: AsyncClient, post_body: dict) -> None:
        first = await api.post(JOBS, json=post_body)
        second = await api.post(JOBS, json=post_body)

        assert first.status_code == 201
        assert first.json()["id"] == 0
        assert first.json()["status"] == "open"
        assert second.json()["id"] == 1

        listed = await api.get(JOBS)
        assert [job["id"] for job in listed.json()] == [0, 1]

        fetched = await api.get(f"{JOBS}/1")
        assert fetched.json()["required_threshold"] == 70

    @pytest.mark.asyncio
    async def test_unknown_job(self, api: AsyncClient) -> None:
        response = await api.get(f"{JOBS}/42")

        assert response.status_code == 404
        assert response.json()["error_code"] == "job_not_found"

    @pytest.mark.asyncio
    async def test_threshold_out_of_domain(self, api: AsyncClient, post_body: dict) -> None:
        response = await api.post(JOBS, json={**post_body, "required_threshold": -5})

        assert response.status_code == 422
        assert response.json()["error_code"] == "invalid_threshold"

    @pytest.mark.asyncio
    async def test_salary_disclosure(self, api: AsyncClient, post_body: dict) -> None:
        blinding = bytes(range(32))
        commitment = commit(120_000, blinding)
        job = (await api.post(JOBS, json={**post_body, "salary_commitment": commitment})).json()

        opened = await api.post(
            f"{JOBS}/{job['id']}/salary-disclosure",
            json={"salary": 120_000, "blinding_factor": blinding.hex()},
        )
        wrong = await api.post(
            f"{JOBS}/{job['id']}/salary-disclosure",
            json={"salary": 90_000, "blinding_factor": blinding.hex()},
        )

        assert opened.json() == {"job_id": job["id"], "valid": True}
        assert wrong.json()["valid"] is False


class TestApplicationRoutes:
    """Tests for applying and accepting."""

    @pytest.mark.asyncio
    async def test_apply_and_list(self, api: AsyncClient, post_body: dict, circuit: SkillCircuit) -> None:
        await api.post(JOBS, json=post_body)

        response = await api.post(f"{JOBS}/0/applications", json=apply_body(circuit, 80, 70))

        assert response.status_code == 201
        assert response.json()["accepted"] is False

        applications = (await api.get(f"{JOBS}/0/applications")).json()
        assert len(applications) == 1
        assert applications[0]["applicant_id_hash"] == APPLICANT

    @pytest.mark.asyncio
    async def test_threshold_mismatch(self, api: AsyncClient, post_body: dict, circuit: SkillCircuit) -> None:
        await api.post(JOBS, json=post_body)

        response = await api.post(f"{JOBS}/0/applications", json=apply_body(circuit, 80, 60))

        assert response.status_code == 422
        assert response.json()["error_code"] == "threshold_mismatch"
        assert (await api.get(f"{JOBS}/0/applications")).json() == []

    @pytest.mark.asyncio
    async def test_invalid_proof(self, api: AsyncClient, post_body: dict, circuit: SkillCircuit) -> None:
        await api.post(JOBS, json=post_body)
        body = apply_body(circuit, 80, 70)
        body["proof"]["commitment"] = "0x" + "11" * 32

        response = await api.post(f"{JOBS}/0/applications", json=body)

        assert response.status_code == 422
        assert response.json()["error_code"] == "invalid_proof"

    @pytest.mark.asyncio
    async def test_string_proof_reaches_proof_system(self, api: AsyncClient, post_body: dict) -> None:
        await api.post(JOBS, json=post_body)
        body = {
            "applicant_id_hash": APPLICANT,
            "proof": "0xdeadbeef",
            "public_inputs": {"required_threshold": 70},
        }

        response = await api.post(f"{JOBS}/0/applications", json=body)

        assert response.status_code == 422
        assert response.json()["error_code"] == "invalid_proof"
        assert response.json()["details"]["reason"] == "MalformedProof"

    @pytest.mark.asyncio
    async def test_apply_unknown_job(self, api: AsyncClient, circuit: SkillCircuit) -> None:
        response = await api.post(f"{JOBS}/3/applications", json=apply_body(circuit, 80, 70))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate(self, api: AsyncClient, post_body: dict, circuit: SkillCircuit) -> None:
        await api.post(JOBS, json=post_body)
        await api.post(f"{JOBS}/0/applications", json=apply_body(circuit, 80, 70))

        response = await api.post(f"{JOBS}/0/applications", json=apply_body(circuit, 90, 70))

        assert response.status_code == 409
        assert response.json()["error_code"] == "duplicate_application"

    @pytest.mark.asyncio
    async def test_accept(self, api: AsyncClient, post_body: dict, circuit: SkillCircuit) -> None:
        await api.post(JOBS, json=post_body)
        await api.post(f"{JOBS}/0/applications", json=apply_body(circuit, 80, 70))
        url = f"{JOBS}/0/applications/{APPLICANT}/accept"

        forbidden = await api.post(url, json={"employer_id": "E2"})
        accepted = await api.post(url, json={"employer_id": "E1"})

        assert forbidden.status_code == 403
        assert forbidden.json()["error_code"] == "not_authorized"
        assert accepted.status_code == 200
        assert accepted.json()["accepted"] is True

        job = (await api.get(f"{JOBS}/0")).json()
        assert job["accepted_applicant_id_hash"] == APPLICANT


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_reports_ledger(self, api: AsyncClient, post_body: dict) -> None:
        await api.post(JOBS, json=post_body)

        data = (await api.get("/health")).json()

        assert data["service"] == "job_board"
        assert data["components"]["ledger"]["jobs"] == 1
        assert data["components"]["ledger"]["network_id"] == "TestNet"
        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, api: AsyncClient) -> None:
        response = await api.get(JOBS, headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.parametrize(
    "error,status_code",
    [
        (ThresholdMismatch(0, 70, -1), 422),
        (InvalidThreshold("threshold outside domain"), 422),
        (JobNotFound(3), 404),
        (DuplicateApplication(0, APPLICANT), 409),
        (NotAuthorized("not the employer"), 403),
    ],
)
def test_status_for(error: JobBoardError, status_code: int) -> None:
    from services.job_board.main import status_for

    assert status_for(error) == status_code
