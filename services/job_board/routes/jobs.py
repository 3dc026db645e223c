"""
Job Routes
==========

Ledger contract actions for posting and reading jobs.
"""

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from zkjobs.board import JobBoard
from zkjobs.models.board import Job


router = APIRouter()


def get_board(request: Request) -> JobBoard:
    return request.app.state.board


# ============================================================================
# Request/Response Models
# ============================================================================


class PostJobRequest(BaseModel):
    """Request to post a job."""

    employer_id: str = Field(..., min_length=1, description="Opaque employer identifier")
    required_threshold: int = Field(..., description="Public minimum skill score")
    description_hash: str = Field(..., description="32-byte hex digest of the off-chain description")
    salary_commitment: str | None = Field(
        default=None,
        description="Optional commitment to a confidential salary figure",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "employer_id": "E1",
                    "required_threshold": 70,
                    "description_hash": "0x" + "00" * 32,
                }
            ]
        }
    }


class SalaryDisclosureRequest(BaseModel):
    """Opening of a job's salary commitment."""

    salary: int
    blinding_factor: str = Field(..., description="32-byte hex blinding factor")


class SalaryDisclosureResponse(BaseModel):
    job_id: int
    valid: bool


# ============================================================================
# Endpoints
# ============================================================================


@router.post("", response_model=Job, status_code=status.HTTP_201_CREATED)
def post_job(body: PostJobRequest, board: JobBoard = Depends(get_board)) -> Job:
    """Post a job; the response carries the authoritative job id."""
    return board.post_job(
        employer_id=body.employer_id,
        required_threshold=body.required_threshold,
        description_hash=body.description_hash,
        salary_commitment=body.salary_commitment,
    )


@router.get("", response_model=list[Job])
def list_jobs(board: JobBoard = Depends(get_board)) -> list[Job]:
    return board.list_jobs()


@router.get("/{job_id}", response_model=Job)
def get_job(job_id: int, board: JobBoard = Depends(get_board)) -> Job:
    return board.get_job(job_id)


@router.post("/{job_id}/salary-disclosure", response_model=SalaryDisclosureResponse)
def disclose_salary(
    job_id: int,
    body: SalaryDisclosureRequest,
    board: JobBoard = Depends(get_board),
) -> SalaryDisclosureResponse:
    """Check that a salary figure opens the job's salary commitment."""
    valid = board.prove_salary_for_job(job_id, body.salary, body.blinding_factor)
    return SalaryDisclosureResponse(job_id=job_id, valid=valid)
