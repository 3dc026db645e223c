"""
Application Routes
==================

Ledger contract actions for applying with an eligibility proof and for the
employer's acceptance.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, JsonValue

from services.job_board.routes.jobs import get_board
from zkjobs.board import JobBoard
from zkjobs.models.board import Application


router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class ApplyRequest(BaseModel):
    """Application carrying an eligibility proof."""

    applicant_id_hash: str = Field(..., description="32-byte hex digest of the applicant identity")
    proof: JsonValue = Field(..., description="Opaque proof artifact")
    public_inputs: dict[str, Any] = Field(..., description="Public inputs the proof was made for")


class AcceptRequest(BaseModel):
    employer_id: str = Field(..., min_length=1)


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/{job_id}/applications",
    response_model=Application,
    status_code=status.HTTP_201_CREATED,
)
def apply(job_id: int, body: ApplyRequest, board: JobBoard = Depends(get_board)) -> Application:
    """
    Apply to a job.

    Rejections name the reason: unknown job (404), threshold mismatch or
    invalid proof (422), duplicate application (409).
    """
    return board.apply(
        job_id=job_id,
        applicant_id_hash=body.applicant_id_hash,
        proof=body.proof,
        public_inputs=body.public_inputs,
    )


@router.get("/{job_id}/applications", response_model=list[Application])
def get_applications(job_id: int, board: JobBoard = Depends(get_board)) -> list[Application]:
    return board.get_applications(job_id)


@router.post(
    "/{job_id}/applications/{applicant_id_hash}/accept",
    response_model=Application,
)
def accept(
    job_id: int,
    applicant_id_hash: str,
    body: AcceptRequest,
    board: JobBoard = Depends(get_board),
) -> Application:
    """Accept an application on behalf of the job's employer."""
    return board.accept(job_id, applicant_id_hash, employer_id=body.employer_id)
