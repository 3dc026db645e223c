"""
Job Board Models
================

Ledger-resident records owned by the job board.

Version: 0.1.0
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, JsonValue

from zkjobs.zk.models import PublicInputs


class JobStatus(str, Enum):
    """Job lifecycle states."""

    OPEN = "open"


class Job(BaseModel):
    """A posted opportunity with a public skill threshold."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0)
    employer_id: str
    required_threshold: int = Field(..., ge=0)
    description_hash: str = Field(..., description="Digest of the off-chain title/body")
    created_at: int = Field(..., description="Ledger height at creation")
    status: JobStatus = JobStatus.OPEN

    # Confidential salary figure, committed by the employer
    salary_commitment: str | None = None

    # Set once by the employer's accept action
    accepted_applicant_id_hash: str | None = None


class Application(BaseModel):
    """An applicant's verified claim of eligibility for a job."""

    model_config = ConfigDict(frozen=True)

    job_id: int = Field(..., ge=0)
    applicant_id_hash: str
    proof: JsonValue
    public_inputs: PublicInputs
    accepted: bool = False
    applied_at: int = Field(..., description="Ledger height at submission")
