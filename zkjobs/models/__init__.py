"""
Shared Models
=============

Pydantic models for job board records and HTTP responses.
"""

from zkjobs.models.board import Application, Job, JobStatus
from zkjobs.models.common import ErrorResponse, HealthResponse


__all__ = [
    "Application",
    "Job",
    "JobStatus",
    "ErrorResponse",
    "HealthResponse",
]
