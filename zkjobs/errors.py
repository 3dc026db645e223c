"""
Error Taxonomy
==============

Domain exceptions raised by the commitment module, the proof client and the
job board. Every exception carries a stable `code` that the HTTP services
return as `error_code`.

Version: 0.1.0
"""

from typing import Any


class JobBoardError(Exception):
    """Base class for all domain errors."""

    code = "job_board_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


# =============================================================================
# Validation
# =============================================================================


class ValidationError(JobBoardError):
    """Bad threshold, value range, or malformed identifier."""

    code = "validation_error"


class InvalidRange(ValidationError):
    """A value lies outside the circuit's numeric domain."""

    code = "invalid_range"


class InvalidThreshold(ValidationError):
    """A job threshold is not a non-negative integer within the domain."""

    code = "invalid_threshold"


# =============================================================================
# Lookup
# =============================================================================


class NotFoundError(JobBoardError):
    """A referenced record does not exist."""

    code = "not_found"


class JobNotFound(NotFoundError):
    code = "job_not_found"

    def __init__(self, job_id: int) -> None:
        super().__init__(f"Job {job_id} does not exist", job_id=job_id)
        self.job_id = job_id


class ApplicationNotFound(NotFoundError):
    code = "application_not_found"

    def __init__(self, job_id: int, applicant_id_hash: str) -> None:
        super().__init__(
            f"No application from {applicant_id_hash} for job {job_id}",
            job_id=job_id,
            applicant_id_hash=applicant_id_hash,
        )


# =============================================================================
# Proofs
# =============================================================================


class ProofError(JobBoardError):
    """Proof generation or verification did not produce a usable proof."""

    code = "proof_error"


class BackendUnavailable(ProofError):
    """The proving backend could not be reached."""

    code = "backend_unavailable"


class ProofTimeout(BackendUnavailable):
    """The proving backend did not answer within the configured timeout."""

    code = "proof_timeout"


class ProofGenerationFailed(ProofError):
    """The proving backend answered with a non-success status."""

    code = "proof_generation_failed"

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(
            f"Proof backend error ({status_code}): {message}",
            status_code=status_code,
            backend_message=message,
        )
        self.status_code = status_code
        self.backend_message = message


class MalformedProofResponse(ProofError):
    """The proving backend answered with a body that is not a proof."""

    code = "malformed_proof_response"


class PublicInputEchoMismatch(MalformedProofResponse):
    """The backend proved a different threshold from the one requested."""

    code = "public_input_echo_mismatch"

    def __init__(self, requested: int, echoed: Any) -> None:
        super().__init__(
            f"Backend echoed required_threshold={echoed!r}, requested {requested}",
            requested=requested,
            echoed=echoed,
        )


class ThresholdMismatch(ProofError):
    """A proof's declared threshold differs from the job's threshold."""

    code = "threshold_mismatch"

    def __init__(self, job_id: int, expected: int, declared: Any) -> None:
        super().__init__(
            f"Proof declares required_threshold={declared!r} "
            f"but job {job_id} requires {expected}",
            job_id=job_id,
            expected=expected,
            declared=declared,
        )


class InvalidProof(ProofError):
    """The verification gateway rejected a proof."""

    code = "invalid_proof"

    def __init__(self, job_id: int, reason: str, detail: str | None = None) -> None:
        super().__init__(
            f"Proof for job {job_id} rejected: {reason}",
            job_id=job_id,
            reason=reason,
            detail=detail,
        )
        self.reason = reason


# =============================================================================
# State
# =============================================================================


class StateConflictError(JobBoardError):
    """A transition conflicts with the current ledger state."""

    code = "state_conflict"


class DuplicateApplication(StateConflictError):
    code = "duplicate_application"

    def __init__(self, job_id: int, applicant_id_hash: str) -> None:
        super().__init__(
            f"Applicant {applicant_id_hash} already applied to job {job_id}",
            job_id=job_id,
            applicant_id_hash=applicant_id_hash,
        )


class NotAuthorized(JobBoardError):
    """The caller may not perform this transition."""

    code = "not_authorized"
