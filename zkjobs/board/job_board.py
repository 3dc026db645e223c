"""
Job Board State Machine
=======================

Authoritative model of jobs and applications. Proof verification gates the
`apply` transition; the employer's `accept` is the only mutator of an
application.

Records live in memory. The board is safe to share between threads: job id
allocation and record insertion happen under one short lock, and proof
verification always runs outside it.

Version: 0.1.0
"""

import hashlib
import threading
from typing import Any

from zkjobs.errors import (
    ApplicationNotFound,
    DuplicateApplication,
    InvalidProof,
    InvalidThreshold,
    JobNotFound,
    NotAuthorized,
    StateConflictError,
    ThresholdMismatch,
    ValidationError,
)
from zkjobs.logging import get_logger
from zkjobs.models.board import Application, Job
from zkjobs.zk.commitment import (
    DEFAULT_VALUE_BITS,
    normalize_digest,
    verify_commitment,
)
from zkjobs.zk.gateway import VerificationGateway, declared_threshold, read_public_inputs
from zkjobs.zk.models import VerificationReason


logger = get_logger(__name__)


def hash_applicant_id(applicant_id: str) -> str:
    """Derive the ledger-visible applicant digest from a real identity."""
    return "0x" + hashlib.sha256(applicant_id.encode()).hexdigest()


class JobBoard:
    """
    In-memory job board ledger.

    Usage:
        board = JobBoard(VerificationGateway(circuit))

        job = board.post_job("E1", required_threshold=70, description_hash=h)
        board.apply(job.id, hash_applicant_id("A1"), proof.proof, proof.public_inputs)
        board.accept(job.id, hash_applicant_id("A1"), employer_id="E1")
    """

    def __init__(
        self,
        gateway: VerificationGateway,
        value_bits: int = DEFAULT_VALUE_BITS,
    ) -> None:
        self._gateway = gateway
        self._value_bits = value_bits
        self._lock = threading.Lock()

        self._next_job_id = 0
        self._height = 0

        self._jobs: dict[int, Job] = {}
        # job_id -> applicant_id_hash -> Application, in submission order
        self._applications: dict[int, dict[str, Application]] = {}

    @property
    def max_threshold(self) -> int:
        return (1 << self._value_bits) - 1

    def _advance(self) -> int:
        """Next ledger height. Caller holds the lock."""
        self._height += 1
        return self._height

    # =========================================================================
    # Jobs
    # =========================================================================

    def _check_threshold(self, required_threshold: Any) -> int:
        if isinstance(required_threshold, bool) or not isinstance(required_threshold, int):
            raise InvalidThreshold(
                f"required_threshold must be an integer, got {type(required_threshold).__name__}"
            )
        if not 0 <= required_threshold <= self.max_threshold:
            raise InvalidThreshold(
                f"required_threshold {required_threshold} outside [0, {self.max_threshold}]",
                required_threshold=required_threshold,
            )
        return required_threshold

    def post_job(
        self,
        employer_id: str,
        required_threshold: int,
        description_hash: str,
        salary_commitment: str | None = None,
    ) -> Job:
        """
        Create an open job and return it with its authoritative id.

        Raises:
            InvalidThreshold: If the threshold is outside the circuit domain
            ValidationError: If an identifier or digest is malformed
        """
        if not employer_id:
            raise ValidationError("employer_id must not be empty")
        threshold = self._check_threshold(required_threshold)
        description_hash = normalize_digest(description_hash)
        if salary_commitment is not None:
            salary_commitment = normalize_digest(salary_commitment)

        with self._lock:
            job = Job(
                id=self._next_job_id,
                employer_id=employer_id,
                required_threshold=threshold,
                description_hash=description_hash,
                created_at=self._advance(),
                salary_commitment=salary_commitment,
            )
            self._next_job_id += 1
            self._jobs[job.id] = job
            self._applications[job.id] = {}

        logger.info(
            "job_posted",
            job_id=job.id,
            employer_id=employer_id,
            required_threshold=threshold,
            created_at=job.created_at,
            confidential_terms=salary_commitment is not None,
        )
        return job

    def get_job(self, job_id: int) -> Job:
        """
        Raises:
            JobNotFound: If no job has this id
        """
        try:
            return self._jobs[job_id]
        except KeyError:
            raise JobNotFound(job_id) from None

    def list_jobs(self) -> list[Job]:
        """All jobs in creation order."""
        with self._lock:
            return sorted(self._jobs.values(), key=lambda job: job.id)

    # =========================================================================
    # Applications
    # =========================================================================

    def apply(
        self,
        job_id: int,
        applicant_id_hash: str,
        proof: Any,
        public_inputs: Any,
    ) -> Application:
        """
        Submit an application carrying an eligibility proof.

        Either a verified application is stored or nothing is. Exceptions
        raised while verifying propagate unchanged.

        Raises:
            JobNotFound: Unknown job
            ValidationError: Malformed applicant digest
            ThresholdMismatch: Declared threshold differs from the job's
            DuplicateApplication: Applicant already applied to this job
            InvalidProof: The verification gateway rejected the proof
        """
        job = self.get_job(job_id)
        applicant_id_hash = normalize_digest(applicant_id_hash)

        try:
            threshold = declared_threshold(public_inputs)
        except ValueError as e:
            raise InvalidProof(job_id, VerificationReason.MALFORMED_PROOF.value, str(e)) from e

        if threshold != job.required_threshold:
            raise ThresholdMismatch(job_id, job.required_threshold, threshold)

        try:
            declared = read_public_inputs(public_inputs)
        except ValueError as e:
            raise InvalidProof(job_id, VerificationReason.MALFORMED_PROOF.value, str(e)) from e

        if applicant_id_hash in self._applications[job_id]:
            raise DuplicateApplication(job_id, applicant_id_hash)

        outcome = self._gateway.verify(proof, declared, job.required_threshold)
        if not outcome.valid:
            reason = outcome.reason or VerificationReason.VERIFICATION_FAILED
            if reason == VerificationReason.PUBLIC_INPUT_MISMATCH:
                raise ThresholdMismatch(job_id, job.required_threshold, declared.required_threshold)
            raise InvalidProof(job_id, reason.value, outcome.detail)

        with self._lock:
            # Another thread may have stored the same applicant while we verified.
            if applicant_id_hash in self._applications[job_id]:
                raise DuplicateApplication(job_id, applicant_id_hash)
            application = Application(
                job_id=job_id,
                applicant_id_hash=applicant_id_hash,
                proof=proof,
                public_inputs=declared,
                applied_at=self._advance(),
            )
            self._applications[job_id][applicant_id_hash] = application

        logger.info(
            "application_stored",
            job_id=job_id,
            applicant_id_hash=applicant_id_hash,
            applied_at=application.applied_at,
        )
        return application

    def get_applications(self, job_id: int) -> list[Application]:
        """
        Applications for a job in submission order.

        Raises:
            JobNotFound: Unknown job
        """
        self.get_job(job_id)
        with self._lock:
            return list(self._applications[job_id].values())

    def accept(
        self,
        job_id: int,
        applicant_id_hash: str,
        employer_id: str,
    ) -> Application:
        """
        Mark an application accepted on behalf of the job's employer.

        Accepting the already-accepted application again is a no-op.

        Raises:
            JobNotFound: Unknown job
            NotAuthorized: Caller is not the job's employer
            ApplicationNotFound: No application from this applicant
            StateConflictError: Another application was already accepted
        """
        job = self.get_job(job_id)
        applicant_id_hash = normalize_digest(applicant_id_hash)

        if employer_id != job.employer_id:
            raise NotAuthorized(
                f"Only the employer of job {job_id} may accept applications",
                job_id=job_id,
            )

        with self._lock:
            job = self._jobs[job_id]
            application = self._applications[job_id].get(applicant_id_hash)
            if application is None:
                raise ApplicationNotFound(job_id, applicant_id_hash)

            if job.accepted_applicant_id_hash == applicant_id_hash:
                return application
            if job.accepted_applicant_id_hash is not None:
                raise StateConflictError(
                    f"Job {job_id} already accepted {job.accepted_applicant_id_hash}",
                    job_id=job_id,
                )

            application = application.model_copy(update={"accepted": True})
            self._applications[job_id][applicant_id_hash] = application
            self._jobs[job_id] = job.model_copy(
                update={"accepted_applicant_id_hash": applicant_id_hash}
            )

        logger.info(
            "application_accepted",
            job_id=job_id,
            applicant_id_hash=applicant_id_hash,
        )
        return application

    # =========================================================================
    # Confidential salary
    # =========================================================================

    def prove_salary_for_job(
        self,
        job_id: int,
        salary: int,
        blinding_factor: bytes | str,
    ) -> bool:
        """
        Check an opening of the job's salary commitment.

        Raises:
            JobNotFound: Unknown job
            ValidationError: The job was posted without a salary commitment
        """
        job = self.get_job(job_id)
        if job.salary_commitment is None:
            raise ValidationError(f"Job {job_id} has no salary commitment", job_id=job_id)

        opened = verify_commitment(job.salary_commitment, salary, blinding_factor, self._value_bits)
        logger.info("salary_disclosure_checked", job_id=job_id, valid=opened)
        return opened

    def stats(self) -> dict[str, int]:
        """Record counts and current ledger height."""
        with self._lock:
            return {
                "jobs": len(self._jobs),
                "applications": sum(len(apps) for apps in self._applications.values()),
                "height": self._height,
            }
