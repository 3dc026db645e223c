"""
Proof Client
============

Requests eligibility proofs from a proving backend over HTTP and turns the
reply into a canonical `EligibilityProof`.

The client keeps no state between calls. It never retries on its own:
proving is expensive, so retries are opt-in through `generate_with_retry`.

Version: 0.1.0
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from zkjobs.config import ProverSettings
from zkjobs.errors import (
    BackendUnavailable,
    MalformedProofResponse,
    ProofGenerationFailed,
    ProofTimeout,
    PublicInputEchoMismatch,
)
from zkjobs.logging import get_logger
from zkjobs.zk.circuit import SKILL_CIRCUIT
from zkjobs.zk.commitment import DEFAULT_VALUE_BITS, check_range
from zkjobs.zk.models import EligibilityProof, ProveRequest, ProveResponse


logger = get_logger(__name__)


@dataclass(frozen=True)
class ProofReceived:
    """The backend answered 2xx with a JSON body."""

    body: Any


@dataclass(frozen=True)
class BackendRejected:
    """The backend answered with a non-success status."""

    status_code: int
    message: str


ProverReply = ProofReceived | BackendRejected


class ProofClient:
    """
    HTTP client for a `SkillCircuit` proving backend.

    Usage:
        async with ProofClient(settings.prover) as client:
            proof = await client.generate_eligibility_proof(
                skill_score=80,
                required_threshold=70,
            )
    """

    def __init__(
        self,
        settings: ProverSettings,
        *,
        circuit: str = SKILL_CIRCUIT,
        value_bits: int = DEFAULT_VALUE_BITS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Proving backend endpoint and timeout
            circuit: Circuit name sent with each request
            value_bits: Width of the circuit's numeric domain
            http_client: Borrowed HTTP client; one is created (and owned) if omitted
        """
        self._settings = settings
        self._circuit = circuit
        self._value_bits = value_bits
        self._timeout = httpx.Timeout(settings.timeout_seconds)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self._timeout)

    async def __aenter__(self) -> "ProofClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, request: ProveRequest) -> ProverReply:
        """
        POST a prove request and classify the reply.

        Raises:
            ProofTimeout: If the backend does not answer in time
            BackendUnavailable: If the backend cannot be reached
            MalformedProofResponse: If a 2xx body is not JSON
        """
        endpoint = self._settings.endpoint
        try:
            response = await self._client.post(
                endpoint,
                json=request.model_dump(),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise ProofTimeout(
                f"Proof backend at {endpoint} timed out after {self._settings.timeout_seconds}s",
                endpoint=endpoint,
            ) from e
        except httpx.TransportError as e:
            raise BackendUnavailable(
                f"Proof backend at {endpoint} is unreachable: {e}",
                endpoint=endpoint,
            ) from e

        if not response.is_success:
            return BackendRejected(status_code=response.status_code, message=response.text)

        try:
            return ProofReceived(body=response.json())
        except ValueError as e:
            raise MalformedProofResponse("Proof backend returned a non-JSON body") from e

    def _resolve(self, reply: ProverReply, required_threshold: int) -> EligibilityProof:
        """Turn a classified reply into a proof or a domain error."""
        if isinstance(reply, BackendRejected):
            raise ProofGenerationFailed(reply.status_code, reply.message)

        try:
            parsed = ProveResponse.model_validate(reply.body)
        except PydanticValidationError as e:
            raise MalformedProofResponse(
                f"Proof backend response does not match the protocol: {e.error_count()} errors",
                errors=e.errors(include_url=False),
            ) from e

        echoed = parsed.public_inputs.required_threshold
        if echoed != required_threshold:
            raise PublicInputEchoMismatch(required_threshold, echoed)

        return EligibilityProof(proof=parsed.proof, public_inputs=parsed.public_inputs)

    async def generate_eligibility_proof(
        self,
        skill_score: int,
        required_threshold: int,
    ) -> EligibilityProof:
        """
        Ask the backend to prove `skill_score >= required_threshold`.

        Args:
            skill_score: Private score; sent to the backend, never logged
            required_threshold: Public threshold the proof is bound to

        Returns:
            EligibilityProof carrying the opaque proof and its public inputs

        Raises:
            InvalidRange: If either value is outside the circuit domain
            BackendUnavailable: Backend unreachable (ProofTimeout on timeout)
            ProofGenerationFailed: Backend answered with a non-success status
            MalformedProofResponse: Backend body is not a valid proof reply
        """
        check_range(skill_score, self._value_bits)
        check_range(required_threshold, self._value_bits)

        request = ProveRequest.for_skill_circuit(
            skill_score,
            required_threshold,
            circuit=self._circuit,
        )

        logger.info(
            "eligibility_proof_requested",
            circuit=self._circuit,
            required_threshold=required_threshold,
            endpoint=self._settings.endpoint,
        )
        start_time = time.perf_counter()

        try:
            proof = self._resolve(await self._send(request), required_threshold)
        except ProofGenerationFailed as e:
            logger.warning(
                "eligibility_proof_failed",
                status_code=e.status_code,
                backend_message=e.backend_message,
            )
            raise

        logger.info(
            "eligibility_proof_generated",
            circuit=self._circuit,
            required_threshold=required_threshold,
            proving_time_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return proof


async def generate_with_retry(
    client: ProofClient,
    skill_score: int,
    required_threshold: int,
    *,
    attempts: int = 3,
    wait: wait_base | None = None,
) -> EligibilityProof:
    """
    Generate a proof, retrying only when the backend is unavailable.

    Backend rejections and malformed replies are not retried: asking again
    would yield the same answer.
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type(BackendUnavailable),
        stop=stop_after_attempt(attempts),
        wait=wait or wait_exponential(multiplier=1, min=2, max=30),
        before_sleep=lambda retry_state: logger.warning(
            "eligibility_proof_retry",
            attempt=retry_state.attempt_number,
        ),
        reraise=True,
    ):
        with attempt:
            return await client.generate_eligibility_proof(skill_score, required_threshold)
    raise AssertionError("unreachable")  # pragma: no cover
