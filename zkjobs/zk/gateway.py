"""
Verification Gateway
====================

Checks a proof artifact against its declared public inputs and the
threshold the caller expects. Pure and deterministic: no network I/O,
no state beyond the proof system it wraps.

Version: 0.1.0
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from zkjobs.logging import get_logger
from zkjobs.zk.circuit import ProofSystem
from zkjobs.zk.models import PublicInputs, VerificationOutcome, VerificationReason


logger = get_logger(__name__)


def declared_threshold(public_inputs: Any) -> int:
    """
    Read the raw `required_threshold` a caller declared, without range checks.

    Raises:
        ValueError: If no integer `required_threshold` can be read
    """
    if isinstance(public_inputs, PublicInputs):
        return public_inputs.required_threshold
    if not isinstance(public_inputs, Mapping):
        raise ValueError("Public inputs must be a mapping")
    threshold = public_inputs.get("required_threshold")
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ValueError("Public inputs must carry an integer required_threshold")
    return threshold


def read_public_inputs(public_inputs: Any) -> PublicInputs:
    """
    Coerce declared public inputs into `PublicInputs`.

    Raises:
        ValueError: If the inputs do not form valid `PublicInputs`
    """
    if isinstance(public_inputs, PublicInputs):
        return public_inputs
    declared_threshold(public_inputs)
    try:
        return PublicInputs.model_validate(dict(public_inputs))
    except PydanticValidationError as e:
        raise ValueError(str(e)) from e


class VerificationGateway:
    """
    Accept/reject boundary used by the job board before committing a transition.

    Usage:
        gateway = VerificationGateway(SkillCircuit.from_settings(settings.circuit))
        outcome = gateway.verify(proof, {"required_threshold": 70}, expected_threshold=70)
        if not outcome.valid:
            print(outcome.reason)
    """

    def __init__(self, proof_system: ProofSystem) -> None:
        self._proof_system = proof_system

    @property
    def circuit(self) -> str:
        return self._proof_system.name

    def verify(
        self,
        proof: Any,
        public_inputs: Any,
        expected_threshold: int,
    ) -> VerificationOutcome:
        """
        Verify `proof` for `public_inputs` against `expected_threshold`.

        The declared threshold is compared before any cryptographic work.

        Returns:
            VerificationOutcome; `reason` is set whenever `valid` is False
        """
        try:
            threshold = declared_threshold(public_inputs)
        except ValueError as e:
            return self._reject(VerificationReason.MALFORMED_PROOF, str(e))

        if threshold != expected_threshold:
            return self._reject(
                VerificationReason.PUBLIC_INPUT_MISMATCH,
                f"declared {threshold}, expected {expected_threshold}",
            )

        try:
            declared = read_public_inputs(public_inputs)
        except ValueError as e:
            return self._reject(VerificationReason.MALFORMED_PROOF, str(e))

        try:
            valid = self._proof_system.verify(proof, declared.required_threshold)
        except (ValueError, TypeError, KeyError) as e:
            return self._reject(VerificationReason.MALFORMED_PROOF, str(e))

        if not valid:
            return self._reject(VerificationReason.VERIFICATION_FAILED)

        logger.debug(
            "proof_verified",
            circuit=self.circuit,
            required_threshold=expected_threshold,
        )
        return VerificationOutcome.accepted()

    def _reject(
        self,
        reason: VerificationReason,
        detail: str | None = None,
    ) -> VerificationOutcome:
        logger.info(
            "proof_rejected",
            circuit=self.circuit,
            reason=reason.value,
            detail=detail,
        )
        return VerificationOutcome.rejected(reason, detail)
