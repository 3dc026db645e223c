"""
Eligibility Circuit
===================

The statement proven by an applicant:

    SkillCircuit(private skill_score, public required_threshold):
        skill_score >= required_threshold

over unsigned integers of `value_bits` bits.

`SkillCircuit` also carries the reference proof system used by the bundled
proof server and by the verification gateway. A proof is a keyed attestation
over the circuit name, the public threshold, a commitment to the private
score and the circuit's output bit:

    tag = HMAC-SHA256(key, circuit | threshold | commitment | output)

Verifiers recompute the tag with output = 1, so a proof produced for a
witness that does not satisfy the circuit never verifies, and any honest
proof always does. The key plays the role of the proving/verification key
pair and must only be held by the prover and the verifier.

Version: 0.1.0
"""

import hashlib
import hmac
import json
from collections.abc import Mapping
from typing import Any, Protocol

from zkjobs.config import CircuitSettings
from zkjobs.errors import ValidationError
from zkjobs.logging import get_logger
from zkjobs.zk.commitment import (
    DEFAULT_VALUE_BITS,
    check_range,
    commit,
    generate_blinding_factor,
    normalize_digest,
)


logger = get_logger(__name__)

PROTOCOL = "hmac-sha256-attestation"
SKILL_CIRCUIT = "SkillCircuit"
PRIVATE_INPUTS = ("skill_score",)
PUBLIC_INPUTS = ("required_threshold",)
PROOF_FIELDS = ("protocol", "circuit", "commitment", "tag")


class ProofSystem(Protocol):
    """What the verification gateway needs from a proving backend."""

    @property
    def name(self) -> str: ...

    def verify(self, proof: Mapping[str, Any], required_threshold: int) -> bool:
        """
        Check `proof` against the public threshold.

        Raises:
            ValueError: If the proof is structurally malformed
        """
        ...


class SkillCircuit:
    """
    The `SkillCircuit` eligibility statement and its reference proof system.

    Usage:
        circuit = SkillCircuit(key=b"...")
        proof = circuit.prove(skill_score=80, required_threshold=60)
        assert circuit.verify(proof, required_threshold=60)
    """

    def __init__(
        self,
        key: bytes,
        value_bits: int = DEFAULT_VALUE_BITS,
        name: str = SKILL_CIRCUIT,
    ) -> None:
        if not key:
            raise ValueError("Circuit key must not be empty")
        self._key = key
        self.value_bits = value_bits
        self._name = name

    @classmethod
    def from_settings(cls, settings: CircuitSettings) -> "SkillCircuit":
        return cls(
            key=settings.key.get_secret_value().encode(),
            value_bits=settings.value_bits,
            name=settings.name,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_value(self) -> int:
        return (1 << self.value_bits) - 1

    def check_inputs(self, skill_score: int, required_threshold: int) -> None:
        """
        Check both inputs lie in the circuit domain.

        Raises:
            InvalidRange: If either value is outside [0, max_value]
        """
        check_range(skill_score, self.value_bits)
        check_range(required_threshold, self.value_bits)

    def is_satisfied(self, skill_score: int, required_threshold: int) -> bool:
        self.check_inputs(skill_score, required_threshold)
        return skill_score >= required_threshold

    def _tag(self, required_threshold: int, commitment: str, output: int) -> str:
        message = json.dumps(
            [self._name, required_threshold, commitment, output],
            separators=(",", ":"),
        ).encode()
        return "0x" + hmac.new(self._key, message, hashlib.sha256).hexdigest()

    def prove(
        self,
        skill_score: int,
        required_threshold: int,
        blinding_factor: bytes | None = None,
    ) -> dict[str, Any]:
        """
        Evaluate the circuit on the witness and emit a proof.

        The proof is emitted whether or not the witness satisfies the
        circuit; an unsatisfied witness yields a proof that fails
        verification. Callers serving applicants should reject unsatisfied
        witnesses up front with `is_satisfied`.

        Raises:
            InvalidRange: If either value is outside the domain
        """
        output = int(self.is_satisfied(skill_score, required_threshold))
        commitment = commit(
            skill_score,
            blinding_factor or generate_blinding_factor(),
            self.value_bits,
        )
        logger.debug(
            "circuit_evaluated",
            circuit=self._name,
            required_threshold=required_threshold,
            satisfied=bool(output),
        )
        return {
            "protocol": PROTOCOL,
            "circuit": self._name,
            "commitment": commitment,
            "tag": self._tag(required_threshold, commitment, output),
        }

    def verify(self, proof: Mapping[str, Any], required_threshold: int) -> bool:
        """
        Check that `proof` attests a satisfied circuit for `required_threshold`.

        Raises:
            ValueError: If the proof is structurally malformed
        """
        if not isinstance(proof, Mapping):
            raise ValueError("Proof must be a mapping")
        missing = [f for f in PROOF_FIELDS if f not in proof]
        if missing:
            raise ValueError(f"Proof is missing fields: {', '.join(missing)}")
        if proof["protocol"] != PROTOCOL:
            raise ValueError(f"Unsupported proof protocol: {proof['protocol']!r}")
        if proof["circuit"] != self._name:
            raise ValueError(f"Proof is for circuit {proof['circuit']!r}, not {self._name!r}")
        try:
            check_range(required_threshold, self.value_bits)
            commitment = normalize_digest(proof["commitment"])
            tag = normalize_digest(proof["tag"])
        except ValidationError as e:
            raise ValueError(str(e)) from e

        expected = self._tag(required_threshold, commitment, 1)
        return hmac.compare_digest(tag, expected)
