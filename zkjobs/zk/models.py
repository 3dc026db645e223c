"""
Eligibility Proof Data Models
=============================

Pydantic models for the proof backend protocol and for proof artifacts
exchanged between the proof client, the verification gateway and the
job board.

Version: 0.1.0
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class PublicInputs(BaseModel):
    """
    Public parameters a proof was generated against.

    Backends may echo additional public parameters; they are kept verbatim.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    required_threshold: int = Field(..., ge=0)


class EligibilityProof(BaseModel):
    """
    Canonical proof artifact returned by the proof client.

    `proof` is opaque to everything except the proof system that verifies it.
    Backends may return a structure, a hex or base64 string, or any other
    JSON value.
    """

    model_config = ConfigDict(frozen=True)

    proof: JsonValue
    public_inputs: PublicInputs


# =============================================================================
# Proof backend protocol
# =============================================================================


class PrivateWitness(BaseModel):
    skill_score: int


class PublicStatement(BaseModel):
    required_threshold: int


class CircuitInputs(BaseModel):
    private: PrivateWitness
    public: PublicStatement


class ProveRequest(BaseModel):
    """Request body sent to a proving backend."""

    circuit: str
    inputs: CircuitInputs

    @classmethod
    def for_skill_circuit(
        cls,
        skill_score: int,
        required_threshold: int,
        circuit: str = "SkillCircuit",
    ) -> "ProveRequest":
        return cls(
            circuit=circuit,
            inputs=CircuitInputs(
                private=PrivateWitness(skill_score=skill_score),
                public=PublicStatement(required_threshold=required_threshold),
            ),
        )


class ProveResponse(BaseModel):
    """Success body returned by a proving backend."""

    model_config = ConfigDict(populate_by_name=True)

    proof: JsonValue
    public_inputs: PublicInputs = Field(..., alias="publicInputs")


# =============================================================================
# Verification
# =============================================================================


class VerificationReason(str, Enum):
    """Why the verification gateway rejected a proof."""

    MALFORMED_PROOF = "MalformedProof"
    PUBLIC_INPUT_MISMATCH = "PublicInputMismatch"
    VERIFICATION_FAILED = "VerificationFailed"


class VerificationOutcome(BaseModel):
    """Result of proof verification; equal inputs give equal outcomes."""

    valid: bool
    reason: VerificationReason | None = None
    detail: str | None = None

    @classmethod
    def accepted(cls) -> "VerificationOutcome":
        return cls(valid=True)

    @classmethod
    def rejected(
        cls,
        reason: VerificationReason,
        detail: str | None = None,
    ) -> "VerificationOutcome":
        return cls(valid=False, reason=reason, detail=detail)
