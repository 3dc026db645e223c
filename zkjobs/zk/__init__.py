"""
Confidential Eligibility Module
===============================

Commitments, the `SkillCircuit` eligibility statement, the proof client and
the verification gateway.

Usage:
    from zkjobs.zk import ProofClient, SkillCircuit, VerificationGateway

    # Applicant side: request a proof from the proving backend
    async with ProofClient(settings.prover) as client:
        proof = await client.generate_eligibility_proof(
            skill_score=80,
            required_threshold=70,
        )

    # Ledger side: check it before accepting an application
    gateway = VerificationGateway(SkillCircuit.from_settings(settings.circuit))
    outcome = gateway.verify(proof.proof, proof.public_inputs, expected_threshold=70)

Version: 0.1.0
"""

from zkjobs.zk.circuit import ProofSystem, SkillCircuit
from zkjobs.zk.client import ProofClient, generate_with_retry
from zkjobs.zk.commitment import (
    Commitment,
    commit,
    create_commitment,
    generate_blinding_factor,
    verify_commitment,
)
from zkjobs.zk.gateway import VerificationGateway
from zkjobs.zk.models import (
    EligibilityProof,
    PublicInputs,
    VerificationOutcome,
    VerificationReason,
)


__all__ = [
    # Commitments
    "Commitment",
    "commit",
    "create_commitment",
    "generate_blinding_factor",
    "verify_commitment",
    # Circuit
    "ProofSystem",
    "SkillCircuit",
    # Client
    "ProofClient",
    "generate_with_retry",
    # Gateway
    "VerificationGateway",
    # Models
    "EligibilityProof",
    "PublicInputs",
    "VerificationOutcome",
    "VerificationReason",
]
