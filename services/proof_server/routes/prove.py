"""
Prove Routes
============

Reference implementation of the proof backend protocol for `SkillCircuit`.
"""

import time

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, ConfigDict, Field

from zkjobs.errors import InvalidRange
from zkjobs.logging import get_logger
from zkjobs.zk.circuit import SkillCircuit
from zkjobs.zk.models import ProveRequest


logger = get_logger(__name__)
router = APIRouter()


class ProveReply(BaseModel):
    """Success body of the proof backend protocol."""

    model_config = ConfigDict(populate_by_name=True)

    proof: dict
    public_inputs: dict = Field(..., alias="publicInputs")
    proving_time_ms: int = Field(..., alias="provingTimeMs")


def get_circuit(request: Request) -> SkillCircuit:
    return request.app.state.circuit


@router.post("/prove", response_model=ProveReply, response_model_by_alias=True)
def prove(body: ProveRequest, request: Request) -> ProveReply:
    """
    Generate an eligibility proof.

    Fails with 404 for an unknown circuit, 400 for inputs outside the
    circuit domain and 422 when the witness does not satisfy the circuit.
    """
    circuit = get_circuit(request)
    threshold = body.inputs.public.required_threshold

    if body.circuit != circuit.name:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown circuit: {body.circuit}",
        )

    try:
        satisfied = circuit.is_satisfied(body.inputs.private.skill_score, threshold)
    except InvalidRange as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

    if not satisfied:
        logger.info("witness_unsatisfied", circuit=circuit.name, required_threshold=threshold)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=f"Witness does not satisfy {circuit.name}",
        )

    start_time = time.perf_counter()
    proof = circuit.prove(body.inputs.private.skill_score, threshold)
    proving_time_ms = int((time.perf_counter() - start_time) * 1000)

    logger.info(
        "proof_generated",
        circuit=circuit.name,
        required_threshold=threshold,
        proving_time_ms=proving_time_ms,
    )
    return ProveReply(
        proof=proof,
        public_inputs={"required_threshold": threshold},
        proving_time_ms=proving_time_ms,
    )
