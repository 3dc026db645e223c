#!/usr/bin/env python3
"""
End-to-End Apply Flow
=====================

Posts a job, requests an eligibility proof from the proving backend,
applies with it and lists the job's applications. The board runs in
process; the proof comes from the backend at PROVER_URL, which must share
CIRCUIT_KEY with this process.

Usage:
    python scripts/apply_flow.py [--threshold 70] [--skill-score 80] [--applicant A1]
"""

import argparse
import asyncio
import hashlib
import sys

from zkjobs.board import JobBoard, hash_applicant_id
from zkjobs.config import get_settings
from zkjobs.errors import JobBoardError
from zkjobs.logging import get_logger, setup_logging
from zkjobs.zk import ProofClient, SkillCircuit, VerificationGateway


logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the post/prove/apply flow")
    parser.add_argument("--employer", default="E1")
    parser.add_argument("--applicant", default="A1")
    parser.add_argument("--threshold", type=int, default=70)
    parser.add_argument("--skill-score", type=int, default=80)
    parser.add_argument("--description", default="ZK Engineer")
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    setup_logging(
        log_level=settings.log_level.value,
        service_name="apply_flow",
        network_id=settings.ledger.network_id,
    )

    circuit = SkillCircuit.from_settings(settings.circuit)
    board = JobBoard(VerificationGateway(circuit), value_bits=settings.circuit.value_bits)

    description_hash = "0x" + hashlib.sha256(args.description.encode()).hexdigest()
    job = board.post_job(args.employer, args.threshold, description_hash)

    try:
        async with ProofClient(
            settings.prover,
            circuit=circuit.name,
            value_bits=circuit.value_bits,
        ) as client:
            proof = await client.generate_eligibility_proof(args.skill_score, job.required_threshold)

        board.apply(
            job.id,
            hash_applicant_id(args.applicant),
            proof.proof,
            proof.public_inputs,
        )
    except JobBoardError as e:
        logger.error("apply_flow_failed", job_id=job.id, error_code=e.code, error=e.message)
        return 1

    for application in board.get_applications(job.id):
        print(application.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run(parse_args())))
