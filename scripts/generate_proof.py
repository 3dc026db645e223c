#!/usr/bin/env python3
"""
Eligibility Proof CLI
=====================

Requests a SkillCircuit proof from the configured proving backend and
prints the resulting artifact as JSON.

Usage:
    python scripts/generate_proof.py [--skill-score N] [--threshold N] [--retries N]

Environment:
    SKILL_SCORE, REQUIRED_THRESHOLD: defaults for the two inputs
    PROVER_URL, PROVER_TIMEOUT_SECONDS: proving backend endpoint
    PROVER_MAX_RETRIES: attempts when --retries is not given
"""

import argparse
import asyncio
import os
import sys

from zkjobs.config import get_settings
from zkjobs.errors import JobBoardError
from zkjobs.logging import get_logger, setup_logging
from zkjobs.zk import ProofClient, generate_with_retry


logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a SkillCircuit eligibility proof")
    parser.add_argument(
        "--skill-score",
        type=int,
        default=int(os.environ.get("SKILL_SCORE", 80)),
        help="Private skill score (default: $SKILL_SCORE or 80)",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=int(os.environ.get("REQUIRED_THRESHOLD", 60)),
        help="Public required threshold (default: $REQUIRED_THRESHOLD or 60)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Attempts when the backend is unreachable (default: $PROVER_MAX_RETRIES)",
    )
    return parser.parse_args()


async def main() -> int:
    args = parse_args()
    settings = get_settings()
    setup_logging(log_level=settings.log_level.value, service_name="generate_proof")

    async with ProofClient(
        settings.prover,
        circuit=settings.circuit.name,
        value_bits=settings.circuit.value_bits,
    ) as client:
        try:
            proof = await generate_with_retry(
                client,
                args.skill_score,
                args.threshold,
                attempts=max(args.retries or settings.prover.max_retries, 1),
            )
        except JobBoardError as e:
            logger.error("eligibility_proof_cli_failed", error_code=e.code, error=e.message)
            return 1

    print(proof.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
