"""
ZK Jobs Services
================

HTTP services for the confidential job board.

Services:
- job_board: Ledger contract actions (post_job, apply, accept, reads)
- proof_server: Reference proving backend for SkillCircuit
"""

__all__ = [
    "job_board",
    "proof_server",
]
