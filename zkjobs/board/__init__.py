"""
Job Board Module
================

Ledger-side state machine for jobs and applications.

Usage:
    from zkjobs.board import JobBoard, hash_applicant_id

    board = JobBoard(gateway)
    job = board.post_job("E1", required_threshold=70, description_hash=h)
"""

from zkjobs.board.job_board import JobBoard, hash_applicant_id


__all__ = [
    "JobBoard",
    "hash_applicant_id",
]
