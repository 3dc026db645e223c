"""
ZK Jobs Shared Library
======================

Confidential eligibility protocol for a job board: employers post jobs with
a public skill threshold, applicants prove they meet it without revealing
their score.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - errors: Domain error taxonomy
    - zk: Commitments, eligibility circuit, proof client, verification gateway
    - board: Job board state machine
    - models: Shared Pydantic models

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "ZK Jobs Team"

from zkjobs.config import get_settings
from zkjobs.logging import get_logger, setup_logging

__all__ = [
    "get_settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
