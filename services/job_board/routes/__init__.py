"""Job board routes."""

from services.job_board.routes import applications, jobs


__all__ = ["applications", "jobs"]
