"""Proof server routes."""

from services.proof_server.routes import prove


__all__ = ["prove"]
