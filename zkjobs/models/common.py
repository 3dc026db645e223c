"""
Common Models
=============

Response bodies shared by the job board and proof server.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorResponse(BaseModel):
    """Body returned for a rejected ledger action."""

    error: str
    error_code: str | None = Field(default=None, description="Stable JobBoardError code")
    details: dict[str, Any] | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ComponentHealth(BaseModel):
    """Health of one component; components add their own fields."""

    model_config = ConfigDict(extra="allow")

    status: str = "healthy"


class HealthResponse(BaseModel):
    """Service health check response."""

    service: str
    version: str
    components: dict[str, ComponentHealth] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> str:
        healthy = all(c.status == "healthy" for c in self.components.values())
        return "healthy" if healthy else "degraded"
