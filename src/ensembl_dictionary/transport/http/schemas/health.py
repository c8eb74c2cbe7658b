"""Health check DTOs."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Liveness plus the upstream this instance queries."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = "healthy"
    version: str
    timestamp: datetime
    dict_id: str = Field(alias="dictID")
    upstream: str = Field(description="EBI Search free-text URL template")
    optimap: bool
