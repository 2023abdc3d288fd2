from typing import Literal

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Liveness report of the service and its database."""

    status: Literal["ok", "degraded"]
    version: str
    timestamp: str
    database: Literal["connected", "unreachable"]
