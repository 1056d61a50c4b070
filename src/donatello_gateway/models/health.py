"""Backend health models."""

from typing import Dict, Optional
from pydantic import BaseModel


class HealthStatus(BaseModel):
    """Liveness payload of the backend ``/health`` endpoint."""

    status: str
    timestamp: Optional[str] = None
    services: Optional[Dict[str, str]] = None

    class Config:
        extra = "allow"
