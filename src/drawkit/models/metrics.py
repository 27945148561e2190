"""Metrics models for drawkit."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from drawkit.models.errors import ErrorCode


class GenerationMetrics(BaseModel):
    """Tracking data for one generation call."""

    model_config = ConfigDict(protected_namespaces=())

    provider: str = Field(..., description="Provider name the call was made for")
    duration_ms: int = Field(..., ge=0, description="Total generation time in milliseconds")
    model_used: Optional[str] = Field(None, description="Resolved model identifier")
    retry_count: int = Field(0, ge=0, description="Transport retries performed (0 = first attempt answered)")
    timestamp: Optional[datetime] = Field(None, description="When the call finished")
    error_code: Optional[ErrorCode] = Field(None, description="Failure category, None on success")
    input: Optional[str] = Field(None, description="Input parameters as JSON string (for observability)")
    output: Optional[str] = Field(None, description="Output summary as JSON string (path, byte count)")

    @property
    def succeeded(self) -> bool:
        return self.error_code is None

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None
