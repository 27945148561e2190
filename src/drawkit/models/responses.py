"""Result models for drawkit."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from drawkit.models.metrics import GenerationMetrics


class ExtractedImage(BaseModel):
    """Decoded image taken from a generateContent response."""

    data: bytes = Field(..., description="Decoded image bytes")
    mime_type: str = Field(..., description="MIME type declared by the response fragment")
    text: Optional[str] = Field(None, description="Text fragments returned alongside the image")


class GenerationResult(BaseModel):
    """Outcome of a successful generation: the persisted file and its bytes."""

    model_config = ConfigDict(protected_namespaces=())

    output_path: Path = Field(..., description="Where the image was written")
    data: bytes = Field(..., repr=False, description="Decoded image bytes as written")
    mime_type: str = Field("image/png", description="MIME type declared by the provider")
    model_used: str = Field(..., description="Model that generated the image")
    text: Optional[str] = Field(None, description="Accompanying text (e.g. grounding notes)")
    metrics: Optional[GenerationMetrics] = Field(None, description="Timing and retry tracking")
