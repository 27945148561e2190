"""Request models for drawkit."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from drawkit.models.capabilities import DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_SIZE, normalize_image_size

MAX_REFERENCE_IMAGES = 14


class ReferenceImage(BaseModel):
    """An already-validated local reference image."""

    path: Path = Field(..., description="Local file path of the reference image")

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()

    @property
    def name(self) -> str:
        return self.path.name


class GenerationRequest(BaseModel):
    """Request model for a single image generation."""

    prompt: str = Field(..., min_length=1, description="Image generation prompt")
    references: list[ReferenceImage] = Field(
        default_factory=list,
        max_length=MAX_REFERENCE_IMAGES,
        description="Ordered reference images sent after the prompt",
    )
    model: Optional[str] = Field(
        None,
        description="Model id. When None the provider resolves it from config, then its default.",
    )
    aspect_ratio: str = Field(
        DEFAULT_ASPECT_RATIO,
        description="Aspect ratio passed through as-is (validated at the caller boundary)",
    )
    image_size: Optional[str] = Field(
        DEFAULT_IMAGE_SIZE.value,
        description="Resolution tier (1K/2K/4K). Dropped for fixed-grid models.",
    )
    enable_search: bool = Field(False, description="Attach the search grounding tool")

    @field_validator("image_size", mode="before")
    @classmethod
    def _normalize_image_size(cls, value):
        return normalize_image_size(value)
