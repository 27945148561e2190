"""Wire models for the generateContent protocol.

Fields serialize with camelCase aliases. Parsing accepts both camelCase and
snake_case keys since compatible endpoints differ on this.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InlineData(WireModel):
    """Base64 payload of a binary fragment."""

    mime_type: str = "image/png"
    data: str


class Part(WireModel):
    """One fragment of a content array: text or inline binary data."""

    text: Optional[str] = None
    inline_data: Optional[InlineData] = None

    @property
    def has_image(self) -> bool:
        return self.inline_data is not None and bool(self.inline_data.data)


class Content(WireModel):
    parts: list[Part] = Field(default_factory=list)
    role: Optional[str] = None


class ImageConfig(WireModel):
    aspect_ratio: Optional[str] = None
    image_size: Optional[str] = None


class GenerationConfig(WireModel):
    response_modalities: list[str] = Field(default_factory=lambda: list(RESPONSE_MODALITIES))
    image_config: Optional[ImageConfig] = None


class GoogleSearch(WireModel):
    pass


class Tool(WireModel):
    google_search: GoogleSearch = Field(default_factory=GoogleSearch)


class GenerateContentRequest(WireModel):
    contents: list[Content]
    generation_config: GenerationConfig
    tools: Optional[list[Tool]] = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and unset optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Candidate(WireModel):
    content: Content = Field(default_factory=Content)
    finish_reason: Optional[str] = None


class PromptFeedback(WireModel):
    block_reason: Optional[str] = None


class GenerateContentResponse(WireModel):
    candidates: list[Candidate] = Field(default_factory=list)
    prompt_feedback: Optional[PromptFeedback] = None


class ApiErrorBody(WireModel):
    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None


class ApiErrorEnvelope(WireModel):
    """Error body returned with non-2xx statuses."""

    error: ApiErrorBody
