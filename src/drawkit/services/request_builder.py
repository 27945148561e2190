"""Builds generateContent payloads from generation requests."""

import base64
import logging

from drawkit.models.capabilities import capability_for
from drawkit.models.requests import GenerationRequest, ReferenceImage
from drawkit.models.wire import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    ImageConfig,
    InlineData,
    Part,
    Tool,
)
from drawkit.utils.file_utils import mime_type_for_extension, read_file_bytes

logger = logging.getLogger(__name__)


def encode_reference_image(reference: ReferenceImage) -> InlineData:
    """
    Read a reference image and wrap it as an inline-data fragment.

    Raises:
        FileReadError: The file could not be read
    """
    raw = read_file_bytes(reference.path)
    return InlineData(
        mime_type=mime_type_for_extension(reference.extension),
        data=base64.b64encode(raw).decode("ascii"),
    )


def build_image_config(model: str, aspect_ratio: str, image_size: str | None) -> ImageConfig:
    """
    Apply the model family's capabilities to the image parameters.

    Fixed-grid models only take the aspect ratio, so any requested resolution
    tier is dropped rather than sent as an invalid field.
    """
    capability = capability_for(model)
    if not capability.supports_image_size:
        if image_size:
            logger.debug(f"[RequestBuilder] {model} has a fixed pixel grid, dropping imageSize={image_size}")
        return ImageConfig(aspect_ratio=aspect_ratio)

    known_sizes = [size.value for size in capability.image_sizes]
    if image_size and image_size not in known_sizes:
        logger.warning(
            f"[RequestBuilder] imageSize={image_size} is not one of {', '.join(known_sizes)} for {model}, sending as-is"
        )
    return ImageConfig(aspect_ratio=aspect_ratio, image_size=image_size)


def build_generate_request(request: GenerationRequest, model: str) -> GenerateContentRequest:
    """
    Build the wire request for ``request`` against ``model``.

    The prompt is the first fragment, followed by one inline-data fragment per
    reference image in order. The search tool is attached whenever requested;
    whether the model honours it is left to the service.

    Args:
        request: Generation parameters
        model: Resolved model id

    Returns:
        GenerateContentRequest ready for ``to_payload()``

    Raises:
        FileReadError: A reference image could not be read
    """
    parts = [Part(text=request.prompt)]
    for reference in request.references:
        parts.append(Part(inline_data=encode_reference_image(reference)))

    tools = [Tool()] if request.enable_search else None
    if request.enable_search and not capability_for(model).supports_search:
        logger.warning(f"[RequestBuilder] Search grounding requested for {model}, which may not support it")

    return GenerateContentRequest(
        contents=[Content(parts=parts)],
        generation_config=GenerationConfig(
            image_config=build_image_config(model, request.aspect_ratio, request.image_size),
        ),
        tools=tools,
    )


def build_payload(request: GenerationRequest, model: str) -> dict:
    """JSON-ready payload for ``request`` (see build_generate_request)."""
    return build_generate_request(request, model).to_payload()
