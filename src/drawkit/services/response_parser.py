"""Extracts the generated image from generateContent responses."""

import base64
import binascii
import json
import logging

from pydantic import ValidationError

from drawkit.models.errors import ImageDecodeFailed, InvalidResponse, NoResultsFound
from drawkit.models.responses import ExtractedImage
from drawkit.models.wire import ApiErrorEnvelope, GenerateContentResponse

logger = logging.getLogger(__name__)

ERROR_SNIPPET_LENGTH = 200


def parse_response(body: bytes) -> GenerateContentResponse:
    """
    Parse a response body into the typed envelope.

    Raises:
        InvalidResponse: Body is not JSON or not shaped like a generateContent response
    """
    try:
        return GenerateContentResponse.model_validate(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise InvalidResponse(
            f"Unexpected response body: {e}",
            details={"body": _snippet(body)},
            original_exception=e,
        ) from e


def extract_image(body: bytes) -> ExtractedImage:
    """
    Decode the image carried by a generateContent response.

    Only the first candidate is considered. Within it the first fragment that
    carries inline data wins; text fragments before it (grounding notes, model
    commentary) are collected into ``text``. A response may in principle carry
    several images; only the first one is returned.

    Raises:
        InvalidResponse: Body could not be parsed
        NoResultsFound: No candidate, or no fragment with inline data
        ImageDecodeFailed: The inline data is not valid base64
    """
    response = parse_response(body)

    if not response.candidates:
        details = {}
        if response.prompt_feedback and response.prompt_feedback.block_reason:
            details["block_reason"] = response.prompt_feedback.block_reason
        raise NoResultsFound("Response contained no candidates", details=details)

    candidate = response.candidates[0]
    texts = [part.text for part in candidate.content.parts if part.text]
    image_part = next((part for part in candidate.content.parts if part.has_image), None)

    if image_part is None:
        details = {}
        if texts:
            details["model_text"] = "\n".join(texts)
        if candidate.finish_reason:
            details["finish_reason"] = candidate.finish_reason
        logger.warning(f"[ResponseParser] No image fragment among {len(candidate.content.parts)} part(s)")
        raise NoResultsFound("Response contained no image data", details=details)

    inline_data = image_part.inline_data
    try:
        data = base64.b64decode(inline_data.data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeFailed(
            f"Image data is not valid base64: {e}",
            details={"mime_type": inline_data.mime_type},
            original_exception=e,
        ) from e

    return ExtractedImage(
        data=data,
        mime_type=inline_data.mime_type,
        text="\n".join(texts) if texts else None,
    )


def extract_image_bytes(body: bytes) -> bytes:
    return extract_image(body).data


def extract_error_message(body: bytes) -> str:
    """Best-effort message from an error response: the API's own message, else a body snippet."""
    try:
        envelope = ApiErrorEnvelope.model_validate(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return _snippet(body) or "empty response body"
    return envelope.error.message or envelope.error.status or _snippet(body)


def _snippet(body: bytes) -> str:
    text = body.decode("utf-8", errors="replace")
    if len(text) > ERROR_SNIPPET_LENGTH:
        return text[:ERROR_SNIPPET_LENGTH] + "..."
    return text
