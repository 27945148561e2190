"""Tests for generateContent response interpretation."""

import base64
import json

import pytest

from drawkit.models.errors import ErrorCode, ImageDecodeFailed, InvalidResponse, NoResultsFound
from drawkit.services.response_parser import extract_error_message, extract_image, extract_image_bytes


def _body(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_extracts_first_image_after_text_parts(image_body, png_bytes):
    body = _body(image_body(png_bytes, texts=("Here is your cat.", "Grounded on 2 sources.")))

    image = extract_image(body)

    assert image.data == png_bytes
    assert image.mime_type == "image/png"
    assert image.text == "Here is your cat.\nGrounded on 2 sources."


def test_first_image_part_wins():
    first = base64.b64encode(b"first").decode()
    second = base64.b64encode(b"second").decode()
    body = _body({
        "candidates": [{
            "content": {"parts": [
                {"inlineData": {"mimeType": "image/webp", "data": first}},
                {"inlineData": {"mimeType": "image/png", "data": second}},
            ]},
        }],
    })

    image = extract_image(body)

    assert image.data == b"first"
    assert image.mime_type == "image/webp"
    assert image.text is None


def test_accepts_snake_case_keys(png_bytes):
    body = _body({
        "candidates": [{
            "content": {"parts": [
                {"inline_data": {"mime_type": "image/jpeg", "data": base64.b64encode(png_bytes).decode()}},
            ]},
            "finish_reason": "STOP",
        }],
    })

    image = extract_image(body)

    assert image.data == png_bytes
    assert image.mime_type == "image/jpeg"


def test_extract_image_bytes(image_body, png_bytes):
    assert extract_image_bytes(_body(image_body(png_bytes))) == png_bytes


def test_no_candidates_raises_no_results_with_block_reason():
    body = _body({"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(NoResultsFound) as exc_info:
        extract_image(body)

    assert exc_info.value.code == ErrorCode.NO_RESULTS_FOUND
    assert exc_info.value.details == {"block_reason": "SAFETY"}


def test_empty_candidates_raises_no_results():
    with pytest.raises(NoResultsFound):
        extract_image(_body({"candidates": []}))


def test_text_only_response_carries_model_text():
    body = _body({
        "candidates": [{
            "content": {"parts": [{"text": "I can't draw that."}]},
            "finishReason": "STOP",
        }],
    })

    with pytest.raises(NoResultsFound) as exc_info:
        extract_image(body)

    assert exc_info.value.details["model_text"] == "I can't draw that."
    assert exc_info.value.details["finish_reason"] == "STOP"


def test_empty_inline_data_is_not_an_image():
    body = _body({"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": ""}}]}}]})

    with pytest.raises(NoResultsFound):
        extract_image(body)


def test_invalid_base64_raises_image_decode_failed():
    body = _body({"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "not*base64!"}}]}}]})

    with pytest.raises(ImageDecodeFailed) as exc_info:
        extract_image(body)

    assert exc_info.value.details["mime_type"] == "image/png"


@pytest.mark.parametrize("body", [b"", b"<html>502 Bad Gateway</html>", b"\xff\xfe\x00", b'{"candidates": "nope"}'])
def test_malformed_body_raises_invalid_response(body):
    with pytest.raises(InvalidResponse) as exc_info:
        extract_image(body)

    assert exc_info.value.code == ErrorCode.INVALID_RESPONSE
    assert "body" in exc_info.value.details


def test_error_message_from_envelope():
    body = _body({"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}})

    assert extract_error_message(body) == "API key not valid."


def test_error_message_falls_back_to_status():
    body = _body({"error": {"code": 503, "status": "UNAVAILABLE"}})

    assert extract_error_message(body) == "UNAVAILABLE"


def test_error_message_falls_back_to_truncated_body():
    body = b"x" * 500

    message = extract_error_message(body)

    assert message == "x" * 200 + "..."


def test_error_message_for_empty_body():
    assert extract_error_message(b"") == "empty response body"
