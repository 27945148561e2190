"""Tests for model families and resolution reporting."""

import pytest

from drawkit.models.capabilities import (
    ImageSize,
    ModelFamily,
    SUPPORTED_ASPECT_RATIOS,
    capability_for,
    describe_resolution,
    expected_dimensions,
    is_supported_aspect_ratio,
    model_family,
    normalize_image_size,
)


@pytest.mark.parametrize(
    "model_id, family",
    [
        ("gemini-2.5-flash-image", ModelFamily.FLASH),
        ("gemini-2.5-flash-image-preview", ModelFamily.FLASH),
        ("gemini-3-pro-image-preview", ModelFamily.PRO),
        ("gemini-4-Flash-image", ModelFamily.FLASH),
        ("my-proxy-model", ModelFamily.PRO),
    ],
)
def test_model_family(model_id, family):
    assert model_family(model_id) is family


def test_capabilities_per_family():
    flash = capability_for("gemini-2.5-flash-image")
    pro = capability_for("gemini-3-pro-image-preview")

    assert flash.supports_image_size is False
    assert flash.image_sizes == ()
    assert pro.supports_image_size is True
    assert pro.supports_search is True
    assert pro.image_sizes == (ImageSize.ONE_K, ImageSize.TWO_K, ImageSize.FOUR_K)


@pytest.mark.parametrize(
    "value, expected",
    [("2k", "2K"), (" 4k ", "4K"), ("1K", "1K"), (ImageSize.FOUR_K, "4K"), (None, None), ("", None)],
)
def test_normalize_image_size(value, expected):
    assert normalize_image_size(value) == expected


def test_supported_aspect_ratios():
    assert len(SUPPORTED_ASPECT_RATIOS) == 10
    assert is_supported_aspect_ratio("16:9")
    assert not is_supported_aspect_ratio("7:3")


def test_expected_dimensions_pro():
    assert expected_dimensions("gemini-3-pro-image-preview", "16:9", "2K") == (2752, 1536)
    assert expected_dimensions("gemini-3-pro-image-preview", "1:1", "4k") == (4096, 4096)
    assert expected_dimensions("gemini-3-pro-image-preview", "9:16") == (1536, 2752)


def test_expected_dimensions_pro_unknown_combination():
    assert expected_dimensions("gemini-3-pro-image-preview", "7:3", "2K") is None
    assert expected_dimensions("gemini-3-pro-image-preview", "1:1", "8K") is None


def test_expected_dimensions_flash_ignores_tier():
    assert expected_dimensions("gemini-2.5-flash-image", "16:9", "4K") == (1344, 768)
    assert expected_dimensions("gemini-2.5-flash-image", "7:3") == (1024, 1024)


def test_describe_resolution():
    assert describe_resolution("gemini-3-pro-image-preview", "16:9", "2K") == "2K (2752x1536)"
    assert describe_resolution("gemini-3-pro-image-preview", "7:3", "1K") == "1K (unknown)"
    assert describe_resolution("gemini-2.5-flash-image", "1:1") == "1024px grid (1024x1024)"
