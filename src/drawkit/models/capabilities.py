"""Model family capabilities and the resolution reporting tables.

Capabilities are looked up by exact model id. Ids missing from the table fall
back on a single rule: an id containing ``FLASH_MARKER`` belongs to the FLASH
family, anything else is treated as PRO. The remote service stays the source
of truth for what a model accepts; this table only decides which optional
fields are worth sending.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ModelFamily(str, Enum):
    """Classes of remote models sharing output-size constraints."""

    FLASH = "flash"  # fixed ~1024px grid, aspect ratio only
    PRO = "pro"  # discrete 1K/2K/4K tiers


class ImageSize(str, Enum):
    """Resolution tiers accepted by variable-resolution models."""

    ONE_K = "1K"
    TWO_K = "2K"
    FOUR_K = "4K"


class ModelCapability(BaseModel):
    """What a model family supports in ``imageConfig``."""

    family: ModelFamily
    supports_image_size: bool = Field(..., description="Whether imageSize may be sent")
    supports_search: bool = Field(..., description="Whether search grounding is meaningful")
    image_sizes: tuple[ImageSize, ...] = Field((), description="Accepted resolution tiers")


FLASH_MARKER = "flash"

DEFAULT_ASPECT_RATIO = "1:1"
DEFAULT_IMAGE_SIZE = ImageSize.TWO_K

SUPPORTED_ASPECT_RATIOS: tuple[str, ...] = (
    "1:1",
    "2:3",
    "3:2",
    "3:4",
    "4:3",
    "4:5",
    "5:4",
    "9:16",
    "16:9",
    "21:9",
)

FAMILY_CAPABILITIES: dict[ModelFamily, ModelCapability] = {
    ModelFamily.FLASH: ModelCapability(
        family=ModelFamily.FLASH,
        supports_image_size=False,
        supports_search=False,
    ),
    ModelFamily.PRO: ModelCapability(
        family=ModelFamily.PRO,
        supports_image_size=True,
        supports_search=True,
        image_sizes=(ImageSize.ONE_K, ImageSize.TWO_K, ImageSize.FOUR_K),
    ),
}

KNOWN_MODELS: dict[str, ModelFamily] = {
    "gemini-2.5-flash-image": ModelFamily.FLASH,
    "gemini-2.5-flash-image-preview": ModelFamily.FLASH,
    "gemini-3-pro-image-preview": ModelFamily.PRO,
}

FLASH_RESOLUTIONS: dict[str, tuple[int, int]] = {
    "1:1": (1024, 1024),
    "2:3": (832, 1248),
    "3:2": (1248, 832),
    "3:4": (864, 1184),
    "4:3": (1184, 864),
    "4:5": (896, 1152),
    "5:4": (1152, 896),
    "9:16": (768, 1344),
    "16:9": (1344, 768),
    "21:9": (1536, 672),
}

PRO_RESOLUTIONS: dict[ImageSize, dict[str, tuple[int, int]]] = {
    ImageSize.ONE_K: {
        "1:1": (1024, 1024),
        "2:3": (848, 1264),
        "3:2": (1264, 848),
        "3:4": (896, 1200),
        "4:3": (1200, 896),
        "4:5": (928, 1152),
        "5:4": (1152, 928),
        "9:16": (768, 1376),
        "16:9": (1376, 768),
        "21:9": (1584, 672),
    },
    ImageSize.TWO_K: {
        "1:1": (2048, 2048),
        "2:3": (1696, 2528),
        "3:2": (2528, 1696),
        "3:4": (1792, 2400),
        "4:3": (2400, 1792),
        "4:5": (1856, 2304),
        "5:4": (2304, 1856),
        "9:16": (1536, 2752),
        "16:9": (2752, 1536),
        "21:9": (3168, 1344),
    },
    ImageSize.FOUR_K: {
        "1:1": (4096, 4096),
        "2:3": (3392, 5056),
        "3:2": (5056, 3392),
        "3:4": (3584, 4800),
        "4:3": (4800, 3584),
        "4:5": (3712, 4608),
        "5:4": (4608, 3712),
        "9:16": (3072, 5504),
        "16:9": (5504, 3072),
        "21:9": (6336, 2688),
    },
}


def model_family(model_id: str) -> ModelFamily:
    """Resolve the family of a model id (exact table first, then the marker rule)."""
    family = KNOWN_MODELS.get(model_id)
    if family is not None:
        return family
    if FLASH_MARKER in model_id.lower():
        return ModelFamily.FLASH
    return ModelFamily.PRO


def capability_for(model_id: str) -> ModelCapability:
    return FAMILY_CAPABILITIES[model_family(model_id)]


def normalize_image_size(image_size: str | ImageSize | None) -> str | None:
    """Upper-case a resolution tier so "2k" and "2K" mean the same thing."""
    if image_size is None:
        return None
    if isinstance(image_size, ImageSize):
        return image_size.value
    normalized = image_size.strip().upper()
    return normalized or None


def is_supported_aspect_ratio(aspect_ratio: str) -> bool:
    return aspect_ratio in SUPPORTED_ASPECT_RATIOS


def expected_dimensions(
    model_id: str,
    aspect_ratio: str,
    image_size: str | ImageSize | None = None,
) -> tuple[int, int] | None:
    """
    Look up the pixel size the provider documents for a request.

    Used for reporting only. FLASH models ignore ``image_size`` and fall back to
    1024x1024 for unknown ratios; PRO models return None for unknown combinations.
    """
    if model_family(model_id) is ModelFamily.FLASH:
        return FLASH_RESOLUTIONS.get(aspect_ratio, FLASH_RESOLUTIONS[DEFAULT_ASPECT_RATIO])

    tier = normalize_image_size(image_size) or DEFAULT_IMAGE_SIZE.value
    try:
        table = PRO_RESOLUTIONS[ImageSize(tier)]
    except ValueError:
        return None
    return table.get(aspect_ratio)


def describe_resolution(model_id: str, aspect_ratio: str, image_size: str | ImageSize | None = None) -> str:
    """Human-readable resolution line, e.g. ``2K (2752x1536)``."""
    dimensions = expected_dimensions(model_id, aspect_ratio, image_size)
    size_text = f"{dimensions[0]}x{dimensions[1]}" if dimensions else "unknown"
    if model_family(model_id) is ModelFamily.FLASH:
        return f"1024px grid ({size_text})"
    tier = normalize_image_size(image_size) or DEFAULT_IMAGE_SIZE.value
    return f"{tier} ({size_text})"
