"""Local file helpers: reference validation, MIME lookup, output paths and writes."""

import logging
import os
import uuid
from contextlib import suppress
from datetime import datetime
from pathlib import Path

from drawkit.models.errors import FileNotFound, FileReadError, FileWriteError, UnsupportedFormat

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_FORMATS = ("jpg", "jpeg", "png", "heic", "heif", "tiff", "tif", "webp", "gif", "bmp")

MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "heic": "image/heic",
    "heif": "image/heif",
    "webp": "image/webp",
    "gif": "image/gif",
}
DEFAULT_MIME_TYPE = "image/jpeg"

DEFAULT_OUTPUT_PREFIX = "generated"
DEFAULT_OUTPUT_EXTENSION = "png"


def expand_path(path: str | os.PathLike[str]) -> Path:
    return Path(path).expanduser()


def get_extension(path: str | os.PathLike[str]) -> str:
    return Path(path).suffix.lstrip(".").lower()


def mime_type_for_extension(extension: str) -> str:
    """Fixed extension table; anything unknown is sent as JPEG."""
    return MIME_TYPES.get(extension.lower().lstrip("."), DEFAULT_MIME_TYPE)


def validate_image_file(path: str | os.PathLike[str]) -> Path:
    """
    Check that ``path`` is an existing file with a supported image extension.

    Raises:
        FileNotFound: Nothing (or a directory) at ``path``
        UnsupportedFormat: Extension not in SUPPORTED_IMAGE_FORMATS
    """
    resolved = expand_path(path)
    if not resolved.is_file():
        raise FileNotFound(str(resolved))

    extension = get_extension(resolved)
    if extension not in SUPPORTED_IMAGE_FORMATS:
        raise UnsupportedFormat(extension, path=str(resolved))
    return resolved


def read_file_bytes(path: str | os.PathLike[str]) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise FileReadError(str(path), original_exception=e) from e


def generate_output_path(
    directory: str | os.PathLike[str] | None = None,
    prefix: str = DEFAULT_OUTPUT_PREFIX,
    extension: str = DEFAULT_OUTPUT_EXTENSION,
) -> Path:
    """
    Build a timestamped output file name.

    Args:
        directory: Target directory (defaults to the current directory)
        prefix: File name prefix
        extension: File extension without the dot

    Returns:
        Path like ``<directory>/generated_20250101_120000_1a2b3c4d.png``
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    unique_id = uuid.uuid4().hex[:8]
    base = Path(directory) if directory is not None else Path.cwd()
    return base / f"{prefix}_{timestamp}_{unique_id}.{extension}"


def write_file_bytes(path: str | os.PathLike[str], data: bytes) -> Path:
    """
    Write ``data`` to ``path``, creating parent directories.

    The bytes go to a temporary sibling first and are renamed into place, so a
    failed write never leaves a partial output file behind.

    Raises:
        FileWriteError: Directory creation or write failed
    """
    target = expand_path(path)
    temp_path = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}.part")

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_bytes(data)
        os.replace(temp_path, target)
    except OSError as e:
        with suppress(OSError):
            temp_path.unlink(missing_ok=True)
        raise FileWriteError(str(target), original_exception=e) from e

    logger.debug(f"[FileUtils] Wrote {len(data)} bytes to {target}")
    return target
