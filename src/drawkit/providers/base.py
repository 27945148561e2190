"""Base provider interface for image generation."""

import os
from typing import Protocol

from typing_extensions import runtime_checkable

from drawkit.models.requests import GenerationRequest
from drawkit.models.responses import GenerationResult


@runtime_checkable
class ImageProvider(Protocol):
    """Protocol for image generation providers."""

    async def generate(
        self,
        request: GenerationRequest,
        output_path: str | os.PathLike[str] | None = None,
    ) -> GenerationResult:
        """
        Generate one image and persist it.

        Args:
            request: Prompt, references and image parameters
            output_path: Where to write the image (a timestamped name in the
                current directory when omitted)

        Returns:
            GenerationResult with the written path and the decoded bytes

        Raises:
            GenerationFailure: Any failure, with provider/path/status context
        """
        ...

    async def aclose(self) -> None:
        """Release transport resources owned by the provider."""
        ...
