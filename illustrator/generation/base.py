from abc import ABC, abstractmethod
from collections.abc import Sequence

from illustrator.generation.models import GenerationResult
from illustrator.workflow.models import ModelConfig


class BaseGenerationClient(ABC):
    """Contract for schema generation backends."""

    @abstractmethod
    async def generate(
        self,
        content: str,
        config: ModelConfig,
        images: Sequence[str] | None = None,
    ) -> GenerationResult:
        """Turn paper content (and optional page images) into a visual schema.

        Args:
            content: Free text, or a default instruction when only images are sent.
            config: Endpoint, key and model to call.
            images: Page images as ``data:`` URIs, in document order.

        Raises:
            GenerationError: on any failure, with a human-readable message.
        """
