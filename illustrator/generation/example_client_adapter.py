"""Example generation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGenerationClient and register the provider in GenerationClientFactory.
"""

from collections.abc import Sequence

from illustrator.generation.base import BaseGenerationClient
from illustrator.generation.models import GenerationResult
from illustrator.workflow.models import ModelConfig


class ExampleGenerationClient(BaseGenerationClient):
    """Offline adapter that echoes its input into a fixed schema layout."""

    async def generate(
        self,
        content: str,
        config: ModelConfig,
        images: Sequence[str] | None = None,
    ) -> GenerationResult:
        first_line = content.strip().splitlines()[0] if content.strip() else "Untitled"
        schema = "\n".join(
            [
                f"Title: {first_line[:80]}",
                "Layout: left-to-right pipeline",
                f"Components: {len(images or ())} reference images",
                "Connections: input -> method -> output",
                f"Style: generated by {config.model_name or 'example'}",
            ]
        )
        return GenerationResult(schema=schema)
