from illustrator.generation.base import BaseGenerationClient
from illustrator.generation.factory import GenerationClientFactory
from illustrator.generation.models import GenerationResult

__all__ = ["BaseGenerationClient", "GenerationClientFactory", "GenerationResult"]
