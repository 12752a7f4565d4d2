from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationResult:
    """Visual schema returned by the logic model."""

    schema: str
