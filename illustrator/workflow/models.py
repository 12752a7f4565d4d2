from dataclasses import dataclass, field
from enum import Enum

from illustrator.config.settings import Settings

SUPPORTED_LANGUAGES = ("en", "zh")
DEFAULT_LANGUAGE = "zh"


class WorkflowStage(Enum):
    INTAKE = "intake"
    REVIEW = "review"
    RENDER = "render"


@dataclass(frozen=True)
class ModelConfig:
    """Endpoint, credentials and model name for one generation backend."""

    base_url: str
    api_key: str
    model_name: str


@dataclass(frozen=True)
class HistoryItem:
    """A past generation result."""

    id: str
    timestamp: int
    schema: str
    image_url: str | None = None


@dataclass(frozen=True)
class WorkflowSnapshot:
    """The persisted subset of workflow state."""

    logic_config: ModelConfig
    vision_config: ModelConfig
    language: str = DEFAULT_LANGUAGE
    paper_content: str = ""
    generated_schema: str = ""
    history: tuple[HistoryItem, ...] = field(default_factory=tuple)


def default_snapshot(settings: Settings) -> WorkflowSnapshot:
    """Snapshot used before anything has been saved."""
    return WorkflowSnapshot(
        logic_config=ModelConfig(
            base_url=settings.default_logic_base_url,
            api_key="",
            model_name=settings.default_logic_model_name,
        ),
        vision_config=ModelConfig(
            base_url=settings.default_vision_base_url,
            api_key="",
            model_name=settings.default_vision_model_name,
        ),
    )
