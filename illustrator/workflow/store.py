from collections.abc import Callable, Iterable

from illustrator.logging.logger import Log
from illustrator.workflow.exceptions import HydrationError
from illustrator.workflow.models import (
    SUPPORTED_LANGUAGES,
    HistoryItem,
    ModelConfig,
    WorkflowSnapshot,
    WorkflowStage,
)

SnapshotListener = Callable[[WorkflowSnapshot], None]


class WorkflowStore:
    """In-memory state of the three-stage workflow.

    Constructed once by the application root and passed to whoever needs it.
    Mutations of persisted fields notify subscribers with a fresh snapshot;
    the store itself never talks to storage.
    """

    def __init__(self, defaults: WorkflowSnapshot) -> None:
        self._logic_config = defaults.logic_config
        self._vision_config = defaults.vision_config
        self._language = defaults.language
        self._paper_content = defaults.paper_content
        self._generated_schema = defaults.generated_schema
        self._history: list[HistoryItem] = list(defaults.history)

        self._stage = WorkflowStage.INTAKE
        self._generated_image: str | None = None
        self._reference_images: list[str] = []
        self._has_hydrated = False
        self._listeners: list[SnapshotListener] = []

    # persisted fields

    @property
    def logic_config(self) -> ModelConfig:
        return self._logic_config

    @property
    def vision_config(self) -> ModelConfig:
        return self._vision_config

    @property
    def language(self) -> str:
        return self._language

    @property
    def paper_content(self) -> str:
        return self._paper_content

    @property
    def generated_schema(self) -> str:
        return self._generated_schema

    @property
    def history(self) -> list[HistoryItem]:
        return list(self._history)

    # runtime-only fields

    @property
    def stage(self) -> WorkflowStage:
        return self._stage

    @property
    def generated_image(self) -> str | None:
        return self._generated_image

    @property
    def reference_images(self) -> list[str]:
        return list(self._reference_images)

    @property
    def has_hydrated(self) -> bool:
        return self._has_hydrated

    def set_logic_config(self, config: ModelConfig) -> None:
        self._logic_config = config
        self._notify()

    def set_vision_config(self, config: ModelConfig) -> None:
        self._vision_config = config
        self._notify()

    def set_language(self, language: str) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language '{language}'. Choose from: {list(SUPPORTED_LANGUAGES)}"
            )
        self._language = language
        self._notify()

    def set_paper_content(self, content: str) -> None:
        self._paper_content = content
        self._notify()

    def set_generated_schema(self, schema: str) -> None:
        self._generated_schema = schema
        self._notify()

    def set_generated_image(self, image: str | None) -> None:
        self._generated_image = image

    def add_reference_image(self, image: str) -> None:
        self._reference_images.append(image)

    def remove_reference_image(self, index: int) -> None:
        self._reference_images = [
            image for i, image in enumerate(self._reference_images) if i != index
        ]

    def set_reference_images(self, images: Iterable[str]) -> None:
        self._reference_images = list(images)

    def clear_reference_images(self) -> None:
        self._reference_images = []

    def set_history(self, history: Iterable[HistoryItem]) -> None:
        self._history = list(history)
        self._notify()

    def set_stage(self, target: WorkflowStage) -> bool:
        """Move to ``target``; Review and Render require a generated schema.

        Returns True when the transition was applied.
        """
        if target is not WorkflowStage.INTAKE and not self._generated_schema:
            Log.debug(f"Ignoring transition to {target.value}: no generated schema")
            return False
        self._stage = target
        return True

    def show_result(self, schema: str, image: str | None) -> bool:
        """Display a stored result: set schema and image, then jump to Render.

        Returns True when the workflow is now in the Render stage.
        """
        self._generated_schema = schema
        self._generated_image = image
        moved = self.set_stage(WorkflowStage.RENDER)
        self._notify()
        return moved

    def reset_project(self) -> None:
        """Start over; configuration and history are kept."""
        self._paper_content = ""
        self._generated_schema = ""
        self._generated_image = None
        self._reference_images = []
        self._stage = WorkflowStage.INTAKE
        self._notify()

    def snapshot(self) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            logic_config=self._logic_config,
            vision_config=self._vision_config,
            language=self._language,
            paper_content=self._paper_content,
            generated_schema=self._generated_schema,
            history=tuple(self._history),
        )

    def apply_hydration(self, snapshot: WorkflowSnapshot | None) -> None:
        """Load persisted fields once at startup and mark the store hydrated.

        ``None`` keeps the defaults. Subscribers are not notified.

        Raises:
            HydrationError: if the store has already been hydrated.
        """
        if self._has_hydrated:
            raise HydrationError("Workflow store is already hydrated")
        if snapshot is not None:
            self._logic_config = snapshot.logic_config
            self._vision_config = snapshot.vision_config
            self._language = snapshot.language
            self._paper_content = snapshot.paper_content
            self._generated_schema = snapshot.generated_schema
            self._history = list(snapshot.history)
        self._has_hydrated = True

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener for persisted-field changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
