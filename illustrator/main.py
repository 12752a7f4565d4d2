import argparse
import asyncio
import sys
from dataclasses import dataclass, replace
from pathlib import Path

from illustrator.config.settings import Settings
from illustrator.generation.base import BaseGenerationClient
from illustrator.generation.exceptions import GenerationError
from illustrator.generation.factory import GenerationClientFactory
from illustrator.intake.coordinator import IntakeCoordinator
from illustrator.intake.exceptions import FileReadError
from illustrator.intake.file_loader import FileLoader
from illustrator.intake.models import IncomingFile
from illustrator.logging.logger import Log
from illustrator.pdf.engine import RasterizationEngine
from illustrator.storage.base import BaseKeyValueStore
from illustrator.storage.exceptions import StorageWriteError
from illustrator.storage.factory import KeyValueStoreFactory
from illustrator.workflow.exceptions import SubmissionError
from illustrator.workflow.history import HistoryManager
from illustrator.workflow.models import default_snapshot
from illustrator.workflow.persistence import SnapshotPersister
from illustrator.workflow.store import WorkflowStore
from illustrator.workflow.submission import SchemaSubmission


@dataclass
class Application:
    """Owns every long-lived component for one process."""

    kv_store: BaseKeyValueStore
    store: WorkflowStore
    persister: SnapshotPersister
    history: HistoryManager
    engine: RasterizationEngine
    coordinator: IntakeCoordinator
    submission: SchemaSubmission

    async def start(self) -> None:
        await self.persister.hydrate(self.store)
        self.persister.attach(self.store)

    async def shutdown(self) -> None:
        try:
            await self.persister.flush()
        finally:
            await self.kv_store.close()


def build_application(
    settings: Settings,
    kv_store: BaseKeyValueStore | None = None,
    generation_client: BaseGenerationClient | None = None,
) -> Application:
    """Build the application root with all required adapters."""
    defaults = default_snapshot(settings)
    kv_store = kv_store if kv_store is not None else KeyValueStoreFactory.create(settings)
    client = (
        generation_client
        if generation_client is not None
        else GenerationClientFactory.create(settings)
    )
    store = WorkflowStore(defaults)
    engine = RasterizationEngine(settings)
    coordinator = IntakeCoordinator(engine)
    return Application(
        kv_store=kv_store,
        store=store,
        persister=SnapshotPersister(
            kv_store,
            settings.storage_key,
            defaults,
            max_history_items=settings.max_history_items,
        ),
        history=HistoryManager(store, capacity=settings.max_history_items),
        engine=engine,
        coordinator=coordinator,
        submission=SchemaSubmission(store, coordinator, client),
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="illustrator",
        description="Turn papers (PDFs, images, text) into a visual schema.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="PDF or image files to ingest")
    parser.add_argument("--text", default=None, help="paper content to submit")
    parser.add_argument("--language", choices=["en", "zh"], default=None)
    parser.add_argument("--api-key", default=None, help="logic model API key to store")
    return parser.parse_args(argv)


def _load_files(paths: list[Path]) -> list[IncomingFile]:
    loader = FileLoader()
    loaded: list[IncomingFile] = []
    for path in paths:
        try:
            loaded.append(loader.load(path))
        except FileReadError as exc:
            Log.warning(str(exc))
    return loaded


async def run(settings: Settings, args: argparse.Namespace) -> int:
    app = build_application(settings)
    await app.start()
    try:
        code = await _submit(app, args)
    finally:
        try:
            await app.shutdown()
        except StorageWriteError as exc:
            Log.error(f"Workflow state was not saved: {exc}")
            code = 1
    return code


async def _submit(app: Application, args: argparse.Namespace) -> int:
    if args.language:
        app.store.set_language(args.language)
    if args.api_key:
        app.store.set_logic_config(replace(app.store.logic_config, api_key=args.api_key))
    if args.text is not None:
        app.store.set_paper_content(args.text)

    result = await app.coordinator.ingest(_load_files(args.files))
    for failure in result.failures:
        Log.error(f"Could not process {failure.file_name}: {failure.message}")

    try:
        schema = await app.submission.submit()
    except (SubmissionError, GenerationError) as exc:
        Log.error(f"Generation failed: {exc}")
        return 1

    app.history.add(schema)
    print(schema)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point: settings -> logging -> application root -> one submission."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = _parse_args(argv)
    sys.exit(asyncio.run(run(settings, args)))


if __name__ == "__main__":
    main()
