from pathlib import Path

from illustrator.generation.exceptions import GenerationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the schema generation system prompt.

    Args:
        path: Prompt file. Defaults to the bundled system_prompt.txt.

    Raises:
        GenerationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "system_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise GenerationError(f"Failed to load system prompt: {exc}") from exc
