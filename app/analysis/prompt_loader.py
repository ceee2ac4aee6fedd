from pathlib import Path

from app.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the reviewer instructions sent as the system message.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled system_prompt.txt.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "system_prompt.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load system prompt: {exc}") from exc


def load_user_prompt_template(path: Path | None = None) -> str:
    """Load the user message template; it must contain `{resume_text}`.

    Raises:
        AnalysisError: if the file cannot be read or lacks the placeholder.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "user_prompt.txt"
    try:
        template = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load user prompt template: {exc}") from exc
    if "{resume_text}" not in template:
        raise AnalysisError(f"User prompt template {path} has no {{resume_text}} placeholder")
    return template
