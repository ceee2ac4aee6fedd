"""AI-powered resume reviewer."""

from pathlib import Path

from app.analysis.base import BaseAnalyzer
from app.analysis.client_base import BaseCompletionClient
from app.analysis.exceptions import AnalysisError
from app.analysis.models import AnalysisResult
from app.analysis.prompt_loader import load_system_prompt, load_user_prompt_template
from app.logging.logger import Log


class ResumeAnalyzer(BaseAnalyzer):
    """Sends resume text to a text-generation provider and returns its feedback.

    Model, temperature and output length are fixed at construction so every
    request is reviewed in the same style.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2500,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        if max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
        if not 0.0 <= temperature <= 2.0:
            raise ValueError(f"temperature must be between 0 and 2, got {temperature}")
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._user_prompt_template = load_user_prompt_template(user_prompt_path)

    def analyze(self, resume_text: str) -> AnalysisResult:
        if not resume_text.strip():
            raise AnalysisError("Resume text is empty")
        prompt = self._build_prompt(resume_text)
        Log.debug(f"Analysis prompt:\n{prompt}")

        feedback = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
        Log.debug(f"AI raw response:\n{feedback}")

        Log.info(f"Analysis complete: {len(feedback)} chars of feedback", model=self._model)
        return AnalysisResult(narrative_feedback=feedback.strip())

    def _build_prompt(self, resume_text: str) -> str:
        return self._user_prompt_template.format(resume_text=resume_text)
