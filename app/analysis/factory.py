from typing import ClassVar

from app.analysis.analyzer import ResumeAnalyzer
from app.analysis.base import BaseAnalyzer
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings
from app.logging.logger import Log


class AnalyzerFactory:
    """Creates the configured resume analyzer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.strip().lower()
        if provider == "example":
            Log.warning("Analysis provider 'example' returns canned feedback; not for production")
            return ResumeAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=settings.analysis_temperature,
                max_tokens=settings.analysis_max_tokens,
            )
        client = OpenAIClientAdapter(
            api_key=settings.analysis_api_key,
            timeout_seconds=settings.analysis_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return ResumeAnalyzer(
            client=client,
            model=settings.analysis_model_name,
            temperature=settings.analysis_temperature,
            max_tokens=settings.analysis_max_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.analysis_base_url.strip()
            if not url:
                raise ValueError(
                    "analysis_base_url is required for analysis_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.analysis_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown analysis provider '{provider}'. Choose from: {supported}")
