"""Offline completion client for local development and tests.

Selected only with analysis_provider=example; never used as a fallback for a
failing provider.
"""

from typing import ClassVar

from app.analysis.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Returns fixed reviewer feedback without any network calls."""

    DEFAULT_RESPONSE: ClassVar[str] = (
        "Overall impression: the resume is readable but undersells measurable impact.\n\n"
        "Content strength: lead each bullet with an action verb and a quantified result.\n"
        "ATS optimization: mirror the keywords of the roles you target in a skills section.\n"
        "Format and layout: keep to one column, consistent dates, and standard headings.\n\n"
        "Rewritten example:\n"
        "Before: Responsible for the reporting pipeline.\n"
        "After: Rebuilt the reporting pipeline, cutting nightly run time by 40%."
    )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        return self.DEFAULT_RESPONSE
