from __future__ import annotations

import logging
from typing import Optional, Protocol

from .config import ConfigurationError, Settings
from .exceptions import TagGenerationError
from .models import TagResult

logger = logging.getLogger(__name__)


class Tagger(Protocol):
    def generate(self, *, prompt: str) -> str:  # pragma: no cover - interface
        ...


class OpenAITagger:
    def __init__(self, *, api_key: str, model: str, temperature: float, timeout_sec: float) -> None:
        from openai import OpenAI

        self._client = OpenAI(api_key=api_key)
        self._model = model
        self._temperature = temperature
        self._timeout = timeout_sec

    def generate(self, *, prompt: str) -> str:
        resp = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": "You extract keywords from news articles. Reply with the keywords only."},
                {"role": "user", "content": prompt},
            ],
            temperature=self._temperature,
            timeout=self._timeout,
        )
        content = resp.choices[0].message.content if resp and resp.choices else None
        if not content:
            raise TagGenerationError("OpenAI returned an empty response")
        return content


class GeminiTagger:
    def __init__(self, *, api_key: str, model: str, temperature: float, timeout_sec: float) -> None:
        import google.generativeai as genai

        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model)
        self._temperature = temperature
        self._timeout = timeout_sec

    def generate(self, *, prompt: str) -> str:
        resp = self._model.generate_content(
            prompt,
            generation_config={"temperature": self._temperature},
            request_options={"timeout": self._timeout},
        )
        text = getattr(resp, "text", None)
        if not text:
            raise TagGenerationError("Gemini returned an empty response")
        return str(text)


def build_tagger(settings: Settings) -> Tagger:
    if not settings.api_key:
        raise ConfigurationError(f"No API key configured for provider {settings.provider!r}")
    kwargs = dict(
        api_key=settings.api_key,
        model=settings.model_name,
        temperature=settings.temperature,
        timeout_sec=settings.tag_timeout_sec,
    )
    if settings.provider == "gemini":
        return GeminiTagger(**kwargs)
    if settings.provider == "openai":
        return OpenAITagger(**kwargs)
    raise ConfigurationError(f"Unknown tag provider: {settings.provider}")


def _truncate(s: str, limit: int) -> str:
    if limit <= 0 or len(s) <= limit:
        return s
    return s[:limit]


def build_prompt(title: str, summary: str, *, language: Optional[str] = None, max_input_chars: int = 4000) -> str:
    if language:
        lang_line = f"Write the keywords in {language}."
    else:
        lang_line = "Write the keywords in the same language as the article."
    return (
        "Read the title and summary of the news article below and list the five keywords "
        "most relevant to it, separated by commas. Reply with the keywords only.\n"
        f"{lang_line}\n"
        f"Title: {title}\n"
        f"Summary: {_truncate(summary, max_input_chars)}"
    )


def generate_tags(
    tagger: Tagger,
    title: str,
    summary: str,
    *,
    language: Optional[str] = None,
    max_input_chars: int = 4000,
) -> TagResult:
    """
    Ask the tagger for five comma-separated keywords.

    Never raises: any failure is logged and returned as a degraded result whose
    tags are the error sentinel.
    """
    prompt = build_prompt(title, summary, language=language, max_input_chars=max_input_chars)
    try:
        text = tagger.generate(prompt=prompt)
        if not isinstance(text, str):
            raise TagGenerationError(f"Unexpected response type: {type(text).__name__}")
        text = text.strip()
        if not text:
            raise TagGenerationError("Empty tag response")
    except Exception as e:
        logger.warning("Tag generation failed for %r: %s", title, e, exc_info=True)
        return TagResult.degraded(f"{type(e).__name__}: {e}")
    return TagResult.success(text)
