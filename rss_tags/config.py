"""
Service configuration.

Every environment variable the service reads is defined here. The entry point
loads `.env` (python-dotenv) before calling `Settings.from_env()`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


def _optional_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid integer value for {name}: {value}")


def _optional_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid number for {name}: {value}")


@dataclass(frozen=True)
class Settings:
    provider: str = "gemini"
    model: Optional[str] = None
    api_key: Optional[str] = None
    temperature: float = 0.1
    language: Optional[str] = None
    news_limit: int = 10
    max_workers: int = 0  # 0: one worker per item
    max_input_chars: int = 4000
    fetch_timeout_sec: float = 10.0
    tag_timeout_sec: float = 30.0
    categories_file: Optional[str] = None
    static_dir: str = "public"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def model_name(self) -> str:
        return self.model or DEFAULT_MODELS.get(self.provider, "")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the process environment (or the given mapping).

        The generation credential is required up front: a missing key for the
        selected provider raises ConfigurationError instead of failing every
        tag call later.
        """
        env = os.environ if env is None else env

        provider = (env.get("RSS_TAGS_PROVIDER") or "gemini").strip().lower()
        if provider in {"google", "googleai"}:
            provider = "gemini"
        if provider == "gemini":
            api_key = env.get("GEMINI_API_KEY") or env.get("GOOGLE_API_KEY")
            key_names = "GEMINI_API_KEY (or GOOGLE_API_KEY)"
        elif provider == "openai":
            api_key = env.get("OPENAI_API_KEY")
            key_names = "OPENAI_API_KEY"
        else:
            raise ConfigurationError(f"Unknown tag provider: {provider}")
        if not api_key:
            raise ConfigurationError(
                f"Missing required environment variable: {key_names}\n"
                f"Please set this in your .env file or environment."
            )

        news_limit = _optional_int(env, "RSS_TAGS_NEWS_LIMIT", 10)
        if news_limit < 1:
            raise ConfigurationError(f"RSS_TAGS_NEWS_LIMIT must be positive: {news_limit}")
        max_workers = _optional_int(env, "RSS_TAGS_MAX_WORKERS", 0)
        if max_workers < 0:
            raise ConfigurationError(f"RSS_TAGS_MAX_WORKERS must not be negative: {max_workers}")
        fetch_timeout_sec = _optional_float(env, "RSS_TAGS_FETCH_TIMEOUT_SEC", 10.0)
        tag_timeout_sec = _optional_float(env, "RSS_TAGS_TAG_TIMEOUT_SEC", 30.0)
        for name, value in (("RSS_TAGS_FETCH_TIMEOUT_SEC", fetch_timeout_sec),
                            ("RSS_TAGS_TAG_TIMEOUT_SEC", tag_timeout_sec)):
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive: {value}")
        log_level = (env.get("RSS_TAGS_LOG_LEVEL") or "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid RSS_TAGS_LOG_LEVEL: {log_level} (expected one of {', '.join(LOG_LEVELS)})"
            )

        return cls(
            provider=provider,
            model=env.get("RSS_TAGS_MODEL") or None,
            api_key=api_key,
            temperature=_optional_float(env, "RSS_TAGS_TEMPERATURE", 0.1),
            language=env.get("RSS_TAGS_LANGUAGE") or None,
            news_limit=news_limit,
            max_workers=max_workers,
            max_input_chars=_optional_int(env, "RSS_TAGS_MAX_INPUT_CHARS", 4000),
            fetch_timeout_sec=fetch_timeout_sec,
            tag_timeout_sec=tag_timeout_sec,
            categories_file=env.get("RSS_TAGS_CATEGORIES_FILE") or None,
            static_dir=env.get("RSS_TAGS_STATIC_DIR") or "public",
            host=env.get("RSS_TAGS_HOST") or "0.0.0.0",
            port=_optional_int(env, "RSS_TAGS_PORT", 3000),
            log_level=log_level,
        )
