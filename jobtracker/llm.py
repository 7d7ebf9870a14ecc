"""Thin client for the external reasoning provider (any OpenAI-compatible API)."""
from __future__ import annotations

from typing import Any

import openai
from openai import OpenAI

from jobtracker.config import get_env
from jobtracker.errors import ProviderUnavailable
from jobtracker.log import get_logger

log = get_logger(__name__)


class ReasoningClient:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 10,
        timeout: float = 10,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url or None
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client: OpenAI | None = None

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> "ReasoningClient | None":
        """None when disabled in settings or no OPENAI_API_KEY is set."""
        llm_cfg = settings.get("llm", {})
        if not llm_cfg.get("enabled", True):
            return None
        api_key = get_env("OPENAI_API_KEY")
        if not api_key:
            log.debug("No OPENAI_API_KEY — match scores use keyword overlap only")
            return None
        return cls(
            api_key=api_key,
            model=llm_cfg.get("model", "gpt-3.5-turbo"),
            base_url=get_env("OPENAI_BASE_URL") or None,
            temperature=llm_cfg.get("temperature", 0.1),
            max_tokens=llm_cfg.get("max_tokens", 10),
            timeout=llm_cfg.get("timeout_s", 10),
        )

    def _get_client(self) -> OpenAI:
        if self._client is None:
            # Single attempt per call; callers degrade instead of retrying
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def complete(self, prompt: str) -> str:
        """Free-text completion for *prompt*; raises ProviderUnavailable on any failure."""
        try:
            r = self._get_client().chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            return (r.choices[0].message.content or "").strip()
        except openai.OpenAIError as exc:
            raise ProviderUnavailable(f"Reasoning provider error: {exc}") from exc
        except (IndexError, AttributeError) as exc:
            raise ProviderUnavailable(f"Reasoning provider returned an unexpected shape: {exc}") from exc
