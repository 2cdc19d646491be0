"""Minimal chat-completions client."""

from __future__ import annotations

import logging
from typing import Any

import requests

DEFAULT_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.2

log = logging.getLogger(__name__)


def _dig(node: Any, *path: Any) -> Any:
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return None
        elif not isinstance(node, dict):
            return None
        node = node[key] if isinstance(key, int) else node.get(key)
    return node


class OpenAIClient:
    """Sends one system prompt and one user message, returns the reply text."""

    def __init__(
        self,
        api_key: str,
        *,
        session: requests.Session | None = None,
        url: str = DEFAULT_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()
        self.url = url
        self.model = model
        self.temperature = temperature
        self.timeout = timeout

    def build_payload(self, system_prompt: str, user_message: str) -> dict[str, Any]:
        """The JSON request body for one exchange."""
        return {
            "model": self.model,
            "temperature": self.temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }

    def send(self, system_prompt: str, user_message: str) -> str:
        """The model's reply, or an empty string if none could be obtained."""
        try:
            response = self.session.post(
                self.url,
                json=self.build_payload(system_prompt, user_message),
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.warning("chat request failed: %s", exc)
            return ""
        log.info("chat HTTP code: %s", response.status_code)
        try:
            document = response.json()
        except ValueError as exc:
            log.warning("chat response parse error: %s", exc)
            return ""
        content = _dig(document, "choices", 0, "message", "content")
        return content if isinstance(content, str) else ""