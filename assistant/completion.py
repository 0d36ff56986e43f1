"""
Completion Client

Thin async client for an OpenAI-compatible chat completions endpoint, plus
the polish policy that rewrites a draft reply for tone only.

The client has one failure mode, CompletionUnavailable. Callers decide what
to do with it; polish_reply falls back to the untouched draft.
"""

import re
from typing import Optional

import httpx

from assistant.logging_config import get_logger
from assistant.pipeline_logger import log_error, log_stage_event

logger = get_logger(__name__)

PERSONA_PROMPT = (
    "You are ANiLab AI assistant. Be helpful, concise and friendly. "
    "Always answer in Slovak."
)

POLISH_INSTRUCTIONS = (
    "Rewrite the draft reply below so it sounds natural and warm. "
    "Only adjust tone and wording. Keep every product name and every URL exactly "
    "as written, keep the list structure, do not add products, prices or facts. "
    "Return only the rewritten reply."
)

URL_RE = re.compile(r"https?://[^\s)]+")


class CompletionUnavailable(Exception):
    """Raised when the completion service cannot produce text this turn."""


class CompletionClient:
    """
    Client for the chat completions API.

    Usage:
        client = CompletionClient(api_key="sk-...", model="gpt-4o-mini")
        text = await client.generate("Ahoj", system=PERSONA_PROMPT)
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model
        self.url = f"{base_url.rstrip('/')}/chat/completions"
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def generate(self, prompt: str, system: str = PERSONA_PROMPT, temperature: float = 0.4) -> str:
        """Send one system + user turn and return the assistant text."""
        if not self.configured:
            raise CompletionUnavailable("completion credential is not configured")

        payload = {
            "model": self.model,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        client = await self._get_client()
        try:
            with logger.llm_span(self.model, prompt_preview=prompt):
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise CompletionUnavailable(f"transport error: {e}") from e

        if response.status_code != 200:
            raise CompletionUnavailable(f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionUnavailable("malformed completion response") from e

        if not isinstance(content, str) or not content.strip():
            raise CompletionUnavailable("empty completion")
        return content.strip()


def build_polish_prompt(draft: str, message: str) -> str:
    return (
        f"{POLISH_INSTRUCTIONS}\n\n"
        f"Customer message:\n{message.strip()}\n\n"
        f"Draft reply:\n{draft}"
    )


async def polish_reply(client: Optional[CompletionClient], draft: str, message: str) -> str:
    """
    Best-effort tone rewrite of a draft.

    Returns the draft unchanged when the client is missing or unavailable,
    or when the rewrite lost any URL present in the draft.
    """
    if client is None or not client.configured or not draft:
        return draft

    try:
        polished = await client.generate(build_polish_prompt(draft, message))
    except CompletionUnavailable as e:
        log_error("LLM", "Polish unavailable, using draft", e)
        return draft

    missing = [url for url in URL_RE.findall(draft) if url not in polished]
    if missing:
        log_stage_event("LLM", "Polish dropped URLs, using draft", {"missing": len(missing)})
        return draft

    log_stage_event("LLM", "Draft polished", {"draft_len": len(draft), "polished_len": len(polished)})
    return polished
