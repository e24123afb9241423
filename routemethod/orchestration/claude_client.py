"""
Anthropic Messages API wrapper with streamed text output.
"""

from __future__ import annotations

import json
import time
from typing import Any, Iterator

import requests

from routemethod.orchestration.prompt import SYSTEM_PROMPT
from routemethod.utils.config import (
    anthropic_api_key,
    llm_base_url,
    llm_max_tokens,
    llm_model,
    llm_timeout,
)
from routemethod.utils.logger import get_logger

logger = get_logger()

ANTHROPIC_VERSION = "2023-06-01"
MAX_RETRIES = 3


class ClaudeAPIError(RuntimeError):
    """Raised when the Messages API fails or reports an error event mid-stream."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.original = original


class ClaudeAuthError(ClaudeAPIError):
    """Raised on 401/403: the API key is missing, invalid or lacks access."""


def _iter_sse_events(response: requests.Response) -> Iterator[dict[str, Any]]:
    """Yield the JSON payload of each `data:` line of a server-sent event stream."""
    if response.encoding is None:
        response.encoding = "utf-8"
    for line in response.iter_lines(decode_unicode=True):
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        if not line or not line.startswith("data:"):
            continue
        data = line[len("data:"):].strip()
        try:
            event = json.loads(data)
        except json.JSONDecodeError:
            logger.debug("Skipping malformed SSE data line: %s", data[:200])
            continue
        if isinstance(event, dict):
            yield event


class ClaudeClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        system_prompt: str | None = None,
    ) -> None:
        self._base_url = base_url or llm_base_url()
        self.api_key = api_key or anthropic_api_key()
        self.model = model or llm_model()
        self.max_tokens = max_tokens or llm_max_tokens()
        self.timeout = llm_timeout()
        self.system_prompt = system_prompt or SYSTEM_PROMPT

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    def _payload(self, messages: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": self.system_prompt,
            "messages": [
                {"role": m["role"], "content": m.get("content") or ""}
                for m in messages
                if m.get("role") in ("user", "assistant")
            ],
            "stream": True,
        }

    def _open_stream(self, payload: dict[str, Any]) -> requests.Response:
        """POST the request, retrying transport errors, 429 and 5xx with backoff."""
        last_err: Exception | None = None
        status: int | None = None
        for attempt in range(MAX_RETRIES):
            delay = 2 ** attempt
            try:
                r = requests.post(
                    self._base_url,
                    headers=self._headers(),
                    json=payload,
                    stream=True,
                    timeout=self.timeout,
                )
                r.raise_for_status()
                return r
            except requests.HTTPError as e:
                last_err = e
                status = e.response.status_code if e.response is not None else None
                body = e.response.text if e.response is not None else ""
                if status in (401, 403):
                    raise ClaudeAuthError(
                        f"Anthropic API rejected the credentials ({status}). "
                        "Check ANTHROPIC_API_KEY in .env.",
                        status,
                        e,
                    ) from e
                if status is not None and status != 429 and status < 500:
                    raise ClaudeAPIError(
                        f"Anthropic API request failed ({status}): {body[:500]}", status, e
                    ) from e
                if status == 429 and e.response is not None:
                    retry_after = e.response.headers.get("retry-after", "")
                    try:
                        delay = max(float(retry_after), 1.0)
                    except ValueError:
                        delay = max(5.0, delay * 2)
            except requests.RequestException as e:
                last_err = e
                status = None

            logger.warning("LLM API attempt %d failed: %s", attempt + 1, last_err)
            if attempt < MAX_RETRIES - 1:
                time.sleep(delay)

        raise ClaudeAPIError(
            f"LLM API failed after {MAX_RETRIES} retries: {last_err}", status, last_err
        ) from last_err

    def stream_text(self, messages: list[dict[str, Any]]) -> Iterator[str]:
        """
        Stream the assistant reply as text chunks.

        Raises:
            ClaudeAPIError: If the request fails or the stream reports an error event.
        """
        response = self._open_stream(self._payload(messages))
        try:
            for event in _iter_sse_events(response):
                etype = event.get("type")
                if etype == "content_block_delta":
                    delta = event.get("delta") or {}
                    if delta.get("type") == "text_delta" and delta.get("text"):
                        yield delta["text"]
                elif etype == "error":
                    err = event.get("error") or {}
                    raise ClaudeAPIError(
                        f"Stream error: {err.get('type', 'unknown')}: {err.get('message', '')}"
                    )
                elif etype == "message_stop":
                    break
        finally:
            response.close()

    def chat(self, messages: list[dict[str, Any]]) -> str:
        """Return the full assistant reply."""
        return "".join(self.stream_text(messages))
