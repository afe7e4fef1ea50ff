"""
Model Client - The remote language model, behind a narrow interface.

    (system_prompt, user_content, tool_definitions) -> [ToolCall, ...]

The compiler only ever sees this interface, so builds can be tested
with a stub. The real client speaks the OpenAI-compatible
chat.completions protocol over httpx.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..errors import UpstreamError
from ..site_model.tool_call import ToolCall

logger = logging.getLogger(__name__)


class ModelClient(ABC):
    """Asks a model for the ordered tool calls that build a site."""

    @abstractmethod
    def request_tool_calls(
        self,
        system_prompt: str,
        user_content: str,
        tool_definitions: list[dict[str, Any]],
    ) -> list[ToolCall]:
        """Return the model's tool calls, in order."""


class ChatCompletionsClient(ModelClient):
    """
    OpenAI-compatible chat.completions client.

    One POST per compile, temperature 0, tool_choice "auto".
    No timeout is applied unless one is passed in.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @property
    def url(self) -> str:
        return f"{self.api_base}/chat/completions"

    def _build_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def build_payload(
        self,
        system_prompt: str,
        user_content: str,
        tool_definitions: list[dict[str, Any]],
    ) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            "tools": tool_definitions,
            "tool_choice": "auto",
            "temperature": 0,
        }

    def request_tool_calls(
        self,
        system_prompt: str,
        user_content: str,
        tool_definitions: list[dict[str, Any]],
    ) -> list[ToolCall]:
        payload = self.build_payload(system_prompt, user_content, tool_definitions)
        logger.info("Requesting tool calls from %s (model %s)", self.api_base, self.model)

        client = self._http_client or httpx.Client(timeout=self.timeout)
        try:
            response = client.post(self.url, json=payload, headers=self._build_headers())
        except httpx.HTTPError as e:
            raise UpstreamError(f"chat.completions request failed: {e}") from e
        finally:
            if self._http_client is None:
                client.close()

        if not response.is_success:
            raise UpstreamError(
                f"chat.completions failed: {response.status_code} "
                f"{response.reason_phrase} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"chat.completions returned invalid JSON: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        return parse_tool_calls(data)


def parse_tool_calls(data: Any) -> list[ToolCall]:
    """
    Extract choices[0].message.tool_calls.

    A message without tool calls yields an empty list; a body without
    choices raises UpstreamError.
    """
    if not isinstance(data, dict):
        raise UpstreamError("chat.completions response is not a JSON object")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise UpstreamError("chat.completions response has no choices")

    message = choices[0].get("message") or {}
    raw_calls = message.get("tool_calls") if isinstance(message, dict) else None
    if not raw_calls:
        return []
    if not isinstance(raw_calls, list):
        raise UpstreamError("chat.completions tool_calls is not a list")
    return [ToolCall.from_dict(call) for call in raw_calls if isinstance(call, dict)]
