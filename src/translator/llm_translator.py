"""Natural-language to IR translator.

Sends the strategy description to an OpenAI-compatible chat-completions
endpoint together with a system prompt that lists the catalog, and parses
the single JSON answer as IR. Responsible only for translation: the result
is not validated here.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import TranslationError
from .ir import IntermediateRepresentation
from .prompts import build_system_prompt
from .registries import CapabilityCatalog

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_TIMEOUT_SECONDS = 60.0
# Low temperature for deterministic output
DEFAULT_TEMPERATURE = 0.1


# =============================================================================
# Chat-completions response (only the fields we read)
# =============================================================================


class ChatMessage(BaseModel):
    content: str | None = None


class ChatChoice(BaseModel):
    message: ChatMessage | None = None


class ChatCompletionResponse(BaseModel):
    choices: list[ChatChoice] | None = None


def _describe_api_error(body: str) -> str:
    """Extract a readable detail from an error response body."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return body

    detail = str(error.get("message") or error.get("code") or "Unknown error")
    if error.get("type"):
        detail += f" (Type: {error['type']})"
    return detail


def _timeout_from_env() -> float:
    """OPENAI_TIMEOUT_SECONDS as a positive float, or the default."""
    raw = os.getenv("OPENAI_TIMEOUT_SECONDS")
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if not timeout > 0:
        logger.warning(
            f"Invalid OPENAI_TIMEOUT_SECONDS={raw!r}; using {DEFAULT_TIMEOUT_SECONDS}s"
        )
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


class LLMTranslator:
    """Translates natural language into IR via a chat-completions API."""

    def __init__(
        self,
        catalog: CapabilityCatalog,
        api_key: str | None,
        api_url: str | None = None,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize translator.

        Args:
            catalog: Catalog whose compact registry goes into the prompt
            api_key: Bearer token for the completion API
            api_url: Chat-completions endpoint (default: OpenAI)
            model: Model name (default: gpt-4o)
            timeout: Request timeout in seconds
            http_client: Optional client to reuse; a new one is opened per call otherwise
        """
        self.catalog = catalog
        self.api_key = api_key
        self.api_url = api_url or DEFAULT_API_URL
        self.model = model or DEFAULT_MODEL
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_env(cls, catalog: CapabilityCatalog) -> LLMTranslator:
        """Create a translator configured from environment variables."""
        return cls(
            catalog,
            api_key=os.getenv("OPENAI_API_KEY"),
            api_url=os.getenv("OPENAI_API_URL"),
            model=os.getenv("OPENAI_MODEL"),
            timeout=_timeout_from_env(),
        )

    def build_request(self, natural_language: str) -> dict[str, Any]:
        """Build the chat-completions request body."""
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(self.catalog.compact_registry())},
                {"role": "user", "content": natural_language},
            ],
            "temperature": DEFAULT_TEMPERATURE,
            "response_format": {"type": "json_object"},
        }

    async def translate(self, natural_language: str) -> IntermediateRepresentation:
        """Translate a strategy description into IR.

        Raises:
            TranslationError: If the API call fails or the answer is not valid IR
        """
        if not self.api_key:
            raise TranslationError(
                "OPENAI_API_KEY is not configured. Set it in a .env file or the environment."
            )

        response = await self._post(self.build_request(natural_language))

        if not response.is_success:
            detail = _describe_api_error(response.text)
            logger.error(f"Completion API returned {response.status_code}: {detail}")
            raise TranslationError(f"OpenAI API error ({response.status_code}): {detail}")

        try:
            api_response = ChatCompletionResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            raise TranslationError(f"Failed to decode OpenAI API response: {e}") from e

        if not api_response.choices:
            raise TranslationError("No response from LLM - API returned empty choices array")

        message = api_response.choices[0].message
        ir_json = message.content if message else None
        if not ir_json:
            raise TranslationError("Empty response from LLM - message content is null or empty")

        try:
            ir = IntermediateRepresentation.from_json(ir_json)
        except PydanticValidationError as e:
            raise TranslationError(f"Failed to parse LLM response as IR - {e}") from e

        logger.info(
            f"Translated strategy: {len(ir.strategy.entry_signals) if ir.strategy else 0} entry, "
            f"{len(ir.strategy.exit_signals) if ir.strategy else 0} exit signal(s)"
        )
        return ir

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        logger.info(f"Requesting translation from {self.api_url} (model={self.model})")
        try:
            if self._http_client is not None:
                return await self._http_client.post(
                    self.api_url, json=body, headers=headers, timeout=self.timeout
                )
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.post(self.api_url, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise TranslationError(f"OpenAI API request failed: {e}") from e
