"""Chat-completion client for the OpenAI-compatible LLM provider."""

from typing import Dict, List, Optional

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from careerspark_ai.config import HTTP_TIMEOUT_SECONDS, LLM_BASE_URL, MODEL_NAME, PPLX_API_KEY
from careerspark_ai.errors import ProviderError
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)

Messages = List[Dict[str, str]]


def _status_error_message(e: APIStatusError) -> str:
    """Prefer the provider's error.message, then the status text."""
    body = e.body
    if isinstance(body, dict):
        err = body.get("error", body)
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return e.response.reason_phrase or str(e)


class CompletionClient:
    """
    One outbound chat completion per call; returns the raw assistant text.
    No retries here: transport-level retry policy is configured on the client, off by default.
    """

    def __init__(
        self,
        api_key: str = PPLX_API_KEY,
        base_url: str = LLM_BASE_URL,
        model: str = MODEL_NAME,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        max_retries: int = 0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            http_client=http_client,
        )

    async def complete(self, messages: Messages, timeout: Optional[float] = None) -> str:
        """Send messages and return the assistant message content (may be empty)."""
        kwargs = {"timeout": timeout} if timeout is not None else {}
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                **kwargs,
            )
        except APIStatusError as e:
            message = _status_error_message(e)
            logger.error("LLM provider HTTP error: %s %s", e.status_code, message)
            raise ProviderError(e.status_code, message) from e
        except APIConnectionError as e:
            # Also covers APITimeoutError
            logger.error("LLM provider request failed: %s", e)
            raise ProviderError(None, str(e) or type(e).__name__) from e

        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            return ""
        return choice.message.content

    async def close(self) -> None:
        await self._client.close()
