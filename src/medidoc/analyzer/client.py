"""httpx-based client for the remote text-generation endpoint.

Sends ``{"message": <prompt>}`` to ``POST {api_base_url}/api/gemini`` and
parses the JSON reply into a ChatReply.  Non-2xx responses raise
RemoteServiceError carrying the status and the response body.  No retry
is attempted; the only timeout is the transport timeout configured on the
request.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from medidoc.analyzer.schemas import ChatReply
from medidoc.config.settings import GeminiSettings
from medidoc.errors import RemoteServiceError

logger = logging.getLogger(__name__)

CHAT_FALLBACK = "Sorry, I could not generate a response."


class GeminiClient:
    """Thin adapter over the ``/api/gemini`` chat route.

    Args:
        settings: Endpoint configuration.
        http_client: An ``httpx.AsyncClient`` whose lifecycle is managed by
            the caller.
    """

    def __init__(self, settings: GeminiSettings, http_client: httpx.AsyncClient) -> None:
        self._url = settings.chat_url
        self._timeout = settings.timeout_seconds
        self._client = http_client

    async def generate(self, prompt_text: str) -> ChatReply:
        """POST *prompt_text* and return the parsed reply.

        Raises:
            RemoteServiceError: Non-2xx status, or a 2xx body that is not a
                UTF-8 JSON object.
            httpx.HTTPError: Transport-level failure.
        """
        logger.info("Sending %d-char prompt to %s", len(prompt_text), self._url)
        response = await self._client.post(
            self._url,
            json={"message": prompt_text},
            timeout=self._timeout,
        )

        if not response.is_success:
            body = response.text
            logger.error(
                "Gemini API error: HTTP %d: %s", response.status_code, body[:200]
            )
            raise RemoteServiceError(response.status_code, body)

        try:
            reply = ChatReply.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Gemini API returned an unreadable body: %s", exc)
            raise RemoteServiceError(response.status_code, response.text) from exc

        logger.debug("Gemini API reply received (HTTP %d)", response.status_code)
        return reply

    async def send_message(self, prompt_text: str) -> str:
        """Send a free-text prompt and return the generated text."""
        reply = await self.generate(prompt_text)
        return reply.text_or(CHAT_FALLBACK)
