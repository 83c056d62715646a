"""
Completion API forwarder
Passes chat-completion requests through to the configured LLM endpoint
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import ServerConfig
from .errors import ConfigurationError, RemoteOperationError

logger = logging.getLogger(__name__)


class CompletionClient:
    """Forwards ``{model, messages, max_tokens}`` and returns the response body verbatim"""

    def __init__(self, config: ServerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = config.completion_api_url
        self.api_key = config.completion_api_key
        self.client = httpx.AsyncClient(timeout=config.completion_timeout, transport=transport)

    async def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise ConfigurationError("COMPLETION_API_KEY is not configured")

        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            response = await self.client.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Completion request failed: {e}")
            raise RemoteOperationError(f"Could not reach completion API: {e}") from e

        if response.is_error:
            logger.error(f"Completion API error {response.status_code}: {response.text[:200]}")
            raise RemoteOperationError(
                f"Completion API responded with status {response.status_code}",
                remote_status=response.status_code,
                details={"body": response.text},
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Completion API returned a non-JSON body: {response.text[:200]}")
            raise RemoteOperationError(
                "Completion API returned a non-JSON response", remote_status=response.status_code
            ) from e

    async def close(self) -> None:
        await self.client.aclose()
