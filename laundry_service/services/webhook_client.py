"""
HTTP Client for workflow-automation webhooks with retry logic
"""
import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from laundry_service.config import settings

logger = logging.getLogger(__name__)


class WebhookError(Exception):
    """Base exception for webhook errors"""
    pass


class WebhookUnavailableError(WebhookError):
    """Webhook endpoint could not be reached"""
    pass


class WebhookClient:
    """Client for relaying payloads to external webhooks"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = settings.WEBHOOK_TIMEOUT
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    @retry(
        stop=stop_after_attempt(max(settings.MAX_RETRIES, 1)),
        wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        reraise=True
    )
    async def _post(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        async with self._client() as client:
            return await client.post(url, json=payload)

    async def post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload to a webhook

        Args:
            url: Webhook URL
            payload: JSON-serializable body

        Returns:
            Decoded response body, or an empty dict if it is not JSON

        Raises:
            WebhookUnavailableError: If the webhook cannot be reached
            WebhookError: If the webhook answers with a non-2xx status
        """
        try:
            response = await self._post(url, payload)
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            logger.error("Error calling webhook %s: %s", url, e)
            raise WebhookUnavailableError(f"Webhook unavailable: {e}")

        if not response.is_success:
            raise WebhookError(f"Webhook returned {response.status_code}")

        try:
            return response.json()
        except ValueError:
            return {}
