"""Resend transactional email HTTP client.

One POST per message. HTTP 429 and connection errors are retried with
exponential backoff (1s, 2s, 4s, ...); any other non-2xx response is a hard
failure for that message.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import httpx
import structlog

from vininfo.config import Settings, get_settings
from vininfo.core.exceptions import ConfigError, TransientProviderError

logger = structlog.get_logger(__name__)

REQUEST_TIMEOUT = 30  # seconds


class EmailDeliveryError(TransientProviderError):
    """The provider did not accept the message."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        self.reason = reason
        self.provider_status = status_code
        super().__init__("Email se nepodařilo odeslat", {"reason": reason})


class EmailClient:
    """Client for the Resend email API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings()
        self.api_url = self.settings.RESEND_API_URL
        self.api_key = self.settings.RESEND_API_KEY
        self.sender = self.settings.EMAIL_FROM
        self.max_attempts = max(1, self.settings.EMAIL_MAX_ATTEMPTS)
        self._transport = transport
        self._sleep = sleep

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def ensure_configured(self) -> None:
        if not self.is_configured:
            raise ConfigError("RESEND_API_KEY is not configured")

    @staticmethod
    def backoff_seconds(attempt: int) -> float:
        """Delay after the given 1-based failed attempt: 1s, 2s, 4s, ..."""
        return float(2 ** (attempt - 1))

    async def send(self, to: str, subject: str, html: str) -> None:
        """Send one message. Raises EmailDeliveryError when the provider refuses it."""
        self.ensure_configured()

        payload = {"from": self.sender, "to": to, "subject": subject, "html": html}
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        last_error = "unknown error"
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self._transport) as client:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    response = await client.post(self.api_url, json=payload, headers=headers)
                except httpx.HTTPError as e:
                    last_error = f"connection error: {e}"
                    logger.warning("Email provider connection error", attempt=attempt, error=str(e))
                else:
                    if response.is_success:
                        logger.info("Email sent", attempt=attempt, subject=subject)
                        return

                    body = response.text[:200] if response.text else "No response body"
                    last_error = f"{response.status_code}: {body}"
                    if response.status_code != 429:
                        logger.error("Email provider rejected message", status_code=response.status_code, body=body)
                        raise EmailDeliveryError(last_error, response.status_code)
                    logger.warning("Email provider rate limit hit", attempt=attempt, max_attempts=self.max_attempts)

                if attempt < self.max_attempts:
                    await self._sleep(self.backoff_seconds(attempt))

        logger.error("Email send failed after all retries", attempts=self.max_attempts, error=last_error)
        raise EmailDeliveryError(last_error)
