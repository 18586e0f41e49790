import logging
from typing import Optional

import httpx

from contact_relay.config.settings import RESEND_API_URL
from contact_relay.exceptions import EmailProviderError
from contact_relay.schemas.contact import EmailMessage

logger = logging.getLogger(__name__)


class ResendEmailService:
    """Sends transactional emails through the Resend API"""

    def __init__(
        self,
        api_key: str,
        api_url: str = RESEND_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.transport = transport

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send_email(self, message: EmailMessage) -> bool:
        """
        Send a single email

        Args:
            message: Email to deliver

        Returns:
            True once the provider accepted the message (2xx)

        Raises:
            EmailProviderError: non-2xx reply or the request never completed
        """
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                resp = await client.post(self.api_url, json=message.to_payload(), headers=self._get_headers())
        except httpx.HTTPError as exc:
            logger.error(f"HTTPS request to Resend failed: {exc}")
            raise EmailProviderError(cause=exc) from exc

        if 200 <= resp.status_code < 300:
            logger.info(f"Email sent successfully → {message.to}: {resp.text}")
            return True

        logger.error(f"Error sending email → {message.to}: {resp.status_code} {resp.text}")
        raise EmailProviderError(status_code=resp.status_code, body=resp.text)
