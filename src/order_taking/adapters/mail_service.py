"""
HTTP adapter — acknowledgment email delivery via a transactional mail API.

Implements the SendOrderAcknowledgment port with httpx's AsyncClient.
Delivery is best effort: any failure (non-2xx, timeout, network error after
retries) is logged and reported as NOT_SENT, never raised.
"""

from __future__ import annotations

import httpx
import structlog
from railway import ErrorCode, FailureDescription, Result
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from order_taking.domain.models import OrderAcknowledgment, SendResult

log = structlog.get_logger()


class HttpAcknowledgmentSender:
    """
    Send acknowledgment letters as HTML email.

    Implements the SendOrderAcknowledgment port.
    Uses tenacity retry on transient network errors only.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        sender: str,
        subject: str = "Your order has been received",
        timeout: int = 10,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._sender = sender
        self._subject = subject
        self._timeout = timeout

    async def __call__(self, acknowledgment: OrderAcknowledgment) -> SendResult:
        result = await Result.from_computation_async(
            lambda: self._do_send(acknowledgment),
            ErrorCode.EXTERNAL_SERVICE_ERROR,
            "Acknowledgment email delivery failed",
        )
        return result.either(on_success=self._sent, on_failure=self._not_sent)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=0.1, max=30),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _do_send(self, acknowledgment: OrderAcknowledgment) -> int:
        """HTTP POST with retry — exceptions caught by from_computation_async."""
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "from": self._sender,
                    "to": acknowledgment.email_address.value,
                    "subject": self._subject,
                    "html": acknowledgment.letter.value,
                },
            )
            response.raise_for_status()
            return response.status_code

    @staticmethod
    def _sent(status: int) -> SendResult:
        log.info("acknowledgment.sent", status=status)
        return SendResult.SENT

    @staticmethod
    def _not_sent(failure: FailureDescription) -> SendResult:
        log.warning(
            "acknowledgment.not_sent",
            error=failure.message,
            cause=repr(failure.exception),
        )
        return SendResult.NOT_SENT
