"""
HTTP adapter — address existence check via a remote address-validation service.

Implements the CheckAddressExists port with httpx's AsyncClient.

Request:  POST {url}  Authorization: Bearer {api_key}  JSON body with the raw address.
Response mapping:
  2xx (body {"exists": false} counts as not found) → Success(CheckedAddress)
  404                                              → AddressNotFound
  400 / 422                                        → AddressInvalidFormat(detail)
  401 / 403                                        → ServiceError(AUTHENTICATION_ERROR)
  429                                              → ServiceError(RATE_LIMIT_ERROR)
  503                                              → ServiceError(SERVICE_UNAVAILABLE_ERROR)
  other status                                     → ServiceError(EXTERNAL_SERVICE_ERROR)
  timeout                                          → ServiceError(TIMEOUT_ERROR)
  network failure                                  → ServiceError(EXTERNAL_SERVICE_ERROR)
  invalid URL                                      → ServiceError(CONFIGURATION_ERROR)

Retry/backoff via tenacity on transient errors (network, timeout) only.
No exception leaks to the workflow.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from railway import ErrorCode, FailureDescription, Result
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from order_taking.domain.errors import (
    AddressCheckError,
    AddressInvalidFormat,
    AddressNotFound,
    ServiceError,
    ServiceInfo,
)
from order_taking.domain.models import CheckedAddress, UnvalidatedAddress

log = structlog.get_logger()

_STATUS_CODES: dict[int, ErrorCode] = {
    401: ErrorCode.AUTHENTICATION_ERROR,
    403: ErrorCode.AUTHENTICATION_ERROR,
    429: ErrorCode.RATE_LIMIT_ERROR,
    503: ErrorCode.SERVICE_UNAVAILABLE_ERROR,
}


def _address_payload(address: UnvalidatedAddress) -> dict[str, Any]:
    return {
        "addressLine1": address.address_line1,
        "addressLine2": address.address_line2,
        "addressLine3": address.address_line3,
        "addressLine4": address.address_line4,
        "city": address.city,
        "zipCode": address.zip_code,
        "state": address.state,
        "country": address.country,
    }


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class HttpAddressChecker:
    """
    Confirm addresses against the address-validation endpoint.

    Implements the CheckAddressExists port.
    """

    def __init__(self, url: str, api_key: str, timeout: int = 10) -> None:
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._service = ServiceInfo(name="AddressCheckingService", endpoint=url)

    async def __call__(self, address: UnvalidatedAddress) -> Result[CheckedAddress, AddressCheckError]:
        try:
            response = await self._do_check(address)
        except httpx.TimeoutException as e:
            return self._service_failure(ErrorCode.TIMEOUT_ERROR, "Address check timed out", e)
        except httpx.HTTPError as e:
            return self._service_failure(ErrorCode.EXTERNAL_SERVICE_ERROR, "Address check request failed", e)
        except httpx.InvalidURL as e:
            return self._service_failure(ErrorCode.CONFIGURATION_ERROR, "Address service URL is invalid", e)
        return self._interpret(response, address)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=0.1, max=30),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _do_check(self, address: UnvalidatedAddress) -> httpx.Response:
        """HTTP call with retry — transport exceptions are mapped by the caller."""
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=_address_payload(address),
            )

    def _interpret(
        self, response: httpx.Response, address: UnvalidatedAddress
    ) -> Result[CheckedAddress, AddressCheckError]:
        status = response.status_code
        if response.is_success:
            if _json_body(response).get("exists", True) is False:
                log.info("address_check.not_found", status=status)
                return Result.failure(AddressNotFound())
            log.info("address_check.confirmed", status=status)
            return Result.success(CheckedAddress(address))
        if status == 404:
            log.info("address_check.not_found", status=status)
            return Result.failure(AddressNotFound())
        if status in (400, 422):
            reason = _json_body(response).get("detail") or response.text or "rejected by address service"
            log.info("address_check.invalid_format", status=status)
            return Result.failure(AddressInvalidFormat(reason=str(reason)))
        code = _STATUS_CODES.get(status, ErrorCode.EXTERNAL_SERVICE_ERROR)
        return self._service_failure(code, f"Address service responded with HTTP {status}")

    def _service_failure(
        self, code: ErrorCode, message: str, exception: BaseException | None = None
    ) -> Result[CheckedAddress, AddressCheckError]:
        log.warning("address_check.service_error", code=code.value, message=message)
        return Result.failure(
            ServiceError(self._service, FailureDescription(code, message, exception))
        )
