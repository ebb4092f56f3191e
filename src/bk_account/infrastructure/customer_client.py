"""CustomerClient — HTTP adapter for the customer-identity service.

Implements CustomerValidatorProtocol. Every failure mode (unknown customer,
inactive customer, timeout, transport error, unexpected status, malformed
body) surfaces as CustomerValidationError so account creation never persists
an account for an unverified owner.
"""

import logging

import httpx

from config.settings import settings
from src.bk_account.domain.models import CustomerInfo
from src.bk_common.errors import CustomerValidationError

logger = logging.getLogger(__name__)


class CustomerClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url or settings.CUSTOMER_SERVICE_URL
        self._timeout = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.CUSTOMER_SERVICE_TIMEOUT_SECONDS
        )
        self._transport = transport

    async def _fetch(self, customer_id: int) -> CustomerInfo:
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                resp = await client.get(f"/api/v1/customers/{customer_id}")
            except httpx.HTTPError as exc:
                logger.error("Error calling customer service for %s: %s", customer_id, exc)
                raise CustomerValidationError(
                    f"Unable to validate customer with ID: {customer_id}"
                ) from exc

        if resp.status_code == httpx.codes.NOT_FOUND:
            raise CustomerValidationError(f"Customer not found with ID: {customer_id}")
        if resp.is_error:
            logger.error(
                "Customer service returned %d for customer %s", resp.status_code, customer_id
            )
            raise CustomerValidationError(f"Unable to validate customer with ID: {customer_id}")

        try:
            body = resp.json()
            status = body["status"]
            if not isinstance(status, bool):
                raise TypeError(f"status must be a boolean, got {status!r}")
            return CustomerInfo(
                customer_id=int(body.get("customer_id", customer_id)),
                name=body.get("name"),
                active=status,
            )
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Malformed customer payload for %s: %s", customer_id, exc)
            raise CustomerValidationError(
                f"Unable to validate customer with ID: {customer_id}"
            ) from exc

    async def validate_customer(self, customer_id: int) -> bool:
        logger.info("Validating customer with ID: %s", customer_id)
        customer = await self._fetch(customer_id)
        if not customer.active:
            raise CustomerValidationError(f"Customer is inactive with ID: {customer_id}")
        logger.info("Customer validated successfully: %s", customer_id)
        return True

    async def get_customer(self, customer_id: int) -> CustomerInfo:
        logger.info("Fetching customer details for ID: %s", customer_id)
        return await self._fetch(customer_id)
