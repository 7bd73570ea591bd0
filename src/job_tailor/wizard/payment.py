"""Simulated checkout.

There is no payment provider behind this: a submission waits a fixed delay
and is always accepted. Replace before taking real payments.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from pydantic import BaseModel

from job_tailor.errors import PaymentDetailsError

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 2.0


class PaymentDetails(BaseModel):
    cardholder_name: str = ""
    card_number: str = ""
    expiry: str = ""
    cvc: str = ""

    def missing_fields(self) -> list[str]:
        return [name for name, value in self.model_dump().items() if not value.strip()]


class PaymentGate:
    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self.processing = False

    async def charge(self, details: PaymentDetails) -> bool:
        """Run one simulated charge.

        Returns False without waiting when a charge is already processing.
        Raises PaymentDetailsError when a card field is blank.
        """
        if self.processing:
            logger.debug("Ignoring payment submit while one is processing")
            return False
        missing = details.missing_fields()
        if missing:
            raise PaymentDetailsError(missing)

        self.processing = True
        try:
            await self._sleep(self.delay_seconds)
        finally:
            self.processing = False
        logger.info("Simulated payment accepted")
        return True
