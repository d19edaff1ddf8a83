"""Payment collaborator used when no real gateway is wired in.

Approves every charge and logs it, which matches pay-on-delivery and
local development. A real gateway implements the same PaymentGateway port.
"""

from __future__ import annotations

import logging

from bazaar.domain.model.value_objects import Money
from bazaar.domain.service.payment import PaymentGateway

logger = logging.getLogger(__name__)


class ApprovingPaymentGateway(PaymentGateway):

    def confirm(self, buyer_id: str, amount: Money, reference: str) -> bool:
        logger.info("Payment %s of %s for buyer %s approved", reference, amount, buyer_id)
        return True
