"""Port for the payment collaborator.

The engine computes what to charge and asks for a yes/no; how the money
actually moves is not its concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bazaar.domain.model.value_objects import Money


class PaymentGateway(ABC):

    @abstractmethod
    def confirm(self, buyer_id: str, amount: Money, reference: str) -> bool:
        """Charge ``amount`` to the buyer. True on success, False if declined."""
