"""Caller identity as supplied by the identity collaborator.

The engine trusts this and does not re-authenticate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bazaar.domain.exceptions import ValidationError


class Role(Enum):
    CUSTOMER = "customer"
    BUSINESS = "business"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """Who is calling.

    ``profile_id`` is the customer id for customers and the business id
    for businesses. Admins act on behalf of the platform.
    """

    user_id: str
    role: Role
    profile_id: str

    def __post_init__(self) -> None:
        if not self.user_id or not self.profile_id:
            raise ValidationError("Actor requires a user id and a profile id")

    @staticmethod
    def customer(customer_id: str, user_id: str | None = None) -> Actor:
        return Actor(user_id=user_id or customer_id, role=Role.CUSTOMER, profile_id=customer_id)

    @staticmethod
    def business(business_id: str, user_id: str | None = None) -> Actor:
        return Actor(user_id=user_id or business_id, role=Role.BUSINESS, profile_id=business_id)

    @staticmethod
    def admin(user_id: str) -> Actor:
        return Actor(user_id=user_id, role=Role.ADMIN, profile_id=user_id)

    def require(self, role: Role, action: str) -> None:
        """Raise ValidationError unless this actor holds ``role``."""
        if self.role != role:
            raise ValidationError(
                f"Only {_article(role.value)} {role.value} can {action} "
                f"(you are signed in as {self.role.value})"
            )


def _article(word: str) -> str:
    return "an" if word[:1] in "aeiou" else "a"
