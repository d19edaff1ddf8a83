"""Caller identity for CLI commands.

The CLI stands in for the identity collaborator: whoever runs it says who
they are with ``--role``/``--profile`` and the engine takes their word.
"""

from __future__ import annotations

from dataclasses import dataclass

import click

from bazaar.application.cart_session import CartSession
from bazaar.domain.model.actor import Actor, Role
from bazaar.infrastructure.bootstrap import cart_repository, device_cart_repository


@dataclass(frozen=True)
class Identity:
    role: Role
    profile_id: str | None
    user_id: str | None
    device_id: str

    def actor(self) -> Actor:
        if not self.profile_id:
            raise click.ClickException(
                f"Sign in first: pass --profile with your {self.role.value} id"
            )
        return Actor(
            user_id=self.user_id or self.profile_id,
            role=self.role,
            profile_id=self.profile_id,
        )

    def cart_session(self) -> CartSession:
        """Device cart when anonymous; a signed-in customer's cart otherwise.

        Signing in merges whatever is in the device cart first.
        """
        session = CartSession(
            anonymous_repo=device_cart_repository(),
            persisted_repo=cart_repository(),
            device_id=self.device_id,
        )
        if self.role == Role.CUSTOMER and self.profile_id:
            merged = session.authenticate(self.profile_id)
            if merged:
                click.echo(f"Moved {merged} item(s) from this device into your cart.")
        return session


pass_identity = click.make_pass_decorator(Identity)
