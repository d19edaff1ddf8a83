"""Transition tables for status-driven aggregates.

Orders, Jobs and Withdrawal Requests all follow the same shape: a closed
status enum plus a table of ``(from_status, role) -> allowed targets``.
Aggregates consult their table from a single ``transition()`` method
instead of scattering status checks across callers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Generic, TypeVar

from bazaar.domain.exceptions import InvalidTransitionError
from bazaar.domain.model.actor import Role

S = TypeVar("S", bound=Enum)


class TransitionTable(Generic[S]):

    def __init__(
        self,
        entity: str,
        rules: Mapping[tuple[S, Role], Iterable[S]],
        terminal: Iterable[S],
    ) -> None:
        self._entity = entity
        self._rules = {key: frozenset(targets) for key, targets in rules.items()}
        self._terminal = frozenset(terminal)

    def is_terminal(self, status: S) -> bool:
        return status in self._terminal

    def allowed(self, current: S, role: Role) -> frozenset[S]:
        """Destinations ``role`` may move to from ``current``."""
        if current in self._terminal:
            return frozenset()
        return self._rules.get((current, role), frozenset())

    def check(self, current: S, target: S, role: Role) -> None:
        """Raise InvalidTransitionError unless ``current -> target`` is legal."""
        if current in self._terminal:
            raise InvalidTransitionError(
                f"{self._entity} is already {current.value} and can no longer change"
            )
        if target == current:
            raise InvalidTransitionError(
                f"{self._entity} is already {current.value}"
            )
        if target not in self.allowed(current, role):
            options = sorted(s.value for s in self.allowed(current, role))
            hint = f" (allowed: {', '.join(options)})" if options else ""
            raise InvalidTransitionError(
                f"As {role.value} you cannot move {self._entity.lower()} from "
                f"{current.value} to {target.value}{hint}"
            )
