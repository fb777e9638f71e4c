from __future__ import annotations

import logging
from typing import Optional

from domain.errors import PermissionDenied, UserNotExist
from domain.models import Role, State, User
from domain.repositories import UserRegistry


logger = logging.getLogger(__name__)


class SessionContext:
    """
    Tracks the currently active admin and the currently active regular user.

    Slots hold usernames only; records are always re-read from the registry.
    Putting someone new into an occupied slot forces the previous holder out:
    a logged-in holder is moved back to LOGGED_OUT through the registry, a
    banned one keeps its ban. Clearing a slot has no such side effect.
    """

    def __init__(self, registry: UserRegistry) -> None:
        self._registry = registry
        self._admin: Optional[str] = None
        self._regular_user: Optional[str] = None

    @property
    def current_admin(self) -> Optional[User]:
        return self._lookup(self._admin)

    @property
    def current_regular_user(self) -> Optional[User]:
        return self._lookup(self._regular_user)

    def activate(self, user: User) -> None:
        """Put `user` into the slot matching its role."""

        if user.role is Role.ADMIN:
            self.set_admin(user.username)
        else:
            self.set_regular_user(user.username)

    def set_admin(self, username: str) -> None:
        self._require_role(username, Role.ADMIN)
        if self._admin == username:
            return
        if self._admin is not None:
            self._evict(self._admin, "Admin")
        self._admin = username

    def set_regular_user(self, username: str) -> None:
        self._require_role(username, Role.REGULAR_USER)
        if self._regular_user == username:
            return
        if self._regular_user is not None:
            self._evict(self._regular_user, "User")
        self._regular_user = username

    def clear_admin(self) -> None:
        self._admin = None

    def clear_regular_user(self) -> None:
        self._regular_user = None

    def deactivate(self, username: str) -> None:
        """Empty whichever slot holds `username`, if any."""

        if self._admin == username:
            self.clear_admin()
        if self._regular_user == username:
            self.clear_regular_user()

    def _lookup(self, username: Optional[str]) -> Optional[User]:
        if username is None:
            return None
        return self._registry.get_user(username)

    def _require_role(self, username: str, role: Role) -> None:
        user = self._registry.get_user(username)
        if user is None:
            raise UserNotExist(f"User {username} does not exist.")
        if user.role is not role:
            raise PermissionDenied(f"User {username} cannot take the {role.value} session.")

    def _evict(self, username: str, label: str) -> None:
        previous = self._registry.get_user(username)
        # Banned and already logged-out holders keep their state.
        if previous is not None and previous.state is State.LOGGED_IN:
            self._registry.change_state(username, State.LOGGED_OUT)
        logger.info("%s %s logged out from system", label, username)
