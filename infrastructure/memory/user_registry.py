from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

from domain.errors import PermissionDenied, StateError, UsernameBusy, UserNotExist
from domain.models import Role, State, User
from domain.repositories import UserRegistry


class InMemoryUserRegistry(UserRegistry):
    """
    Process-local implementation of `UserRegistry`.

    Records live in a dict keyed by username and are replaced, never
    mutated, when their state changes. Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def _is_unique(self, username: str) -> bool:
        return username not in self._users

    def add_user(self, user: User) -> None:
        if not self._is_unique(user.username):
            raise UsernameBusy(f"Username {user.username} is busy.")
        self._users[user.username] = user

    def get_user(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def get_all_users(self) -> List[User]:
        return list(self._users.values())

    def list_regular_users(self) -> List[User]:
        return [u for u in self._users.values() if u.role is Role.REGULAR_USER]

    def change_state(self, username: str, state: State) -> User:
        user = self._users.get(username)
        if user is None:
            raise UserNotExist(f"User {username} does not exist.")

        if user.is_admin and state is State.BANNED:
            raise PermissionDenied(f"Admin {username} cannot be banned.")

        if user.state is state:
            raise StateError(f"User {username} is already {state.value}.")

        updated = replace(user, state=state)
        self._users[username] = updated
        return updated
