from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Bet, State, User


class UserRegistry(Protocol):
    """
    Abstraction over the store of registered accounts.

    Implementations are the single writer of `User` records:
    - Usernames are unique keys.
    - Every state change happens by key through `change_state`; callers never
      mutate a record they were handed.
    """

    def add_user(self, user: User) -> None:
        """
        Store a new user.

        Raises `UsernameBusy` if the username is already registered.
        """

        ...

    def get_user(self, username: str) -> Optional[User]:
        """Return the user with the given username, or None if not found."""

        ...

    def get_all_users(self) -> List[User]:
        """Return every registered user, admins included, in no particular order."""

        ...

    def list_regular_users(self) -> List[User]:
        """Return all users with the regular-user role, in no particular order."""

        ...

    def change_state(self, username: str, state: State) -> User:
        """
        Move a user into `state` and return the updated record.

        Checks, in order:
        - `UserNotExist` if the username is unknown.
        - `PermissionDenied` when banning an admin.
        - `StateError` when `state` is the user's current state.
        """

        ...


class BetLedger(Protocol):
    """
    Append-only store of bets keyed by username.
    """

    def append_bet(self, username: str, bet: Bet) -> None:
        ...

    def list_bets(self, username: str) -> List[Bet]:
        """Return the user's bets in insertion order; empty if there are none."""

        ...
