from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Privilege class of an account. Assigned at registration, never changed."""

    ADMIN = "admin"
    REGULAR_USER = "regular"


class State(str, Enum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"
    BANNED = "banned"


@dataclass(frozen=True)
class User:
    """
    Domain representation of a registered account.

    Records are immutable snapshots. The registry that owns them is the
    only component allowed to produce a record with a different state, so
    a copy handed to a caller can never silently drift from the stored one.
    """

    username: str
    password: str
    role: Role
    state: State = State.LOGGED_OUT

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class Bet:
    """A free-text wager placed by a regular user."""

    description: str
