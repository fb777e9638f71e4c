from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from domain.errors import (
    AuthError,
    PermissionDenied,
    StateError,
    UserBanned,
    UserDataIncorrect,
    UsernameBusy,
    UserNotExist,
)
from domain.models import Bet, Role, State, User
from domain.repositories import BetLedger, UserRegistry

from .session import SessionContext


logger = logging.getLogger(__name__)


BAN = "ban"
LIST_USERS = "list_users"
PLACE_BET = "place_bet"
SHOW_BETS = "show_bets"

# Role-specific behaviour is looked up on the role tag rather than on a
# subclass per kind of user.
CAPABILITIES: Dict[Role, FrozenSet[str]] = {
    Role.ADMIN: frozenset({BAN, LIST_USERS}),
    Role.REGULAR_USER: frozenset({PLACE_BET, SHOW_BETS}),
}


@dataclass
class OperationResult:
    """
    Generic result type for simple operations.

    `already_active` is set when a login/logout found the user already in
    the requested state; the operation still counts as a success.
    """

    success: bool
    error: Optional[AuthError] = None
    already_active: bool = False

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error else None


@dataclass
class LoginResult(OperationResult):
    """Result of a login attempt; `user` is the fresh record on success."""

    user: Optional[User] = None


@dataclass
class UserListing(OperationResult):
    users: List[User] = field(default_factory=list)


@dataclass
class BetListing(OperationResult):
    bets: List[Bet] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.bets


def has_capability(role: Role, capability: str) -> bool:
    return capability in CAPABILITIES.get(role, frozenset())


def _check_capability(
    actor: User,
    capability: str,
    registry: UserRegistry,
) -> Optional[AuthError]:
    # Role and state come from the registry, not from the caller's snapshot.
    current = registry.get_user(actor.username)
    if current is None:
        return UserNotExist(f"User {actor.username} does not exist.")
    if not has_capability(current.role, capability):
        return PermissionDenied(f"{current.username} is not allowed to {capability.replace('_', ' ')}.")
    if current.state is not State.LOGGED_IN:
        return PermissionDenied(f"{current.username} must be logged in.")
    return None


def _failure(error: AuthError, action: str) -> OperationResult:
    logger.warning("%s failed: %s", action, error)
    return OperationResult(success=False, error=error)


# --- Authorization -----------------------------------------------------------


def register_user(
    username: str,
    password: str,
    role: Role,
    registry: UserRegistry,
) -> OperationResult:
    """
    Register a new account in the LOGGED_OUT state.

    A busy username is reported through the result; it never propagates.
    """

    user = User(username=username, password=password, role=role)
    try:
        registry.add_user(user)
    except UsernameBusy as exc:
        logger.warning("Username %s is busy! Try another username", username)
        return OperationResult(success=False, error=exc)

    logger.info("New %s %s registered", role.value, username)
    return OperationResult(success=True)


def login(username: str, password: str, registry: UserRegistry) -> LoginResult:
    """
    Verify credentials and move the user to LOGGED_IN.

    - Unknown user, banned user and wrong password are failed results.
    - Matching credentials for a user who is already logged in still give a
      successful result, flagged with `already_active`.
    """

    user = registry.get_user(username)
    error: Optional[AuthError] = None
    if user is None:
        error = UserNotExist(f"User {username} does not exist.")
    elif user.state is State.BANNED:
        error = UserBanned(f"User {username} is banned.")
    elif user.password != password:
        error = UserDataIncorrect()

    if error is not None:
        logger.warning("Login of %s failed: %s", username, error)
        return LoginResult(success=False, error=error)

    try:
        user = registry.change_state(username, State.LOGGED_IN)
    except StateError:
        logger.info("User %s has already logged in", username)
        return LoginResult(success=True, user=user, already_active=True)
    except AuthError as exc:
        logger.warning("Login of %s failed: %s", username, exc)
        return LoginResult(success=False, error=exc)

    logger.info("User %s successfully logged in", username)
    return LoginResult(success=True, user=user)


def logout(username: str, registry: UserRegistry) -> OperationResult:
    """
    Move the user back to LOGGED_OUT.

    Logging out twice is benign; a successful result is where callers clear
    the session slot.
    """

    user = registry.get_user(username)
    if user is not None and user.state is State.BANNED:
        return _failure(UserBanned(f"User {username} is banned."), f"Logout of {username}")

    try:
        registry.change_state(username, State.LOGGED_OUT)
    except StateError:
        logger.info("User %s has already logged out", username)
        return OperationResult(success=True, already_active=True)
    except AuthError as exc:
        return _failure(exc, f"Logout of {username}")

    logger.info("User %s logged out", username)
    return OperationResult(success=True)


# --- Admin capabilities ------------------------------------------------------


def ban_user(
    actor: User,
    username: str,
    registry: UserRegistry,
    session: SessionContext,
) -> OperationResult:
    """
    Ban `username` on behalf of the admin `actor`.

    The banned user is dropped from the session without the eviction side
    effect, so the ban is kept.
    """

    error = _check_capability(actor, BAN, registry)
    if error:
        return _failure(error, f"Ban of {username}")

    try:
        registry.change_state(username, State.BANNED)
    except AuthError as exc:
        return _failure(exc, f"Ban of {username}")

    session.deactivate(username)
    logger.info("Admin %s banned %s", actor.username, username)
    return OperationResult(success=True)


def list_regular_users(actor: User, registry: UserRegistry) -> UserListing:
    error = _check_capability(actor, LIST_USERS, registry)
    if error:
        logger.warning("Listing users failed: %s", error)
        return UserListing(success=False, error=error)

    return UserListing(success=True, users=registry.list_regular_users())


# --- Regular-user capabilities -----------------------------------------------


def take_bet(
    actor: User,
    description: str,
    ledger: BetLedger,
    registry: UserRegistry,
) -> OperationResult:
    """Record a bet placed by the regular user `actor`."""

    error = _check_capability(actor, PLACE_BET, registry)
    if error:
        return _failure(error, "Placing bet")

    ledger.append_bet(actor.username, Bet(description=description))
    logger.info("User %s placed bet: %s", actor.username, description)
    return OperationResult(success=True)


def show_bets(actor: User, ledger: BetLedger, registry: UserRegistry) -> BetListing:
    error = _check_capability(actor, SHOW_BETS, registry)
    if error:
        logger.warning("Showing bets failed: %s", error)
        return BetListing(success=False, error=error)

    return BetListing(success=True, bets=ledger.list_bets(actor.username))
