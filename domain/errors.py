from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """
    Base class for every failure the registry and services can report.

    Subclasses carry a default human-readable message so interface code can
    show `str(error)` without knowing the concrete kind.
    """

    default_message = "Authorization error."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class UsernameBusy(AuthError):
    default_message = "Username is already taken."


class UserDataIncorrect(AuthError):
    default_message = "Username or password is incorrect."


class UserNotExist(AuthError):
    default_message = "User does not exist."


class UserBanned(AuthError):
    default_message = "User is banned."


class PermissionDenied(AuthError):
    default_message = "Permission denied."


class StateError(AuthError):
    """Raised for a transition into the state the user is already in."""

    default_message = "User is already in that state."
