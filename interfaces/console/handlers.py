from __future__ import annotations

from typing import Callable, Dict, List

from application.services import (
    ban_user,
    list_regular_users,
    login,
    logout,
    register_user,
    show_bets,
    take_bet,
)
from application.session import SessionContext
from domain.models import Role, User
from domain.repositories import BetLedger, UserRegistry
from interfaces.console.commands import Command, parse_command


Handler = Callable[[Command], List[str]]

HELP_TEXT = [
    "register <username> <password> <admin|regular> - create an account",
    "login <username> <password>                    - log in",
    "logout [admin|user]                            - log out of a session slot",
    "bet <description>                              - place a bet (regular user)",
    "bets                                           - show your bets (regular user)",
    "users                                          - list regular users (admin)",
    "ban <username>                                 - ban a user (admin)",
    "whoami                                         - show active sessions",
]


def _format_user(user: User) -> str:
    return f"Username: {user.username}, state: {user.state.value}"


class Console:
    """Maps text commands to handlers and returns their reply lines."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def command(self, name: str) -> Callable[[Handler], Handler]:
        def decorator(func: Handler) -> Handler:
            self._handlers[name] = func
            return func

        return decorator

    def dispatch(self, line: str) -> List[str]:
        try:
            cmd = parse_command(line)
        except ValueError as exc:
            return [str(exc), "Type help to see available commands."]

        return self._handlers[cmd.name](cmd)


def create_console(
    registry: UserRegistry,
    ledger: BetLedger,
    session: SessionContext,
) -> Console:
    """
    Configure and return a `Console` wired to the application layer.

    This module contains only console concerns: turning parsed commands into
    service calls and results into reply lines. Session slots are updated
    here, from login and logout outcomes.
    """

    console = Console()

    @console.command("help")
    def handle_help(cmd: Command) -> List[str]:
        return list(HELP_TEXT)

    @console.command("register")
    def handle_register(cmd: Command) -> List[str]:
        username, password, _ = cmd.args
        result = register_user(username, password, cmd.role, registry)
        if not result.success:
            return [result.error_message]
        return [f"New {cmd.role.value} {username} registered."]

    @console.command("login")
    def handle_login(cmd: Command) -> List[str]:
        username, password = cmd.args
        result = login(username, password, registry)
        if not result.success:
            return [result.error_message]

        session.activate(result.user)
        if result.already_active:
            return [f"{username} is already logged in."]
        return [f"Welcome, {username}."]

    @console.command("logout")
    def handle_logout(cmd: Command) -> List[str]:
        if cmd.role is not None:
            user = session.current_admin if cmd.role is Role.ADMIN else session.current_regular_user
        else:
            user = session.current_regular_user or session.current_admin

        if user is None:
            return ["Nobody to log out."]

        result = logout(user.username, registry)
        if not result.success:
            return [result.error_message]

        session.deactivate(user.username)
        return [f"{user.username} logged out."]

    @console.command("bet")
    def handle_bet(cmd: Command) -> List[str]:
        user = session.current_regular_user
        if user is None:
            return ["Log in as a regular user first."]

        result = take_bet(user, cmd.args[0], ledger, registry)
        if not result.success:
            return [result.error_message]
        return [f"User {user.username} placed bet: {cmd.args[0]}"]

    @console.command("bets")
    def handle_bets(cmd: Command) -> List[str]:
        user = session.current_regular_user
        if user is None:
            return ["Log in as a regular user first."]

        listing = show_bets(user, ledger, registry)
        if not listing.success:
            return [listing.error_message]
        if listing.is_empty:
            return ["Bets empty."]
        return [f"{user.username} bets:"] + [bet.description for bet in listing.bets]

    @console.command("users")
    def handle_users(cmd: Command) -> List[str]:
        admin = session.current_admin
        if admin is None:
            return ["Log in as an admin first."]

        listing = list_regular_users(admin, registry)
        if not listing.success:
            return [listing.error_message]

        lines = ["All regular users:"]
        lines.extend(_format_user(u) for u in sorted(listing.users, key=lambda u: u.username))
        return lines

    @console.command("ban")
    def handle_ban(cmd: Command) -> List[str]:
        admin = session.current_admin
        if admin is None:
            return ["Log in as an admin first."]

        target = cmd.args[0]
        result = ban_user(admin, target, registry, session)
        if not result.success:
            return [result.error_message]
        return [f"Admin {admin.username} banned {target}."]

    @console.command("whoami")
    def handle_whoami(cmd: Command) -> List[str]:
        admin = session.current_admin
        user = session.current_regular_user
        lines = []
        if admin is not None:
            lines.append(f"Admin: {admin.username}")
        if user is not None:
            lines.append(f"User: {user.username}")
        return lines or ["Nobody is logged in."]

    return console
