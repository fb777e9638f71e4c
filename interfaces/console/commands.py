from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from domain.models import Role


# name -> (min args, max args)
_ARITY: Dict[str, Tuple[int, int]] = {
    "register": (3, 3),
    "login": (2, 2),
    "logout": (0, 1),
    "ban": (1, 1),
    "bets": (0, 0),
    "users": (0, 0),
    "whoami": (0, 0),
    "help": (0, 0),
}
# Commands whose single argument is the rest of the line.
_FREE_TEXT = {"bet"}

_ROLE_NAMES = {
    "admin": Role.ADMIN,
    "regular": Role.REGULAR_USER,
    "user": Role.REGULAR_USER,
}


@dataclass(frozen=True)
class Command:
    name: str
    args: Tuple[str, ...] = ()
    # Parsed role argument of `register` and `logout`.
    role: Optional[Role] = None


def parse_command(line: str) -> Command:
    """
    Parse one console line.

    Format: <name> [args...]. `bet` takes the rest of the line as its
    description; every other command takes whitespace-separated words.
    """

    text = line.strip()
    if not text:
        raise ValueError("Empty command.")

    head, _, rest = text.partition(" ")
    name = head.lower()

    if name in _FREE_TEXT:
        description = rest.strip()
        if not description:
            raise ValueError(f"Usage: {name} <description>")
        return Command(name=name, args=(description,))

    if name not in _ARITY:
        raise ValueError(f"Unknown command: {head}")

    args = tuple(rest.split())
    low, high = _ARITY[name]
    if not low <= len(args) <= high:
        raise ValueError(f"Wrong number of arguments for {name}: {len(args)}")

    role = None
    if name == "register":
        role = parse_role(args[2])
    elif name == "logout" and args:
        role = parse_role(args[0])

    return Command(name=name, args=args, role=role)


def parse_role(text: str) -> Role:
    try:
        return _ROLE_NAMES[text.lower()]
    except KeyError:
        raise ValueError(f"Invalid role: {text}") from None
