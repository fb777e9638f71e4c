import logging
import sys

from application.services import register_user
from application.session import SessionContext
from config import get_settings
from domain.models import Role
from infrastructure.memory.bet_ledger import InMemoryBetLedger
from infrastructure.memory.user_registry import InMemoryUserRegistry
from interfaces.console.handlers import create_console


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)

    registry = InMemoryUserRegistry()
    ledger = InMemoryBetLedger()
    session = SessionContext(registry)

    if settings.bootstrap_admin:
        register_user(
            settings.bootstrap_admin_username,
            settings.bootstrap_admin_password,
            Role.ADMIN,
            registry,
        )

    console = create_console(registry, ledger, session)
    print("Betting desk ready. Type help to see available commands.")
    for line in sys.stdin:
        if not line.strip():
            continue
        for reply in console.dispatch(line):
            print(reply)


if __name__ == "__main__":
    main()
