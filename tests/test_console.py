import unittest

from application.session import SessionContext
from domain.models import Role, State
from infrastructure.memory.bet_ledger import InMemoryBetLedger
from infrastructure.memory.user_registry import InMemoryUserRegistry
from interfaces.console.commands import Command, parse_command, parse_role
from interfaces.console.handlers import create_console


class ParseCommandTests(unittest.TestCase):
    def test_parse_register(self):
        cmd = parse_command("register Alex 123 regular")
        self.assertEqual(
            cmd,
            Command(name="register", args=("Alex", "123", "regular"), role=Role.REGULAR_USER),
        )

    def test_logout_target_is_parsed_once(self):
        self.assertIs(parse_command("logout Admin").role, Role.ADMIN)
        self.assertIsNone(parse_command("logout").role)
        self.assertIsNone(parse_command("login Alex 123").role)

    def test_command_name_is_case_insensitive(self):
        self.assertEqual(parse_command("  LOGIN Alex 123 ").name, "login")

    def test_bet_takes_rest_of_line(self):
        cmd = parse_command("bet To me or to u")
        self.assertEqual(cmd.args, ("To me or to u",))

    def test_invalid_input(self):
        for line in (
            "",
            "   ",
            "fly away",
            "login Alex",
            "register Alex 123 superuser",
            "bet",
            "logout everyone",
            "whoami now",
        ):
            with self.subTest(line=line):
                with self.assertRaises(ValueError):
                    parse_command(line)

    def test_parse_role(self):
        self.assertIs(parse_role("admin"), Role.ADMIN)
        self.assertIs(parse_role("Regular"), Role.REGULAR_USER)
        with self.assertRaises(ValueError):
            parse_role("root")


class ConsoleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = InMemoryUserRegistry()
        self.ledger = InMemoryBetLedger()
        self.session = SessionContext(self.registry)
        self.console = create_console(self.registry, self.ledger, self.session)
        self.console.dispatch("register Alex 123 regular")
        self.console.dispatch("register Admin 234 admin")

    def test_unknown_command_replies_with_usage(self):
        replies = self.console.dispatch("dance")
        self.assertEqual(replies[0], "Unknown command: dance")
        self.assertIn("help", replies[1])

    def test_help_lists_commands(self):
        replies = self.console.dispatch("help")
        self.assertTrue(any(line.startswith("ban ") for line in replies))

    def test_register_busy_username(self):
        replies = self.console.dispatch("register Alex 999 admin")
        self.assertEqual(replies, ["Username Alex is busy."])

    def test_login_updates_session(self):
        self.assertEqual(self.console.dispatch("login Alex 123"), ["Welcome, Alex."])
        self.assertEqual(self.console.dispatch("login Alex 123"), ["Alex is already logged in."])
        self.assertEqual(self.console.dispatch("whoami"), ["User: Alex"])

    def test_login_failure_is_reported(self):
        replies = self.console.dispatch("login Alex nope")
        self.assertEqual(replies, ["Username or password is incorrect."])
        self.assertEqual(self.console.dispatch("whoami"), ["Nobody is logged in."])

    def test_logout_clears_session(self):
        self.console.dispatch("login Alex 123")
        self.console.dispatch("login Admin 234")

        self.assertEqual(self.console.dispatch("logout user"), ["Alex logged out."])
        self.assertIs(self.registry.get_user("Alex").state, State.LOGGED_OUT)
        self.assertEqual(self.console.dispatch("whoami"), ["Admin: Admin"])

        self.assertEqual(self.console.dispatch("logout"), ["Admin logged out."])
        self.assertEqual(self.console.dispatch("logout"), ["Nobody to log out."])

    def test_bets_require_regular_session(self):
        self.assertEqual(self.console.dispatch("bet hello"), ["Log in as a regular user first."])

        self.console.dispatch("login Alex 123")
        self.assertEqual(self.console.dispatch("bets"), ["Bets empty."])
        self.console.dispatch("bet To me or to u")
        self.assertEqual(self.console.dispatch("bets"), ["Alex bets:", "To me or to u"])

    def test_admin_commands(self):
        self.assertEqual(self.console.dispatch("users"), ["Log in as an admin first."])

        self.console.dispatch("register Vasya 234 regular")
        self.console.dispatch("login Alex 123")
        self.console.dispatch("login Admin 234")

        self.assertEqual(
            self.console.dispatch("users"),
            [
                "All regular users:",
                "Username: Alex, state: logged_in",
                "Username: Vasya, state: logged_out",
            ],
        )

        self.assertEqual(self.console.dispatch("ban Alex"), ["Admin Admin banned Alex."])
        self.assertEqual(self.console.dispatch("whoami"), ["Admin: Admin"])
        self.assertEqual(self.console.dispatch("ban Admin"), ["Admin Admin cannot be banned."])
        self.assertEqual(self.console.dispatch("login Alex 123"), ["User Alex is banned."])


if __name__ == "__main__":
    unittest.main()
