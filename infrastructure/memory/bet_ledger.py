from __future__ import annotations

from typing import Dict, List

from domain.models import Bet
from domain.repositories import BetLedger


class InMemoryBetLedger(BetLedger):
    """Process-local `BetLedger`; a list of bets per username."""

    def __init__(self) -> None:
        self._bets: Dict[str, List[Bet]] = {}

    def append_bet(self, username: str, bet: Bet) -> None:
        self._bets.setdefault(username, []).append(bet)

    def list_bets(self, username: str) -> List[Bet]:
        return list(self._bets.get(username, []))
