from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .bets import (
    AlabamaBet,
    Bet,
    BetFormat,
    DoDaBet,
    FourBallMatchBet,
    IndividualMatchBet,
    SkinsBet,
)
from .scoresheet import Player, ScoreSheet, TeeBox

logger = logging.getLogger(__name__)


class BetNotFound(Exception):
    pass


class BetRegistry:
    """Owned collection of live bet instances keyed by bet id.

    Bets are immutable; add, remove and freeze are the only mutators. A
    settlement pass works from ``snapshot()`` so concurrent edits never leak
    into a calculation that is already running.
    """

    def __init__(self, bets: Iterable[Bet] = ()) -> None:
        self._bets: Dict[str, Bet] = {}
        self._lock = Lock()
        for bet in bets:
            self.add(bet)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bets)

    def add(self, bet: Bet) -> Bet:
        with self._lock:
            if bet.id in self._bets:
                raise ValueError(f"bet {bet.id} already registered")
            self._bets[bet.id] = bet
        logger.info("registered %s bet %s", bet.bet_format.value, bet.id)
        return bet

    def add_individual(
        self,
        *,
        player1: Player,
        player2: Player,
        per_hole_amount: float,
        per_birdie_amount: float = 0.0,
        press_on_9_and_18: bool = False,
    ) -> IndividualMatchBet:
        bet = IndividualMatchBet(
            player1=player1,
            player2=player2,
            per_hole_amount=per_hole_amount,
            per_birdie_amount=per_birdie_amount,
            press_on_9_and_18=press_on_9_and_18,
        )
        self.add(bet)
        return bet

    def add_four_ball(
        self,
        *,
        team1: Tuple[Player, Player],
        team2: Tuple[Player, Player],
        per_hole_amount: float,
        per_birdie_amount: float = 0.0,
        press_on_9_and_18: bool = False,
    ) -> FourBallMatchBet:
        bet = FourBallMatchBet(
            team1=team1,
            team2=team2,
            per_hole_amount=per_hole_amount,
            per_birdie_amount=per_birdie_amount,
            press_on_9_and_18=press_on_9_and_18,
        )
        self.add(bet)
        return bet

    def add_alabama(
        self,
        *,
        teams: Sequence[Sequence[Player]],
        counting_scores: int,
        front_nine_amount: float = 0.0,
        back_nine_amount: float = 0.0,
        low_ball_amount: float = 0.0,
        per_birdie_amount: float = 0.0,
        swing_man: Optional[Player] = None,
    ) -> AlabamaBet:
        bet = AlabamaBet(
            teams=[list(team) for team in teams],
            swing_man=swing_man,
            counting_scores=counting_scores,
            front_nine_amount=front_nine_amount,
            back_nine_amount=back_nine_amount,
            low_ball_amount=low_ball_amount,
            per_birdie_amount=per_birdie_amount,
        )
        self.add(bet)
        return bet

    def add_doda(
        self, *, players: Sequence[Player], amount: float, is_pool: bool = True
    ) -> DoDaBet:
        bet = DoDaBet(players=list(players), amount=amount, is_pool=is_pool)
        self.add(bet)
        return bet

    def add_skins(self, *, players: Sequence[Player], amount: float) -> SkinsBet:
        bet = SkinsBet(players=list(players), amount=amount)
        self.add(bet)
        return bet

    def get(self, bet_id: str) -> Optional[Bet]:
        with self._lock:
            return self._bets.get(bet_id)

    def remove(self, bet_id: str) -> Bet:
        with self._lock:
            bet = self._bets.pop(bet_id, None)
        if bet is None:
            raise BetNotFound(bet_id)
        logger.info("removed %s bet %s", bet.bet_format.value, bet_id)
        return bet

    def freeze(self, bet_id: str, scores: ScoreSheet, tee_box: TeeBox) -> Bet:
        """Pin a bet to its own copy of the score sheet and tee box."""

        with self._lock:
            bet = self._bets.get(bet_id)
            if bet is None:
                raise BetNotFound(bet_id)
            frozen = bet.with_snapshot(scores, tee_box)
            self._bets[bet_id] = frozen
        return frozen

    def list_bets(self, fmt: BetFormat | str | None = None) -> List[Bet]:
        with self._lock:
            bets = list(self._bets.values())
        if fmt is None:
            return bets
        wanted = BetFormat(fmt)
        return [bet for bet in bets if bet.bet_format is wanted]

    def snapshot(self) -> Tuple[Bet, ...]:
        with self._lock:
            return tuple(self._bets.values())

    def players(self) -> List[Player]:
        """Everyone seated in at least one bet, ordered by first name."""

        seen: Dict[str, Player] = {}
        for bet in self.snapshot():
            for player in bet.participants():
                seen.setdefault(player.id, player)
        return sorted(seen.values(), key=lambda player: player.first_name)

    def clear(self) -> None:
        with self._lock:
            self._bets.clear()


__all__ = ["BetNotFound", "BetRegistry"]
