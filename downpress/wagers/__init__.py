"""Golf side-wager settlement engine."""

from .bets import (
    HEAD_TO_HEAD_FORMATS,
    AlabamaBet,
    Bet,
    BetFormat,
    DoDaBet,
    FourBallMatchBet,
    IndividualMatchBet,
    SkinsBet,
)
from .registry import BetNotFound, BetRegistry
from .scoresheet import HOLE_COUNT, Hole, Player, ScoreSheet, TeeBox, parse_score
from .settle import (
    BetBreakdown,
    FourBallShare,
    Outcome,
    build_ledger,
    player_share,
    player_total,
    round_winnings,
    settle,
    settle_breakdown,
)

__all__ = [
    "HEAD_TO_HEAD_FORMATS",
    "HOLE_COUNT",
    "AlabamaBet",
    "Bet",
    "BetBreakdown",
    "BetFormat",
    "BetNotFound",
    "BetRegistry",
    "DoDaBet",
    "FourBallMatchBet",
    "FourBallShare",
    "Hole",
    "IndividualMatchBet",
    "Outcome",
    "Player",
    "ScoreSheet",
    "SkinsBet",
    "TeeBox",
    "build_ledger",
    "parse_score",
    "player_share",
    "player_total",
    "round_winnings",
    "settle",
    "settle_breakdown",
]
