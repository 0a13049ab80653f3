import pytest
from pydantic import TypeAdapter, ValidationError

from downpress.wagers.bets import (
    AlabamaBet,
    Bet,
    BetFormat,
    DoDaBet,
    FourBallMatchBet,
    IndividualMatchBet,
    SkinsBet,
)
from downpress.wagers.scoresheet import HOLE_COUNT, Player, ScoreSheet, TeeBox

ANN = Player(id="ann", first_name="Ann")
BEN = Player(id="ben", first_name="Ben")
CAL = Player(id="cal", first_name="Cal")
DEE = Player(id="dee", first_name="Dee")


def test_ids_are_generated_and_unique() -> None:
    first = SkinsBet(players=[ANN, BEN], amount=5)
    second = SkinsBet(players=[ANN, BEN], amount=5)

    assert first.id.startswith("bet_")
    assert first.id != second.id
    assert first.bet_format is BetFormat.SKINS


def test_negative_amounts_are_rejected() -> None:
    with pytest.raises(ValidationError):
        IndividualMatchBet(player1=ANN, player2=BEN, per_hole_amount=-1)
    with pytest.raises(ValidationError):
        SkinsBet(players=[ANN, BEN], amount=-5)
    with pytest.raises(ValidationError):
        AlabamaBet(teams=[[ANN], [BEN]], counting_scores=1, low_ball_amount=-1)


def test_duplicate_participants_are_rejected() -> None:
    with pytest.raises(ValidationError):
        IndividualMatchBet(player1=ANN, player2=ANN, per_hole_amount=1)
    with pytest.raises(ValidationError):
        FourBallMatchBet(team1=(ANN, BEN), team2=(BEN, CAL), per_hole_amount=1)
    with pytest.raises(ValidationError):
        DoDaBet(players=[ANN, ANN], amount=1)


def test_four_ball_teams_are_pairs() -> None:
    with pytest.raises(ValidationError):
        FourBallMatchBet(team1=(ANN,), team2=(BEN, CAL), per_hole_amount=1)


def test_alabama_team_rules() -> None:
    with pytest.raises(ValidationError):
        AlabamaBet(teams=[], counting_scores=1)
    with pytest.raises(ValidationError):
        AlabamaBet(teams=[[ANN], []], counting_scores=1)
    with pytest.raises(ValidationError):
        AlabamaBet(teams=[[ANN], [BEN]], counting_scores=0)
    with pytest.raises(ValidationError):
        AlabamaBet(teams=[[ANN], [BEN]], swing_man=ANN, counting_scores=1)


def test_pool_formats_need_players() -> None:
    with pytest.raises(ValidationError):
        DoDaBet(players=[], amount=1)
    with pytest.raises(ValidationError):
        SkinsBet(players=[], amount=1)


def test_participants_cover_every_seat() -> None:
    alabama = AlabamaBet(teams=[[ANN, BEN], [CAL]], swing_man=DEE, counting_scores=2)
    four_ball = FourBallMatchBet(team1=(ANN, BEN), team2=(CAL, DEE), per_hole_amount=1)

    assert alabama.participant_ids() == ["ann", "ben", "cal", "dee"]
    assert alabama.team_ids() == [["ann", "ben"], ["cal"]]
    assert four_ball.team_of("ben") == 1
    assert four_ball.team_of("dee") == 2
    assert four_ball.team_of("zed") is None


def test_bets_are_immutable() -> None:
    bet = SkinsBet(players=[ANN, BEN], amount=5)
    with pytest.raises(ValidationError):
        bet.amount = 10  # type: ignore[misc]


def test_with_snapshot_returns_a_frozen_copy() -> None:
    bet = DoDaBet(players=[ANN, BEN], amount=2)
    sheet = ScoreSheet.from_mapping({"ann": [2] * HOLE_COUNT})
    tee = TeeBox.from_pars([4] * HOLE_COUNT)

    frozen = bet.with_snapshot(sheet, tee)

    assert not bet.is_frozen
    assert frozen.is_frozen
    assert frozen.id == bet.id
    assert frozen.scores == sheet
    assert frozen.tee_box == tee


def test_discriminated_union_parses_camel_case_payloads() -> None:
    adapter = TypeAdapter(Bet)
    bet = adapter.validate_python(
        {
            "format": "individual",
            "player1": {"id": "ann", "firstName": "Ann"},
            "player2": {"id": "ben", "firstName": "Ben"},
            "perHoleAmount": 2,
            "pressOn9And18": True,
        }
    )

    assert isinstance(bet, IndividualMatchBet)
    assert bet.per_hole_amount == 2
    assert bet.press_on_9_and_18 is True
    assert bet.per_birdie_amount == 0.0
