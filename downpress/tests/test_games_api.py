from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from downpress.config import reset_settings_cache

PLAYERS = [
    {"id": "ann", "firstName": "Ann", "lastName": "Archer"},
    {"id": "ben", "firstName": "Ben", "lastName": "Baker"},
    {"id": "cal", "firstName": "Cal"},
    {"id": "dee", "firstName": "Dee", "nickname": "Deuce"},
]


def _create_game(client: TestClient, **overrides) -> dict:
    payload = {"courseName": "Backyard", "pars": [4] * 18, "players": PLAYERS}
    payload.update(overrides)
    response = client.post("/api/games", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def _post_scores(client: TestClient, game_id: str, entries: list[dict]) -> dict:
    response = client.post(f"/api/games/{game_id}/scores", json={"scores": entries})
    assert response.status_code == 200, response.text
    return response.json()


def _front_three_birdies(client: TestClient, game_id: str) -> None:
    entries = []
    for hole in (1, 2, 3):
        entries.append({"playerId": "ann", "hole": hole, "score": 3})
        entries.append({"playerId": "ben", "hole": hole, "score": "4"})
    _post_scores(client, game_id, entries)


def test_create_and_fetch_game_with_custom_pars(client: TestClient) -> None:
    game = _create_game(client)

    assert game["id"].startswith("game_")
    assert game["courseName"] == "Backyard"
    assert [hole["par"] for hole in game["teeBox"]["holes"]] == [4] * 18
    assert [player["id"] for player in game["players"]] == [
        "ann",
        "ben",
        "cal",
        "dee",
    ]
    assert game["completed"] is False

    fetched = client.get(f"/api/games/{game['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == game["id"]


def test_create_game_defaults_to_catalog_tee_box(client: TestClient) -> None:
    game = _create_game(client, courseName=None, pars=None)

    assert game["courseId"] == "bayou-desiard"
    assert game["courseName"] == "Bayou DeSiard Country Club"
    assert game["teeBox"]["name"] == "Blue"

    gold = _create_game(client, pars=None, courseId="bayou-desiard", teeName="gold")
    assert gold["teeBox"]["name"] == "Gold"
    assert gold["courseName"] == "Backyard"


@pytest.mark.parametrize(
    "overrides, status, detail",
    [
        ({"pars": [4] * 9}, 400, "invalid_tee_box"),
        ({"pars": None, "courseId": "augusta"}, 404, "course_not_found"),
        ({"pars": None, "teeName": "Purple"}, 404, "tee_not_found"),
        ({"players": []}, 400, "no_players"),
        ({"players": [PLAYERS[0], PLAYERS[0]]}, 400, "duplicate_players"),
    ],
)
def test_create_game_rejects_bad_input(client, overrides, status, detail) -> None:
    payload = {"courseName": "Backyard", "pars": [4] * 18, "players": PLAYERS}
    payload.update(overrides)

    response = client.post("/api/games", json=payload)

    assert response.status_code == status
    assert response.json()["detail"] == detail


def test_unknown_game_is_404(client: TestClient) -> None:
    assert client.get("/api/games/game_missing").status_code == 404
    assert client.get("/api/games/game_missing/bets").status_code == 404
    assert client.get("/api/games/game_missing/settlement").status_code == 404
    response = client.post("/api/games/game_missing/complete")
    assert response.json()["detail"] == "game_not_found"


def test_scores_upsert_and_overwrite(client: TestClient) -> None:
    game_id = _create_game(client)["id"]

    _post_scores(
        client,
        game_id,
        [
            {"playerId": "ann", "hole": 1, "score": 5},
            {"playerId": "ben", "hole": 1, "score": 4},
        ],
    )
    updated = _post_scores(
        client,
        game_id,
        [
            {"playerId": "ann", "hole": 1, "score": 6},
            {"playerId": "ann", "hole": 18, "score": "X"},
        ],
    )

    ann = updated["scores"]["ann"]
    assert len(ann) == 18
    assert ann[0] == 6
    assert ann[17] == "X"
    assert ann[5] is None
    assert updated["scores"]["ben"][0] == 4
    assert "cal" not in updated["scores"]


def test_scores_reject_invalid_entries(client: TestClient) -> None:
    game_id = _create_game(client)["id"]

    for entry in (
        {"playerId": "ann", "hole": 19, "score": 4},
        {"playerId": "ann", "hole": 0, "score": 4},
        {"playerId": "zed", "hole": 1, "score": 4},
    ):
        response = client.post(
            f"/api/games/{game_id}/scores", json={"scores": [entry]}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "invalid_score_entries"

    missing = client.post(
        "/api/games/game_missing/scores",
        json={"scores": [{"playerId": "ann", "hole": 1, "score": 4}]},
    )
    assert missing.status_code == 404


def test_complete_game(client: TestClient) -> None:
    game_id = _create_game(client)["id"]

    response = client.post(f"/api/games/{game_id}/complete")

    assert response.status_code == 200
    assert response.json()["completed"] is True


def test_delete_game(client: TestClient) -> None:
    game_id = _create_game(client)["id"]

    response = client.delete(f"/api/games/{game_id}")
    assert response.status_code == 204

    assert client.get(f"/api/games/{game_id}").status_code == 404
    assert client.get(f"/api/games/{game_id}/bets").status_code == 404
    again = client.delete(f"/api/games/{game_id}")
    assert again.status_code == 404
    assert again.json()["detail"] == "game_not_found"


def test_boolean_score_reads_as_absent(client: TestClient) -> None:
    game_id = _create_game(client)["id"]
    game = _post_scores(
        client,
        game_id,
        [
            {"playerId": "ann", "hole": 1, "score": True},
            {"playerId": "ben", "hole": 1, "score": 4},
        ],
    )
    assert game["scores"]["ann"][0] is True

    client.post(
        f"/api/games/{game_id}/bets",
        json={
            "format": "individual",
            "player1": "ann",
            "player2": "ben",
            "perHoleAmount": 1,
        },
    )

    ledger = client.get(f"/api/games/{game_id}/settlement").json()["ledger"]
    assert ledger["ann"] == 0.0
    assert ledger["ben"] == 0.0


def test_bet_lifecycle(client: TestClient) -> None:
    game_id = _create_game(client)["id"]

    created = client.post(
        f"/api/games/{game_id}/bets",
        json={
            "format": "individual",
            "player1": "ann",
            "player2": "ben",
            "perHoleAmount": 2,
            "pressOn9And18": True,
        },
    )
    assert created.status_code == 200, created.text
    bet = created.json()
    assert bet["id"].startswith("bet_")
    assert bet["format"] == "individual"
    assert bet["player1"]["id"] == "ann"
    assert bet["pressOn9And18"] is True

    client.post(
        f"/api/games/{game_id}/bets",
        json={"format": "skins", "players": ["ann", "ben", "cal"], "amount": 5},
    )

    listed = client.get(f"/api/games/{game_id}/bets").json()["bets"]
    assert {item["format"] for item in listed} == {"individual", "skins"}
    skins_only = client.get(f"/api/games/{game_id}/bets", params={"format": "skins"})
    assert [item["format"] for item in skins_only.json()["bets"]] == ["skins"]
    bad_filter = client.get(f"/api/games/{game_id}/bets", params={"format": "nassau"})
    assert bad_filter.status_code == 400

    deleted = client.delete(f"/api/games/{game_id}/bets/{bet['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["id"] == bet["id"]

    again = client.delete(f"/api/games/{game_id}/bets/{bet['id']}")
    assert again.status_code == 404
    assert again.json()["detail"] == "bet_not_found"


@pytest.mark.parametrize(
    "payload, detail",
    [
        (
            {"format": "individual", "player1": "ann", "player2": "zed"},
            "unknown_player",
        ),
        (
            {
                "format": "individual",
                "player1": "ann",
                "player2": "ann",
                "perHoleAmount": 1,
            },
            "invalid_bet",
        ),
        (
            {
                "format": "four_ball",
                "team1": ["ann", "ben", "cal"],
                "team2": ["dee"],
                "perHoleAmount": 1,
            },
            "invalid_bet",
        ),
        ({"format": "skins", "players": ["ann"], "amount": -5}, "invalid_bet"),
        (
            {"format": "alabama", "teams": [["ann"], ["ben"]], "countingScores": 0},
            "invalid_bet",
        ),
    ],
)
def test_invalid_bets_are_rejected(client, payload, detail) -> None:
    game_id = _create_game(client)["id"]
    payload.setdefault("perHoleAmount", 1)

    response = client.post(f"/api/games/{game_id}/bets", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_settlement_sheet_and_round_scopes(client: TestClient) -> None:
    game_id = _create_game(client)["id"]
    _front_three_birdies(client, game_id)

    client.post(
        f"/api/games/{game_id}/bets",
        json={
            "format": "individual",
            "player1": "ann",
            "player2": "ben",
            "perHoleAmount": 1,
            "perBirdieAmount": 2,
        },
    )
    client.post(
        f"/api/games/{game_id}/bets",
        json={"format": "skins", "players": ["ann", "ben"], "amount": 5},
    )

    sheet = client.get(f"/api/games/{game_id}/settlement")
    assert sheet.status_code == 200, sheet.text
    data = sheet.json()
    assert data["scope"] == "sheet"
    assert data["fourBallShare"] == "full"
    assert data["ledger"] == {
        "ann": pytest.approx(9.0 + 5.0),
        "ben": pytest.approx(-9.0 - 5.0),
        "cal": 0.0,
        "dee": 0.0,
    }
    skins = next(item for item in data["bets"] if item["format"] == "skins")
    assert skins["skinsByHole"] == {"1": "ann", "2": "ann", "3": "ann"}
    assert skins["valuePerSkin"] == pytest.approx(10.0 / 3)

    round_view = client.get(
        f"/api/games/{game_id}/settlement", params={"scope": "round"}
    ).json()
    assert round_view["ledger"]["ann"] == pytest.approx(9.0)
    assert [item["format"] for item in round_view["bets"]] == ["individual"]

    metrics = client.get("/metrics")
    assert "settlement_passes_total" in metrics.text
    assert 'bets_settled_total{format="skins"}' in metrics.text


def test_settlement_four_ball_share(client: TestClient, monkeypatch) -> None:
    game_id = _create_game(client)["id"]
    _post_scores(client, game_id, [{"playerId": "ann", "hole": 1, "score": 3}])
    _post_scores(
        client,
        game_id,
        [
            {"playerId": player_id, "hole": 1, "score": 4}
            for player_id in ("ben", "cal", "dee")
        ],
    )
    client.post(
        f"/api/games/{game_id}/bets",
        json={
            "format": "four_ball",
            "team1": ["ann", "ben"],
            "team2": ["cal", "dee"],
            "perHoleAmount": 4,
        },
    )

    full = client.get(f"/api/games/{game_id}/settlement").json()
    assert full["ledger"]["ben"] == pytest.approx(4.0)
    assert full["ledger"]["dee"] == pytest.approx(-4.0)

    split = client.get(
        f"/api/games/{game_id}/settlement", params={"fourBallShare": "split"}
    ).json()
    assert split["fourBallShare"] == "split"
    assert split["ledger"]["ben"] == pytest.approx(2.0)

    monkeypatch.setenv("FOUR_BALL_SHARE", "split")
    reset_settings_cache()
    configured = client.get(f"/api/games/{game_id}/settlement").json()
    assert configured["ledger"]["ann"] == pytest.approx(2.0)


def test_frozen_bet_ignores_later_scores(client: TestClient) -> None:
    game_id = _create_game(client)["id"]
    _front_three_birdies(client, game_id)
    bet = client.post(
        f"/api/games/{game_id}/bets",
        json={
            "format": "individual",
            "player1": "ann",
            "player2": "ben",
            "perHoleAmount": 1,
        },
    ).json()

    frozen = client.post(f"/api/games/{game_id}/bets/{bet['id']}/freeze")
    assert frozen.status_code == 200
    assert frozen.json()["scores"]["rows"]["ann"][0] == 3

    _post_scores(client, game_id, [{"playerId": "ben", "hole": 1, "score": 2}])

    ledger = client.get(f"/api/games/{game_id}/settlement").json()["ledger"]
    assert ledger["ann"] == pytest.approx(3.0)

    missing = client.post(f"/api/games/{game_id}/bets/bet_missing/freeze")
    assert missing.status_code == 404


def test_alabama_and_doda_breakdowns(client: TestClient) -> None:
    game_id = _create_game(client)["id"]
    _post_scores(
        client,
        game_id,
        [
            {"playerId": "ann", "hole": 1, "score": 2},
            {"playerId": "ben", "hole": 1, "score": 4},
            {"playerId": "cal", "hole": 1, "score": 4},
            {"playerId": "dee", "hole": 1, "score": 4},
        ],
    )
    client.post(
        f"/api/games/{game_id}/bets",
        json={
            "format": "alabama",
            "teams": [["ann"], ["ben"], ["cal"]],
            "swingMan": "dee",
            "countingScores": 1,
            "lowBallAmount": 1,
        },
    )
    client.post(
        f"/api/games/{game_id}/bets",
        json={"format": "doda", "players": ["ann", "ben", "cal"], "amount": 3},
    )

    data = client.get(f"/api/games/{game_id}/settlement").json()
    alabama = next(item for item in data["bets"] if item["format"] == "alabama")
    doda = next(item for item in data["bets"] if item["format"] == "doda")

    assert len(alabama["teamTotals"]) == 3
    assert alabama["teamTotals"][0]["frontLowBall"] == 2
    assert alabama["outcome"]["ann"] == pytest.approx(2.0)
    assert alabama["outcome"]["dee"] == pytest.approx(0.0)
    assert doda["dodaCounts"] == {"ann": 1, "ben": 0, "cal": 0}
    assert doda["outcome"]["ann"] == pytest.approx(6.0)


def test_api_key_required_when_enabled(client: TestClient, monkeypatch) -> None:
    monkeypatch.setenv("REQUIRE_API_KEY", "1")
    monkeypatch.setenv("API_KEY", "s3cret")

    denied = client.post("/api/games", json={"pars": [4] * 18, "players": PLAYERS})
    assert denied.status_code == 401

    allowed = client.post(
        "/api/games",
        json={"pars": [4] * 18, "players": PLAYERS},
        headers={"x-api-key": "s3cret"},
    )
    assert allowed.status_code == 200

    by_query = client.get(
        f"/api/games/{allowed.json()['id']}", params={"apiKey": "s3cret"}
    )
    assert by_query.status_code == 200

    assert client.get("/health").status_code == 200
