"""Tests for API routes."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from deadline99.api.routes import router
from deadline99.models.card import Card
from deadline99.models.enums import Rank, Suit
from deadline99.repositories.game_registry import game_registry


@pytest.fixture
def test_app():
    """Create a test FastAPI app without lifespan dependencies."""
    app = FastAPI()
    app.include_router(router)
    return app


@pytest.fixture
def client(test_app):
    """Create a test client."""
    with TestClient(test_app, raise_server_exceptions=False) as client:
        yield client


def create_player(client: TestClient, name: str) -> str:
    """Register a player and return their id."""
    return client.post("/players", json={"name": name}).json()["player_id"]


@pytest.fixture
def started_game(client):
    """A seeded two-player game that has been started; returns (game_id, [player ids])."""
    game_id = client.post("/games", json={"name": "table", "seed": 7}).json()["game_id"]
    players = [create_player(client, "Alice"), create_player(client, "Bob")]
    for player_id in players:
        response = client.post(f"/games/{game_id}/join", json={"player_id": player_id})
        assert response.status_code == 200
    response = client.post(f"/games/{game_id}/start", json={"player_id": players[0]})
    assert response.status_code == 200
    return game_id, players


class TestPlayers:
    """Tests for player endpoints."""

    def test_create_player(self, client):
        """Creating a player returns a prefixed id."""
        response = client.post("/players", json={"name": "Alice"})
        assert response.status_code == 200
        assert response.json()["player_id"].startswith("p-")

    def test_create_player_default_name(self, client):
        """Players without a name get the default one."""
        player_id = client.post("/players", json={}).json()["player_id"]
        data = client.get(f"/players/{player_id}").json()
        assert data["name"] == "Bravo Player"
        assert data["game_id"] is None
        assert data["hand_cards"] == []

    def test_player_not_found(self, client):
        """Unknown players are a 404 with an error code."""
        response = client.get("/players/p-missing")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "error.playerNotFound"


class TestCreateGame:
    """Tests for POST /games endpoint."""

    def test_create_game_success(self, client):
        """Creating a game should return a game id."""
        response = client.post("/games", json={"name": "Friday"})
        assert response.status_code == 200

        data = response.json()
        assert data["game_id"].startswith("g-")
        assert data["message"] == "Game created successfully"

    def test_create_game_adds_to_registry(self, client):
        """Created game should be accessible via the registry."""
        game_id = client.post("/games", json={}).json()["game_id"]
        game = game_registry.get_game(game_id)
        assert game.name == "Wonderful Game"

    def test_list_games(self, client):
        """All games are listed with their brief."""
        client.post("/games", json={"name": "one"})
        client.post("/games", json={"name": "two"})

        data = client.get("/games").json()

        assert data["count"] == 2
        assert {g["name"] for g in data["games"]} == {"one", "two"}
        assert all(g["state"] == "CREATED" for g in data["games"])


class TestGetGame:
    """Tests for GET /games/{game_id} endpoint."""

    def test_get_game_created(self, client):
        """A fresh game has no players and score 0."""
        game_id = client.post("/games", json={"name": "fresh"}).json()["game_id"]

        data = client.get(f"/games/{game_id}").json()

        assert data["id"] == game_id
        assert data["state"] == "CREATED"
        assert data["score"] == 0
        assert data["next_player_id"] is None
        assert data["direction"] == "CLOCKWISE"
        assert data["players"] == []

    def test_get_game_not_found(self, client):
        """Getting a non-existent game should return 404."""
        response = client.get("/games/g-missing")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "error.gameNotFound"

    def test_get_started_game(self, client, started_game):
        """A started game shows the turn holder and the dealt hands."""
        game_id, players = started_game

        data = client.get(f"/games/{game_id}").json()

        assert data["state"] == "STARTED"
        assert data["next_player_id"] == players[0]
        assert [p["id"] for p in data["players"]] == players
        assert all(p["hand_card_count"] == 5 for p in data["players"])
        assert data["deck_count"] == 48 - 10

    def test_list_game_players(self, client, started_game):
        """Players in a game are listed in seating order."""
        game_id, players = started_game

        data = client.get(f"/games/{game_id}/players").json()

        assert [p["id"] for p in data["players"]] == players
        assert [p["position"] for p in data["players"]] == [0, 1]


class TestJoinAndStart:
    """Tests for join, leave and start endpoints."""

    def test_join_twice(self, client):
        """Joining a second game is a conflict."""
        first = client.post("/games", json={}).json()["game_id"]
        second = client.post("/games", json={}).json()["game_id"]
        player_id = create_player(client, "Alice")
        client.post(f"/games/{first}/join", json={"player_id": player_id})

        response = client.post(f"/games/{second}/join", json={"player_id": player_id})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "error.alreadyJoined"

    def test_start_by_non_member(self, client):
        """Only members can start a game."""
        game_id = client.post("/games", json={}).json()["game_id"]
        outsider = create_player(client, "Eve")

        response = client.post(f"/games/{game_id}/start", json={"player_id": outsider})

        assert response.status_code == 403
        assert response.json()["detail"]["error"] == "error.notMember"

    def test_start_alone(self, client):
        """One player is not enough."""
        game_id = client.post("/games", json={}).json()["game_id"]
        player_id = create_player(client, "Alice")
        client.post(f"/games/{game_id}/join", json={"player_id": player_id})

        response = client.post(f"/games/{game_id}/start", json={"player_id": player_id})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "error.insufficientPlayers"

    def test_leave_started_game_forfeits(self, client, started_game):
        """Leaving a two-player game hands the win to the other player."""
        game_id, players = started_game

        response = client.post(f"/games/{game_id}/leave", json={"player_id": players[1]})

        assert response.status_code == 200
        assert response.json() == {"result": "LOSE", "winner_id": players[0]}
        data = client.get(f"/games/{game_id}").json()
        assert data["state"] == "FINISHED"
        assert data["winner_id"] == players[0]


class TestPlayCard:
    """Tests for POST /games/{game_id}/play."""

    def test_play_score_card(self, client, started_game):
        """A Nine takes the score to 9 and passes the turn."""
        game_id, players = started_game
        player = game_registry.get_player(players[0])
        player.hand[0] = Card.from_suit_rank(Suit.CLUB, Rank.NINE)

        response = client.post(
            f"/games/{game_id}/play", json={"player_id": players[0], "hand_index": 0}
        )

        assert response.status_code == 200
        assert response.json() == {"result": "OK", "winner_id": None}
        data = client.get(f"/games/{game_id}").json()
        assert data["score"] == 9
        assert data["next_player_id"] == players[1]

    def test_play_with_option(self, client, started_game):
        """Options are passed through to the effect."""
        game_id, players = started_game
        player = game_registry.get_player(players[0])
        player.hand[0] = Card.from_suit_rank(Suit.HEART, Rank.QUEEN)

        response = client.post(
            f"/games/{game_id}/play",
            json={
                "player_id": players[0],
                "hand_index": 0,
                "option": {"rank_queen_add": True},
            },
        )

        assert response.status_code == 200
        assert client.get(f"/games/{game_id}").json()["score"] == 20

    def test_play_out_of_turn(self, client, started_game):
        """The other player is turned away."""
        game_id, players = started_game

        response = client.post(
            f"/games/{game_id}/play", json={"player_id": players[1], "hand_index": 0}
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "error.notYourTurn"

    def test_play_bad_index(self, client, started_game):
        """Out-of-range hand indices are validation errors."""
        game_id, players = started_game

        response = client.post(
            f"/games/{game_id}/play", json={"player_id": players[0], "hand_index": 9}
        )

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "error.invalidHandIndex"

    def test_play_missing_option(self, client, started_game):
        """A Ten without an option is rejected."""
        game_id, players = started_game
        player = game_registry.get_player(players[0])
        player.hand[0] = Card.from_suit_rank(Suit.HEART, Rank.TEN)

        response = client.post(
            f"/games/{game_id}/play", json={"player_id": players[0], "hand_index": 0}
        )

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "error.invalidCardOption"

    def test_play_blocked_card_is_server_error(self, client, started_game):
        """An unplayable rank is an invariant violation."""
        game_id, players = started_game
        player = game_registry.get_player(players[0])
        player.hand[0] = Card.from_suit_rank(Suit.HEART, Rank.TWO)

        response = client.post(
            f"/games/{game_id}/play", json={"player_id": players[0], "hand_index": 0}
        )

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "error.invalidRank"

    def test_player_info_shows_card_names(self, client, started_game):
        """Player info lists the hand by name."""
        _, players = started_game
        player = game_registry.get_player(players[0])
        player.hand[0] = Card.from_suit_rank(Suit.SPADE, Rank.KING)

        data = client.get(f"/players/{players[0]}").json()

        assert data["hand_card_count"] == 5
        assert data["hand_cards"][0] == "King of Spade"

    def test_bust_finishes_game(self, client, started_game):
        """Busting in a two-player game ends it."""
        game_id, players = started_game
        game = game_registry.get_game(game_id)
        game.score = 95
        game_registry.get_player(players[0]).hand[0] = Card.from_suit_rank(Suit.HEART, Rank.NINE)

        response = client.post(
            f"/games/{game_id}/play", json={"player_id": players[0], "hand_index": 0}
        )

        assert response.json() == {"result": "LOSE", "winner_id": players[1]}
        data = client.get(f"/games/{game_id}").json()
        assert data["state"] == "FINISHED"
        assert data["score"] == 95
