"""Street job endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from casino_mafia_backend.game_logic.street_jobs import (
    CodeBreaker,
    GuessGame,
    MatchSamples,
    MathQuiz,
)
from casino_mafia_backend.shared import StreetJob

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from casino_mafia_backend.api.services import GameService
    from tests.conftest import RegisteredPlayer


def puzzle_of(games: GameService, player: RegisteredPlayer, job: StreetJob):
    return games.session(player.id).puzzles[job]


def test_jobs_list_attempts(client: TestClient, player: RegisteredPlayer) -> None:
    jobs = client.get("/jobs", headers=player.headers).json()

    assert [job["job"] for job in jobs] == [
        "math_quiz",
        "match_samples",
        "code_breaker",
        "guess_game",
    ]
    assert all(job["attempts_left"] == 3 for job in jobs)


def test_unknown_job_fails_validation(
    client: TestClient, player: RegisteredPlayer
) -> None:
    response = client.post("/jobs/juggling/start", headers=player.headers)

    assert response.status_code == 422


def test_guess_game_round_trip(
    client: TestClient, player: RegisteredPlayer, api_games: GameService
) -> None:
    assert client.get("/jobs/guess_game", headers=player.headers).status_code == 404

    started = client.post("/jobs/guess_game/start", headers=player.headers).json()
    assert started["attempts_left"] == 3
    assert started["puzzle"]["secret"] is None
    game = puzzle_of(api_games, player, StreetJob.GUESS_GAME)
    assert isinstance(game, GuessGame)
    game.secret = 30

    invalid = client.post(
        "/jobs/guess_game/guess", json={"value": 0}, headers=player.headers
    )
    assert invalid.status_code == 400

    low = client.post(
        "/jobs/guess_game/guess", json={"value": 20}, headers=player.headers
    ).json()
    assert low["result"]["hint"] == "Too low!"
    assert low["reward"] == 0
    assert low["puzzle"]["attempts_left"] == 6

    won = client.post(
        "/jobs/guess_game/guess", json={"value": 30}, headers=player.headers
    ).json()
    assert won["result"]["hint"] == "Correct!"
    assert won["reward"] == 20
    assert won["puzzle"]["secret"] == 30
    assert won["state"]["money"] == 120
    assert won["state"]["guessGameCount"] == 1

    finished = client.post(
        "/jobs/guess_game/guess", json={"value": 30}, headers=player.headers
    )
    assert finished.status_code == 404


def test_math_quiz_pays_on_the_last_answer(
    client: TestClient, player: RegisteredPlayer, api_games: GameService
) -> None:
    started = client.post("/jobs/math_quiz/start", headers=player.headers).json()
    assert started["puzzle"]["question_number"] == 1
    quiz = puzzle_of(api_games, player, StreetJob.MATH_QUIZ)
    assert isinstance(quiz, MathQuiz)

    rewards = []
    for _ in range(MathQuiz.TOTAL_QUESTIONS):
        answered = client.post(
            "/jobs/math_quiz/answer",
            json={"value": quiz.question.answer},
            headers=player.headers,
        ).json()
        rewards.append(answered["reward"])

    assert rewards == [0, 0, 0, 0, 50]
    assert answered["puzzle"]["prompt"] is None
    assert answered["puzzle"]["correct_answers"] == 5
    assert answered["state"]["money"] == 150


def test_match_samples_hides_unflipped_cards(
    client: TestClient, player: RegisteredPlayer, api_games: GameService
) -> None:
    started = client.post("/jobs/match_samples/start", headers=player.headers).json()
    assert started["puzzle"]["cards"] == [None] * 12
    board = puzzle_of(api_games, player, StreetJob.MATCH_SAMPLES)
    assert isinstance(board, MatchSamples)

    missing = client.post(
        "/jobs/match_samples/flip", json={"index": 12}, headers=player.headers
    )
    assert missing.status_code == 400

    pairs: dict[str, list[int]] = {}
    for index, emoji in enumerate(board.cards):
        pairs.setdefault(emoji, []).append(index)

    for first, second in pairs.values():
        client.post(
            "/jobs/match_samples/flip", json={"index": first}, headers=player.headers
        )
        flipped = client.post(
            "/jobs/match_samples/flip", json={"index": second}, headers=player.headers
        ).json()
        assert flipped["result"]["matched"] is True

    assert flipped["reward"] == 50
    assert flipped["puzzle"]["pairs_found"] == 6
    assert flipped["puzzle"]["moves"] == 6
    assert None not in flipped["puzzle"]["cards"]
    assert flipped["state"]["matchSamplesCount"] == 1


def test_code_breaker_scores_guesses(
    client: TestClient, player: RegisteredPlayer, api_games: GameService
) -> None:
    client.post("/jobs/code_breaker/start", headers=player.headers)
    breaker = puzzle_of(api_games, player, StreetJob.CODE_BREAKER)
    assert isinstance(breaker, CodeBreaker)
    breaker.code = (1, 2, 3, 4)

    short = client.post(
        "/jobs/code_breaker/guess", json={"digits": [1, 2]}, headers=player.headers
    )
    assert short.status_code == 400

    close = client.post(
        "/jobs/code_breaker/guess",
        json={"digits": [1, 3, 2, 6]},
        headers=player.headers,
    ).json()
    assert (close["result"]["exact"], close["result"]["misplaced"]) == (1, 2)
    assert close["puzzle"]["code"] is None

    cracked = client.post(
        "/jobs/code_breaker/guess",
        json={"digits": [1, 2, 3, 4]},
        headers=player.headers,
    ).json()
    assert cracked["reward"] == 30
    assert cracked["puzzle"]["won"] is True
    assert cracked["puzzle"]["code"] == [1, 2, 3, 4]


def test_exhausted_job_cannot_start(
    client: TestClient, player: RegisteredPlayer, api_games: GameService
) -> None:
    store = api_games.session(player.id).store
    for _ in range(3):
        store.complete_guess_game()

    response = client.post("/jobs/guess_game/start", headers=player.headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "No guess game attempts left."
