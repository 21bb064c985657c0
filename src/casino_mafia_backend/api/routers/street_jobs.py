"""Street job endpoints.

Puzzles live on the server; clients only ever see their snapshots. A
finished puzzle pays out through the store and counts against the job's
attempt cap.
"""

from __future__ import annotations

from fastapi import APIRouter

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.errors import game_errors
from casino_mafia_backend.api.models import (
    CodeGuessRequest,
    CodeGuessResponse,
    JobAttempts,
    JobPuzzleResponse,
    MatchFlipRequest,
    MatchFlipResponse,
    MathAnswerRequest,
    MathAnswerResponse,
    NumberGuessRequest,
    NumberGuessResponse,
)
from casino_mafia_backend.api.services import GameService
from casino_mafia_backend.game_logic import StreetJobPuzzle
from casino_mafia_backend.shared import StreetJob

router = APIRouter(prefix="/jobs", tags=["street-jobs"])


def _puzzle_response(
    job: StreetJob, puzzle: StreetJobPuzzle, player_id: str, games: GameService
) -> JobPuzzleResponse:
    return JobPuzzleResponse(
        job=job,
        attempts_left=games.state(player_id).attempts_left(job),
        puzzle=puzzle.snapshot(),
    )


@router.get("", response_model=list[JobAttempts])
def list_jobs(player_id: PlayerId, games: GameServiceDep) -> list[JobAttempts]:
    state = games.state(player_id)
    return [
        JobAttempts(
            job=job,
            completed=state.job_count(job),
            attempts_left=state.attempts_left(job),
        )
        for job in StreetJob
    ]


@router.post("/{job}/start", response_model=JobPuzzleResponse)
def start_job(
    job: StreetJob, player_id: PlayerId, games: GameServiceDep
) -> JobPuzzleResponse:
    """Open a fresh puzzle; refused once the paid attempts are used up."""
    with game_errors():
        puzzle = games.start_job(player_id, job)
    return _puzzle_response(job, puzzle, player_id, games)


@router.get("/{job}", response_model=JobPuzzleResponse)
def get_job(
    job: StreetJob, player_id: PlayerId, games: GameServiceDep
) -> JobPuzzleResponse:
    with game_errors():
        puzzle = games.job_puzzle(player_id, job)
    return _puzzle_response(job, puzzle, player_id, games)


@router.post("/math_quiz/answer", response_model=MathAnswerResponse)
def answer_math_question(
    payload: MathAnswerRequest, player_id: PlayerId, games: GameServiceDep
) -> MathAnswerResponse:
    with game_errors():
        result, quiz, reward = games.answer_math(player_id, payload.value)
    return MathAnswerResponse(
        result=result,
        puzzle=quiz.snapshot(),
        reward=reward,
        state=games.state(player_id),
    )


@router.post("/match_samples/flip", response_model=MatchFlipResponse)
def flip_sample(
    payload: MatchFlipRequest, player_id: PlayerId, games: GameServiceDep
) -> MatchFlipResponse:
    with game_errors():
        result, board, reward = games.flip_sample(player_id, payload.index)
    return MatchFlipResponse(
        result=result,
        puzzle=board.snapshot(),
        reward=reward,
        state=games.state(player_id),
    )


@router.post("/code_breaker/guess", response_model=CodeGuessResponse)
def guess_code(
    payload: CodeGuessRequest, player_id: PlayerId, games: GameServiceDep
) -> CodeGuessResponse:
    with game_errors():
        feedback, breaker, reward = games.break_code(player_id, payload.digits)
    return CodeGuessResponse(
        result=feedback,
        puzzle=breaker.snapshot(),
        reward=reward,
        state=games.state(player_id),
    )


@router.post("/guess_game/guess", response_model=NumberGuessResponse)
def guess_number(
    payload: NumberGuessRequest, player_id: PlayerId, games: GameServiceDep
) -> NumberGuessResponse:
    with game_errors():
        result, game, reward = games.guess_number(player_id, payload.value)
    return NumberGuessResponse(
        result=result,
        puzzle=game.snapshot(),
        reward=reward,
        state=games.state(player_id),
    )
