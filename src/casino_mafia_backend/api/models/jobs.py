"""Pydantic models for street job endpoints."""

# ruff: noqa: TC001

from __future__ import annotations

from pydantic import BaseModel

from casino_mafia_backend.game_logic import GameState
from casino_mafia_backend.game_logic.street_jobs import (
    CodeBreakerSnapshot,
    CodeFeedback,
    GuessGameSnapshot,
    GuessResult,
    MatchFlipResult,
    MatchSamplesSnapshot,
    MathAnswerResult,
    MathQuizSnapshot,
)
from casino_mafia_backend.shared import StreetJob

PuzzleSnapshot = (
    MathQuizSnapshot | MatchSamplesSnapshot | CodeBreakerSnapshot | GuessGameSnapshot
)


class JobPuzzleResponse(BaseModel):
    job: StreetJob
    attempts_left: int
    puzzle: PuzzleSnapshot


class MathAnswerRequest(BaseModel):
    value: int


class MathAnswerResponse(BaseModel):
    result: MathAnswerResult
    puzzle: MathQuizSnapshot
    reward: int
    state: GameState


class MatchFlipRequest(BaseModel):
    index: int


class MatchFlipResponse(BaseModel):
    result: MatchFlipResult
    puzzle: MatchSamplesSnapshot
    reward: int
    state: GameState


class CodeGuessRequest(BaseModel):
    digits: list[int]


class CodeGuessResponse(BaseModel):
    result: CodeFeedback
    puzzle: CodeBreakerSnapshot
    reward: int
    state: GameState


class NumberGuessRequest(BaseModel):
    value: int


class NumberGuessResponse(BaseModel):
    result: GuessResult
    puzzle: GuessGameSnapshot
    reward: int
    state: GameState


__all__ = [
    "CodeGuessRequest",
    "CodeGuessResponse",
    "JobPuzzleResponse",
    "MatchFlipRequest",
    "MatchFlipResponse",
    "MathAnswerRequest",
    "MathAnswerResponse",
    "NumberGuessRequest",
    "NumberGuessResponse",
    "PuzzleSnapshot",
]
