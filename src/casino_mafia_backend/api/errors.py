"""Translate game rule errors into HTTP responses."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from casino_mafia_backend.game_logic import (
    GameRuleError,
    InvalidBetError,
    InvalidMoveError,
    ItemNotFoundError,
)

_STATUS_BY_ERROR: tuple[tuple[type[GameRuleError], int], ...] = (
    (InvalidBetError, status.HTTP_400_BAD_REQUEST),
    (InvalidMoveError, status.HTTP_400_BAD_REQUEST),
    (ItemNotFoundError, status.HTTP_404_NOT_FOUND),
)


def status_for(error: GameRuleError) -> int:
    """Return the HTTP status for *error*; other rule violations are conflicts."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_409_CONFLICT


@contextmanager
def game_errors() -> Iterator[None]:
    """Re-raise any :class:`GameRuleError` as an :class:`HTTPException`."""
    try:
        yield
    except GameRuleError as exc:
        raise HTTPException(status_code=status_for(exc), detail=str(exc)) from exc


_BET_PATH_PREFIX = "/casino/"


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"] if part != "body")
    return f"{location}: {error['msg']}" if location else error["msg"]


async def bet_validation_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Reject malformed casino bets with 400; other requests keep the 422."""
    if request.method != "POST" or not request.url.path.startswith(_BET_PATH_PREFIX):
        return await request_validation_exception_handler(request, exc)
    errors = exc.errors()
    detail = _describe(errors[0]) if errors else "Malformed bet."
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail}
    )


__all__ = ["bet_validation_handler", "game_errors", "status_for"]
