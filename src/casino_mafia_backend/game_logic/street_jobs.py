"""Server-side street job puzzles.

Each puzzle keeps its secret (answers, card layout, code, number) on the
server and only exposes a :meth:`snapshot` the client may see. Puzzles do not
pay out themselves; the caller rewards a finished puzzle through the game
store, which enforces the per-job attempt cap.
"""

from __future__ import annotations

from typing import ClassVar, Literal
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.errors import InvalidMoveError, RoundStateError
from casino_mafia_backend.shared.enums import StreetJob
from casino_mafia_backend.shared.rng import CasinoRandomService

MathOperator = Literal["+", "-", "×"]
GuessHint = Literal["Too low!", "Too high!", "Correct!"]


class StreetJobPuzzle:
    """Common bookkeeping for a single puzzle run."""

    job: ClassVar[StreetJob]

    def __init__(self, rng: CasinoRandomService | None = None) -> None:
        self._rng = rng or CasinoRandomService()
        self.puzzle_id = uuid4().hex
        self.is_finished = False
        self.is_won = False

    def _require_open(self) -> None:
        if self.is_finished:
            msg = f"This {self.job.value.replace('_', ' ')} is already finished."
            raise RoundStateError(msg)

    def snapshot(self) -> BaseModel:
        """Return what the player may see of the puzzle right now."""
        raise NotImplementedError


# Math quiz


class MathQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: int
    operator: MathOperator
    right: int

    @property
    def answer(self) -> int:
        if self.operator == "+":
            return self.left + self.right
        if self.operator == "-":
            return self.left - self.right
        return self.left * self.right

    @property
    def prompt(self) -> str:
        return f"{self.left} {self.operator} {self.right} = ?"


class MathAnswerResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    correct: bool
    expected: int
    correct_answers: int
    finished: bool


class MathQuizSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    puzzle_id: str
    question_number: int
    total_questions: int
    correct_answers: int
    prompt: str | None
    finished: bool


class MathQuiz(StreetJobPuzzle):
    """Five arithmetic questions; every correct answer pays."""

    job = StreetJob.MATH_QUIZ
    TOTAL_QUESTIONS: ClassVar[int] = 5
    MAX_OPERAND: ClassVar[int] = 20
    MAX_FACTOR: ClassVar[int] = 10

    def __init__(self, rng: CasinoRandomService | None = None) -> None:
        super().__init__(rng)
        self.current_index = 0
        self.correct_answers = 0
        self.question = self._generate_question()

    def _generate_question(self) -> MathQuestion:
        left = self._rng.next_int(self.MAX_OPERAND) + 1
        right = self._rng.next_int(self.MAX_OPERAND) + 1
        operator: MathOperator = self._rng.select_random(("+", "-", "×"))
        if operator == "-" and right > left:
            left, right = right, left
        elif operator == "×":
            left = self._rng.next_int(self.MAX_FACTOR) + 1
            right = self._rng.next_int(self.MAX_FACTOR) + 1
        return MathQuestion(left=left, operator=operator, right=right)

    def answer(self, value: int) -> MathAnswerResult:
        """Grade *value* against the current question and move on."""
        self._require_open()
        expected = self.question.answer
        correct = value == expected
        if correct:
            self.correct_answers += 1
        self.current_index += 1
        if self.current_index >= self.TOTAL_QUESTIONS:
            self.is_finished = True
            self.is_won = True
        else:
            self.question = self._generate_question()
        return MathAnswerResult(
            correct=correct,
            expected=expected,
            correct_answers=self.correct_answers,
            finished=self.is_finished,
        )

    def snapshot(self) -> MathQuizSnapshot:
        return MathQuizSnapshot(
            puzzle_id=self.puzzle_id,
            question_number=min(self.current_index + 1, self.TOTAL_QUESTIONS),
            total_questions=self.TOTAL_QUESTIONS,
            correct_answers=self.correct_answers,
            prompt=None if self.is_finished else self.question.prompt,
            finished=self.is_finished,
        )


# Match samples


class MatchFlipResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    emoji: str
    first_index: int | None = None
    first_emoji: str | None = None
    matched: bool = False
    moves: int
    finished: bool


class MatchSamplesSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    puzzle_id: str
    cards: tuple[str | None, ...]
    moves: int
    pairs_found: int
    total_pairs: int
    finished: bool


class MatchSamples(StreetJobPuzzle):
    """Memory game over six shuffled emoji pairs.

    Turning over the second card of a try counts one move. A mismatched pair
    is turned face down again straight away; the flip result still reveals
    both emojis so the client can show them briefly.
    """

    job = StreetJob.MATCH_SAMPLES
    EMOJIS: ClassVar[tuple[str, ...]] = ("🍎", "🍊", "🍋", "🍇", "🍓", "🍑")

    def __init__(self, rng: CasinoRandomService | None = None) -> None:
        super().__init__(rng)
        self.cards = self._rng.shuffle((*self.EMOJIS, *self.EMOJIS))
        self.matched: set[int] = set()
        self.pending: int | None = None
        self.moves = 0

    def flip(self, index: int) -> MatchFlipResult:
        self._require_open()
        if not 0 <= index < len(self.cards):
            msg = f"Card {index} does not exist."
            raise InvalidMoveError(msg)
        if index in self.matched or index == self.pending:
            msg = f"Card {index} is already face up."
            raise InvalidMoveError(msg)

        emoji = self.cards[index]
        if self.pending is None:
            self.pending = index
            return MatchFlipResult(
                index=index, emoji=emoji, moves=self.moves, finished=False
            )

        first = self.pending
        self.pending = None
        self.moves += 1
        matched = self.cards[first] == emoji
        if matched:
            self.matched.update((first, index))
            if len(self.matched) == len(self.cards):
                self.is_finished = True
                self.is_won = True
        return MatchFlipResult(
            index=index,
            emoji=emoji,
            first_index=first,
            first_emoji=self.cards[first],
            matched=matched,
            moves=self.moves,
            finished=self.is_finished,
        )

    def snapshot(self) -> MatchSamplesSnapshot:
        visible = self.matched | ({self.pending} if self.pending is not None else set())
        return MatchSamplesSnapshot(
            puzzle_id=self.puzzle_id,
            cards=tuple(
                card if index in visible else None
                for index, card in enumerate(self.cards)
            ),
            moves=self.moves,
            pairs_found=len(self.matched) // 2,
            total_pairs=len(self.EMOJIS),
            finished=self.is_finished,
        )


# Code breaker


class CodeFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    guess: tuple[int, ...]
    exact: int = Field(..., ge=0)
    misplaced: int = Field(..., ge=0)

    @property
    def label(self) -> str:
        return f"🟢{self.exact} 🟡{self.misplaced}"


class CodeBreakerSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    puzzle_id: str
    code_length: int
    max_digit: int
    max_attempts: int
    history: tuple[CodeFeedback, ...]
    finished: bool
    won: bool
    code: tuple[int, ...] | None = None


def score_guess(secret: tuple[int, ...], guess: tuple[int, ...]) -> tuple[int, int]:
    """Return ``(exact, misplaced)``; exact hits are consumed first."""
    secret_left: list[int | None] = list(secret)
    guess_left: list[int | None] = list(guess)
    exact = 0
    for position, digit in enumerate(guess):
        if digit == secret[position]:
            exact += 1
            secret_left[position] = None
            guess_left[position] = None
    misplaced = 0
    for digit in guess_left:
        if digit is not None and digit in secret_left:
            misplaced += 1
            secret_left[secret_left.index(digit)] = None
    return exact, misplaced


class CodeBreaker(StreetJobPuzzle):
    """Crack a four digit code in six tries."""

    job = StreetJob.CODE_BREAKER
    CODE_LENGTH: ClassVar[int] = 4
    MAX_DIGIT: ClassVar[int] = 6
    MAX_ATTEMPTS: ClassVar[int] = 6

    def __init__(self, rng: CasinoRandomService | None = None) -> None:
        super().__init__(rng)
        self.code = tuple(
            self._rng.next_int(self.MAX_DIGIT) + 1 for _ in range(self.CODE_LENGTH)
        )
        self.history: list[CodeFeedback] = []

    @property
    def attempts_left(self) -> int:
        return self.MAX_ATTEMPTS - len(self.history)

    def guess(self, digits: tuple[int, ...] | list[int]) -> CodeFeedback:
        self._require_open()
        guess = tuple(digits)
        if len(guess) != self.CODE_LENGTH:
            msg = f"A guess needs exactly {self.CODE_LENGTH} digits."
            raise InvalidMoveError(msg)
        if any(not 1 <= digit <= self.MAX_DIGIT for digit in guess):
            msg = f"Digits must be between 1 and {self.MAX_DIGIT}."
            raise InvalidMoveError(msg)
        exact, misplaced = score_guess(self.code, guess)
        feedback = CodeFeedback(guess=guess, exact=exact, misplaced=misplaced)
        self.history.append(feedback)
        if exact == self.CODE_LENGTH:
            self.is_finished = True
            self.is_won = True
        elif len(self.history) >= self.MAX_ATTEMPTS:
            self.is_finished = True
        return feedback

    def snapshot(self) -> CodeBreakerSnapshot:
        return CodeBreakerSnapshot(
            puzzle_id=self.puzzle_id,
            code_length=self.CODE_LENGTH,
            max_digit=self.MAX_DIGIT,
            max_attempts=self.MAX_ATTEMPTS,
            history=tuple(self.history),
            finished=self.is_finished,
            won=self.is_won,
            code=self.code if self.is_finished else None,
        )


# Guess game


class GuessResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    guess: int
    hint: GuessHint


class GuessGameSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    puzzle_id: str
    min_number: int
    max_number: int
    attempts_left: int
    history: tuple[GuessResult, ...]
    finished: bool
    won: bool
    secret: int | None = None


class GuessGame(StreetJobPuzzle):
    """Find a number between 1 and 100 in seven guesses."""

    job = StreetJob.GUESS_GAME
    MIN_NUMBER: ClassVar[int] = 1
    MAX_NUMBER: ClassVar[int] = 100
    MAX_ATTEMPTS: ClassVar[int] = 7

    def __init__(self, rng: CasinoRandomService | None = None) -> None:
        super().__init__(rng)
        span = self.MAX_NUMBER - self.MIN_NUMBER + 1
        self.secret = self._rng.next_int(span) + self.MIN_NUMBER
        self.history: list[GuessResult] = []

    @property
    def attempts_left(self) -> int:
        return self.MAX_ATTEMPTS - len(self.history)

    def guess(self, value: int) -> GuessResult:
        """Compare *value* with the secret; out-of-range guesses cost nothing."""
        self._require_open()
        if not self.MIN_NUMBER <= value <= self.MAX_NUMBER:
            msg = f"Enter a number between {self.MIN_NUMBER} and {self.MAX_NUMBER}."
            raise InvalidMoveError(msg)
        hint: GuessHint
        if value == self.secret:
            hint = "Correct!"
        elif value < self.secret:
            hint = "Too low!"
        else:
            hint = "Too high!"
        result = GuessResult(guess=value, hint=hint)
        self.history.append(result)
        if value == self.secret:
            self.is_finished = True
            self.is_won = True
        elif len(self.history) >= self.MAX_ATTEMPTS:
            self.is_finished = True
        return result

    def snapshot(self) -> GuessGameSnapshot:
        return GuessGameSnapshot(
            puzzle_id=self.puzzle_id,
            min_number=self.MIN_NUMBER,
            max_number=self.MAX_NUMBER,
            attempts_left=self.attempts_left,
            history=tuple(self.history),
            finished=self.is_finished,
            won=self.is_won,
            secret=self.secret if self.is_finished else None,
        )


PUZZLE_TYPES: dict[StreetJob, type[StreetJobPuzzle]] = {
    StreetJob.MATH_QUIZ: MathQuiz,
    StreetJob.MATCH_SAMPLES: MatchSamples,
    StreetJob.CODE_BREAKER: CodeBreaker,
    StreetJob.GUESS_GAME: GuessGame,
}


__all__ = [
    "PUZZLE_TYPES",
    "CodeBreaker",
    "CodeBreakerSnapshot",
    "CodeFeedback",
    "GuessGame",
    "GuessGameSnapshot",
    "GuessResult",
    "MatchFlipResult",
    "MatchSamples",
    "MatchSamplesSnapshot",
    "MathAnswerResult",
    "MathQuestion",
    "MathQuiz",
    "MathQuizSnapshot",
    "StreetJobPuzzle",
    "score_guess",
]
