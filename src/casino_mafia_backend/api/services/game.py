"""Per-player game sessions behind the HTTP API.

:class:`GameService` keeps one :class:`PlayerSession` per authenticated
player. A session owns the player's :class:`GameStore` together with the
server-side rounds that span several requests: blackjack hands, aviator
flights, the open mafia encounter and street-job puzzles. Store operations
report refusals through their return values; this layer turns those into
:mod:`~casino_mafia_backend.game_logic.errors` exceptions for the routers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import ValidationError

from casino_mafia_backend.game_logic import (
    INITIAL_LOCATION,
    MARKET_ITEMS,
    ROUTES,
    ActionRejectedError,
    GameState,
    GameStateStore,
    GameStore,
    InsufficientFundsError,
    InvalidBetError,
    InventoryItem,
    ItemNotFoundError,
    JobLimitReachedError,
    MafiaEncounter,
    MafiaEventManager,
    MafiaEventResult,
    MafiaEventService,
    OddsConfiguration,
    Route,
    RouteGroup,
    RulesConfiguration,
    StreetJobPuzzle,
    get_default_odds,
    get_default_rules,
    get_market_item,
    resolve,
)
from casino_mafia_backend.game_logic.casino import (
    HORSES,
    AviatorFlight,
    AviatorGame,
    BlackjackRound,
    BlackjackTable,
    CasinoSimulationService,
    CoinFlip,
    CoinFlipResult,
    CoinSide,
    HorseRace,
    HorseRaceResult,
    RouletteBet,
    RouletteBetType,
    RouletteResult,
    RouletteWheel,
    SimulationResult,
    SlotMachine,
    SlotResult,
)
from casino_mafia_backend.game_logic.store import Clock  # noqa: TC001
from casino_mafia_backend.game_logic.street_jobs import (
    PUZZLE_TYPES,
    CodeBreaker,
    CodeFeedback,
    GuessGame,
    GuessResult,
    MatchFlipResult,
    MatchSamples,
    MathAnswerResult,
    MathQuiz,
)
from casino_mafia_backend.shared import (
    ActivityEvent,
    ActivityLog,
    CasinoGame,
    CasinoRandomService,
    StreetJob,
)

logger = logging.getLogger(__name__)

_PuzzleT = TypeVar("_PuzzleT", bound=StreetJobPuzzle)

_LANDED_FLIGHT_HISTORY = 20

_WIN_REWARDS: dict[StreetJob, Callable[[GameStore], int]] = {
    StreetJob.MATCH_SAMPLES: GameStore.complete_match_samples,
    StreetJob.CODE_BREAKER: GameStore.complete_code_breaker,
    StreetJob.GUESS_GAME: GameStore.complete_guess_game,
}


@dataclass(slots=True)
class PlayerSession:
    """Everything the server keeps in memory for one player."""

    store: GameStore
    mafia: MafiaEventManager
    blackjack: BlackjackTable
    activity: ActivityLog = field(default_factory=ActivityLog)
    blackjack_rounds: dict[str, BlackjackRound] = field(default_factory=dict)
    flights: dict[str, AviatorFlight] = field(default_factory=dict)
    landed_flights: dict[str, AviatorFlight] = field(default_factory=dict)
    puzzles: dict[StreetJob, StreetJobPuzzle] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock)

    def record(self, kind: str, message: str, **payload: Any) -> None:
        self.activity = self.activity.append(
            ActivityEvent(kind=kind, message=message, payload=payload)
        )


class GameService:
    """Route player actions to their store and settle the outcomes."""

    def __init__(
        self,
        state_store: GameStateStore,
        *,
        rng: CasinoRandomService | None = None,
        rules: RulesConfiguration | None = None,
        odds: OddsConfiguration | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._state_store = state_store
        self._rng = rng or CasinoRandomService()
        self._rules = rules or get_default_rules()
        self._odds = odds or get_default_odds()
        self._clock = clock
        self._sessions: dict[str, PlayerSession] = {}
        self._sessions_lock = threading.Lock()
        self._wheel = RouletteWheel(self._rng)
        self._coin = CoinFlip(self._rng, odds=self._odds)
        self._race = HorseRace(self._rng, odds=self._odds)
        self._slots = SlotMachine(self._rng, odds=self._odds)
        self._aviator = AviatorGame(self._rng, odds=self._odds)

    @property
    def rules(self) -> RulesConfiguration:
        return self._rules

    @property
    def odds(self) -> OddsConfiguration:
        return self._odds

    # Sessions

    def _open_session(self, player_id: str) -> PlayerSession:
        store = GameStore.load(
            player_id, self._state_store, rules=self._rules, clock=self._clock
        )
        mafia = MafiaEventService(self._rng, rules=self._rules, clock=store.now_ms)
        logger.info("Opened game session for player %s.", player_id)
        return PlayerSession(
            store=store,
            mafia=MafiaEventManager(store, mafia),
            blackjack=BlackjackTable(self._rng, odds=self._odds),
        )

    def session(self, player_id: str) -> PlayerSession:
        """Return the player's session, loading saved state on first use."""
        with self._sessions_lock:
            session = self._sessions.get(player_id)
            if session is None:
                session = self._open_session(player_id)
                self._sessions[player_id] = session
            return session

    @contextmanager
    def _locked(self, player_id: str) -> Iterator[PlayerSession]:
        session = self.session(player_id)
        with session.lock:
            self._land_flights(session)
            yield session

    def state(self, player_id: str) -> GameState:
        with self._locked(player_id) as session:
            return session.store.state

    def activity(self, player_id: str, count: int = 10) -> tuple[ActivityEvent, ...]:
        return self.session(player_id).activity.latest(count)

    def reset(self, player_id: str) -> GameState:
        """Wipe progress and abandon every open round."""
        with self._locked(player_id) as session:
            session.store.reset_game()
            session.blackjack_rounds.clear()
            session.flights.clear()
            session.landed_flights.clear()
            session.puzzles.clear()
            session.mafia.dismiss()
            session.mafia.reset_cooldown()
            session.activity = ActivityLog(capacity=session.activity.capacity)
            session.record("player.reset", "Started a new game.")
            return session.store.state

    def apply_casino_time_penalty(self, player_id: str) -> GameState:
        with self._locked(player_id) as session:
            session.store.apply_casino_time_penalty()
            return session.store.state

    def apply_home_absence_penalty(self, player_id: str) -> GameState:
        with self._locked(player_id) as session:
            session.store.apply_home_absence_penalty()
            return session.store.state

    # Navigation

    def routes(self, player_id: str) -> tuple[tuple[Route, bool], ...]:
        """Return every route with whether it is currently locked."""
        state = self.state(player_id)
        return tuple((route, route.is_locked(state)) for route in ROUTES)

    def navigate(self, player_id: str, path: str) -> Route:
        """Resolve *path*; unknown paths land on the initial location."""
        with self._locked(player_id) as session:
            route = resolve(path)
            if route.is_locked(session.store.state):
                msg = f"{route.title} is locked."
                logger.info("Player %s tried locked route %s.", player_id, route.path)
                raise ActionRejectedError(msg)
            if route.group is RouteGroup.CASINO or route.path == INITIAL_LOCATION:
                session.store.enter_casino()
            return route

    # Market and inventory

    @staticmethod
    def market_items() -> tuple[InventoryItem, ...]:
        return MARKET_ITEMS

    @staticmethod
    def _market_item(item_id: str) -> InventoryItem:
        item = get_market_item(item_id)
        if item is None:
            msg = f"Unknown item '{item_id}'."
            raise ItemNotFoundError(msg)
        return item

    def buy_item(self, player_id: str, item_id: str) -> GameState:
        item = self._market_item(item_id)
        with self._locked(player_id) as session:
            store = session.store
            if not store.buy_item(item):
                raise InsufficientFundsError(item.price, store.state.money)
            session.record("market.buy", f"Bought {item.name}.", item_id=item.id_)
            return store.state

    def use_item(self, player_id: str, item_id: str) -> int:
        """Eat one unit of a held item; returns the hunger restored."""
        with self._locked(player_id) as session:
            store = session.store
            held = store.state.find_item(item_id)
            if held is None:
                msg = f"You do not have any '{item_id}'."
                raise ItemNotFoundError(msg)
            restored = store.use_item(held)
            session.record(
                "inventory.use",
                f"Ate {held.name} (+{restored} hunger).",
                item_id=held.id_,
                restored=restored,
            )
            return restored

    # Buildings

    def visit_home(self, player_id: str) -> int:
        with self._locked(player_id) as session:
            reward = session.store.visit_home()
            session.record("home.visit", f"Visited home and earned ${reward}.")
            return reward

    def suggested_donation(self, player_id: str) -> int:
        return self.session(player_id).store.suggested_donation()

    def donate(self, player_id: str, amount: int) -> GameState:
        if amount <= 0:
            msg = "Donation must be positive."
            raise InvalidBetError(msg)
        with self._locked(player_id) as session:
            store = session.store
            if not store.leave_money_for_family(amount):
                raise InsufficientFundsError(amount, store.state.money)
            session.record("home.donate", f"Left ${amount} for the family.")
            return store.state

    def visit_hospital(self, player_id: str) -> int:
        """Heal to full; returns the price paid."""
        with self._locked(player_id) as session:
            store = session.store
            state = store.state
            if state.hp >= state.effective_max_hp:
                msg = "You are already at full health."
                raise ActionRejectedError(msg)
            price = state.hospital_cost
            if not store.heal_to_full():
                raise InsufficientFundsError(price, state.money)
            session.record("hospital.heal", f"Paid ${price} for treatment.")
            return price

    def hire_bodyguard(self, player_id: str) -> GameState:
        with self._locked(player_id) as session:
            store = session.store
            state = store.state
            if not state.bodyguard_unlocked:
                msg = "The secure building is locked."
                raise ActionRejectedError(msg)
            if state.bodyguards >= self._rules.max_bodyguards:
                msg = f"You already have {self._rules.max_bodyguards} bodyguards."
                raise ActionRejectedError(msg)
            if not store.add_bodyguard():
                raise InsufficientFundsError(self._rules.bodyguard_cost, state.money)
            session.record("building.bodyguard", "Hired a bodyguard.")
            return store.state

    def recruit_gang(self, player_id: str, count: int) -> GameState:
        if count <= 0:
            msg = "Recruit at least one gang member."
            raise ActionRejectedError(msg)
        with self._locked(player_id) as session:
            store = session.store
            state = store.state
            if not state.gang_unlocked:
                msg = "The gang building is locked."
                raise ActionRejectedError(msg)
            cost = count * self._rules.gang_recruit_cost
            if not store.recruit_gang_members(count, cost):
                raise InsufficientFundsError(cost, state.money)
            session.record("building.gang", f"Recruited {count} gang members.")
            return store.state

    # Casino

    @staticmethod
    def _take_stake(session: PlayerSession, amount: int) -> None:
        if amount <= 0:
            msg = "Bet must be positive."
            raise InvalidBetError(msg)
        store = session.store
        if not store.spend_money(amount):
            raise InsufficientFundsError(amount, store.state.money)

    @staticmethod
    def _settle(
        session: PlayerSession, game: CasinoGame, stake: int, payout: int
    ) -> None:
        if payout > 0:
            session.store.add_money(payout)
        verdict = f"won ${payout}" if payout > stake else f"lost ${stake - payout}"
        if payout == stake:
            verdict = "pushed"
        session.record(
            f"casino.{game.value}",
            f"Bet ${stake} on {game.value.replace('_', ' ')} and {verdict}.",
            stake=stake,
            payout=payout,
        )

    def play_roulette(
        self,
        player_id: str,
        bet_type: RouletteBetType,
        amount: int,
        number: int | None = None,
    ) -> RouletteResult:
        try:
            bet = RouletteBet(bet_type=bet_type, number=number, amount=amount)
        except ValidationError as exc:
            msg = exc.errors()[0]["msg"]
            raise InvalidBetError(msg) from exc
        with self._locked(player_id) as session:
            self._take_stake(session, amount)
            result = self._wheel.spin(bet)
            self._settle(session, CasinoGame.ROULETTE, amount, result.payout)
            return result

    def flip_coin(
        self, player_id: str, choice: CoinSide, amount: int
    ) -> CoinFlipResult:
        with self._locked(player_id) as session:
            self._take_stake(session, amount)
            result = self._coin.play(choice)
            self._settle(session, CasinoGame.COIN_FLIP, amount, result.payout(amount))
            return result

    def race_horses(
        self, player_id: str, horse_index: int, amount: int
    ) -> HorseRaceResult:
        if not 0 <= horse_index < len(HORSES):
            msg = f"Pick a horse between 0 and {len(HORSES) - 1}."
            raise InvalidBetError(msg)
        with self._locked(player_id) as session:
            self._take_stake(session, amount)
            result = self._race.race(horse_index)
            self._settle(session, CasinoGame.HORSE_RACE, amount, result.payout(amount))
            return result

    def spin_slots(self, player_id: str, amount: int) -> SlotResult:
        with self._locked(player_id) as session:
            self._take_stake(session, amount)
            result = self._slots.spin()
            self._settle(
                session, CasinoGame.SLOT_MACHINE, amount, result.payout(amount)
            )
            return result

    def _settle_blackjack(
        self, session: PlayerSession, round_: BlackjackRound
    ) -> BlackjackRound:
        if round_.is_settled:
            session.blackjack_rounds.pop(round_.round_id, None)
            payout = round_.result.payout if round_.result else 0
            self._settle(session, CasinoGame.BLACKJACK, round_.stake, payout)
        else:
            session.blackjack_rounds[round_.round_id] = round_
        return round_

    @staticmethod
    def _blackjack_round(session: PlayerSession, round_id: str) -> BlackjackRound:
        round_ = session.blackjack_rounds.get(round_id)
        if round_ is None:
            msg = f"Unknown blackjack round '{round_id}'."
            raise ItemNotFoundError(msg)
        return round_

    def blackjack_deal(self, player_id: str, amount: int) -> BlackjackRound:
        """Deal a new hand; a hand left open is stood and settled first."""
        with self._locked(player_id) as session:
            for open_round in tuple(session.blackjack_rounds.values()):
                self._settle_blackjack(session, session.blackjack.stand(open_round))
            self._take_stake(session, amount)
            return self._settle_blackjack(session, session.blackjack.deal(amount))

    def blackjack_hit(self, player_id: str, round_id: str) -> BlackjackRound:
        with self._locked(player_id) as session:
            round_ = self._blackjack_round(session, round_id)
            return self._settle_blackjack(session, session.blackjack.hit(round_))

    def blackjack_stand(self, player_id: str, round_id: str) -> BlackjackRound:
        with self._locked(player_id) as session:
            round_ = self._blackjack_round(session, round_id)
            return self._settle_blackjack(session, session.blackjack.stand(round_))

    @property
    def aviator(self) -> AviatorGame:
        return self._aviator

    def _track_flight(
        self, session: PlayerSession, flight: AviatorFlight
    ) -> AviatorFlight:
        if flight.is_flying:
            session.flights[flight.round_id] = flight
            return flight
        session.flights.pop(flight.round_id, None)
        session.landed_flights[flight.round_id] = flight
        while len(session.landed_flights) > _LANDED_FLIGHT_HISTORY:
            session.landed_flights.pop(next(iter(session.landed_flights)))
        self._settle(session, CasinoGame.AVIATOR, flight.stake, flight.payout)
        return flight

    def _land_flights(self, session: PlayerSession) -> None:
        """Settle every open flight that crashed or auto cashed out by now."""
        if not session.flights:
            return
        now_ms = session.store.now_ms()
        for flight in tuple(session.flights.values()):
            advanced = self._aviator.advance(flight, now_ms)
            if not advanced.is_flying:
                self._track_flight(session, advanced)

    @staticmethod
    def _flight(session: PlayerSession, round_id: str) -> AviatorFlight:
        flight = session.flights.get(round_id) or session.landed_flights.get(round_id)
        if flight is None:
            msg = f"Unknown aviator round '{round_id}'."
            raise ItemNotFoundError(msg)
        return flight

    def aviator_start(
        self, player_id: str, amount: int, auto_cashout: float | None = None
    ) -> tuple[AviatorFlight, int]:
        """Take off now; returns the flight and the server time it started."""
        if auto_cashout is not None and auto_cashout <= 1.0:
            msg = "Auto cash-out must be above 1.00x."
            raise InvalidBetError(msg)
        with self._locked(player_id) as session:
            self._take_stake(session, amount)
            now_ms = session.store.now_ms()
            flight = self._aviator.start(amount, now_ms, auto_cashout=auto_cashout)
            return self._track_flight(session, flight), now_ms

    def aviator_status(
        self, player_id: str, round_id: str
    ) -> tuple[AviatorFlight, int]:
        """Advance the flight to the server clock; settles a landed flight."""
        with self._locked(player_id) as session:
            flight = self._flight(session, round_id)
            now_ms = session.store.now_ms()
            if flight.is_flying:
                flight = self._track_flight(
                    session, self._aviator.advance(flight, now_ms)
                )
            return flight, now_ms

    def aviator_cash_out(
        self, player_id: str, round_id: str
    ) -> tuple[AviatorFlight, int]:
        with self._locked(player_id) as session:
            flight = self._flight(session, round_id)
            now_ms = session.store.now_ms()
            flight = self._aviator.cash_out(flight, now_ms)
            return self._track_flight(session, flight), now_ms

    def run_simulation(
        self, rounds: int, seed: int | None = None
    ) -> tuple[tuple[SimulationResult, ...], str]:
        service = CasinoSimulationService(seed, odds=self._odds)
        results = service.run_all(rounds)
        return results, service.format_report(results, rounds)

    # Mafia

    def mafia_status(self, player_id: str) -> tuple[MafiaEncounter | None, int]:
        """Return the open encounter and the remaining cooldown in ms."""
        session = self.session(player_id)
        return session.mafia.encounter, session.mafia.service.cooldown_remaining_ms()

    def mafia_check(self, player_id: str) -> MafiaEncounter | None:
        with self._locked(player_id) as session:
            return session.mafia.check_and_trigger()

    def mafia_force(self, player_id: str) -> MafiaEncounter:
        with self._locked(player_id) as session:
            encounter = session.mafia.force_trigger()
            if encounter is None:
                msg = "The mafia is not interested in you yet."
                raise ActionRejectedError(msg)
            return encounter

    def mafia_pay(self, player_id: str) -> MafiaEventResult:
        with self._locked(player_id) as session:
            result = session.mafia.pay_tribute()
            session.record("mafia.pay", result.message, money_lost=result.money_lost)
            return result

    def mafia_fight(self, player_id: str) -> MafiaEventResult:
        with self._locked(player_id) as session:
            result = session.mafia.fight()
            session.record(
                "mafia.fight",
                result.message,
                hp_lost=result.hp_lost,
                gang_lost=result.gang_lost,
            )
            return result

    def mafia_dismiss(self, player_id: str) -> None:
        with self._locked(player_id) as session:
            session.mafia.dismiss()

    def mafia_reset_cooldown(self, player_id: str) -> None:
        with self._locked(player_id) as session:
            session.mafia.reset_cooldown()

    # Street jobs

    def start_job(self, player_id: str, job: StreetJob) -> StreetJobPuzzle:
        """Open a fresh puzzle for *job*, replacing an unfinished one."""
        with self._locked(player_id) as session:
            if not session.store.state.can_play(job):
                msg = f"No {job.value.replace('_', ' ')} attempts left."
                raise JobLimitReachedError(msg)
            puzzle = PUZZLE_TYPES[job](self._rng)
            session.puzzles[job] = puzzle
            return puzzle

    def job_puzzle(self, player_id: str, job: StreetJob) -> StreetJobPuzzle:
        return self._puzzle(self.session(player_id), job, StreetJobPuzzle)

    @staticmethod
    def _puzzle(
        session: PlayerSession, job: StreetJob, kind: type[_PuzzleT]
    ) -> _PuzzleT:
        puzzle = session.puzzles.get(job)
        if not isinstance(puzzle, kind):
            msg = f"No {job.value.replace('_', ' ')} in progress."
            raise ItemNotFoundError(msg)
        return puzzle

    @staticmethod
    def _finish_job(session: PlayerSession, puzzle: StreetJobPuzzle) -> int:
        """Pay out a finished puzzle and drop it; returns the reward."""
        if not puzzle.is_finished:
            return 0
        session.puzzles.pop(puzzle.job, None)
        reward = 0
        if isinstance(puzzle, MathQuiz):
            reward = session.store.complete_math_quiz(puzzle.correct_answers)
        elif puzzle.is_won:
            reward = _WIN_REWARDS[puzzle.job](session.store)
        label = puzzle.job.value.replace("_", " ")
        outcome = "finished" if puzzle.is_won else "failed"
        session.record(
            f"job.{puzzle.job.value}",
            f"{outcome.capitalize()} {label} and earned ${reward}.",
            reward=reward,
        )
        return reward

    def answer_math(
        self, player_id: str, value: int
    ) -> tuple[MathAnswerResult, MathQuiz, int]:
        with self._locked(player_id) as session:
            quiz = self._puzzle(session, StreetJob.MATH_QUIZ, MathQuiz)
            result = quiz.answer(value)
            return result, quiz, self._finish_job(session, quiz)

    def flip_sample(
        self, player_id: str, index: int
    ) -> tuple[MatchFlipResult, MatchSamples, int]:
        with self._locked(player_id) as session:
            board = self._puzzle(session, StreetJob.MATCH_SAMPLES, MatchSamples)
            result = board.flip(index)
            return result, board, self._finish_job(session, board)

    def break_code(
        self, player_id: str, digits: list[int]
    ) -> tuple[CodeFeedback, CodeBreaker, int]:
        with self._locked(player_id) as session:
            breaker = self._puzzle(session, StreetJob.CODE_BREAKER, CodeBreaker)
            feedback = breaker.guess(digits)
            return feedback, breaker, self._finish_job(session, breaker)

    def guess_number(
        self, player_id: str, value: int
    ) -> tuple[GuessResult, GuessGame, int]:
        with self._locked(player_id) as session:
            game = self._puzzle(session, StreetJob.GUESS_GAME, GuessGame)
            result = game.guess(value)
            return result, game, self._finish_job(session, game)


__all__ = ["GameService", "PlayerSession"]
