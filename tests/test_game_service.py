"""Tests for the per-player game service used by the API."""

from __future__ import annotations

import math
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from casino_mafia_backend.api.services import GameService
from casino_mafia_backend.game_logic import (
    ActionRejectedError,
    GameState,
    GuessGame,
    InMemoryGameStateStore,
    InsufficientFundsError,
    InvalidBetError,
    ItemNotFoundError,
    JobLimitReachedError,
    MathQuiz,
    RoundStateError,
)
from casino_mafia_backend.game_logic.casino import (
    Card,
    CoinSide,
    FlightStatus,
    RouletteBetType,
)
from casino_mafia_backend.game_logic.casino.blackjack import CardRank, CardSuit
from casino_mafia_backend.shared import CasinoRandomService, StreetJob

if TYPE_CHECKING:
    from tests.conftest import FakeClock

PLAYER = "player-1"


class HalfRoll(CasinoRandomService):
    """Seeded RNG whose uniform draws are pinned to one half."""

    def next_double(self) -> float:
        return 0.5


@pytest.fixture
def games(state_store: InMemoryGameStateStore, clock: FakeClock) -> GameService:
    return GameService(state_store, rng=HalfRoll(7), clock=clock)


def give_money(games: GameService, amount: int) -> None:
    games.session(PLAYER).store.set_money(amount)


def kinds(games: GameService) -> list[str]:
    return [event.kind for event in games.activity(PLAYER, 50)]


def test_session_loads_saved_state_once(
    games: GameService, state_store: InMemoryGameStateStore
) -> None:
    state_store.save_state(PLAYER, GameState(money=777))

    assert games.state(PLAYER).money == 777
    assert games.session(PLAYER) is games.session(PLAYER)


def test_market_purchases(games: GameService) -> None:
    with pytest.raises(ItemNotFoundError):
        games.buy_item(PLAYER, "caviar")

    state = games.buy_item(PLAYER, "bread")
    assert state.money == 80
    assert state.find_item("bread") is not None

    give_money(games, 10)
    with pytest.raises(InsufficientFundsError) as excinfo:
        games.buy_item(PLAYER, "burger_menu")
    assert excinfo.value.required == 80
    assert kinds(games) == ["market.buy"]


def test_using_items(games: GameService) -> None:
    with pytest.raises(ItemNotFoundError):
        games.use_item(PLAYER, "bread")

    games.session(PLAYER).store.update_hunger(-50)
    games.buy_item(PLAYER, "pizza_slice")

    assert games.use_item(PLAYER, "pizza_slice") == 30
    assert games.state(PLAYER).hunger == 80
    assert games.state(PLAYER).inventory == ()


def test_home_and_donations(games: GameService) -> None:
    assert games.visit_home(PLAYER) == 200
    assert games.state(PLAYER).money == 300

    with pytest.raises(InvalidBetError):
        games.donate(PLAYER, 0)
    with pytest.raises(InsufficientFundsError):
        games.donate(PLAYER, 301)
    assert games.donate(PLAYER, 200).money == 100


def test_hospital(games: GameService) -> None:
    with pytest.raises(ActionRejectedError):
        games.visit_hospital(PLAYER)

    games.session(PLAYER).store.update_hp(-40)
    with pytest.raises(InsufficientFundsError):
        games.visit_hospital(PLAYER)

    give_money(games, 2_000)
    assert games.visit_hospital(PLAYER) == 1_500
    assert games.state(PLAYER).hp == 100


def test_bodyguards_need_the_unlock(games: GameService) -> None:
    with pytest.raises(ActionRejectedError):
        games.hire_bodyguard(PLAYER)

    give_money(games, 60_000)
    state = games.hire_bodyguard(PLAYER)

    assert state.bodyguards == 1
    assert state.money == 55_000


def test_gang_recruiting(games: GameService) -> None:
    with pytest.raises(ActionRejectedError):
        games.recruit_gang(PLAYER, 0)
    with pytest.raises(ActionRejectedError):
        games.recruit_gang(PLAYER, 1)

    give_money(games, 100_000)
    state = games.recruit_gang(PLAYER, 3)

    assert state.gang_mates == 3
    assert state.money == 94_000


def test_navigation_marks_casino_visits(games: GameService, clock: FakeClock) -> None:
    clock.advance(5_000)

    assert games.navigate(PLAYER, "/nowhere").path == "/casino"
    assert games.state(PLAYER).last_casino_visit == clock.now
    assert games.navigate(PLAYER, "/home").name == "home"
    with pytest.raises(ActionRejectedError):
        games.navigate(PLAYER, "/gang-building")

    locked = {route.name for route, is_locked in games.routes(PLAYER) if is_locked}
    assert locked == {"secure-building", "gang-building"}


def test_concurrent_purchases_apply_one_at_a_time(games: GameService) -> None:
    give_money(games, 4 * 15)
    barrier = threading.Barrier(8)

    def buy_banana(_: int) -> bool:
        barrier.wait()
        try:
            games.buy_item(PLAYER, "banana")
        except InsufficientFundsError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(buy_banana, range(8)))

    state = games.state(PLAYER)
    held = state.find_item("banana")
    assert outcomes.count(True) == 4
    assert state.money == 0
    assert held is not None
    assert held.quantity == 4
    assert kinds(games).count("market.buy") == 4


def test_concurrent_first_access_opens_one_session(games: GameService) -> None:
    barrier = threading.Barrier(6)

    def open_session(_: int) -> int:
        barrier.wait()
        return id(games.session("newcomer"))

    with ThreadPoolExecutor(max_workers=6) as pool:
        sessions = set(pool.map(open_session, range(6)))

    assert len(sessions) == 1


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_stakes_are_rejected(games: GameService, amount: int) -> None:
    with pytest.raises(InvalidBetError):
        games.spin_slots(PLAYER, amount)
    assert games.state(PLAYER).money == 100


def test_unaffordable_stakes_leave_money_alone(games: GameService) -> None:
    with pytest.raises(InsufficientFundsError):
        games.flip_coin(PLAYER, CoinSide.HEADS, 500)
    assert games.state(PLAYER).money == 100


def test_malformed_bets(games: GameService) -> None:
    with pytest.raises(InvalidBetError):
        games.play_roulette(PLAYER, RouletteBetType.SINGLE, 10)
    with pytest.raises(InvalidBetError):
        games.race_horses(PLAYER, 5, 10)
    with pytest.raises(InvalidBetError):
        games.aviator_start(PLAYER, 10, auto_cashout=1.0)
    assert games.state(PLAYER).money == 100


def test_one_shot_games_settle_immediately(games: GameService) -> None:
    result = games.play_roulette(PLAYER, RouletteBetType.RED, 10)
    after_roulette = 90 + result.payout
    assert games.state(PLAYER).money == after_roulette

    flip = games.flip_coin(PLAYER, CoinSide.TAILS, 10)
    after_flip = after_roulette - 10 + flip.payout(10)
    assert games.state(PLAYER).money == after_flip

    race = games.race_horses(PLAYER, 1, 10)
    after_race = after_flip - 10 + race.payout(10)
    assert games.state(PLAYER).money == after_race

    spin = games.spin_slots(PLAYER, 10)
    assert games.state(PLAYER).money == after_race - 10 + spin.payout(10)

    assert kinds(games) == [
        "casino.roulette",
        "casino.coin_flip",
        "casino.horse_race",
        "casino.slot_machine",
    ]


def test_blackjack_round_lifecycle(games: GameService) -> None:
    with pytest.raises(ItemNotFoundError):
        games.blackjack_hit(PLAYER, "missing")

    round_ = games.blackjack_deal(PLAYER, 50)
    assert games.state(PLAYER).money == 50 or round_.is_settled
    if not round_.is_settled:
        round_ = games.blackjack_stand(PLAYER, round_.round_id)

    assert round_.is_settled
    assert round_.result is not None
    assert games.state(PLAYER).money == 50 + round_.result.payout
    with pytest.raises(ItemNotFoundError):
        games.blackjack_stand(PLAYER, round_.round_id)
    assert kinds(games) == ["casino.blackjack"]


def test_aviator_cash_out_pays_at_the_server_multiplier(
    games: GameService, clock: FakeClock
) -> None:
    flight, started_at = games.aviator_start(PLAYER, 50)
    assert flight.crash_point == pytest.approx(1.92)
    assert started_at == clock.now
    assert games.state(PLAYER).money == 50

    clock.advance(5_000)
    flying, observed_at = games.aviator_status(PLAYER, flight.round_id)
    assert flying.is_flying
    assert observed_at == clock.now
    cashed, _ = games.aviator_cash_out(PLAYER, flight.round_id)

    assert cashed.cashout_multiplier == pytest.approx(math.exp(0.3))
    assert cashed.payout == 67
    assert games.state(PLAYER).money == 117
    landed, _ = games.aviator_status(PLAYER, flight.round_id)
    assert landed.status is FlightStatus.CASHED_OUT
    with pytest.raises(RoundStateError):
        games.aviator_cash_out(PLAYER, flight.round_id)
    assert games.state(PLAYER).money == 117
    with pytest.raises(ItemNotFoundError):
        games.aviator_status(PLAYER, "missing")


def test_aviator_flight_crashes_on_the_server_clock(
    games: GameService, clock: FakeClock
) -> None:
    flight, _ = games.aviator_start(PLAYER, 40)
    clock.advance(20_000)

    landed, _ = games.aviator_status(PLAYER, flight.round_id)

    assert landed.status is FlightStatus.CRASHED
    assert games.state(PLAYER).money == 60
    assert kinds(games) == ["casino.aviator"]


def test_auto_cash_out_settles_without_polling_the_flight(
    games: GameService, clock: FakeClock
) -> None:
    flight, _ = games.aviator_start(PLAYER, 50, auto_cashout=1.2)
    clock.advance(20_000)

    games.spin_slots(PLAYER, 10)

    session = games.session(PLAYER)
    assert session.flights == {}
    assert session.landed_flights[flight.round_id].payout == 60
    assert games.state(PLAYER).money == 50 + 60 - 10 + 30
    assert kinds(games) == ["casino.aviator", "casino.slot_machine"]


def test_reading_state_lands_crashed_flights(
    games: GameService, clock: FakeClock
) -> None:
    games.aviator_start(PLAYER, 10)
    games.aviator_start(PLAYER, 10, auto_cashout=1.5)
    clock.advance(60_000)

    assert games.state(PLAYER).money == 80 + 15
    assert games.session(PLAYER).flights == {}


def test_landed_flight_history_is_bounded(
    games: GameService, clock: FakeClock
) -> None:
    give_money(games, 1_000)
    round_ids = []
    for _ in range(25):
        flight, _ = games.aviator_start(PLAYER, 1)
        round_ids.append(flight.round_id)
        clock.advance(20_000)

    games.state(PLAYER)

    landed = games.session(PLAYER).landed_flights
    assert list(landed) == round_ids[-20:]
    with pytest.raises(ItemNotFoundError):
        games.aviator_status(PLAYER, round_ids[0])


class TickingClock:
    """Clock that moves forward every time it is read."""

    def __init__(self, step_ms: int) -> None:
        self.now = 1_700_000_000_000
        self.step_ms = step_ms

    def __call__(self) -> int:
        self.now += self.step_ms
        return self.now


def test_flight_is_reported_at_one_server_instant(
    state_store: InMemoryGameStateStore,
) -> None:
    clock = TickingClock(1_000)
    games = GameService(state_store, rng=HalfRoll(7), clock=clock)
    flight, _ = games.aviator_start(PLAYER, 10)

    observed, now_ms = games.aviator_status(PLAYER, flight.round_id)

    elapsed = now_ms - flight.started_at_ms
    assert observed.is_flying
    assert games.aviator.current_multiplier(observed, now_ms) == pytest.approx(
        games.aviator.multiplier_after(elapsed)
    )
    assert games.aviator.multiplier_after(elapsed) < observed.crash_point


class StackedShoe:
    """Shoe that deals a known sequence of cards."""

    def __init__(self, *ranks: str) -> None:
        self._cards = [
            Card(suit=CardSuit.SPADES, rank=CardRank(rank)) for rank in ranks
        ]

    def __len__(self) -> int:
        return 100

    def rebuild(self) -> None:
        pass

    def draw(self) -> Card:
        return self._cards.pop(0)


def test_dealing_again_stands_the_open_hand(games: GameService) -> None:
    session = games.session(PLAYER)
    session.blackjack._shoe = StackedShoe(  # noqa: SLF001
        "10", "9", "7", "8", "10", "9", "7", "8"
    )
    first = games.blackjack_deal(PLAYER, 10)
    assert not first.is_settled

    second = games.blackjack_deal(PLAYER, 10)

    assert list(session.blackjack_rounds) == [second.round_id]
    assert games.state(PLAYER).money == 100 - 10 + 10 - 10
    assert kinds(games) == ["casino.blackjack"]


def test_mafia_flow(games: GameService) -> None:
    with pytest.raises(ActionRejectedError):
        games.mafia_force(PLAYER)

    give_money(games, 20_000)
    encounter = games.mafia_force(PLAYER)
    open_encounter, cooldown = games.mafia_status(PLAYER)
    assert open_encounter == encounter
    assert cooldown == 300_000

    result = games.mafia_pay(PLAYER)
    assert result.paid_tribute
    assert games.state(PLAYER).money == 20_000 - encounter.tribute
    assert games.mafia_status(PLAYER)[0] is None

    games.mafia_reset_cooldown(PLAYER)
    assert games.mafia_status(PLAYER)[1] == 0
    assert kinds(games) == ["mafia.pay"]


def test_mafia_check_rolls_against_the_probability(games: GameService) -> None:
    give_money(games, 20_000)

    assert games.mafia_check(PLAYER) is None


def test_mafia_fight_and_dismiss(games: GameService) -> None:
    give_money(games, 20_000)
    games.mafia_force(PLAYER)

    result = games.mafia_fight(PLAYER)

    assert result.hp_lost > 0
    assert games.state(PLAYER).hp == 100 - result.hp_lost
    games.mafia_force(PLAYER)
    games.mafia_dismiss(PLAYER)
    assert games.mafia_status(PLAYER)[0] is None


def test_guess_game_pays_on_a_win(games: GameService) -> None:
    with pytest.raises(ItemNotFoundError):
        games.job_puzzle(PLAYER, StreetJob.GUESS_GAME)

    puzzle = games.start_job(PLAYER, StreetJob.GUESS_GAME)
    assert isinstance(puzzle, GuessGame)
    puzzle.secret = 30

    _, _, reward = games.guess_number(PLAYER, 20)
    assert reward == 0
    result, _, reward = games.guess_number(PLAYER, 30)

    assert result.hint == "Correct!"
    assert reward == 20
    assert games.state(PLAYER).money == 120
    with pytest.raises(ItemNotFoundError):
        games.guess_number(PLAYER, 30)


def test_lost_puzzle_pays_nothing_but_keeps_attempts(games: GameService) -> None:
    puzzle = games.start_job(PLAYER, StreetJob.GUESS_GAME)
    assert isinstance(puzzle, GuessGame)
    puzzle.secret = 100

    for _ in range(GuessGame.MAX_ATTEMPTS):
        *_, reward = games.guess_number(PLAYER, 1)

    assert reward == 0
    assert games.state(PLAYER).attempts_left(StreetJob.GUESS_GAME) == 3
    assert kinds(games) == ["job.guess_game"]


def test_math_quiz_pays_per_correct_answer_on_finish(games: GameService) -> None:
    quiz = games.start_job(PLAYER, StreetJob.MATH_QUIZ)
    assert isinstance(quiz, MathQuiz)

    rewards = [
        games.answer_math(PLAYER, quiz.question.answer)[2]
        for _ in range(MathQuiz.TOTAL_QUESTIONS)
    ]

    assert rewards == [0, 0, 0, 0, 50]
    assert games.state(PLAYER).job_count(StreetJob.MATH_QUIZ) == 1


def test_job_attempts_run_out(games: GameService) -> None:
    store = games.session(PLAYER).store
    for _ in range(3):
        store.complete_code_breaker()

    with pytest.raises(JobLimitReachedError):
        games.start_job(PLAYER, StreetJob.CODE_BREAKER)


def test_reset_abandons_every_round(games: GameService) -> None:
    give_money(games, 20_000)
    games.aviator_start(PLAYER, 100)
    games.start_job(PLAYER, StreetJob.MATCH_SAMPLES)
    games.mafia_force(PLAYER)

    state = games.reset(PLAYER)

    session = games.session(PLAYER)
    assert state == GameState()
    assert session.flights == {}
    assert session.puzzles == {}
    assert session.mafia.encounter is None
    assert kinds(games) == ["player.reset"]


def test_timed_penalties(games: GameService) -> None:
    games.apply_casino_time_penalty(PLAYER)
    state = games.apply_home_absence_penalty(PLAYER)

    assert state.family_happiness == 85


def test_simulation_report(games: GameService) -> None:
    results, report = games.run_simulation(200, seed=1)

    assert len(results) == 6
    assert all(result.rounds == 200 for result in results)
    assert "CASINO RTP SIMULATION REPORT" in report
