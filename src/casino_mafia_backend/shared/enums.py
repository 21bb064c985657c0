"""Shared enumerations used across the backend."""

from enum import StrEnum


class AvatarIcon(StrEnum):
    """Predefined avatar identifiers available to players."""

    BOSS = "boss"
    CROUPIER = "croupier"
    DETECTIVE = "detective"
    DRIVER = "driver"
    GAMBLER = "gambler"
    HUSTLER = "hustler"
    JOCKEY = "jockey"
    PILOT = "pilot"
    SHARK = "shark"
    TOURIST = "tourist"


class StreetJob(StrEnum):
    """Low-paying side jobs with a capped number of paid completions."""

    MATH_QUIZ = "math_quiz"
    MATCH_SAMPLES = "match_samples"
    CODE_BREAKER = "code_breaker"
    GUESS_GAME = "guess_game"


class CasinoGame(StrEnum):
    """Games offered on the casino floor."""

    ROULETTE = "roulette"
    BLACKJACK = "blackjack"
    HORSE_RACE = "horse_race"
    COIN_FLIP = "coin_flip"
    SLOT_MACHINE = "slot_machine"
    AVIATOR = "aviator"
