"""
State transitions for the number-guessing game.

Every function takes a ``GameSession`` and returns a new one. Nothing here
schedules work or touches Discord; the countdown is driven from outside by
calling ``tick`` once per elapsed second.
"""

import logging
import random
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

import config
from game.session import GamePhase, GameSession

logger = logging.getLogger(__name__)

# Board copy
TIME_EXCEEDED = "time exceeded"
ATTEMPTS_EXHAUSTED = "attempts exhausted"
PLAYER_ENDED = "player ended the session"
GUESS_LOWER = "guess lower"
GUESS_HIGHER = "guess higher"
HINT_ABOVE = f"greater than {config.HINT_THRESHOLD}"
HINT_AT_OR_BELOW = f"less than or equal to {config.HINT_THRESHOLD}"

_INTEGER = re.compile(r"[+-]?\d+")


class GameError(Exception):
    """Base class for engine errors."""


class InvalidTransition(GameError):
    """An operation was called from a phase that does not allow it."""

    def __init__(self, operation: str, phase: GamePhase):
        super().__init__(f"cannot {operation} while game is {phase.value}")
        self.operation = operation
        self.phase = phase


class InvalidSeed(GameError, ValueError):
    """The seed is outside the range a registered phone number can produce."""


class GuessRejection(Enum):
    """Why a guess was refused without costing an attempt."""
    INVALID_INPUT = 'invalid_input'
    OUT_OF_RANGE = 'out_of_range'
    NOT_A_MULTIPLE = 'not_a_multiple'


@dataclass(frozen=True)
class GuessResult:
    """Outcome of ``submit_guess``."""
    session: GameSession
    rejection: Optional[GuessRejection] = None
    message: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def candidate_targets(seed: int) -> List[int]:
    """All multiples of ``seed`` within the playable range."""
    return list(range(seed, config.MAX_NUMBER + 1, seed))


def _draw_target(seed: int, rng: Optional[random.Random]) -> int:
    return (rng or random).choice(candidate_targets(seed))


def _require(session: GameSession, phase: GamePhase, operation: str) -> None:
    if session.phase is not phase:
        raise InvalidTransition(operation, session.phase)


def create_session(seed: int, rng: Optional[random.Random] = None) -> GameSession:
    """Create a fresh, not-yet-started session for ``seed``."""
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidSeed(f"seed must be an integer, got {seed!r}")
    if not config.MIN_SEED <= seed <= config.MAX_SEED:
        raise InvalidSeed(f"seed must be between {config.MIN_SEED} and {config.MAX_SEED}, got {seed}")

    return GameSession(seed=seed, target=_draw_target(seed, rng))


def start(session: GameSession, rng: Optional[random.Random] = None) -> GameSession:
    """
    Begin play.

    A new target is drawn here, so the number picked at creation time is
    never the one actually played.
    """
    _require(session, GamePhase.NOT_STARTED, 'start')

    return replace(
        session,
        target=_draw_target(session.seed, rng),
        phase=GamePhase.IN_PROGRESS,
        seconds_remaining=config.GAME_DURATION_SEC,
        attempts_remaining=config.MAX_ATTEMPTS,
        hint_used=False,
        hint_text=None,
        last_guess=None,
        last_feedback=None,
        outcome_message=None,
    )


def tick(session: GameSession) -> GameSession:
    """Take one second off the clock. A finished session is left as is."""
    if session.phase.is_terminal:
        return session
    _require(session, GamePhase.IN_PROGRESS, 'tick')

    seconds = max(0, session.seconds_remaining - 1)
    if seconds == 0:
        logger.debug("Session out of time (target %d)", session.target)
        return replace(
            session,
            seconds_remaining=0,
            phase=GamePhase.LOST,
            outcome_message=TIME_EXCEEDED,
        )

    return replace(session, seconds_remaining=seconds)


def submit_guess(session: GameSession, raw_input) -> GuessResult:
    """
    Check a guess against the target.

    Malformed, out-of-range and non-multiple guesses are rejected without
    using an attempt. Any other wrong guess costs one attempt.
    """
    _require(session, GamePhase.IN_PROGRESS, 'submit a guess')

    text = str(raw_input).strip()
    if not _INTEGER.fullmatch(text):
        return GuessResult(session, GuessRejection.INVALID_INPUT, "Please enter a whole number.")

    # More digits than the largest number can be out of range without parsing them
    digits = text.lstrip("+-").lstrip("0")
    too_long = len(digits) > len(str(config.MAX_NUMBER))
    guess = None if too_long else int(text)
    if too_long or not config.MIN_NUMBER <= guess <= config.MAX_NUMBER:
        return GuessResult(
            session,
            GuessRejection.OUT_OF_RANGE,
            f"Your guess must be between {config.MIN_NUMBER} and {config.MAX_NUMBER}.",
        )
    if guess % session.seed != 0:
        return GuessResult(
            session,
            GuessRejection.NOT_A_MULTIPLE,
            f"Your guess must be a multiple of {session.seed}.",
        )

    if guess == session.target:
        used = session.attempts_used + 1
        noun = "attempt" if used == 1 else "attempts"
        return GuessResult(replace(
            session,
            phase=GamePhase.WON,
            last_guess=guess,
            last_feedback=None,
            outcome_message=f"guessed correctly in {used} {noun}",
        ))

    attempts = max(0, session.attempts_remaining - 1)
    if attempts == 0:
        return GuessResult(replace(
            session,
            phase=GamePhase.LOST,
            attempts_remaining=0,
            last_guess=guess,
            last_feedback=None,
            outcome_message=ATTEMPTS_EXHAUSTED,
        ))

    return GuessResult(replace(
        session,
        phase=GamePhase.AWAITING_FEEDBACK_ACK,
        attempts_remaining=attempts,
        last_guess=guess,
        last_feedback=GUESS_LOWER if guess > session.target else GUESS_HIGHER,
    ))


def try_again(session: GameSession) -> GameSession:
    """Dismiss the feedback card and keep playing."""
    _require(session, GamePhase.AWAITING_FEEDBACK_ACK, 'try again')
    return replace(session, phase=GamePhase.IN_PROGRESS, last_guess=None, last_feedback=None)


def end_game(session: GameSession) -> GameSession:
    """Give up from the feedback card."""
    _require(session, GamePhase.AWAITING_FEEDBACK_ACK, 'end the game')
    return replace(session, phase=GamePhase.LOST, outcome_message=PLAYER_ENDED)


def use_hint(session: GameSession) -> GameSession:
    """Reveal which half of the range the target is in. Only the first call has an effect."""
    _require(session, GamePhase.IN_PROGRESS, 'use a hint')
    if session.hint_used:
        return session

    text = HINT_ABOVE if session.target > config.HINT_THRESHOLD else HINT_AT_OR_BELOW
    return replace(session, hint_used=True, hint_text=text)


def new_session(previous_seed: int, rng: Optional[random.Random] = None) -> GameSession:
    """Fresh session for the same player, already started."""
    return start(create_session(previous_seed, rng), rng)
