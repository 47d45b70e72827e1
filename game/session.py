"""Game session data structures."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import config


class GamePhase(Enum):
    """Where a guessing session currently stands."""
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    AWAITING_FEEDBACK_ACK = 'awaiting_feedback_ack'
    WON = 'won'
    LOST = 'lost'

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


@dataclass(frozen=True)
class GameSession:
    """
    Immutable snapshot of one number-guessing session.

    Transitions in ``game.engine`` never mutate a session; they return a new
    one built with ``dataclasses.replace``.
    """
    seed: int
    target: int

    # Current state
    phase: GamePhase = GamePhase.NOT_STARTED
    seconds_remaining: int = config.GAME_DURATION_SEC
    attempts_remaining: int = config.MAX_ATTEMPTS

    # Hint (one per session)
    hint_used: bool = False
    hint_text: Optional[str] = None

    # Messages for the board
    last_guess: Optional[int] = None
    last_feedback: Optional[str] = None
    outcome_message: Optional[str] = None

    def __post_init__(self):
        if not config.MIN_SEED <= self.seed <= config.MAX_SEED:
            raise ValueError(f"seed must be between {config.MIN_SEED} and {config.MAX_SEED}, got {self.seed}")
        if not config.MIN_NUMBER <= self.target <= config.MAX_NUMBER:
            raise ValueError(f"target {self.target} is outside {config.MIN_NUMBER}-{config.MAX_NUMBER}")
        if self.target % self.seed != 0:
            raise ValueError(f"target {self.target} is not a multiple of {self.seed}")
        if self.attempts_remaining < 0:
            raise ValueError("attempts_remaining cannot be negative")
        if self.seconds_remaining < 0:
            raise ValueError("seconds_remaining cannot be negative")

    @property
    def attempts_used(self) -> int:
        """Attempts spent so far, not counting a winning guess."""
        return config.MAX_ATTEMPTS - self.attempts_remaining

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal
