"""Manages active game sessions and their countdown timers."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import config
from game import engine
from game.engine import GuessResult
from game.session import GamePhase, GameSession
from game.timer import CountdownTimer

logger = logging.getLogger(__name__)

TickListener = Callable[[GameSession], Awaitable[None]]
SessionKey = Tuple[str, str]


class NoSuchGame(KeyError):
    """No game for this key, or the caller is not the one that opened it."""


@dataclass
class ActiveGame:
    """A session together with the timer that drives it."""
    session: GameSession
    listener: Optional[TickListener] = None
    timer: Optional[CountdownTimer] = None
    # Whoever opened the game (e.g. the board showing it); None means anyone
    owner: Any = None
    on_release: Optional[Callable[[], None]] = None

    def stop_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None

    def owned_by(self, owner) -> bool:
        return owner is None or self.owner is owner

    def release(self) -> None:
        self.stop_timer()
        if self.on_release is not None:
            self.on_release()


class SessionManager:
    """
    Owns one game per (player, channel).

    The countdown timer lives next to the session it ticks. Replacing or
    closing a game cancels its timer before anything else happens, so a timer
    can only ever tick the session it was started for.

    Callers that pass ``owner`` only ever reach the game they opened. Once a
    game is replaced, the old owner's calls fail with ``NoSuchGame`` and its
    ``on_release`` hook has been called.
    """

    def __init__(self, tick_interval: float = config.TICK_INTERVAL_SEC):
        self.tick_interval = tick_interval
        # Dictionary mapping (player_id, channel_id) to game
        self._games: Dict[SessionKey, ActiveGame] = {}

    def open_game(
        self,
        player_id: str,
        channel_id: str,
        seed: int,
        listener: Optional[TickListener] = None,
        owner=None,
        on_release: Optional[Callable[[], None]] = None
    ) -> GameSession:
        """Create a not-yet-started game, replacing any existing one."""
        session = engine.create_session(seed)
        game = ActiveGame(session=session, listener=listener, owner=owner, on_release=on_release)
        self._replace((player_id, channel_id), game)
        logger.info("Opened game for player %s in channel %s (seed %d)", player_id, channel_id, seed)
        return session

    def new_game(self, player_id: str, channel_id: str, owner=None) -> GameSession:
        """Replace a game with a fresh, already running one for the same seed."""
        previous = self._require_game(player_id, channel_id, owner)
        session = engine.new_session(previous.session.seed)
        game = ActiveGame(
            session=session,
            listener=previous.listener,
            owner=previous.owner,
            on_release=previous.on_release
        )
        # Same owner carries on, so the old game is dropped without releasing it
        previous.stop_timer()
        self._games[(player_id, channel_id)] = game
        self._sync_timer((player_id, channel_id), game)
        logger.info("New game for player %s in channel %s", player_id, channel_id)
        return session

    def get_session(self, player_id: str, channel_id: str, owner=None) -> Optional[GameSession]:
        """Get the current session for a player in a channel."""
        game = self._games.get((player_id, channel_id))
        if game is None or not game.owned_by(owner):
            return None
        return game.session

    def set_listener(self, player_id: str, channel_id: str, listener: Optional[TickListener]) -> None:
        """Change who gets told about ticks (e.g. when the board message moves)."""
        self._require_game(player_id, channel_id).listener = listener

    def apply(self, player_id: str, channel_id: str, transition, *args, owner=None):
        """
        Run an engine transition against the stored session and keep the
        timer in step with the resulting phase.

        Returns whatever the transition returns. ``InvalidTransition`` from
        the engine propagates unchanged and leaves the game untouched.
        """
        key = (player_id, channel_id)
        game = self._require_game(player_id, channel_id, owner)

        result = transition(game.session, *args)
        session = result.session if isinstance(result, GuessResult) else result
        game.session = session
        self._sync_timer(key, game)

        if session.phase.is_terminal:
            logger.info(
                "Game for player %s ended: %s (%s)",
                player_id, session.phase.value, session.outcome_message
            )
        return result

    def close_game(self, player_id: str, channel_id: str, owner=None) -> Optional[GameSession]:
        """Stop and forget a game. Does nothing if ``owner`` no longer holds it."""
        key = (player_id, channel_id)
        game = self._games.get(key)
        if game is None or not game.owned_by(owner):
            return None

        del self._games[key]
        game.release()
        logger.info("Closed game for player %s in channel %s", player_id, channel_id)
        return game.session

    def is_active(self, player_id: str, channel_id: str) -> bool:
        """Check if a player has a game that has not finished."""
        session = self.get_session(player_id, channel_id)
        return session is not None and not session.is_over

    def is_ticking(self, player_id: str, channel_id: str) -> bool:
        game = self._games.get((player_id, channel_id))
        return bool(game and game.timer and game.timer.running)

    def get_all_sessions(self) -> List[GameSession]:
        """Get all sessions that have not finished."""
        return [g.session for g in self._games.values() if not g.session.is_over]

    def shutdown(self) -> None:
        """Cancel every timer and drop all games."""
        games = list(self._games.values())
        self._games.clear()
        for game in games:
            game.release()

    def _require_game(self, player_id: str, channel_id: str, owner=None) -> ActiveGame:
        game = self._games.get((player_id, channel_id))
        if game is None or not game.owned_by(owner):
            raise NoSuchGame(f"no game for player {player_id} in channel {channel_id}")
        return game

    def _replace(self, key: SessionKey, game: ActiveGame) -> None:
        old = self._games.pop(key, None)
        self._games[key] = game
        if old is not None:
            logger.debug("Replacing game for %s", key)
            old.release()

    def _sync_timer(self, key: SessionKey, game: ActiveGame) -> None:
        if game.session.phase is GamePhase.IN_PROGRESS:
            if game.timer is None or not game.timer.running:
                game.timer = CountdownTimer(lambda: self._on_tick(key, game), self.tick_interval)
                game.timer.start()
                logger.debug("Timer started for %s", key)
        elif game.timer is not None:
            game.stop_timer()
            logger.debug("Timer cancelled for %s", key)

    async def _on_tick(self, key: SessionKey, game: ActiveGame) -> bool:
        # The game may have been replaced between sleeps
        if self._games.get(key) is not game or game.session.phase is not GamePhase.IN_PROGRESS:
            return False

        game.session = engine.tick(game.session)
        if game.listener is not None:
            try:
                await game.listener(game.session)
            except Exception:
                # A failed redraw must not freeze the clock
                logger.exception("Tick listener failed for %s", key)
        return game.session.phase is GamePhase.IN_PROGRESS


# Global session manager instance
session_manager = SessionManager()
