"""The game screen and its guess form."""

import logging
from typing import Dict, Optional

import discord

import config
from game import engine
from game.engine import InvalidTransition
from game.registration import Registration
from game.session import GamePhase, GameSession
from game.session_manager import NoSuchGame, session_manager
from utils.embeds import create_game_embed
from views.registration import PlayerView, StartView

logger = logging.getLogger(__name__)


def control_states(session: GameSession) -> Dict[str, bool]:
    """
    Which controls the board shows for a session, and whether each is enabled.

    Controls missing from the result are hidden.
    """
    if session.phase is GamePhase.NOT_STARTED:
        return {'start': True, 'restart': True}
    if session.phase is GamePhase.IN_PROGRESS:
        return {'guess': True, 'hint': not session.hint_used, 'restart': True}
    if session.phase is GamePhase.AWAITING_FEEDBACK_ACK:
        return {'try_again': True, 'end_game': True}
    return {'new_game': True, 'restart': True}


class GuessModal(discord.ui.Modal, title="Make a Guess"):
    """Single-field form for a guess."""

    guess = discord.ui.TextInput(label="Your guess", max_length=10)

    def __init__(self, board: "GameView", seed: int):
        super().__init__(timeout=config.VIEW_TIMEOUT_SEC)
        self.board = board
        self.guess.placeholder = f"A multiple of {seed} between {config.MIN_NUMBER} and {config.MAX_NUMBER}"

    async def on_submit(self, interaction: discord.Interaction):
        await self.board.act(interaction, engine.submit_guess, self.guess.value)


class GameView(PlayerView):
    """
    The game board.

    Keeps the most recent interaction so countdown ticks can redraw the
    message between button presses.
    """

    def __init__(self, player_id: int, channel_id: str, registration: Registration):
        super().__init__(player_id, registration)
        self.channel_id = channel_id
        self.interaction: Optional[discord.Interaction] = None
        self._buttons = {
            'start': self.start_button,
            'guess': self.guess_button,
            'hint': self.hint_button,
            'try_again': self.try_again_button,
            'end_game': self.end_game_button,
            'new_game': self.new_game_button,
            'restart': self.restart_button,
        }

    @classmethod
    async def open(cls, interaction: discord.Interaction, player_id: int, registration: Registration):
        """Open a new game for the player and show its board."""
        view = cls(player_id, str(interaction.channel_id), registration)
        session = session_manager.open_game(
            str(player_id),
            view.channel_id,
            registration.seed,
            listener=view.on_tick,
            owner=view,
            on_release=view.stop
        )
        await view.render(interaction, session)

    @property
    def player_key(self):
        return str(self.player_id), self.channel_id

    @property
    def player_name(self) -> str:
        return self.registration.name.strip()

    def refresh(self, session: GameSession) -> None:
        """Lay out the controls for the session's phase."""
        self.clear_items()
        for name, enabled in control_states(session).items():
            button = self._buttons[name]
            button.disabled = not enabled
            self.add_item(button)

    async def render(self, interaction: discord.Interaction, session: GameSession) -> None:
        self.refresh(session)
        await interaction.response.edit_message(embed=create_game_embed(session, self.player_name), view=self)
        # Only an answered interaction can be edited by later ticks
        self.interaction = interaction

    async def on_tick(self, session: GameSession) -> None:
        """Redraw the board after the countdown moves."""
        if self.interaction is None:
            return
        self.refresh(session)
        try:
            await self.interaction.edit_original_response(
                embed=create_game_embed(session, self.player_name),
                view=self
            )
        except discord.HTTPException as e:
            logger.warning("Failed to redraw board for player %s: %s", self.player_id, e)

    async def act(self, interaction: discord.Interaction, transition, *args) -> None:
        """Apply an engine transition for a button press and redraw."""
        try:
            result = session_manager.apply(*self.player_key, transition, *args, owner=self)
        except NoSuchGame:
            await self.reply_game_over(interaction)
            return
        except InvalidTransition as e:
            # A press that raced the countdown; show the board as it is now
            logger.debug("Ignored stale action from player %s: %s", self.player_id, e)
            await self.render(interaction, session_manager.get_session(*self.player_key, owner=self))
            return

        if isinstance(result, engine.GuessResult):
            if not result.accepted:
                await interaction.response.send_message(f"⚠️ {result.message}", ephemeral=True)
                return
            result = result.session

        await self.render(interaction, result)

    async def reply_game_over(self, interaction: discord.Interaction) -> None:
        """Answer a press on a board whose game was closed or replaced."""
        self.stop()
        await interaction.response.send_message(
            "❌ This game has ended. Use `/register` to play again.",
            ephemeral=True
        )

    async def on_timeout(self) -> None:
        session_manager.close_game(*self.player_key, owner=self)

    @discord.ui.button(label="Start", style=discord.ButtonStyle.success)
    async def start_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self.act(interaction, engine.start)

    @discord.ui.button(label="Guess", style=discord.ButtonStyle.primary)
    async def guess_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        session = session_manager.get_session(*self.player_key, owner=self)
        if session is None:
            await self.reply_game_over(interaction)
            return
        if session.phase is not GamePhase.IN_PROGRESS:
            await interaction.response.send_message("❌ You can't guess right now.", ephemeral=True)
            return
        await interaction.response.send_modal(GuessModal(self, session.seed))

    @discord.ui.button(label="Use hint", style=discord.ButtonStyle.secondary)
    async def hint_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self.act(interaction, engine.use_hint)

    @discord.ui.button(label="Try again", style=discord.ButtonStyle.primary)
    async def try_again_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self.act(interaction, engine.try_again)

    @discord.ui.button(label="End game", style=discord.ButtonStyle.danger)
    async def end_game_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self.act(interaction, engine.end_game)

    @discord.ui.button(label="New game", style=discord.ButtonStyle.success)
    async def new_game_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        try:
            session = session_manager.new_game(*self.player_key, owner=self)
        except NoSuchGame:
            await self.reply_game_over(interaction)
            return
        await self.render(interaction, session)

    @discord.ui.button(label="Restart", style=discord.ButtonStyle.danger)
    async def restart_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        session_manager.close_game(*self.player_key, owner=self)
        self.stop()
        self.registration.clear()
        await StartView(self.player_id, self.registration).show(interaction)
