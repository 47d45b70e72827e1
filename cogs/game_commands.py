"""Game commands for the number guessing bot."""

import logging
from typing import Dict

import discord
from discord import app_commands
from discord.ext import commands

from game.registration import Registration
from game.session_manager import session_manager
from utils.embeds import create_start_embed
from views.registration import StartView

logger = logging.getLogger(__name__)


class GameCommands(commands.Cog):
    """Registration and the guessing game."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        # Form entries survive between /register calls so "Go back" can edit them
        self.registrations: Dict[int, Registration] = {}

    async def cog_unload(self):
        session_manager.shutdown()

    @app_commands.command(name="register", description="Register and play the number guessing game")
    async def register(self, interaction: discord.Interaction):
        """Open the registration screen."""
        registration = self.registrations.setdefault(interaction.user.id, Registration())
        view = StartView(interaction.user.id, registration)
        await interaction.response.send_message(
            embed=create_start_embed(registration),
            view=view,
            ephemeral=True
        )

    @app_commands.command(name="guess_quit", description="Abandon your current guessing game")
    async def quit(self, interaction: discord.Interaction):
        """Close the caller's game in this channel."""
        session = session_manager.close_game(str(interaction.user.id), str(interaction.channel_id))
        if not session:
            await interaction.response.send_message("❌ You don't have a game in this channel!", ephemeral=True)
            return

        logger.info("Player %s quit their game", interaction.user.id)
        await interaction.response.send_message(
            f"👋 Game closed. The number was **{session.target}**.",
            ephemeral=True
        )


async def setup(bot: commands.Bot):
    """Load the cog."""
    await bot.add_cog(GameCommands(bot))
