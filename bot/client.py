"""Discord bot client setup."""

import discord
from discord.ext import commands


def create_bot() -> commands.Bot:
    """Create and configure Discord bot."""
    # Slash commands and components only need the default intents
    intents = discord.Intents.default()

    # Create bot (command_prefix is required even if we only use slash commands)
    bot = commands.Bot(command_prefix='!', intents=intents)

    return bot
