"""Main entry point for the Multiple Guess bot."""

import asyncio
import logging
import os

import discord
from dotenv import load_dotenv

import config
from bot.client import create_bot
from bot.events import setup_events
from game.session_manager import session_manager

# Load environment variables
load_dotenv()


def resolve_log_level(name: str) -> int:
    """Map a level name like "debug" to its logging constant, defaulting to INFO."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        print(f"WARNING: unknown LOG_LEVEL {name!r}, using INFO")
        return logging.INFO
    return level


async def main():
    """Main function to start the bot."""
    discord.utils.setup_logging(level=resolve_log_level(config.LOG_LEVEL))

    # Create bot
    bot = create_bot()

    # Setup events
    setup_events(bot)

    # Load cogs
    await bot.load_extension('cogs.game_commands')

    # Get token
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        print("ERROR: DISCORD_TOKEN not found in environment variables!")
        print("Please create a .env file with your Discord bot token.")
        return

    # Start bot
    print("Starting bot...")
    try:
        async with bot:
            await bot.start(token)
    finally:
        session_manager.shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nBot stopped by user.")
