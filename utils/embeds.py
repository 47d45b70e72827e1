"""Discord embed builders for bot responses."""

import discord
from typing import List

import config
from game.registration import Registration
from game.session import GamePhase, GameSession
from utils.formatters import capitalize_first, format_bullets, format_countdown, pluralize
from utils.validation import FORM_ALERT


def _colour(name: str) -> discord.Colour:
    return discord.Colour(config.COLOURS[name])


def create_start_embed(registration: Registration) -> discord.Embed:
    """Create embed for the registration screen."""
    embed = discord.Embed(
        title="📝 Register to Play",
        description="Fill in your details to get a number to guess.",
        color=_colour('card_background')
    )
    embed.add_field(name="Name", value=registration.name or "—", inline=True)
    embed.add_field(name="Email", value=registration.email or "—", inline=True)
    embed.add_field(name="Phone", value=registration.phone or "—", inline=True)

    checkbox = "☑" if registration.agreed else "☐"
    embed.add_field(
        name="Terms",
        value=f"{checkbox} I agree to the terms and conditions",
        inline=False
    )
    if not registration.agreed:
        embed.set_footer(text="Tick the box to enable Register.")
    return embed


def create_validation_error_embed(errors: List[str]) -> discord.Embed:
    """Create embed listing everything wrong with a submitted form."""
    embed = discord.Embed(
        title="❌ Error",
        description=FORM_ALERT,
        color=_colour('button_red')
    )
    embed.add_field(name="Problems", value=format_bullets(errors), inline=False)
    return embed


def create_confirm_embed(registration: Registration) -> discord.Embed:
    """Create embed echoing the registration back for confirmation."""
    embed = discord.Embed(
        title=f"Hello {registration.name.strip()}",
        description="Here is the information you entered:",
        color=_colour('greeting_text')
    )
    embed.add_field(name="Email", value=registration.email, inline=False)
    embed.add_field(name="Phone", value=registration.phone, inline=False)
    embed.set_footer(text="If it is not correct, please go back and edit them.")
    return embed


def create_game_embed(session: GameSession, player_name: str) -> discord.Embed:
    """Render the game board for whatever phase the session is in."""
    if session.phase is GamePhase.NOT_STARTED:
        embed = discord.Embed(
            title="🎲 Guess the Number",
            description=(
                f"A number has been chosen. It is a multiple of **{session.seed}**.\n"
                f"You have {format_countdown(session.seconds_remaining)} and "
                f"{pluralize(session.attempts_remaining, 'attempt')}."
            ),
            color=_colour('instruction_text')
        )
        embed.set_footer(text=f"Player: {player_name} • Press Start when ready")
        return embed

    if session.phase is GamePhase.WON:
        embed = discord.Embed(
            title="🎉 You got it!",
            description=(
                f"The number was **{session.target}**.\n"
                f"You {session.outcome_message}."
            ),
            color=_colour('button_green')
        )
        embed.set_footer(text=f"Player: {player_name}")
        return embed

    if session.phase is GamePhase.LOST:
        embed = discord.Embed(
            title="💀 Game Over",
            description=f"{capitalize_first(session.outcome_message or 'game over')}.",
            color=_colour('button_red')
        )
        embed.add_field(name="The number was", value=str(session.target), inline=False)
        embed.set_footer(text=f"Player: {player_name}")
        return embed

    embed = discord.Embed(
        title="🎲 Guess the Number",
        description=f"Guess a multiple of **{session.seed}** between {config.MIN_NUMBER} and {config.MAX_NUMBER}.",
        color=_colour('feedback_message')
    )
    embed.add_field(name="Time left", value=format_countdown(session.seconds_remaining), inline=True)
    embed.add_field(name="Attempts left", value=str(session.attempts_remaining), inline=True)
    if session.hint_text:
        embed.add_field(name="Hint", value=f"The number is {session.hint_text}.", inline=False)

    if session.phase is GamePhase.AWAITING_FEEDBACK_ACK:
        embed.add_field(
            name=f"You guessed {session.last_guess}",
            value=f"Wrong! {capitalize_first(session.last_feedback)}.",
            inline=False
        )
        embed.set_footer(text="The clock is paused. Try again or end the game.")
    else:
        embed.set_footer(text=f"Player: {player_name}")
    return embed
