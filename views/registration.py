"""Registration and confirmation screens."""

import logging

import discord

import config
from game.registration import Registration
from utils.embeds import create_confirm_embed, create_start_embed, create_validation_error_embed
from utils.validation import validate_registration

logger = logging.getLogger(__name__)

AGREE_LABEL = "I agree to the terms and conditions"


class PlayerView(discord.ui.View):
    """Base view that only answers to the player it was opened for."""

    def __init__(self, player_id: int, registration: Registration):
        super().__init__(timeout=config.VIEW_TIMEOUT_SEC)
        self.player_id = player_id
        self.registration = registration

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.player_id:
            await interaction.response.send_message("❌ This isn't your game!", ephemeral=True)
            return False
        return True


class RegistrationModal(discord.ui.Modal, title="Register"):
    """The registration form. Fields start out with whatever was entered last time."""

    name = discord.ui.TextInput(label="Name", placeholder="Enter your name", max_length=64)
    email = discord.ui.TextInput(label="Email", placeholder="Enter your email", max_length=254)
    phone = discord.ui.TextInput(label="Phone", placeholder="Enter your phone", min_length=1, max_length=10)

    def __init__(self, start_view: "StartView"):
        super().__init__(timeout=config.VIEW_TIMEOUT_SEC)
        self.start_view = start_view
        registration = start_view.registration
        self.name.default = registration.name or None
        self.email.default = registration.email or None
        self.phone.default = registration.phone or None

    async def on_submit(self, interaction: discord.Interaction):
        registration = self.start_view.registration
        registration.name = self.name.value
        registration.email = self.email.value.strip()
        registration.phone = self.phone.value.strip()

        errors = validate_registration(
            registration.name,
            registration.email,
            registration.phone,
            registration.agreed
        )
        if errors:
            logger.debug("Registration for %s rejected: %s", interaction.user.id, errors)
            await interaction.response.edit_message(
                embeds=[create_start_embed(registration), create_validation_error_embed(errors)],
                view=self.start_view
            )
            return

        logger.info("Player %s registered (seed %d)", interaction.user.id, registration.seed)
        view = ConfirmView(self.start_view.player_id, registration)
        await interaction.response.edit_message(embed=create_confirm_embed(registration), view=view)


class StartView(PlayerView):
    """Registration screen: terms checkbox, Register and Reset."""

    def __init__(self, player_id: int, registration: Registration):
        super().__init__(player_id, registration)
        self._sync_buttons()

    def _sync_buttons(self) -> None:
        checkbox = "☑" if self.registration.agreed else "☐"
        self.agree_button.label = f"{checkbox} {AGREE_LABEL}"
        self.agree_button.style = (
            discord.ButtonStyle.success if self.registration.agreed else discord.ButtonStyle.secondary
        )
        self.register_button.disabled = not self.registration.agreed

    async def show(self, interaction: discord.Interaction) -> None:
        self._sync_buttons()
        await interaction.response.edit_message(embed=create_start_embed(self.registration), view=self)

    @discord.ui.button(label=AGREE_LABEL, style=discord.ButtonStyle.secondary, row=0)
    async def agree_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.registration.agreed = not self.registration.agreed
        await self.show(interaction)

    @discord.ui.button(label="Reset", style=discord.ButtonStyle.danger, row=1)
    async def reset_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.registration.clear()
        await self.show(interaction)

    @discord.ui.button(label="Register", style=discord.ButtonStyle.primary, row=1)
    async def register_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.send_modal(RegistrationModal(self))


class ConfirmView(PlayerView):
    """Echo the details back; Go back to edit or Continue to the game."""

    @discord.ui.button(label="Go back", style=discord.ButtonStyle.danger)
    async def back_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.stop()
        await StartView(self.player_id, self.registration).show(interaction)

    @discord.ui.button(label="Continue", style=discord.ButtonStyle.primary)
    async def continue_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        # Imported here to avoid a cycle: the game screen links back to registration
        from views.game import GameView

        self.stop()
        await GameView.open(interaction, self.player_id, self.registration)
