"""Registered player details."""

from dataclasses import dataclass


@dataclass
class Registration:
    """What the player typed into the registration form."""
    name: str = ""
    email: str = ""
    phone: str = ""
    agreed: bool = False

    @property
    def seed(self) -> int:
        """Last digit of the phone number, used as the game divisor."""
        return int(self.phone.strip()[-1])

    def clear(self) -> None:
        """Reset the form to its empty state."""
        self.name = ""
        self.email = ""
        self.phone = ""
        self.agreed = False
