"""Configuration constants for the Multiple Guess bot."""

import os
from dotenv import load_dotenv

load_dotenv()

# Game rules
GAME_DURATION_SEC = int(os.getenv("GAME_DURATION_SEC", "60"))
MAX_ATTEMPTS = int(os.getenv("MAX_ATTEMPTS", "4"))
MIN_NUMBER = 1
MAX_NUMBER = 100
HINT_THRESHOLD = 50

# Seeds come from the last phone digit; phone validation only lets 2-9 through
MIN_SEED = 1
MAX_SEED = 9

# Countdown
TICK_INTERVAL_SEC = float(os.getenv("TICK_INTERVAL_SEC", "1.0"))

# Discord views stop listening after this many seconds of inactivity
VIEW_TIMEOUT_SEC = int(os.getenv("VIEW_TIMEOUT_SEC", "600"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Colour palette (embed accents only)
COLOURS = {
    'card_background': 0xD3D3D3,
    'greeting_text': 0x800080,    # purple
    'instruction_text': 0x800080,
    'user_info_text': 0x0000FF,   # blue
    'feedback_message': 0x800080,
    'info_text': 0x000000,
    'button_red': 0xFF0000,
    'button_blue': 0x0000FF,
    'button_green': 0x008000,
}
