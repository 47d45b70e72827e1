"""Text formatting helpers."""

from typing import List


def format_countdown(seconds: int) -> str:
    """Format remaining seconds as m:ss."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


def pluralize(count: int, noun: str, plural: str = None) -> str:
    """Format a count with the right noun form."""
    if count == 1:
        return f"{count} {noun}"
    return f"{count} {plural or noun + 's'}"


def capitalize_first(text: str) -> str:
    """Upper-case the first letter only, leaving the rest alone."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def format_bullets(items: List[str]) -> str:
    """Render items as a bulleted list."""
    return "\n".join(f"• {item}" for item in items)
