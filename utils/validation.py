"""Registration form validation."""

import re
from dataclasses import dataclass
from typing import List, Optional

NAME_ERROR = "Invalid name: Should be non-numeric and longer than 1 character."
EMAIL_ERROR = "Invalid email format."
PHONE_ERROR = "Phone must be 10 digits, last digit cannot be 0 or 1."
TERMS_ERROR = "You must agree to the terms and conditions."
FORM_ALERT = "Please fix validation errors and check the box."

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# 10 ASCII digits, last one not 0 or 1
PHONE_PATTERN = re.compile(r"[0-9]{9}[2-9]")


@dataclass(frozen=True)
class ValidationResult:
    """Pass/fail for a single field."""
    ok: bool
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


PASSED = ValidationResult(True)


def validate_name(text: str) -> ValidationResult:
    """Names need more than one character and no digits."""
    if len(text.strip()) <= 1 or any(ch.isdigit() for ch in text):
        return ValidationResult(False, NAME_ERROR)
    return PASSED


def validate_email(text: str) -> ValidationResult:
    if not EMAIL_PATTERN.fullmatch(text):
        return ValidationResult(False, EMAIL_ERROR)
    return PASSED


def validate_phone(text: str) -> ValidationResult:
    """
    Phone numbers are exactly 10 digits ending in 2-9.

    The final digit becomes the game seed, which is why 0 and 1 are refused.
    """
    if not PHONE_PATTERN.fullmatch(text):
        return ValidationResult(False, PHONE_ERROR)
    return PASSED


def validate_registration(name: str, email: str, phone: str, agreed: bool) -> List[str]:
    """Return every problem with a submitted form, in field order. Empty means valid."""
    errors = [
        result.message
        for result in (validate_name(name), validate_email(email), validate_phone(phone))
        if not result.ok
    ]
    if not agreed:
        errors.append(TERMS_ERROR)
    return errors
