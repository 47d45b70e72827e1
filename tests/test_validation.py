import pytest

from game.registration import Registration
from utils.validation import (
    EMAIL_ERROR,
    NAME_ERROR,
    PHONE_ERROR,
    TERMS_ERROR,
    validate_email,
    validate_name,
    validate_phone,
    validate_registration,
)


@pytest.mark.parametrize('name', ["Al", "Mary Jane", "  Bo  "])
def test_valid_names(name):
    assert validate_name(name).ok


@pytest.mark.parametrize('name', ["", "A", "  B  ", "R2D2", "Agent 47"])
def test_invalid_names(name):
    result = validate_name(name)
    assert not result
    assert result.message == NAME_ERROR


@pytest.mark.parametrize('email', ["a@b.co", "first.last@example.org", "x+tag@mail.example.com"])
def test_valid_emails(email):
    assert validate_email(email).ok


@pytest.mark.parametrize('email', ["", "plain", "a@b", "@b.com", "a b@c.com", "a@b c.com", "a@b.co\n", "\na@b.co"])
def test_invalid_emails(email):
    assert validate_email(email).message == EMAIL_ERROR


@pytest.mark.parametrize('phone', ["6045551232", "0000000009"])
def test_valid_phones(phone):
    assert validate_phone(phone).ok


@pytest.mark.parametrize('phone', ["6045551230", "6045551231", "604555123", "60455512345", "604555123a", "", "6045551232\n", " 6045551232"])
def test_invalid_phones(phone):
    assert validate_phone(phone).message == PHONE_ERROR


def test_registration_collects_every_error():
    errors = validate_registration("1", "nope", "123", False)
    assert errors == [NAME_ERROR, EMAIL_ERROR, PHONE_ERROR, TERMS_ERROR]


def test_registration_valid():
    assert validate_registration("Ada", "ada@example.com", "6045551237", True) == []


def test_registration_seed_is_last_phone_digit():
    registration = Registration("Ada", "ada@example.com", "6045551237", True)
    assert registration.seed == 7


def test_registration_clear():
    registration = Registration("Ada", "ada@example.com", "6045551237", True)
    registration.clear()
    assert registration == Registration()
