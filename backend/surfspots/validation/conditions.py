"""
SurfSpots Backend — Validation Conditions
===========================================

Pure condition factories. Each one captures its input and returns a
zero-argument predicate for Validator.if_false().
"""

from typing import Callable, Iterable

from email_validator import EmailNotValidError, validate_email

from surfspots.geo import countries, types

MAX_EMAIL_LENGTH = 254

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 50
# bcrypt input limit
MAX_PASSWORD_BYTES = 72


def string_not_empty(value: str) -> Callable[[], bool]:
    return lambda: value != ""


def string_max_length(value: str, size: int) -> Callable[[], bool]:
    return lambda: len(value) <= size


def is_latitude(value: float) -> Callable[[], bool]:
    return lambda: types.is_latitude(value)


def is_longitude(value: float) -> Callable[[], bool]:
    return lambda: types.is_longitude(value)


def is_country(code: str) -> Callable[[], bool]:
    return lambda: countries.is_country(code)


def is_email(value: str) -> Callable[[], bool]:
    """
    Structurally valid address, at most 254 characters, no display name.

    Deliverability (DNS) is not checked.
    """

    def condition() -> bool:
        if not value or len(value) > MAX_EMAIL_LENGTH:
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    return condition


def is_password(value: str) -> Callable[[], bool]:
    # Length only; no character-set rule.
    return lambda: (
        MIN_PASSWORD_LENGTH <= len(value) <= MAX_PASSWORD_LENGTH
        and len(value.encode("utf-8")) <= MAX_PASSWORD_BYTES
    )


def is_role(value: str, allowed: Iterable[str]) -> Callable[[], bool]:
    allowed = frozenset(allowed)
    return lambda: value in allowed
