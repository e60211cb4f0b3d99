"""Exception types raised by HabitVault services and the habit engine."""

from __future__ import annotations


class HabitVaultError(ValueError):
    """Base error for caller-facing validation and lookup failures."""

    code = "error"


class InvalidDateError(HabitVaultError):
    """A calendar date was not a canonical ``YYYY-MM-DD`` string."""

    code = "invalid_date"


class InvalidRuleError(HabitVaultError):
    """A recurrence rule was malformed."""

    code = "invalid_rule"


class InvalidStatusError(HabitVaultError):
    """A log status was neither ``completed`` nor ``missed``."""

    code = "invalid_status"


class NotFoundError(HabitVaultError):
    """The requested record does not exist for the caller."""

    code = "not_found"


class DuplicateError(HabitVaultError):
    """A unique value (such as an email address) is already taken."""

    code = "duplicate"


class AuthenticationError(HabitVaultError):
    """Credentials were missing or invalid."""

    code = "unauthorized"


__all__ = [
    "AuthenticationError",
    "DuplicateError",
    "HabitVaultError",
    "InvalidDateError",
    "InvalidRuleError",
    "InvalidStatusError",
    "NotFoundError",
]
