"""Custom exceptions for scenario ledgers."""


class WagerbookError(Exception):
    """Base exception for ledger errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(WagerbookError, ValueError):
    """Input rejected by a precondition check."""

    pass


class NotFoundError(WagerbookError, LookupError):
    """Referenced wager does not exist."""

    pass
