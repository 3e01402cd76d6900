"""Wagerbook: betting-scenario ledger with insured wagers and house cut settlement."""

__version__ = "0.1.0"
__author__ = "Wagerbook Team"

from .exceptions import InvalidArgumentError, NotFoundError, WagerbookError
from .ledger import ScenarioLedger
from .models import (
    FixedInsurance,
    InsuredWager,
    RateInsurance,
    ScenarioStatus,
    Wager,
    format_cents,
)

__all__ = [
    "__version__",
    "__author__",
    "ScenarioLedger",
    "ScenarioStatus",
    "Wager",
    "InsuredWager",
    "FixedInsurance",
    "RateInsurance",
    "format_cents",
    "WagerbookError",
    "InvalidArgumentError",
    "NotFoundError",
]
