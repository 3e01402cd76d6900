from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator


def format_cents(cents: int, symbol: str = "R$") -> str:
    """Render an amount in cents as currency text, e.g. 1050 -> 'R$10,50'."""
    return f"{symbol}{cents // 100},{cents % 100:02d}"


class ScenarioStatus(str, Enum):
    OPEN = "Open"
    OCCURRED = "Finished (occurred)"
    NOT_OCCURRED = "Finished (did not occur)"


class FixedInsurance(BaseModel):
    """Guarantees a flat amount regardless of outcome."""

    kind: Literal["fixed"] = "fixed"
    value: int = Field(strict=True, gt=0, description="Guaranteed amount in cents")

    def guaranteed_amount(self, stake: int) -> int:
        return self.value

    def describe(self, symbol: str = "R$") -> str:
        return f"INSURED (VALUE) - {format_cents(self.value, symbol)}"


class RateInsurance(BaseModel):
    """Guarantees a fraction of the stake regardless of outcome."""

    kind: Literal["rate"] = "rate"
    rate: float = Field(ge=0.0, le=1.0, description="Guaranteed fraction of the stake")

    def guaranteed_amount(self, stake: int) -> int:
        return math.floor(stake * self.rate)

    def describe(self, symbol: str = "R$") -> str:
        return f"INSURED (RATE) - {self.rate * 100:g}%"


InsurancePolicy = Annotated[
    FixedInsurance | RateInsurance, Field(discriminator="kind")
]


class Wager(BaseModel):
    bettor: str
    prediction: str
    amount: int = Field(strict=True, gt=0, description="Stake in cents")
    won: bool = False

    @field_validator("bettor", "prediction")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def key(self) -> tuple[str, str, int]:
        """Identity of a plain wager; the resolved flag is not part of it."""
        return (self.bettor, self.prediction, self.amount)

    def predicts_occurrence(self, occurs_predictions: list[str]) -> bool:
        return self.prediction.strip().upper() in occurs_predictions

    def describe(self, symbol: str = "R$") -> str:
        return f"{self.bettor} - {format_cents(self.amount, symbol)} - {self.prediction}"


class InsuredWager(Wager):
    insurance_id: int = Field(strict=True, gt=0)
    insurance: InsurancePolicy

    @property
    def guaranteed_amount(self) -> int:
        return self.insurance.guaranteed_amount(self.amount)

    def describe(self, symbol: str = "R$") -> str:
        return f"{super().describe(symbol)} - {self.insurance.describe(symbol)}"
