"""Scenario ledger: wagers on one real-world event and their settlement.

A ledger collects plain and insured wagers while the scenario is open, then
``finalize`` resolves the event and marks each plain wager as won or lost.
The losers' stake is split between the house cut and the payout pool:

- house_cut = floor(amount_wagered_by_losers * rate)
- payout_pool = amount_wagered_by_losers - house_cut

Insured wagers count towards totals and listings but are not resolved and
do not feed the losers' stake.

All amounts are integers in cents.
"""

import logging
import math
import os
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

from wagerbook.config import LedgerConfig, get_settings
from wagerbook.exceptions import InvalidArgumentError, NotFoundError
from wagerbook.models import (
    FixedInsurance,
    InsuredWager,
    RateInsurance,
    ScenarioStatus,
    Wager,
)

logger = logging.getLogger(__name__)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


@contextmanager
def _rejecting_invalid(prefix: str) -> Iterator[None]:
    """Re-raise pydantic validation failures as InvalidArgumentError."""
    try:
        yield
    except ValidationError as e:
        raise InvalidArgumentError(f"{prefix}: {_validation_message(e)}") from e


class ScenarioLedger:
    """Bookkeeping for a single betting scenario."""

    def __init__(self, number: int, description: str, config: LedgerConfig | None = None):
        if not description or not description.strip():
            raise InvalidArgumentError(
                "Error registering scenario: description cannot be empty"
            )

        self._number = number
        self._description = description
        self.config = config or get_settings().ledger
        self.status = ScenarioStatus.OPEN
        self.house_cut = 0
        # Keyed by wager identity / insurance id; dicts keep insertion order
        self._wagers: dict[tuple[str, str, int], Wager] = {}
        self._insured_wagers: dict[int, InsuredWager] = {}
        self._next_insurance_id = 1

        logger.debug(f"Created scenario {number}: {description}")

    @property
    def number(self) -> int:
        return self._number

    @property
    def description(self) -> str:
        return self._description

    @property
    def wagers(self) -> list[Wager]:
        return list(self._wagers.values())

    @property
    def insured_wagers(self) -> list[InsuredWager]:
        return list(self._insured_wagers.values())

    # ------------------------------------------------------------------
    # Registering wagers
    # ------------------------------------------------------------------

    def add_wager(self, bettor: str, prediction: str, amount: int) -> bool:
        """Register a plain wager.

        Returns:
            True if inserted, False if an identical wager was already registered
        """
        with _rejecting_invalid("Error registering wager"):
            wager = Wager(bettor=bettor, prediction=prediction, amount=amount)

        if wager.key in self._wagers:
            logger.debug(f"Scenario {self._number}: duplicate wager ignored ({wager.describe()})")
            return False

        self._wagers[wager.key] = wager
        logger.debug(f"Scenario {self._number}: wager registered ({wager.describe()})")
        return True

    def add_insured_wager_fixed(
        self, bettor: str, prediction: str, amount: int, insured_value: int
    ) -> bool:
        """Register a wager insured for a fixed amount in cents."""
        with _rejecting_invalid("Error registering insured wager"):
            policy = FixedInsurance(value=insured_value)
        return self._add_insured(bettor, prediction, amount, policy)

    def add_insured_wager_rate(
        self, bettor: str, prediction: str, amount: int, rate: float
    ) -> bool:
        """Register a wager insured for a fraction (0.0 to 1.0) of its stake."""
        with _rejecting_invalid("Error registering insured wager"):
            policy = RateInsurance(rate=rate)
        return self._add_insured(bettor, prediction, amount, policy)

    def _add_insured(
        self,
        bettor: str,
        prediction: str,
        amount: int,
        policy: FixedInsurance | RateInsurance,
    ) -> bool:
        with _rejecting_invalid("Error registering insured wager"):
            wager = InsuredWager(
                bettor=bettor,
                prediction=prediction,
                amount=amount,
                insurance_id=self._next_insurance_id,
                insurance=policy,
            )

        self._insured_wagers[wager.insurance_id] = wager
        self._next_insurance_id += 1
        logger.debug(
            f"Scenario {self._number}: insured wager #{wager.insurance_id} registered "
            f"({wager.describe()})"
        )
        return True

    def get_insured_wager(self, insurance_id: int) -> InsuredWager:
        if insurance_id <= 0:
            raise InvalidArgumentError("Error looking up insured wager: invalid wager")

        wager = self._insured_wagers.get(insurance_id)
        if wager is None:
            raise NotFoundError("Error looking up insured wager: wager does not exist")
        return wager

    def change_insurance_to_fixed(self, insurance_id: int, value: int) -> int:
        """Replace the policy of an insured wager with a fixed-value one.

        Returns:
            The insurance id of the changed wager

        Raises:
            InvalidArgumentError: insurance_id is not positive or value is invalid
            NotFoundError: no insured wager has this id
        """
        if insurance_id <= 0:
            raise InvalidArgumentError("Error changing insurance to fixed: invalid wager")
        if insurance_id not in self._insured_wagers:
            raise NotFoundError("Error changing insurance to fixed: wager does not exist")

        with _rejecting_invalid("Error changing insurance to fixed"):
            policy = FixedInsurance(value=value)

        wager = self._insured_wagers[insurance_id]
        wager.insurance = policy
        logger.info(
            f"Scenario {self._number}: insured wager #{insurance_id} now "
            f"{policy.describe(self.config.currency_symbol)}"
        )
        return insurance_id

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def total_wagered(self) -> int:
        total = sum(w.amount for w in self._wagers.values())
        total += sum(w.amount for w in self._insured_wagers.values())
        return total

    def total_wager_count(self) -> int:
        return len(self._wagers) + len(self._insured_wagers)

    def total_insured(self) -> int:
        """Sum of the amounts guaranteed by every insured wager's policy."""
        return sum(w.guaranteed_amount for w in self._insured_wagers.values())

    def all_wagers_description(self) -> str:
        """List every wager, plain ones first, in registration order."""
        symbol = self.config.currency_symbol
        lines = ["Wagers: "]
        lines.extend(w.describe(symbol) for w in self._wagers.values())
        lines.extend(w.describe(symbol) for w in self._insured_wagers.values())
        return "".join(line + os.linesep for line in lines)

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    def finalize(self, occurred: bool) -> None:
        """Resolve the scenario and mark each plain wager as won or lost.

        Calling it again re-resolves the wagers against the new outcome.
        """
        self.status = ScenarioStatus.OCCURRED if occurred else ScenarioStatus.NOT_OCCURRED

        occurs_predictions = self.config.occurs_predictions
        for wager in self._wagers.values():
            if wager.predicts_occurrence(occurs_predictions):
                wager.won = occurred
            else:
                wager.won = not occurred

        winners = sum(1 for w in self._wagers.values() if w.won)
        logger.info(
            f"Scenario {self._number} finalized ({self.status.value}): "
            f"{winners}/{len(self._wagers)} winning wagers"
        )

    def amount_wagered_by_losers(self) -> int:
        return sum(w.amount for w in self._wagers.values() if not w.won)

    def set_house_cut(self, rate: float | None = None) -> int:
        """Set the house cut to floor(losers' stake * rate).

        Args:
            rate: House rate; defaults to the configured house_rate

        Returns:
            The new house cut in cents
        """
        if rate is None:
            rate = self.config.house_rate

        self.house_cut = math.floor(self.amount_wagered_by_losers() * rate)
        logger.info(f"Scenario {self._number}: house cut set to {self.house_cut} (rate {rate})")
        return self.house_cut

    def payout_pool(self) -> int:
        """Amount redistributed to the winners."""
        return self.amount_wagered_by_losers() - self.house_cut

    def __str__(self) -> str:
        return f"{self._number} - {self._description} - {self.status.value}"

    def __repr__(self) -> str:
        return f"ScenarioLedger(number={self._number!r}, description={self._description!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScenarioLedger):
            return NotImplemented
        return self._number == other._number

    def __hash__(self) -> int:
        return hash(self._number)
