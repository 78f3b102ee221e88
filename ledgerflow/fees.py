"""Fee strategies for LedgerFlow.

A fee strategy turns a transaction amount into a commission. Strategies are
immutable values; the orchestrator holds one at a time and a front end may
swap it between transactions.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ledgerflow.exceptions import ValidationError


def to_decimal(value) -> Decimal:
    """Convert int/float/str/Decimal to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class FeeStrategy(ABC):
    """Abstract base class for fee calculation policies."""

    @abstractmethod
    def calculate_fee(self, amount) -> Decimal:
        """Return the fee for the given amount. Must be free of side effects."""
        pass


@dataclass(frozen=True)
class PercentageFeeStrategy(FeeStrategy):
    """Fee proportional to the amount: amount * rate / 100."""
    rate: Decimal

    def __post_init__(self):
        rate = to_decimal(self.rate)
        if rate < 0:
            raise ValidationError('rate', self.rate)
        object.__setattr__(self, 'rate', rate)

    def calculate_fee(self, amount) -> Decimal:
        return to_decimal(amount) * self.rate / 100

    def __str__(self):
        return f"{self.rate}% of amount"


@dataclass(frozen=True)
class FixedFeeStrategy(FeeStrategy):
    """Flat fee charged regardless of the amount."""
    value: Decimal

    def __post_init__(self):
        value = to_decimal(self.value)
        if value < 0:
            raise ValidationError('value', self.value)
        object.__setattr__(self, 'value', value)

    def calculate_fee(self, amount) -> Decimal:
        return self.value

    def __str__(self):
        return f"fixed {self.value}"
