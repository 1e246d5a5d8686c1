"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Transaction:

    description: str
    transaction_date: date
    amount_in_cents: int
    id: str = ""


@dataclass(frozen=True)
class ExchangeRateRecord:

    record_date: date
    exchange_rate: Decimal

    def __post_init__(self):
        if not isinstance(self.exchange_rate, Decimal):
            object.__setattr__(self, "exchange_rate", Decimal(str(self.exchange_rate)))


@dataclass(frozen=True)
class ConversionResult:

    amount_in_cents: int
    exchange_rate: Decimal
