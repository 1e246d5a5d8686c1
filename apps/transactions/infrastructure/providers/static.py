"""
Static provider for testing and local development.
Serves exchange rate records from an in-memory table instead of calling an API.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Optional

from apps.transactions.domain.interfaces import BaseExchangeRateProvider
from apps.transactions.domain.models import ExchangeRateRecord


class StaticExchangeRateProvider(BaseExchangeRateProvider):
    """
    Provider that answers from a fixed table of records per country.
    Useful for:
    - Testing without external API calls
    - Development without network access
    """

    # Approximate quarterly Treasury rates, used when no table is supplied
    DEFAULT_RECORDS = {
        "Canada": [
            ExchangeRateRecord(date(2023, 3, 31), Decimal("1.353")),
            ExchangeRateRecord(date(2023, 6, 30), Decimal("1.325")),
        ],
        "Euro Zone": [
            ExchangeRateRecord(date(2023, 3, 31), Decimal("0.919")),
            ExchangeRateRecord(date(2023, 6, 30), Decimal("0.916")),
        ],
        "United Kingdom": [
            ExchangeRateRecord(date(2023, 3, 31), Decimal("0.809")),
            ExchangeRateRecord(date(2023, 6, 30), Decimal("0.787")),
        ],
    }

    def __init__(self, records: Optional[Dict[str, Iterable[ExchangeRateRecord]]] = None):
        source = self.DEFAULT_RECORDS if records is None else records
        self.records = {country: list(rows) for country, rows in source.items()}

    def find_latest_record(
        self,
        country: str,
        oldest_record_date: date,
        timeout: float | None = None
    ) -> ExchangeRateRecord | None:
        """
        Return the newest record for the country dated on or after
        oldest_record_date, or None.
        """
        candidates = [
            record for record in self.records.get(country, [])
            if record.record_date >= oldest_record_date
        ]
        if not candidates:
            return None

        return max(candidates, key=lambda r: r.record_date)
