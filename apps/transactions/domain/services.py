"""
Domain services - Core business logic.
Orchestrates storing transactions and fetching them converted to the currency
of a requested country.
"""

import calendar
import logging
from datetime import date
from typing import Callable, Optional

from apps.transactions.application.dto import (
    FetchTransactionResultDTO,
    StoreTransactionRequestDTO,
    StoreTransactionResultDTO,
    TransactionAmountDTO,
)
from apps.transactions.domain.converter import convert
from apps.transactions.domain.errors import (
    BusinessError,
    TRANSACTION_NOT_FOUND,
    UNABLE_TO_CONVERT_TO_TARGET_CURRENCY,
)
from apps.transactions.domain.interfaces import (
    BaseExchangeRateProvider,
    BaseTransactionRepository,
)
from apps.transactions.domain.models import ConversionResult, Transaction
from apps.transactions.domain.validation import (
    parse_date,
    validate_country,
    validate_store_request,
)


logger = logging.getLogger(__name__)

EXCHANGE_RATE_MAX_AGE_MONTHS = 6


def months_before(day: date, months: int) -> date:
    """
    Return the date `months` calendar months before `day`.

    The day of month is clamped to the length of the target month, so
    2023-08-31 minus six months is 2023-02-28. Results before year 1 are
    clamped to date.min.
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    if year < date.min.year:
        return date.min
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class ExchangeRateService:
    """
    Converts amounts using the most recent exchange rate record available
    from the configured provider.
    """

    def __init__(self, provider: BaseExchangeRateProvider):
        self.provider = provider

    def convert(
        self,
        country: str,
        oldest_record_date: date,
        amount_in_cents: int,
        timeout: Optional[float] = None
    ) -> ConversionResult:
        """
        Convert an amount in cents to the currency of a country.

        Args:
            country: Country whose currency is the conversion target
            oldest_record_date: Records dated before this are not acceptable
            amount_in_cents: Amount to convert
            timeout: Seconds to wait on the provider (provider default if None)

        Returns:
            ConversionResult with the converted amount and the rate used

        Raises:
            BusinessError: when no acceptable exchange rate record exists
        """
        record = self.provider.find_latest_record(country, oldest_record_date, timeout=timeout)

        if record is None:
            logger.info("No exchange rate for %s on or after %s", country, oldest_record_date)
            raise BusinessError(UNABLE_TO_CONVERT_TO_TARGET_CURRENCY)

        return ConversionResult(
            amount_in_cents=convert(amount_in_cents, record.exchange_rate),
            exchange_rate=record.exchange_rate,
        )


class TransactionService:
    """
    Stores transactions and fetches them with their amount converted to the
    currency of a requested country.

    Fetch flow:
    1. Validate the country
    2. Look up the transaction
    3. Work out the oldest acceptable exchange rate date (six months earlier)
    4. Convert the amount with the most recent acceptable rate
    """

    def __init__(
        self,
        repository: BaseTransactionRepository,
        exchange_rate_service: ExchangeRateService,
        today: Callable[[], date] = date.today
    ):
        self.repository = repository
        self.exchange_rate_service = exchange_rate_service
        self.today = today

    def store(self, request: StoreTransactionRequestDTO) -> StoreTransactionResultDTO:
        validate_store_request(request, today=self.today())

        saved = self.repository.save(self._to_entity(request))
        logger.info("Stored transaction %s", saved.id)

        return StoreTransactionResultDTO(id=saved.id)

    def fetch(
        self,
        transaction_id: str,
        country: Optional[str],
        timeout: Optional[float] = None
    ) -> FetchTransactionResultDTO:
        # transaction_id comes from the URL path, so it is always present
        validate_country(country)

        transaction = self.repository.find_by_id(transaction_id)
        if transaction is None:
            logger.info("Transaction %s not found", transaction_id)
            raise BusinessError(TRANSACTION_NOT_FOUND)

        oldest_record_date = months_before(transaction.transaction_date, EXCHANGE_RATE_MAX_AGE_MONTHS)
        result = self.exchange_rate_service.convert(
            country,
            oldest_record_date,
            transaction.amount_in_cents,
            timeout=timeout,
        )

        return FetchTransactionResultDTO(
            id=transaction.id,
            description=transaction.description,
            transaction_date=transaction.transaction_date,
            amount=TransactionAmountDTO(
                usd_amount_in_cents=transaction.amount_in_cents,
                converted_amount_in_cents=result.amount_in_cents,
                exchange_rate=result.exchange_rate,
            ),
        )

    @staticmethod
    def _to_entity(request: StoreTransactionRequestDTO) -> Transaction:
        return Transaction(
            description=request.description,
            transaction_date=parse_date(request.transaction_date),
            amount_in_cents=request.amount_in_cents,
        )
