import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from urllib.parse import quote_plus

import requests

from apps.transactions.domain.errors import ExchangeRateProviderError
from apps.transactions.domain.interfaces import BaseExchangeRateProvider
from apps.transactions.domain.models import ExchangeRateRecord
from apps.transactions.domain.validation import parse_date


logger = logging.getLogger(__name__)

TREASURY_API_URL = (
    "https://api.fiscaldata.treasury.gov/services/api/fiscal_service/v1/accounting/od/rates_of_exchange"
)
DEFAULT_TIMEOUT = 5
PAGE_SIZE = 1
PAGE_NUMBER = 1


class TreasuryExchangeRateProvider(BaseExchangeRateProvider):
    """
    US Treasury Reporting Rates of Exchange API provider.
    https://fiscaldata.treasury.gov/datasets/treasury-reporting-rates-exchange/treasury-reporting-rates-of-exchange

    Asks for a single page holding the newest record for the country that is
    not older than the requested date. One timed attempt, no retries.
    """

    def __init__(self, base_url: str = TREASURY_API_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    def build_url(self, country: str, oldest_record_date: date) -> str:
        # Format: {base}?sort=-record_date&format=json&filter=record_date:gte:2023-04-12,country:eq:United+Kingdom&page[size]=1&page[number]=1
        return (
            f"{self.base_url}"
            f"?sort=-record_date&format=json"
            f"&filter=record_date:gte:{oldest_record_date.strftime('%Y-%m-%d')},country:eq:{quote_plus(country)}"
            f"&page[size]={PAGE_SIZE}&page[number]={PAGE_NUMBER}"
        )

    def find_latest_record(
        self,
        country: str,
        oldest_record_date: date,
        timeout: float | None = None
    ) -> ExchangeRateRecord | None:
        """
        Fetch the newest exchange rate record for a country from the Treasury API.

        Args:
            country: Country name as the Treasury API knows it (e.g. United Kingdom)
            oldest_record_date: Records older than this are filtered out
            timeout: Seconds to wait for the API (defaults to the provider timeout)

        Returns:
            The newest matching ExchangeRateRecord, or None if there is none

        Raises:
            ExchangeRateProviderError: transport failure, non-200 status or a
            payload that cannot be parsed
        """
        url = self.build_url(country, oldest_record_date)
        logger.debug("Calling treasury api: %s", url)

        try:
            response = requests.get(url, timeout=timeout if timeout is not None else self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning("Timeout calling treasury api for %s", country)
            raise ExchangeRateProviderError(f"timeout calling treasury api: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.warning("Error calling treasury api for %s: %s", country, e)
            raise ExchangeRateProviderError(f"error calling treasury api: {e}") from e

        if response.status_code != 200:
            logger.warning("Treasury api returned http status %s for %s", response.status_code, country)
            raise ExchangeRateProviderError(
                f"http status {response.status_code} received from treasury api. response body: {response.text}"
            )

        records = self.parse_records(response)
        if not records:
            return None

        # the query already sorts and pages, but don't rely on it
        return max(records, key=lambda r: r.record_date)

    @staticmethod
    def parse_records(response) -> list[ExchangeRateRecord]:
        # Response format: {"data": [{"record_date": "2020-08-01", "exchange_rate": "0.345"}]}
        try:
            rows = response.json()["data"]
            return [
                ExchangeRateRecord(
                    record_date=parse_date(row["record_date"]),
                    exchange_rate=Decimal(str(row["exchange_rate"])),
                )
                for row in rows
            ]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.warning("Invalid response from treasury api: %s", e)
            raise ExchangeRateProviderError(f"invalid response from treasury api: {e}") from e
