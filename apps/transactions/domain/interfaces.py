from abc import ABC, abstractmethod
from datetime import date

from apps.transactions.domain.models import ExchangeRateRecord, Transaction


class BaseIdentifierGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str:
        pass


class BaseExchangeRateProvider(ABC):
    @abstractmethod
    def find_latest_record(
        self,
        country: str,
        oldest_record_date: date,
        timeout: float | None = None
    ) -> ExchangeRateRecord | None:
        pass


class BaseTransactionRepository(ABC):
    @abstractmethod
    def save(self, transaction: Transaction) -> Transaction:
        pass

    @abstractmethod
    def find_by_id(self, transaction_id: str) -> Transaction | None:
        pass
