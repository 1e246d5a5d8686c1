"""
Composition root for the transactions services.
Builds the TransactionService from the configured id generator and provider.
"""

from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from apps.transactions.domain.interfaces import BaseIdentifierGenerator
from apps.transactions.domain.services import ExchangeRateService, TransactionService
from apps.transactions.infrastructure.persistence.identifiers import ID_GENERATOR_REGISTRY
from apps.transactions.infrastructure.persistence.repositories import InMemoryTransactionRepository
from apps.transactions.infrastructure.providers.registry import get_provider_instance


def get_id_generator_instance(generator_name: str) -> BaseIdentifierGenerator:
    generator_class = ID_GENERATOR_REGISTRY.get(generator_name)
    if generator_class is None:
        raise ImproperlyConfigured(
            f"Unknown TRANSACTION_ID_GENERATOR '{generator_name}'. "
            f"Choose one of: {', '.join(ID_GENERATOR_REGISTRY)}"
        )
    return generator_class()


def build_transaction_service(generator_name: str, provider_name: str) -> TransactionService:
    provider = get_provider_instance(provider_name)
    if provider is None:
        raise ImproperlyConfigured(f"Unknown EXCHANGE_RATE_PROVIDER '{provider_name}'")

    repository = InMemoryTransactionRepository(get_id_generator_instance(generator_name))
    return TransactionService(repository, ExchangeRateService(provider))


@lru_cache(maxsize=None)
def get_transaction_service() -> TransactionService:
    """
    Process-wide TransactionService. The in-memory store lives as long as the
    process does, so every request must share the same instance.
    """
    return build_transaction_service(
        settings.TRANSACTION_ID_GENERATOR,
        settings.EXCHANGE_RATE_PROVIDER,
    )
