"""
Provider Registry - Maps provider names to adapter factories.
This is the glue between the EXCHANGE_RATE_PROVIDER setting and the actual implementation.
"""

import logging
from typing import Callable

from django.conf import settings

from apps.transactions.domain.interfaces import BaseExchangeRateProvider
from apps.transactions.infrastructure.providers.static import StaticExchangeRateProvider
from apps.transactions.infrastructure.providers.treasury import TreasuryExchangeRateProvider


logger = logging.getLogger(__name__)


class ProviderName:
    """
    Available providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseExchangeRateProvider interface
    3. Register a factory building it in PROVIDER_REGISTRY
    """

    TREASURY = "treasury"
    STATIC = "static"


def build_treasury_provider() -> TreasuryExchangeRateProvider:
    return TreasuryExchangeRateProvider(
        base_url=settings.TREASURY_API_URL,
        timeout=settings.EXCHANGE_RATE_API_TIMEOUT,
    )


# Registry: Maps ProviderName to a factory for the corresponding adapter
PROVIDER_REGISTRY: dict[str, Callable[[], BaseExchangeRateProvider]] = {
    ProviderName.TREASURY: build_treasury_provider,
    ProviderName.STATIC: StaticExchangeRateProvider,
}


def get_provider_instance(provider_name: str) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: One of the ProviderName values

    Returns:
        Instance of the provider adapter, or None if not found
    """
    factory = PROVIDER_REGISTRY.get(provider_name)

    if factory is None:
        logger.error("Provider '%s' not found in registry", provider_name)
        return None

    return factory()
