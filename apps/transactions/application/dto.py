"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class StoreTransactionRequestDTO:
    """Request DTO for storing a transaction. Every field may be missing."""
    description: Optional[str] = None
    transaction_date: Optional[str] = None
    amount_in_cents: Optional[int] = None


@dataclass
class StoreTransactionResultDTO:
    """Result DTO for storing a transaction."""
    id: str


@dataclass
class TransactionAmountDTO:
    """Original and converted amounts, with the rate used."""
    usd_amount_in_cents: int
    converted_amount_in_cents: int
    exchange_rate: Decimal


@dataclass
class FetchTransactionResultDTO:
    """Result DTO for fetching a transaction in a country's currency."""
    id: str
    description: str
    transaction_date: date
    amount: TransactionAmountDTO
