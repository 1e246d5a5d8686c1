"""
Input validation rules for storing and fetching transactions.

Each rule returns a FieldError or None. Rules that check the correctness of a
value skip absent (None) values, leaving those to the REQUIRED rules.
"""

import re
from datetime import date, datetime
from typing import List, Optional

from apps.transactions.domain.errors import FieldError, ValidationError


REQUIRED = "REQUIRED"
MIN_LENGTH = "MIN_LENGTH"
MAX_LENGTH = "MAX_LENGTH"
DATE_BAD_FORMAT = "DATE_BAD_FORMAT"
DATE_IN_FUTURE = "DATE_IN_FUTURE"
ZERO_VALUE = "ZERO_VALUE"

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

DESCRIPTION_FIELD = "description"
TRANSACTION_DATE_FIELD = "transactionDate"
AMOUNT_IN_CENTS_FIELD = "amountInCents"
COUNTRY_FIELD = "country"

DESCRIPTION_MIN_LENGTH = 1
DESCRIPTION_MAX_LENGTH = 50
COUNTRY_MIN_LENGTH = 2


def is_required(field_name: str, value) -> Optional[FieldError]:
    if value is None:
        return FieldError(field_name, REQUIRED)
    return None


def is_min_length(field_name: str, value: Optional[str], minimum: int) -> Optional[FieldError]:
    if value is not None and len(value) < minimum:
        return FieldError(field_name, MIN_LENGTH)
    return None


def is_max_length(field_name: str, value: Optional[str], maximum: int) -> Optional[FieldError]:
    if value is not None and len(value) > maximum:
        return FieldError(field_name, MAX_LENGTH)
    return None


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string, raising ValueError otherwise."""
    if not _DATE_PATTERN.fullmatch(value):
        raise ValueError(f"'{value}' does not match {DATE_FORMAT}")
    return datetime.strptime(value, DATE_FORMAT).date()


def is_date(field_name: str, value: Optional[str]) -> tuple[Optional[date], Optional[FieldError]]:
    if value is None:
        return None, None
    try:
        return parse_date(value), None
    except ValueError:
        return None, FieldError(field_name, DATE_BAD_FORMAT)


def is_date_today_or_earlier(field_name: str, value: Optional[date], today: date) -> Optional[FieldError]:
    if value is not None and value > today:
        return FieldError(field_name, DATE_IN_FUTURE)
    return None


def is_not_zero(field_name: str, value: Optional[int]) -> Optional[FieldError]:
    if value is not None and value == 0:
        return FieldError(field_name, ZERO_VALUE)
    return None


def _collect(*results: Optional[FieldError]) -> List[FieldError]:
    return [r for r in results if r is not None]


def validate_store_request(request, today: Optional[date] = None) -> None:
    """
    Validate a store request (anything with description, transaction_date and
    amount_in_cents attributes).

    Mandatory checks run first, then correctness checks; every violation is
    collected and raised together as a ValidationError.
    """
    if today is None:
        today = date.today()

    mandatory = _collect(
        is_required(DESCRIPTION_FIELD, request.description),
        is_required(TRANSACTION_DATE_FIELD, request.transaction_date),
        is_required(AMOUNT_IN_CENTS_FIELD, request.amount_in_cents),
    )

    transaction_date, date_error = is_date(TRANSACTION_DATE_FIELD, request.transaction_date)
    correctness = _collect(
        is_min_length(DESCRIPTION_FIELD, request.description, DESCRIPTION_MIN_LENGTH),
        is_max_length(DESCRIPTION_FIELD, request.description, DESCRIPTION_MAX_LENGTH),
        date_error,
        is_date_today_or_earlier(TRANSACTION_DATE_FIELD, transaction_date, today),
        is_not_zero(AMOUNT_IN_CENTS_FIELD, request.amount_in_cents),
    )

    field_errors = mandatory + correctness
    if field_errors:
        raise ValidationError(field_errors)


def validate_country(country: Optional[str]) -> None:
    field_errors = _collect(
        is_required(COUNTRY_FIELD, country),
        is_min_length(COUNTRY_FIELD, country, COUNTRY_MIN_LENGTH),
    )
    if field_errors:
        raise ValidationError(field_errors)
