import pytest
from decimal import Decimal
from datetime import date

from apps.transactions.api.v1.serializers import (
    FetchTransactionResponseSerializer,
    StoreTransactionRequestSerializer,
    StoreTransactionResponseSerializer,
)
from apps.transactions.application.dto import (
    FetchTransactionResultDTO,
    StoreTransactionRequestDTO,
    StoreTransactionResultDTO,
    TransactionAmountDTO,
)


class TestStoreTransactionRequestSerializer:
    """Tests for the store request wire format."""

    def test_to_dto(self):
        serializer = StoreTransactionRequestSerializer(data={
            "description": "A holiday somewhere nice",
            "transactionDate": "2023-05-01",
            "amountInCents": 100
        })

        assert serializer.is_valid()
        assert serializer.to_dto() == StoreTransactionRequestDTO(
            description="A holiday somewhere nice",
            transaction_date="2023-05-01",
            amount_in_cents=100
        )

    def test_missing_fields_are_none(self):
        """
        Test that absent fields pass the wire checks so that business
        validation can report them as REQUIRED.
        """
        serializer = StoreTransactionRequestSerializer(data={})

        assert serializer.is_valid()
        assert serializer.to_dto() == StoreTransactionRequestDTO()

    def test_blank_values_are_kept(self):
        serializer = StoreTransactionRequestSerializer(data={"description": "", "transactionDate": ""})

        assert serializer.is_valid()
        dto = serializer.to_dto()
        assert dto.description == ""
        assert dto.transaction_date == ""

    def test_whitespace_is_not_trimmed(self):
        serializer = StoreTransactionRequestSerializer(data={"description": "  padded  "})

        assert serializer.is_valid()
        assert serializer.to_dto().description == "  padded  "

    def test_invalid_amount_type(self):
        serializer = StoreTransactionRequestSerializer(data={"amountInCents": "lots"})

        assert not serializer.is_valid()
        assert "amountInCents" in serializer.errors

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"amountInCents": "100"}, "amountInCents"),
            ({"amountInCents": 100.0}, "amountInCents"),
            ({"amountInCents": True}, "amountInCents"),
            ({"description": 123}, "description"),
            ({"transactionDate": 20230501}, "transactionDate"),
        ],
    )
    def test_values_are_not_coerced(self, data, field):
        """
        Test that numbers are not accepted as strings and strings, floats or
        booleans are not accepted as integers.
        """
        serializer = StoreTransactionRequestSerializer(data=data)

        assert not serializer.is_valid()
        assert field in serializer.errors


class TestResponseSerializers:
    """Tests for the response wire format."""

    def test_store_response(self):
        assert StoreTransactionResponseSerializer(StoreTransactionResultDTO(id="abc")).data == {"id": "abc"}

    def test_fetch_response(self):
        result = FetchTransactionResultDTO(
            id="sequentialID-1",
            description="A holiday somewhere nice",
            transaction_date=date(2023, 5, 1),
            amount=TransactionAmountDTO(
                usd_amount_in_cents=100,
                converted_amount_in_cents=35,
                exchange_rate=Decimal("0.345")
            )
        )

        data = FetchTransactionResponseSerializer(result).data

        assert data == {
            "transaction": {
                "id": "sequentialID-1",
                "description": "A holiday somewhere nice",
                "transactionDate": "2023-05-01",
                "amount": {
                    "usdAmountInCents": 100,
                    "convertedAmountInCents": 35,
                    "exchangeRate": 0.345
                }
            }
        }
        assert isinstance(data["transaction"]["amount"]["exchangeRate"], float)
