"""
Serializers for the transactions bounded context.
Handles wire-level typing and transformation between the API and the DTOs.

Business validation (required fields, lengths, dates) is not done here: it
lives in the domain so that its field errors can be reported together.
"""

from rest_framework import serializers

from apps.transactions.application.dto import StoreTransactionRequestDTO


class StrictCharField(serializers.CharField):
    """CharField that only accepts JSON strings (no number coercion)."""

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictIntegerField(serializers.IntegerField):
    """IntegerField that only accepts JSON integers (no strings, floats or booleans)."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


class StoreTransactionRequestSerializer(serializers.Serializer):
    description = StrictCharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        trim_whitespace=False,
    )
    transactionDate = StrictCharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        trim_whitespace=False,
        help_text="Date of the transaction (YYYY-MM-DD)",
    )
    amountInCents = StrictIntegerField(
        required=False,
        allow_null=True,
        help_text="Amount in US dollar cents",
    )

    def to_dto(self) -> StoreTransactionRequestDTO:
        data = self.validated_data
        return StoreTransactionRequestDTO(
            description=data.get("description"),
            transaction_date=data.get("transactionDate"),
            amount_in_cents=data.get("amountInCents"),
        )


class StoreTransactionResponseSerializer(serializers.Serializer):
    id = serializers.CharField()


class TransactionAmountSerializer(serializers.Serializer):
    usdAmountInCents = serializers.IntegerField(source="usd_amount_in_cents")
    convertedAmountInCents = serializers.IntegerField(source="converted_amount_in_cents")
    exchangeRate = serializers.FloatField(source="exchange_rate")


class TransactionSerializer(serializers.Serializer):
    id = serializers.CharField()
    description = serializers.CharField()
    transactionDate = serializers.DateField(source="transaction_date", format="%Y-%m-%d")
    amount = TransactionAmountSerializer()


class FetchTransactionResponseSerializer(serializers.Serializer):
    transaction = TransactionSerializer(source="*")


class FieldErrorSerializer(serializers.Serializer):
    fieldName = serializers.CharField()
    reason = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    fields = FieldErrorSerializer(many=True, required=False)
