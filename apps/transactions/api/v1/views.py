"""
ViewSet for the transactions API v1.
Maps HTTP requests onto the TransactionService and the results back to JSON.
Errors are turned into responses by the exception handler (exceptions.py).
"""

from rest_framework import viewsets, status
from rest_framework.exceptions import ParseError
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.transactions.api.v1.serializers import (
    ErrorResponseSerializer,
    FetchTransactionResponseSerializer,
    StoreTransactionRequestSerializer,
    StoreTransactionResponseSerializer,
)
from apps.transactions.application.dependencies import get_transaction_service


@extend_schema(tags=['Transactions'])
class TransactionViewSet(viewsets.ViewSet):

    lookup_value_regex = "[^/]+"

    @extend_schema(
        request=StoreTransactionRequestSerializer,
        responses={
            200: StoreTransactionResponseSerializer,
            400: ErrorResponseSerializer,
            422: ErrorResponseSerializer,
        },
        description="Store a purchase transaction (amount in US dollar cents)"
    )
    def create(self, request):
        serializer = StoreTransactionRequestSerializer(data=request.data)
        if not serializer.is_valid():
            raise ParseError()

        result = get_transaction_service().store(serializer.to_dto())

        return Response(
            StoreTransactionResponseSerializer(result).data,
            status=status.HTTP_200_OK
        )

    @extend_schema(
        parameters=[
            OpenApiParameter("country", OpenApiTypes.STR, required=True, description="Country whose currency to convert to (e.g. United Kingdom)"),
        ],
        responses={
            200: FetchTransactionResponseSerializer,
            422: ErrorResponseSerializer,
        },
        description="Fetch a stored transaction with its amount converted to the currency of a country"
    )
    def retrieve(self, request, pk=None):
        # a missing country is treated like an empty one
        country = request.query_params.get('country', '')

        result = get_transaction_service().fetch(pk, country)

        return Response(FetchTransactionResponseSerializer(result).data)
