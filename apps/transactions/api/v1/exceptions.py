"""
Top level error handling for the transactions API.

Installed as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Business and validation
errors become 422 responses carrying their message and field errors. A body
that cannot be parsed becomes a 400. Anything else is a system error: its
details are logged and the caller only gets a static message.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.transactions.domain.errors import (
    BAD_REQUEST,
    ErrorKind,
    SYSTEM_ERROR,
    ServiceError,
)


logger = logging.getLogger(__name__)

CLIENT_ERROR_KINDS = (ErrorKind.VALIDATION, ErrorKind.BUSINESS)


def transaction_exception_handler(exc, context):
    if isinstance(exc, ParseError):
        return Response({"message": BAD_REQUEST}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ServiceError) and exc.kind in CLIENT_ERROR_KINDS:
        return Response(exc.to_dict(), status=status.HTTP_422_UNPROCESSABLE_ENTITY)

    # routing level errors (404, 405, ...) keep DRF's rendering
    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    logger.error("system error: %s", exc, exc_info=exc)
    return Response({"message": SYSTEM_ERROR}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
