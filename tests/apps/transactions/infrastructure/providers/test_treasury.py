import pytest
import requests
from unittest.mock import Mock
from decimal import Decimal
from datetime import date

from apps.transactions.domain.errors import ErrorKind, ExchangeRateProviderError
from apps.transactions.domain.models import ExchangeRateRecord
from apps.transactions.infrastructure.providers.treasury import TreasuryExchangeRateProvider


EXPECTED_URL = (
    "https://api.fiscaldata.treasury.gov/services/api/fiscal_service/v1/accounting/od/rates_of_exchange"
    "?sort=-record_date&format=json"
    "&filter=record_date:gte:2023-04-12,country:eq:United+Kingdom"
    "&page[size]=1&page[number]=1"
)


@pytest.fixture
def provider():
    return TreasuryExchangeRateProvider()


@pytest.fixture
def mock_requests_get(mocker):
    return mocker.patch("requests.get")


def canned_response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    return response


def test_find_latest_record_request(provider, mock_requests_get):
    """
    Test that the request sorts by record date, filters out records older than
    the provided date and records for other countries (url encoded), one page.
    """
    mock_requests_get.return_value = canned_response(
        json_data={"data": [{"record_date": "2020-08-01", "exchange_rate": "0.345"}]}
    )

    provider.find_latest_record("United Kingdom", date(2023, 4, 12))

    mock_requests_get.assert_called_once_with(EXPECTED_URL, timeout=5)


def test_find_latest_record_found(provider, mock_requests_get):
    """
    Test that record date and exchange rate are returned when a record is found.
    """
    mock_requests_get.return_value = canned_response(
        json_data={"data": [{"record_date": "2020-08-01", "exchange_rate": "0.345"}]}
    )

    record = provider.find_latest_record("United Kingdom", date(2023, 4, 12))

    assert record == ExchangeRateRecord(date(2020, 8, 1), Decimal("0.345"))
    assert isinstance(record.exchange_rate, Decimal)


def test_find_latest_record_not_found(provider, mock_requests_get):
    """
    Test that None is returned when no record matches.
    """
    mock_requests_get.return_value = canned_response(json_data={"data": []})

    assert provider.find_latest_record("United Kingdom", date(2023, 4, 12)) is None


def test_find_latest_record_picks_newest(provider, mock_requests_get):
    """
    Test that the newest record wins even if the API returns several unsorted.
    """
    mock_requests_get.return_value = canned_response(json_data={"data": [
        {"record_date": "2023-03-31", "exchange_rate": "0.809"},
        {"record_date": "2023-06-30", "exchange_rate": "0.787"},
        {"record_date": "2022-12-31", "exchange_rate": "0.827"},
    ]})

    record = provider.find_latest_record("United Kingdom", date(2022, 12, 1))

    assert record == ExchangeRateRecord(date(2023, 6, 30), Decimal("0.787"))


def test_find_latest_record_http_error(provider, mock_requests_get):
    """
    Test that a non-200 status is a failure, not "no record".
    """
    mock_requests_get.return_value = canned_response(status_code=500, text="*error-payload*")

    with pytest.raises(ExchangeRateProviderError) as excinfo:
        provider.find_latest_record("United Kingdom", date(2023, 4, 12))

    assert str(excinfo.value) == "http status 500 received from treasury api. response body: *error-payload*"
    assert excinfo.value.kind == ErrorKind.SYSTEM


def test_find_latest_record_timeout(provider, mock_requests_get):
    mock_requests_get.side_effect = requests.exceptions.Timeout("read timed out")

    with pytest.raises(ExchangeRateProviderError, match="timeout"):
        provider.find_latest_record("United Kingdom", date(2023, 4, 12))


def test_find_latest_record_connection_error(provider, mock_requests_get):
    mock_requests_get.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(ExchangeRateProviderError) as excinfo:
        provider.find_latest_record("United Kingdom", date(2023, 4, 12))

    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)


@pytest.mark.parametrize(
    "json_data",
    [
        {"meta": {}},
        {"data": None},
        {"data": [{"record_date": "2020-08-01"}]},
        {"data": [{"record_date": "01/08/2020", "exchange_rate": "0.345"}]},
        {"data": [{"record_date": "2020-08-01", "exchange_rate": "not-a-number"}]},
    ],
)
def test_find_latest_record_malformed_payload(provider, mock_requests_get, json_data):
    """
    Test that an unexpected payload is a failure, not "no record".
    """
    mock_requests_get.return_value = canned_response(json_data=json_data)

    with pytest.raises(ExchangeRateProviderError, match="invalid response"):
        provider.find_latest_record("United Kingdom", date(2023, 4, 12))


def test_find_latest_record_invalid_json(provider, mock_requests_get):
    response = canned_response()
    response.json.side_effect = ValueError("Expecting value")
    mock_requests_get.return_value = response

    with pytest.raises(ExchangeRateProviderError):
        provider.find_latest_record("United Kingdom", date(2023, 4, 12))


def test_find_latest_record_caller_timeout(mock_requests_get):
    """
    Test that a caller supplied timeout overrides the provider default.
    """
    mock_requests_get.return_value = canned_response(json_data={"data": []})
    provider = TreasuryExchangeRateProvider(base_url="http://treasury.test/rates", timeout=10)

    provider.find_latest_record("Canada", date(2023, 1, 31), timeout=0.5)

    url = mock_requests_get.call_args[0][0]
    assert url.startswith("http://treasury.test/rates?sort=-record_date")
    assert "country:eq:Canada" in url
    assert mock_requests_get.call_args[1]["timeout"] == 0.5
