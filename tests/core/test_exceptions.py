"""
Tests for core exception classes.

Every error carries a message, a stable error code and a details mapping so
it can be logged and reported without losing structure.
"""

from tradefeed.core.exceptions import (
    FetchError,
    NetworkError,
    ParseError,
    SourceError,
    StorageError,
    TradeFeedError,
)


class TestTradeFeedError:
    def test_defaults(self):
        error = TradeFeedError("something broke")

        assert str(error) == "something broke"
        assert error.message == "something broke"
        assert error.error_code == "GENERAL_ERROR"
        assert error.details == {}


class TestSourceErrors:
    def test_network_error_records_status(self):
        error = NetworkError("HTTP 503 for https://m.ccmn.cn/", source_name="cu/al", status_code=503)

        assert isinstance(error, SourceError)
        assert error.source_name == "cu/al"
        assert error.error_code == "NETWORK_ERROR"
        assert error.status_code == 503
        assert error.details == {"status_code": 503}

    def test_network_error_without_status(self):
        error = NetworkError("ConnectTimeout", source_name="oil", details={"url": "https://www.100ppi.com/crudeoil/"})

        assert error.status_code is None
        assert error.details == {"url": "https://www.100ppi.com/crudeoil/"}

    def test_parse_error(self):
        error = ParseError("XE parse failed for USD->CNY", source_name="fxSpot")

        assert isinstance(error, SourceError)
        assert error.error_code == "PARSE_ERROR"

    def test_fetch_error_alias(self):
        assert FetchError is NetworkError


class TestStorageError:
    def test_path_in_details(self):
        error = StorageError("Unable to read time series file", path="public/trade-data.json")

        assert not isinstance(error, SourceError)
        assert error.error_code == "STORAGE_ERROR"
        assert error.path == "public/trade-data.json"
        assert error.details["path"] == "public/trade-data.json"
