"""
core/errors.py 테스트

예외 계층 및 메시지 테스트
"""

import pytest

from binance_futures.core.errors import (
    BinanceApiError,
    BinanceClientError,
    EnumLookupError,
    OrderError,
    ParseError,
    RateLimitError,
    TransportError,
    ValidationError,
)


class TestHierarchy:
    """예외 계층 테스트"""

    @pytest.mark.parametrize(
        "error_cls",
        [ValidationError, TransportError, BinanceApiError, ParseError, EnumLookupError],
    )
    def test_base_class(self, error_cls: type) -> None:
        """모든 예외는 BinanceClientError 하위"""
        assert issubclass(error_cls, BinanceClientError)

    def test_api_error_subclasses(self) -> None:
        assert issubclass(OrderError, BinanceApiError)
        assert issubclass(RateLimitError, BinanceApiError)

    def test_builtin_compat(self) -> None:
        """ValueError / LookupError로도 잡을 수 있음"""
        assert issubclass(ValidationError, ValueError)
        assert issubclass(EnumLookupError, LookupError)


class TestBinanceApiError:
    """BinanceApiError 테스트"""

    def test_attributes(self) -> None:
        error = BinanceApiError(code=-1121, message="Invalid symbol.", status_code=400)

        assert error.code == -1121
        assert error.message == "Invalid symbol."
        assert error.status_code == 400
        assert "-1121" in str(error)
        assert "Invalid symbol." in str(error)

    def test_without_envelope(self) -> None:
        """envelope 없는 에러는 code None"""
        error = BinanceApiError(code=None, message="Bad Gateway", status_code=502)

        assert error.code is None
        assert "502" in str(error)


class TestRateLimitError:
    """RateLimitError 테스트"""

    def test_retry_after(self) -> None:
        error = RateLimitError(retry_after=30)

        assert error.retry_after == 30
        assert error.status_code == 429
        assert "Retry after 30 seconds" in str(error)

    def test_ip_ban(self) -> None:
        error = RateLimitError(retry_after=120, message="IP banned", code=-1003, status_code=418)

        assert error.status_code == 418
        assert error.code == -1003
        assert error.message == "IP banned"


class TestParseError:
    def test_field(self) -> None:
        error = ParseError("Missing required field 'code'", field="code")

        assert error.field == "code"
        assert error.message == "Missing required field 'code'"


class TestEnumLookupError:
    def test_message(self) -> None:
        error = EnumLookupError("OrderSide", "HOLD")

        assert error.enum_type == "OrderSide"
        assert error.code == "HOLD"
        assert "HOLD" in str(error)
