"""
rest/sync_client.py 테스트

FakeTransport로 요청 구성/응답 처리/로깅/수명 관리 검증
"""

import logging
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from binance_futures.core.config.loader import RequestOptions, get_settings
from binance_futures.core.constants import BinanceEndpoints
from binance_futures.core.errors import (
    BinanceApiError,
    OrderError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from binance_futures.core.types import (
    CandlestickInterval,
    OrderSide,
    OrderStatus,
    OrderType,
    TimeInForce,
)
from binance_futures.interfaces import IRequestClient
from binance_futures.models import Order, OrderRequest, ResponseResult
from binance_futures.rest.request_builder import generate_signature
from binance_futures.rest.response import DEFAULT_RETRY_AFTER
from binance_futures.rest.sync_client import SyncRequestClient
from binance_futures.rest.transport import HttpxTransport


@pytest.fixture
def client(fake_transport) -> SyncRequestClient:
    return SyncRequestClient(
        api_key="test_key",
        secret_key="test_secret",
        options=RequestOptions(recv_window=5000),
        transport=fake_transport,
    )


class TestConstruction:
    """생성/수명 관리"""

    def test_protocol(self, client: SyncRequestClient) -> None:
        assert isinstance(client, IRequestClient)

    def test_default_options(self) -> None:
        client = SyncRequestClient()

        assert client.options.url == BinanceEndpoints.PROD_REST_URL
        assert isinstance(client._transport, HttpxTransport)
        client.close()

    def test_context_manager_closes_owned_transport(self) -> None:
        with SyncRequestClient.create() as client:
            transport = client._transport

        assert transport._client.is_closed

    def test_injected_transport_not_closed(self, fake_transport) -> None:
        with SyncRequestClient(transport=fake_transport):
            pass

        assert fake_transport.closed is False

    def test_from_settings(self, temp_secrets_file: Path, reset_settings, fake_transport) -> None:
        """testnet 모드 → testnet URL, testnet 키"""
        client = SyncRequestClient.from_settings(get_settings(temp_secrets_file), transport=fake_transport)

        assert client.options.url == BinanceEndpoints.TEST_REST_URL
        assert client.request_impl.api_key == "test_api_key_abcde"
        assert client.request_impl.secret_key == "test_api_secret_fghij"

    def test_from_settings_production(
        self,
        temp_secrets_file_production: Path,
        reset_settings,
        fake_transport,
    ) -> None:
        client = SyncRequestClient.from_settings(
            get_settings(temp_secrets_file_production),
            transport=fake_transport,
        )

        assert client.options.url == BinanceEndpoints.PROD_REST_URL
        assert client.request_impl.api_key == "prod_api_key_12345"


class TestRequests:
    """요청 구성 테스트"""

    def test_public_request(self, client: SyncRequestClient, fake_transport) -> None:
        """공개 요청: 헤더/서명 없음"""
        fake_transport.queue({"serverTime": 1499827319559})

        assert client.get_server_time() == 1499827319559

        sent = fake_transport.last
        assert sent.method == "GET"
        assert sent.path == "/fapi/v1/time"
        assert sent.headers == {}
        assert sent.query_string == ""

    def test_signed_request(self, client: SyncRequestClient, fake_transport, binance_balance_response) -> None:
        """서명 요청: API 키 헤더, timestamp/recvWindow, 마지막에 signature"""
        fake_transport.queue([binance_balance_response])

        balances = client.get_balance()

        assert balances[0].balance == Decimal("122607.35137903")
        sent = fake_transport.last
        assert sent.headers == {"X-MBX-APIKEY": "test_key"}
        assert list(sent.params) == ["timestamp", "recvWindow", "signature"]
        canonical, signature = sent.query_string.rsplit("&signature=", 1)
        assert signature == generate_signature("test_secret", canonical)

    def test_api_key_only_request(self, client: SyncRequestClient, fake_transport) -> None:
        fake_transport.queue({"listenKey": "pqia91ma19a5s61cv6a81va65sdf19v8a65a1a5s61cv6a81va65sdf19v8a65a1"})

        listen_key = client.start_user_data_stream()

        assert listen_key.startswith("pqia91ma")
        assert fake_transport.last.method == "POST"
        assert fake_transport.last.headers == {"X-MBX-APIKEY": "test_key"}
        assert "signature" not in fake_transport.last.query_string

    def test_keep_and_close_return_none(self, client: SyncRequestClient, fake_transport) -> None:
        fake_transport.queue({}).queue({})

        assert client.keep_user_data_stream("lk") is None
        assert fake_transport.last.method == "PUT"
        assert client.close_user_data_stream("lk") is None
        assert fake_transport.last.method == "DELETE"
        assert fake_transport.last.params == {"listenKey": "lk"}

    def test_keep_with_empty_body(self, client: SyncRequestClient, fake_transport) -> None:
        """keepalive/close 응답 본문이 비어 있어도 None"""
        fake_transport.queue(b"").queue(b"")

        assert client.keep_user_data_stream("abc") is None
        assert client.close_user_data_stream("abc") is None

    def test_validation_before_network(self, client: SyncRequestClient, fake_transport) -> None:
        """검증 실패 시 전송하지 않음"""
        with pytest.raises(ValidationError):
            client.get_order_book("BTCUSDT", limit=7)
        with pytest.raises(ValidationError):
            client.change_initial_leverage("BTCUSDT", 0)
        with pytest.raises(ValidationError):
            client.get_candlestick("", CandlestickInterval.HOURLY)

        assert fake_transport.sent == []

    def test_signed_without_key(self, fake_transport) -> None:
        """키 없는 클라이언트의 서명 요청은 전송 전 실패"""
        client = SyncRequestClient(transport=fake_transport)

        with pytest.raises(ValidationError):
            client.get_account_information()

        assert fake_transport.sent == []

    def test_candlestick(self, client: SyncRequestClient, fake_transport) -> None:
        fake_transport.queue([
            [1499040000000, "0.01634790", "0.80000000", "0.01575800", "0.01577100",
             "148976.11427815", 1499644799999, "2434.19055334", 308,
             "1756.87402397", "28.46694368", "17928899.62484339"],
        ])

        candles = client.get_candlestick("BTCUSDT", CandlestickInterval.HOURLY, limit=1)

        assert candles[0].close == Decimal("0.01577100")
        assert fake_transport.last.query_string == "symbol=BTCUSDT&interval=1h&limit=1"

    def test_mark_price_single_symbol(self, client: SyncRequestClient, fake_transport) -> None:
        """symbol 지정 시에도 리스트 반환"""
        fake_transport.queue({
            "symbol": "BTCUSDT",
            "markPrice": "11793.63104562",
            "indexPrice": "11781.80495970",
            "lastFundingRate": "0.00038246",
            "nextFundingTime": 1597392000000,
            "time": 1597370495002,
        })

        prices = client.get_mark_price("BTCUSDT")

        assert len(prices) == 1
        assert prices[0].symbol == "BTCUSDT"


class TestOrders:
    """주문 테스트"""

    def test_post_order(self, client: SyncRequestClient, fake_transport, binance_order_response, caplog) -> None:
        fake_transport.queue(binance_order_response)

        with caplog.at_level(logging.INFO, logger="binance_futures.rest.sync_client"):
            order = client.post_order(
                "BTCUSDT",
                OrderSide.BUY,
                None,
                OrderType.LIMIT,
                time_in_force=TimeInForce.GTC,
                quantity="10",
                price="9000",
            )

        assert isinstance(order, Order)
        assert order.order_id == 22542179
        assert fake_transport.last.method == "POST"
        assert fake_transport.last.path == "/fapi/v1/order"
        params = fake_transport.last.params
        assert params["type"] == "LIMIT"
        assert params["quantity"] == "10"
        assert "주문 생성 완료" in caplog.text

    def test_place_order(self, client: SyncRequestClient, fake_transport, binance_order_response) -> None:
        fake_transport.queue(binance_order_response)
        request = OrderRequest.limit(
            "BTCUSDT",
            OrderSide.BUY,
            quantity=Decimal("0.010"),
            price=Decimal("50000.00"),
            client_order_id="my-order-1",
        )

        client.place_order(request)

        params = fake_transport.last.params
        assert params["newClientOrderId"] == "my-order-1"
        assert params["price"] == "50000.00"
        assert list(params)[-1] == "signature"

    def test_order_rejected(self, client: SyncRequestClient, fake_transport, caplog) -> None:
        """주문 거부 → OrderError, 재시도 없음"""
        fake_transport.queue(
            {"code": -2019, "msg": "Margin is insufficient."},
            status_code=400,
        )

        with caplog.at_level(logging.ERROR, logger="binance_futures.rest.sync_client"):
            with pytest.raises(OrderError) as exc_info:
                client.post_order("BTCUSDT", OrderSide.BUY, None, OrderType.MARKET, quantity="1")

        assert exc_info.value.code == -2019
        assert len(fake_transport.sent) == 1
        assert "API error" in caplog.text

    def test_cancel_order(self, client: SyncRequestClient, fake_transport, binance_order_response) -> None:
        canceled = dict(binance_order_response, status="CANCELED")
        fake_transport.queue(canceled)

        order = client.cancel_order("BTCUSDT", order_id=22542179)

        assert order.status is OrderStatus.CANCELED
        assert fake_transport.last.method == "DELETE"
        assert fake_transport.last.params["orderId"] == "22542179"

    def test_batch_orders_mixed(self, client: SyncRequestClient, fake_transport, binance_order_response) -> None:
        fake_transport.queue([
            binance_order_response,
            {"code": -2022, "msg": "ReduceOnly Order is rejected."},
        ])
        orders = [
            OrderRequest.market("BTCUSDT", OrderSide.BUY, Decimal("0.01")),
            OrderRequest.market("BTCUSDT", OrderSide.SELL, Decimal("0.01"), reduce_only=True),
        ]

        results = client.post_batch_orders(orders)

        assert isinstance(results[0], Order)
        assert results[1] == ResponseResult(code=-2022, msg="ReduceOnly Order is rejected.")
        assert fake_transport.last.path == "/fapi/v1/batchOrders"

    def test_change_position_side(self, client: SyncRequestClient, fake_transport) -> None:
        fake_transport.queue({"code": 200, "msg": "success"})

        result = client.change_position_side(False)

        assert result.is_success
        assert fake_transport.last.params["dualSidePosition"] == "false"

    def test_change_position_side_no_change(self, client: SyncRequestClient, fake_transport) -> None:
        """이미 같은 모드면 거래소 에러"""
        fake_transport.queue(
            {"code": -4059, "msg": "No need to change position side."},
            status_code=400,
        )

        with pytest.raises(BinanceApiError) as exc_info:
            client.change_position_side(True)

        assert exc_info.value.code == -4059


class TestErrorsAndRateLimit:
    """에러 전파 / Rate Limit 추적"""

    def test_rate_limited_no_retry(self, client: SyncRequestClient, fake_transport, caplog) -> None:
        fake_transport.queue(
            {"code": -1003, "msg": "Too many requests."},
            status_code=429,
            headers={"Retry-After": "7"},
        )

        with caplog.at_level(logging.WARNING, logger="binance_futures.rest.sync_client"):
            with pytest.raises(RateLimitError) as exc_info:
                client.get_exchange_information()

        assert exc_info.value.retry_after == 7
        assert len(fake_transport.sent) == 1
        assert client.rate_tracker.retry_after == 7
        assert "Rate limited by Binance" in caplog.text

    def test_rate_limited_http_date_retry_after(self, client: SyncRequestClient, fake_transport) -> None:
        """HTTP-date 형식 Retry-After도 RateLimitError로 변환 (기본 대기 시간)"""
        fake_transport.queue(
            {"code": -1003, "msg": "Too many requests."},
            status_code=429,
            headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"},
        )

        with pytest.raises(RateLimitError) as exc_info:
            client.get_server_time()

        assert isinstance(exc_info.value, BinanceApiError)
        assert exc_info.value.code == -1003
        assert exc_info.value.retry_after == DEFAULT_RETRY_AFTER
        assert client.rate_tracker.retry_after is None

    def test_malformed_weight_header_ignored(self, client: SyncRequestClient, fake_transport) -> None:
        fake_transport.queue({"serverTime": 1}, headers={"X-MBX-USED-WEIGHT-1m": "unknown"})

        assert client.get_server_time() == 1
        assert client.rate_tracker.used_weight_1m is None

    def test_tracker_updated(self, client: SyncRequestClient, fake_transport) -> None:
        fake_transport.queue(
            {"serverTime": 1},
            headers={"x-mbx-used-weight-1m": "120", "x-mbx-order-count-1m": "3"},
        )

        client.get_server_time()

        assert client.rate_tracker.used_weight_1m == 120
        assert client.rate_tracker.order_count_1m == 3

    def test_weight_warning(self, client: SyncRequestClient, fake_transport, caplog) -> None:
        """임계값 도달 시 경고 로그만 남기고 요청은 성공"""
        fake_transport.queue({"serverTime": 1}, headers={"X-MBX-USED-WEIGHT-1m": "1800"})

        with caplog.at_level(logging.WARNING, logger="binance_futures.rest.sync_client"):
            assert client.get_server_time() == 1

        assert "Request weight threshold reached" in caplog.text

    def test_weight_warning_logged_once(self, client: SyncRequestClient, fake_transport, caplog) -> None:
        """임계값 이상이 계속되면 처음 넘을 때만 경고"""
        for _ in range(3):
            fake_transport.queue({"serverTime": 1}, headers={"X-MBX-USED-WEIGHT-1m": "1800"})

        with caplog.at_level(logging.WARNING, logger="binance_futures.rest.sync_client"):
            for _ in range(3):
                client.get_server_time()

        assert caplog.text.count("Request weight threshold reached") == 1

    def test_transport_error_propagates(self, client: SyncRequestClient) -> None:
        with patch.object(client._transport, "send", side_effect=TransportError("Request timeout")):
            with pytest.raises(TransportError):
                client.get_server_time()


class TestSyncTime:
    """서버 시간 동기화"""

    def test_offset_applied_to_signed_requests(
        self,
        client: SyncRequestClient,
        fake_transport,
        binance_balance_response,
    ) -> None:
        fake_transport.queue({"serverTime": 1_000_005_000}).queue([binance_balance_response])

        with patch("time.time", return_value=1_000_000.0):
            offset = client.sync_time()
            client.get_balance()

        assert offset == 5000
        assert client.request_impl.time_offset == 5000
        assert fake_transport.last.params["timestamp"] == "1000005000"

    def test_no_implicit_sync(self, client: SyncRequestClient, fake_transport, binance_balance_response) -> None:
        """명시적으로 sync_time을 호출하지 않으면 서버 시간 요청 없음"""
        fake_transport.queue([binance_balance_response])

        client.get_balance()

        assert [sent.path for sent in fake_transport.sent] == ["/fapi/v2/balance"]
