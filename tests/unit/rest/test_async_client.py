"""
rest/async_client.py 테스트

FakeAsyncTransport 및 httpx.MockTransport 기반 비동기 클라이언트 검증
"""

import json
from decimal import Decimal
from unittest.mock import patch

import httpx
import pytest

from binance_futures.core.config.loader import RequestOptions
from binance_futures.core.errors import OrderError, RateLimitError, ValidationError
from binance_futures.core.types import OrderSide, PeriodType
from binance_futures.interfaces import IAsyncRequestClient
from binance_futures.models import OrderRequest
from binance_futures.rest.async_client import AsyncRequestClient
from binance_futures.rest.transport import AsyncHttpxTransport


@pytest.fixture
def client(fake_async_transport) -> AsyncRequestClient:
    return AsyncRequestClient(
        api_key="test_key",
        secret_key="test_secret",
        options=RequestOptions(recv_window=5000),
        transport=fake_async_transport,
    )


class TestAsyncRequestClient:
    """비동기 클라이언트 테스트"""

    def test_protocol(self, client: AsyncRequestClient) -> None:
        assert isinstance(client, IAsyncRequestClient)

    @pytest.mark.asyncio
    async def test_public_request(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue([
            {"symbol": "BTCUSDT", "sumOpenInterest": "20403.63700000",
             "sumOpenInterestValue": "150570784.07809979", "timestamp": 1583127900000},
        ])

        stats = await client.get_open_interest_stat("BTCUSDT", PeriodType.FIVE_MINUTES, limit=1)

        assert stats[0].sum_open_interest == Decimal("20403.63700000")
        sent = fake_async_transport.last
        assert sent.path == "/futures/data/openInterestHist"
        assert sent.query_string == "symbol=BTCUSDT&period=5m&limit=1"
        assert sent.headers == {}

    @pytest.mark.asyncio
    async def test_signed_request(
        self,
        client: AsyncRequestClient,
        fake_async_transport,
        binance_account_response,
    ) -> None:
        fake_async_transport.queue(binance_account_response)

        info = await client.get_account_information()

        assert info.total_wallet_balance == Decimal("23.72469206")
        assert fake_async_transport.last.headers == {"X-MBX-APIKEY": "test_key"}
        assert list(fake_async_transport.last.params)[-1] == "signature"

    @pytest.mark.asyncio
    async def test_place_order_rejected(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue(
            {"code": -1111, "msg": "Precision is over the maximum defined for this asset."},
            status_code=400,
        )

        with pytest.raises(OrderError) as exc_info:
            await client.place_order(
                OrderRequest.market("BTCUSDT", OrderSide.BUY, Decimal("0.0000001"))
            )

        assert exc_info.value.code == -1111
        assert len(fake_async_transport.sent) == 1

    @pytest.mark.asyncio
    async def test_rate_limited(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue(b"", status_code=418, headers={"Retry-After": "300"})

        with pytest.raises(RateLimitError) as exc_info:
            await client.get_server_time()

        assert exc_info.value.retry_after == 300
        assert exc_info.value.status_code == 418

    @pytest.mark.asyncio
    async def test_validation_before_network(self, client: AsyncRequestClient, fake_async_transport) -> None:
        with pytest.raises(ValidationError):
            await client.get_funding_rate("BTCUSDT", start_time=10, end_time=1)

        assert fake_async_transport.sent == []

    @pytest.mark.asyncio
    async def test_user_data_stream(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue({"listenKey": "lk"}).queue({}).queue({})

        listen_key = await client.start_user_data_stream()

        assert listen_key == "lk"
        assert await client.keep_user_data_stream(listen_key) is None
        assert await client.close_user_data_stream(listen_key) is None
        assert [sent.method for sent in fake_async_transport.sent] == ["POST", "PUT", "DELETE"]

    @pytest.mark.asyncio
    async def test_keep_with_empty_body(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue(b"")

        assert await client.keep_user_data_stream("abc") is None

    @pytest.mark.asyncio
    async def test_rate_limited_http_date(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue(
            {"code": -1003, "msg": "Too many requests."},
            status_code=429,
            headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"},
        )

        with pytest.raises(RateLimitError) as exc_info:
            await client.get_server_time()

        assert exc_info.value.code == -1003
        assert exc_info.value.retry_after == 30

    @pytest.mark.asyncio
    async def test_sync_time(self, client: AsyncRequestClient, fake_async_transport) -> None:
        fake_async_transport.queue({"serverTime": 999_998_000})

        with patch("time.time", return_value=1_000_000.0):
            offset = await client.sync_time()

        assert offset == -2000
        assert client.request_impl.time_offset == -2000

    @pytest.mark.asyncio
    async def test_injected_transport_not_closed(self, fake_async_transport) -> None:
        async with AsyncRequestClient(transport=fake_async_transport):
            pass

        assert fake_async_transport.closed is False


class TestAsyncWithHttpx:
    """httpx.MockTransport 연동"""

    @pytest.mark.asyncio
    async def test_end_to_end(self) -> None:
        recorded: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return httpx.Response(
                200,
                content=json.dumps({"leverage": 21, "maxNotionalValue": "1000000", "symbol": "BTCUSDT"}),
                headers={"X-MBX-USED-WEIGHT-1m": "5"},
            )

        http_client = httpx.AsyncClient(
            base_url="https://testnet.binancefuture.com",
            transport=httpx.MockTransport(handler),
        )
        transport = AsyncHttpxTransport("https://testnet.binancefuture.com", client=http_client)

        async with AsyncRequestClient("key", "secret", transport=transport) as client:
            leverage = await client.change_initial_leverage("BTCUSDT", 21)

        assert leverage.leverage == 21
        assert client.rate_tracker.used_weight_1m == 5
        request = recorded[0]
        assert request.method == "POST"
        assert request.url.host == "testnet.binancefuture.com"
        assert request.url.path == "/fapi/v1/leverage"
        assert request.url.params["leverage"] == "21"
        assert "signature" in request.url.params
        assert request.headers["X-MBX-APIKEY"] == "key"
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_transport_closed(self) -> None:
        client = AsyncRequestClient.create()
        transport = client._transport

        await client.close()

        assert transport._client.is_closed
