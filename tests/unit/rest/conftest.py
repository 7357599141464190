"""
REST 테스트 픽스처

Binance 응답 샘플, 가짜 전송 계층 제공.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from binance_futures.core.utils.json_wrapper import JsonWrapper
from binance_futures.rest.transport import TransportResponse


# -------------------------------------------------------------------------
# 가짜 전송 계층
# -------------------------------------------------------------------------

@dataclass
class SentRequest:
    """전송된 요청 기록"""

    method: str
    path: str
    headers: dict[str, str]
    query_string: str

    @property
    def params(self) -> dict[str, str]:
        """query string → dict (순서 유지)"""
        if not self.query_string:
            return {}
        return dict(pair.split("=", 1) for pair in self.query_string.split("&"))


def make_response(
    body: Any = None,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    reason: str = "OK",
) -> TransportResponse:
    """TransportResponse 생성 (body가 str/bytes가 아니면 JSON 직렬화)"""
    if isinstance(body, bytes):
        raw = body
    elif isinstance(body, str):
        raw = body.encode("utf-8")
    else:
        raw = json.dumps({} if body is None else body).encode("utf-8")
    return TransportResponse(
        status_code=status_code,
        body=raw,
        headers=headers or {},
        reason=reason,
    )


@dataclass
class FakeTransport:
    """ITransport 가짜 구현 (응답 큐, 요청 기록)"""

    responses: list[TransportResponse] = field(default_factory=list)
    sent: list[SentRequest] = field(default_factory=list)
    closed: bool = False

    def queue(self, *args: Any, **kwargs: Any) -> "FakeTransport":
        self.responses.append(make_response(*args, **kwargs))
        return self

    def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        query_string: str,
    ) -> TransportResponse:
        self.sent.append(SentRequest(method, path, dict(headers), query_string))
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {path}")
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> SentRequest:
        return self.sent[-1]


@dataclass
class FakeAsyncTransport(FakeTransport):
    """IAsyncTransport 가짜 구현"""

    async def send(  # type: ignore[override]
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        query_string: str,
    ) -> TransportResponse:
        return FakeTransport.send(self, method, path, headers, query_string)

    async def close(self) -> None:  # type: ignore[override]
        self.closed = True


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def fake_async_transport() -> FakeAsyncTransport:
    return FakeAsyncTransport()


@pytest.fixture
def response_factory() -> Callable[..., TransportResponse]:
    return make_response


@pytest.fixture
def as_json() -> Callable[[Any], JsonWrapper]:
    """dict/list → JsonWrapper (실제 응답처럼 직렬화 후 파싱)"""
    return lambda data: JsonWrapper.parse(json.dumps(data))


# -------------------------------------------------------------------------
# Binance 응답 샘플
# -------------------------------------------------------------------------

@pytest.fixture
def binance_order_response() -> dict:
    """Binance 주문 응답 샘플"""
    return {
        "clientOrderId": "testOrder",
        "cumQuote": "0",
        "executedQty": "0",
        "orderId": 22542179,
        "avgPrice": "0.00000",
        "origQty": "10",
        "price": "0",
        "reduceOnly": False,
        "side": "BUY",
        "positionSide": "SHORT",
        "status": "NEW",
        "stopPrice": "9300",
        "closePosition": False,
        "symbol": "BTCUSDT",
        "timeInForce": "GTC",
        "type": "TRAILING_STOP_MARKET",
        "origType": "TRAILING_STOP_MARKET",
        "activatePrice": "9020",
        "priceRate": "0.3",
        "updateTime": 1566818724722,
        "workingType": "CONTRACT_PRICE",
    }


@pytest.fixture
def binance_balance_response() -> dict:
    """Binance 잔고 응답 샘플 (/fapi/v2/balance 원소)"""
    return {
        "accountAlias": "SgsR",
        "asset": "USDT",
        "balance": "122607.35137903",
        "crossWalletBalance": "23.72469206",
        "crossUnPnl": "0.00000000",
        "availableBalance": "23.72469206",
        "maxWithdrawAmount": "23.72469206",
        "marginAvailable": True,
        "updateTime": 1617939110373,
    }


@pytest.fixture
def binance_position_risk_response() -> dict:
    """Binance 포지션 위험 응답 샘플 (/fapi/v2/positionRisk 원소)"""
    return {
        "entryPrice": "0.00000",
        "marginType": "cross",
        "isAutoAddMargin": "false",
        "isolatedMargin": "0.00000000",
        "leverage": "20",
        "liquidationPrice": "0",
        "markPrice": "6679.50671178",
        "maxNotionalValue": "20000000",
        "positionAmt": "0.000",
        "symbol": "BTCUSDT",
        "unRealizedProfit": "0.00000000",
        "positionSide": "LONG",
        "updateTime": 0,
    }


@pytest.fixture
def binance_account_response() -> dict:
    """Binance 계좌 정보 응답 샘플 (/fapi/v2/account)"""
    return {
        "feeTier": 0,
        "canTrade": True,
        "canDeposit": True,
        "canWithdraw": True,
        "updateTime": 0,
        "totalInitialMargin": "0.00000000",
        "totalMaintMargin": "0.00000000",
        "totalWalletBalance": "23.72469206",
        "totalUnrealizedProfit": "0.00000000",
        "totalMarginBalance": "23.72469206",
        "totalPositionInitialMargin": "0.00000000",
        "totalOpenOrderInitialMargin": "0.00000000",
        "totalCrossWalletBalance": "23.72469206",
        "availableBalance": "23.72469206",
        "maxWithdrawAmount": "23.72469206",
        "assets": [
            {
                "asset": "USDT",
                "walletBalance": "23.72469206",
                "unrealizedProfit": "0.00000000",
                "marginBalance": "23.72469206",
                "maintMargin": "0.00000000",
                "initialMargin": "0.00000000",
                "positionInitialMargin": "0.00000000",
                "openOrderInitialMargin": "0.00000000",
                "maxWithdrawAmount": "23.72469206",
                "availableBalance": "23.72469206",
                "updateTime": 1625474304765,
            }
        ],
        "positions": [
            {
                "symbol": "BTCUSDT",
                "initialMargin": "0",
                "maintMargin": "0",
                "unrealizedProfit": "0.00000000",
                "positionInitialMargin": "0",
                "openOrderInitialMargin": "0",
                "leverage": "100",
                "isolated": True,
                "entryPrice": "0.00000",
                "maxNotional": "250000",
                "positionSide": "BOTH",
                "positionAmt": "0",
                "updateTime": 0,
            }
        ],
    }
