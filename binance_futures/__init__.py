"""
Binance USDⓈ-M Futures REST SDK

동기/비동기 클라이언트와 응답 도메인 모델 제공.
모든 금액/수량은 Decimal 타입.

사용 예시:
```python
from binance_futures import SyncRequestClient, CandlestickInterval

with SyncRequestClient.create() as client:
    candles = client.get_candlestick("BTCUSDT", CandlestickInterval.HOURLY, limit=10)
```
"""

from binance_futures.core.config.loader import RequestOptions
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
from binance_futures.core.types import (
    CandlestickInterval,
    IncomeType,
    MarginType,
    OrderSide,
    OrderStatus,
    OrderType,
    PeriodType,
    PositionSide,
    TimeInForce,
    WorkingType,
)
from binance_futures.interfaces import (
    IAsyncRequestClient,
    IAsyncTransport,
    IRequestClient,
    ITransport,
)
from binance_futures.models import Order, OrderRequest, ResponseResult
from binance_futures.rest.async_client import AsyncRequestClient
from binance_futures.rest.sync_client import SyncRequestClient

__all__ = [
    # Clients
    "SyncRequestClient",
    "AsyncRequestClient",
    "RequestOptions",
    # Interfaces
    "IRequestClient",
    "IAsyncRequestClient",
    "ITransport",
    "IAsyncTransport",
    # Models
    "Order",
    "OrderRequest",
    "ResponseResult",
    # Enums
    "CandlestickInterval",
    "IncomeType",
    "MarginType",
    "OrderSide",
    "OrderStatus",
    "OrderType",
    "PeriodType",
    "PositionSide",
    "TimeInForce",
    "WorkingType",
    # Errors
    "BinanceClientError",
    "ValidationError",
    "TransportError",
    "BinanceApiError",
    "OrderError",
    "RateLimitError",
    "ParseError",
    "EnumLookupError",
]
