"""
Binance Futures REST 패키지

동기/비동기 클라이언트, 요청 생성/서명, 응답 파서, httpx 전송 계층.
"""

from binance_futures.rest.async_client import AsyncRequestClient
from binance_futures.rest.rate_limiter import RateLimitTracker
from binance_futures.rest.request_builder import RequestBuilder, RestApiRequest, SecurityType
from binance_futures.rest.request_impl import RestApiRequestImpl
from binance_futures.rest.sync_client import SyncRequestClient
from binance_futures.rest.transport import AsyncHttpxTransport, HttpxTransport, TransportResponse

__all__ = [
    "SyncRequestClient",
    "AsyncRequestClient",
    "RestApiRequestImpl",
    "RequestBuilder",
    "RestApiRequest",
    "SecurityType",
    "RateLimitTracker",
    "HttpxTransport",
    "AsyncHttpxTransport",
    "TransportResponse",
]
