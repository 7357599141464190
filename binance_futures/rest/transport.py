"""
HTTP 전송 계층 (httpx)

ITransport / IAsyncTransport 구현.
query string은 서명된 그대로 URL에 붙여 전송 (재인코딩 없음).
httpx 예외는 TransportError로 변환.
"""

import logging
from dataclasses import dataclass, field

import httpx

from binance_futures.core.constants import Defaults
from binance_futures.core.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """전송 결과

    Attributes:
        status_code: HTTP 상태 코드
        body: 응답 본문 (bytes)
        headers: 응답 헤더
        reason: HTTP reason phrase
    """

    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)
    reason: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def _build_url(path: str, query_string: str) -> str:
    return f"{path}?{query_string}" if query_string else path


def _to_response(response: httpx.Response) -> TransportResponse:
    return TransportResponse(
        status_code=response.status_code,
        body=response.content,
        headers=dict(response.headers),
        reason=response.reason_phrase,
    )


def _transport_error(method: str, path: str, error: httpx.HTTPError) -> TransportError:
    if isinstance(error, httpx.TimeoutException):
        logger.warning("Request timeout", extra={"method": method, "path": path})
        return TransportError(f"Request timeout: {method} {path}")

    logger.error(
        "Request error",
        extra={"method": method, "path": path, "error": str(error)},
    )
    return TransportError(f"Request failed: {method} {path}: {error}")


class HttpxTransport:
    """동기 httpx 전송

    Args:
        base_url: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        user_agent: User-Agent 헤더
        client: 외부에서 주입한 httpx.Client (주입 시 close하지 않음)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = Defaults.TIMEOUT_SEC,
        user_agent: str = Defaults.USER_AGENT,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )

    def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        query_string: str,
    ) -> TransportResponse:
        """요청 전송 (블로킹)

        Raises:
            TransportError: 연결 실패, 타임아웃 등
        """
        try:
            response = self._client.request(
                method,
                _build_url(path, query_string),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise _transport_error(method, path, e) from e

        return _to_response(response)

    def close(self) -> None:
        """HTTP 클라이언트 종료 (직접 생성한 경우만)"""
        if self._owns_client and not self._client.is_closed:
            self._client.close()


class AsyncHttpxTransport:
    """비동기 httpx 전송

    Args:
        base_url: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        user_agent: User-Agent 헤더
        client: 외부에서 주입한 httpx.AsyncClient (주입 시 close하지 않음)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = Defaults.TIMEOUT_SEC,
        user_agent: str = Defaults.USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )

    async def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        query_string: str,
    ) -> TransportResponse:
        """요청 전송

        Raises:
            TransportError: 연결 실패, 타임아웃 등
        """
        try:
            response = await self._client.request(
                method,
                _build_url(path, query_string),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise _transport_error(method, path, e) from e

        return _to_response(response)

    async def close(self) -> None:
        """HTTP 클라이언트 종료 (직접 생성한 경우만)"""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()
