"""
응답 처리 (동기/비동기 공통)

TransportResponse → 도메인 객체 또는 예외.
- 2xx: JsonWrapper.parse 후 요청의 파서 적용 (파서가 없으면 본문 무시)
- 2xx라도 code < 0 인 에러 envelope이면 BinanceApiError
- 429/418: RateLimitError (Retry-After)
- 그 외 비 2xx: BinanceApiError (주문 요청이면 OrderError)
"""

import json
from typing import Any, TypeVar

from binance_futures.core.constants import ApiHeaders
from binance_futures.core.errors import BinanceApiError, OrderError, RateLimitError
from binance_futures.core.utils.json_wrapper import JsonWrapper
from binance_futures.rest.rate_limiter import header_int
from binance_futures.rest.request_builder import RestApiRequest
from binance_futures.rest.transport import TransportResponse


T = TypeVar("T")

RATE_LIMIT_STATUSES = (429, 418)
DEFAULT_RETRY_AFTER = 30


def _decode_body(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def _error_envelope(body: bytes) -> tuple[int, str] | None:
    """{"code": int, "msg": str} 형식이면 (code, msg) 반환"""
    try:
        data: Any = json.loads(body)
    except (ValueError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    code = data.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code, str(data.get("msg", ""))


def _retry_after(headers: dict[str, str]) -> int:
    """초 단위 Retry-After. 없거나 HTTP-date 형식이면 기본값"""
    seconds = header_int(headers, ApiHeaders.RETRY_AFTER)
    return DEFAULT_RETRY_AFTER if seconds is None else seconds


def raise_for_error(request: RestApiRequest[Any], response: TransportResponse) -> None:
    """에러 응답이면 예외 발생

    Raises:
        RateLimitError: 429/418
        OrderError: 주문 생성/취소 요청 실패
        BinanceApiError: 기타 에러 응답
    """
    envelope = _error_envelope(response.body)

    if response.is_success:
        # 2xx 에러 envelope (code < 0). {"code": 200, "msg": "success"}는 정상
        if envelope is None or envelope[0] >= 0:
            return
        code: int | None = envelope[0]
        message = envelope[1]
    elif envelope is not None:
        code, message = envelope
    else:
        code = None
        message = _decode_body(response.body).strip() or response.reason

    if response.status_code in RATE_LIMIT_STATUSES:
        raise RateLimitError(
            retry_after=_retry_after(response.headers),
            message=message or "Rate limit exceeded",
            code=code,
            status_code=response.status_code,
        )

    error_cls = OrderError if request.is_order else BinanceApiError
    raise error_cls(code=code, message=message, status_code=response.status_code)


def handle_response(request: RestApiRequest[T], response: TransportResponse) -> T:
    """응답 검사 후 파싱

    Raises:
        BinanceApiError: 에러 응답 (raise_for_error 참고)
        ParseError: 응답 구조가 기대와 다른 경우
    """
    raise_for_error(request, response)
    if request.parser is None:
        return None  # type: ignore[return-value]
    return request.parser(JsonWrapper.parse(response.body))
