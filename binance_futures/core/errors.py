"""
SDK 예외 정의

모든 예외는 BinanceClientError를 상속.
- ValidationError: 네트워크 호출 전 인자 검증 실패
- TransportError: 연결 실패, 타임아웃 등 전송 계층 오류
- BinanceApiError: 거래소가 에러 응답을 반환한 경우
- ParseError: 응답 JSON 구조가 기대와 다른 경우
- EnumLookupError: 알 수 없는 wire code 수신
"""


class BinanceClientError(Exception):
    """SDK 최상위 예외"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(BinanceClientError, ValueError):
    """인자 검증 실패 (요청 전송 전)"""
    pass


class TransportError(BinanceClientError):
    """전송 계층 오류

    연결 실패, 타임아웃, 잘못된 HTTP 응답 등.
    원본 httpx 예외는 __cause__로 연결됨.
    """
    pass


class BinanceApiError(BinanceClientError):
    """Binance API 에러

    HTTP 상태가 2xx가 아니거나 응답이 에러 envelope({"code": ..., "msg": ...})인 경우.

    Attributes:
        code: 거래소 에러 코드 (envelope이 없으면 None)
        message: 에러 메시지
        status_code: HTTP 상태 코드
    """

    def __init__(self, code: int | None, message: str, status_code: int | None = None):
        self.code = code
        self.status_code = status_code
        super().__init__(f"Binance API Error [{code}] (HTTP {status_code}): {message}")
        self.message = message


class OrderError(BinanceApiError):
    """주문 관련 에러

    주문 생성/취소 실패 시 발생.
    """
    pass


class RateLimitError(BinanceApiError):
    """Rate Limit 초과 에러

    429 (또는 IP 차단 418) 응답 수신 시 발생.
    재시도는 호출자 정책이며 SDK는 재시도하지 않음.
    """

    def __init__(
        self,
        retry_after: int,
        message: str = "Rate limit exceeded",
        code: int | None = None,
        status_code: int | None = 429,
    ):
        self.retry_after = retry_after
        super().__init__(code=code, message=message, status_code=status_code)
        self.args = (f"{message}. Retry after {retry_after} seconds.",)


class ParseError(BinanceClientError):
    """응답 파싱 실패

    필드 누락 또는 타입 불일치. 거래소 거부(BinanceApiError)와 구분됨.

    Attributes:
        field: 문제가 된 필드 이름 (본문 전체 파싱 실패 시 None)
    """

    def __init__(self, message: str, field: str | int | None = None):
        self.field = field
        super().__init__(message)


class EnumLookupError(BinanceClientError, LookupError):
    """알 수 없는 enum wire code

    Attributes:
        enum_type: enum 클래스 이름
        code: 인식되지 않은 코드
    """

    def __init__(self, enum_type: str, code: object):
        self.enum_type = enum_type
        self.code = code
        super().__init__(f"Unrecognized {enum_type} code: {code!r}")
