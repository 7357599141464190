"""
요청 파라미터 빌더 / 서명

- 파라미터는 호출자가 넣은 순서 그대로 유지 (정렬하지 않음)
- 서명: canonical query string 전체에 대한 HMAC-SHA256, 16진수
- signature 파라미터는 항상 마지막에 추가
"""

import hashlib
import hmac
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Generic, TypeVar
from urllib.parse import urlencode

from binance_futures.core.constants import ApiHeaders
from binance_futures.core.errors import ValidationError
from binance_futures.core.utils.json_wrapper import JsonWrapper


T = TypeVar("T")


class SecurityType(str, Enum):
    """엔드포인트 보안 유형

    - NONE: 공개 시장 데이터 (헤더/서명 없음)
    - API_KEY: X-MBX-APIKEY 헤더만 필요 (listenKey, historicalTrades)
    - SIGNED: 헤더 + timestamp + signature 필요 (계좌/주문)
    """

    NONE = "NONE"
    API_KEY = "API_KEY"
    SIGNED = "SIGNED"


def generate_signature(secret_key: str, payload: str) -> str:
    """HMAC-SHA256 서명 생성

    Args:
        secret_key: API 시크릿
        payload: canonical query string

    Returns:
        16진수 서명 문자열
    """
    return hmac.new(
        secret_key.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def _to_param(value: Any) -> str:
    """파라미터 값 → wire 문자열"""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        # 지수 표기 방지 (1E+1 → 10)
        return format(value, "f")
    return str(value)


@dataclass(frozen=True)
class SignedQuery:
    """서명된 query string

    Attributes:
        canonical: 서명 대상 문자열 (timestamp 포함)
        signature: 16진수 HMAC-SHA256
    """

    canonical: str
    signature: str

    @property
    def query_string(self) -> str:
        """signature가 마지막에 붙은 전체 query string"""
        if not self.canonical:
            return f"signature={self.signature}"
        return f"{self.canonical}&signature={self.signature}"


class RequestBuilder:
    """요청 파라미터 빌더

    사용 예:
        builder = (
            RequestBuilder()
            .require("symbol", "BTCUSDT")
            .put_to_url("limit", 100)
        )
        builder.build_query_string()  # "symbol=BTCUSDT&limit=100"
    """

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def put_to_url(self, name: str, value: Any) -> "RequestBuilder":
        """파라미터 추가 (None은 무시)"""
        if value is not None:
            self._params[name] = _to_param(value)
        return self

    def require(self, name: str, value: Any) -> "RequestBuilder":
        """필수 파라미터 추가

        Raises:
            ValidationError: None 또는 빈 문자열
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required")
        return self.put_to_url(name, value)

    @property
    def params(self) -> dict[str, str]:
        """파라미터 사본 (삽입 순서 유지)"""
        return dict(self._params)

    def build_query_string(self) -> str:
        """canonical query string (삽입 순서, 정렬 없음)"""
        return urlencode(self._params)

    def sign(
        self,
        secret_key: str,
        timestamp: int,
        recv_window: int | None = None,
    ) -> SignedQuery:
        """timestamp(/recvWindow) 추가 후 서명

        빌더 자체는 변경하지 않음. timestamp가 같으면 결과도 같음.

        Raises:
            ValidationError: secret_key가 비어 있는 경우
        """
        if not secret_key:
            raise ValidationError("secret key is required for signed requests")

        params = dict(self._params)
        params["timestamp"] = str(timestamp)
        if recv_window is not None:
            params["recvWindow"] = str(recv_window)

        canonical = urlencode(params)
        return SignedQuery(
            canonical=canonical,
            signature=generate_signature(secret_key, canonical),
        )

    def __repr__(self) -> str:
        return f"RequestBuilder({self._params!r})"


@dataclass(frozen=True)
class PreparedRequest:
    """전송 직전 요청 (transport 입력)"""

    method: str
    path: str
    query_string: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RestApiRequest(Generic[T]):
    """엔드포인트 호출 하나에 대한 요청 정의

    Attributes:
        method: HTTP 메서드
        path: API 경로 (예: /fapi/v1/order)
        builder: 파라미터 빌더
        parser: 응답 파서 (JsonWrapper → 도메인 객체). None이면 본문을 읽지 않고 None 반환
        security: 보안 유형
        is_order: 주문 생성/취소 요청 여부 (실패 시 OrderError)
    """

    method: str
    path: str
    builder: RequestBuilder
    parser: Callable[[JsonWrapper], T] | None
    security: SecurityType = SecurityType.NONE
    is_order: bool = False

    @property
    def signed(self) -> bool:
        return self.security == SecurityType.SIGNED

    def prepare(
        self,
        api_key: str,
        secret_key: str,
        timestamp: int | None = None,
        recv_window: int | None = None,
    ) -> PreparedRequest:
        """헤더/서명을 붙여 PreparedRequest 생성

        Raises:
            ValidationError: 인증이 필요한데 키가 없는 경우
        """
        headers: dict[str, str] = {}

        if self.security != SecurityType.NONE:
            if not api_key:
                raise ValidationError(f"API key is required for {self.path}")
            headers[ApiHeaders.API_KEY] = api_key

        if self.signed:
            if timestamp is None:
                raise ValidationError(f"timestamp is required for signed request {self.path}")
            query_string = self.builder.sign(secret_key, timestamp, recv_window).query_string
        else:
            query_string = self.builder.build_query_string()

        return PreparedRequest(
            method=self.method,
            path=self.path,
            query_string=query_string,
            headers=headers,
        )
