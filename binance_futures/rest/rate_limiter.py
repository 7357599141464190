"""
Binance Rate Limit 추적

응답 헤더에서 사용 가중치/주문 수를 읽어 클라이언트별 상태로 기록.
요청 차단, 대기, 재시도는 하지 않음 (호출자 정책).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from binance_futures.core.constants import ApiHeaders, RateLimitThresholds


def header_int(headers: Mapping[str, Any], name: str) -> int | None:
    """헤더 값을 정수로 읽기 (대소문자 무관)

    없거나 정수가 아니면 None.
    Retry-After는 HTTP-date 형식일 수도 있으므로 예외를 내지 않는다.
    """
    target = name.lower()
    for key, value in headers.items():
        if key.lower() != target:
            continue
        text = str(value).strip()
        if text.isascii() and text.isdigit():
            return int(text)
        return None
    return None


@dataclass
class RateLimitTracker:
    """클라이언트별 Rate Limit 상태

    - used_weight_1m: X-MBX-USED-WEIGHT-1m (1분간 사용된 요청 가중치)
    - order_count_1m: X-MBX-ORDER-COUNT-1m (1분간 주문 수)
    - retry_after: 마지막으로 받은 Retry-After (초)

    아직 받지 못한 값은 None.
    """

    used_weight_1m: int | None = None
    order_count_1m: int | None = None
    retry_after: int | None = None
    updated_at: datetime | None = None

    def update_from_headers(self, headers: Mapping[str, Any]) -> bool:
        """응답 헤더 반영

        헤더가 없거나 값이 잘못되었으면 기존 값 유지.

        Returns:
            이번 응답으로 가중치가 경고 임계값을 처음 넘었으면 True
        """
        was_warning = self.should_warn

        weight = header_int(headers, ApiHeaders.USED_WEIGHT_1M)
        if weight is not None:
            self.used_weight_1m = weight

        order_count = header_int(headers, ApiHeaders.ORDER_COUNT_1M)
        if order_count is not None:
            self.order_count_1m = order_count

        retry_after = header_int(headers, ApiHeaders.RETRY_AFTER)
        if retry_after is not None:
            self.retry_after = retry_after

        self.updated_at = datetime.now(timezone.utc)
        return self.should_warn and not was_warning

    @property
    def should_warn(self) -> bool:
        """경고 임계값 이상 여부"""
        return (self.used_weight_1m or 0) >= RateLimitThresholds.WEIGHT_WARN

    def to_dict(self) -> dict[str, Any]:
        """로그 extra용"""
        return {
            "used_weight_1m": self.used_weight_1m,
            "order_count_1m": self.order_count_1m,
            "retry_after": self.retry_after,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
