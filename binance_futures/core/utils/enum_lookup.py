"""
Enum wire code 조회 유틸리티

거래소가 사용하는 문자열 코드(wire code) → Enum 멤버 매핑.
enum 타입별로 한 번만 테이블을 만들고 이후 읽기 전용으로 사용.
"""

from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Generic, Mapping, TypeVar

from binance_futures.core.errors import EnumLookupError


E = TypeVar("E", bound=Enum)


class EnumLookup(Generic[E]):
    """wire code → Enum 멤버 조회 테이블

    Args:
        enum_type: 조회 대상 Enum 클래스 (멤버의 value가 wire code)

    Raises:
        ValueError: 두 멤버가 같은 wire code를 가진 경우 (Enum alias 포함)
    """

    def __init__(self, enum_type: type[E]):
        self.enum_type = enum_type

        table: dict[str, E] = {}
        # __members__는 alias까지 포함하므로 중복 코드 검출 가능
        for name, member in enum_type.__members__.items():
            code = str(member.value)
            if code in table:
                raise ValueError(
                    f"Duplicate wire code {code!r} in {enum_type.__name__}: "
                    f"{table[code].name}, {name}"
                )
            table[code] = member

        self._table: Mapping[str, E] = MappingProxyType(table)

    def lookup(self, code: str) -> E:
        """wire code로 멤버 조회 (정확히 일치하는 경우만)

        Raises:
            EnumLookupError: 등록되지 않은 코드
        """
        try:
            return self._table[code]
        except (KeyError, TypeError):
            raise EnumLookupError(self.enum_type.__name__, code) from None

    @property
    def codes(self) -> tuple[str, ...]:
        """등록된 wire code 목록 (선언 순서)"""
        return tuple(self._table)

    def __contains__(self, code: object) -> bool:
        return code in self._table

    def __len__(self) -> int:
        return len(self._table)


@lru_cache(maxsize=None)
def get_enum_lookup(enum_type: type[E]) -> EnumLookup[E]:
    """enum 타입별 조회 테이블 반환 (최초 호출 시 생성, 이후 캐시)"""
    return EnumLookup(enum_type)


def lookup_enum(enum_type: type[E], code: str) -> E:
    """enum 타입과 wire code로 멤버 조회

    Args:
        enum_type: Enum 클래스
        code: wire code

    Returns:
        일치하는 Enum 멤버

    Raises:
        EnumLookupError: 알 수 없는 코드
    """
    return get_enum_lookup(enum_type).lookup(code)


class WireEnum(str, Enum):
    """거래소 wire code를 value로 갖는 Enum 베이스

    str을 상속하여 문자열 직렬화 가능, str(member)는 wire code.
    """

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def lookup(cls, code: str) -> "WireEnum":
        """wire code → 멤버 (알 수 없는 코드는 EnumLookupError)"""
        return lookup_enum(cls, code)
