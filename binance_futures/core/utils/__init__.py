"""
유틸리티 패키지

enum wire code 조회, JSON 응답 래퍼
"""

from binance_futures.core.utils.enum_lookup import EnumLookup, WireEnum, lookup_enum
from binance_futures.core.utils.json_wrapper import JsonWrapper

__all__ = [
    "EnumLookup",
    "WireEnum",
    "lookup_enum",
    "JsonWrapper",
]
