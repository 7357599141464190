"""
JSON 응답 접근자

파싱된 JSON 노드 하나를 감싸고 타입별 추출 메서드 제공.
- 필수 접근자: 키가 없거나 타입이 다르면 ParseError
- *_or_default 접근자: 키가 없으면(또는 null) 기본값, 타입이 다르면 ParseError
- 실수는 Decimal로 디코딩 (float 변환 없음)
"""

import json
import re
from decimal import Decimal
from typing import Any, TypeVar

from binance_futures.core.errors import ParseError


T = TypeVar("T")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

# 기본값 미지정 표시용
_MISSING: Any = object()


def _kind(value: Any) -> str:
    """JSON 노드 종류 이름 (에러 메시지용)"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, Decimal, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _to_string(value: Any, field: str | int) -> str:
    if isinstance(value, str):
        return value
    raise ParseError(f"Field {field!r} expected string, got {_kind(value)}", field=field)


def _to_int(value: Any, field: str | int) -> int:
    # bool은 int의 서브클래스이므로 먼저 제외
    if isinstance(value, bool):
        raise ParseError(f"Field {field!r} expected integer, got boolean", field=field)
    if isinstance(value, int):
        return value
    # 일부 정수 필드(leverage 등)는 문자열로 전달됨
    if isinstance(value, str) and _INT_PATTERN.fullmatch(value):
        return int(value)
    raise ParseError(f"Field {field!r} expected integer, got {_kind(value)}", field=field)


def _to_decimal_string(value: Any, field: str | int) -> str:
    if isinstance(value, bool):
        raise ParseError(f"Field {field!r} expected decimal, got boolean", field=field)
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, str):
        # Decimal()은 "1_000", " 1 ", "NaN"도 받아들이므로 형식을 먼저 검사
        if not _DECIMAL_PATTERN.fullmatch(value):
            raise ParseError(f"Field {field!r} is not a decimal string: {value!r}", field=field)
        return value
    raise ParseError(f"Field {field!r} expected decimal, got {_kind(value)}", field=field)


def _to_bool(value: Any, field: str | int) -> bool:
    if isinstance(value, bool):
        return value
    # isAutoAddMargin 등은 "true"/"false" 문자열
    if value == "true":
        return True
    if value == "false":
        return False
    raise ParseError(f"Field {field!r} expected boolean, got {_kind(value)}", field=field)


class JsonWrapper:
    """JSON 노드 래퍼 (불변)

    Args:
        node: json.loads 결과 노드 (dict, list, str, int, Decimal, bool, None)
    """

    __slots__ = ("_node",)

    def __init__(self, node: Any):
        self._node = node

    @classmethod
    def parse(cls, text: str | bytes) -> "JsonWrapper":
        """JSON 텍스트 파싱

        Raises:
            ParseError: 유효한 JSON이 아닌 경우
        """
        try:
            node = json.loads(text, parse_float=Decimal)
        except (ValueError, TypeError) as e:
            raise ParseError(f"Invalid JSON response: {e}") from e
        return cls(node)

    # -------------------------------------------------------------------------
    # 노드 정보
    # -------------------------------------------------------------------------

    @property
    def is_object(self) -> bool:
        return isinstance(self._node, dict)

    @property
    def is_array(self) -> bool:
        return isinstance(self._node, list)

    def unwrap(self) -> Any:
        """원본 노드 반환"""
        return self._node

    def contains_key(self, key: str) -> bool:
        """객체 노드에 키가 있는지 확인 (null 값 포함)"""
        return isinstance(self._node, dict) and key in self._node

    def _object(self) -> dict[str, Any]:
        if not isinstance(self._node, dict):
            raise ParseError(f"Expected JSON object, got {_kind(self._node)}")
        return self._node

    def _array(self) -> list[Any]:
        if not isinstance(self._node, list):
            raise ParseError(f"Expected JSON array, got {_kind(self._node)}")
        return self._node

    def _required(self, key: str) -> Any:
        node = self._object()
        if key not in node:
            raise ParseError(f"Missing required field {key!r}", field=key)
        if node[key] is None:
            raise ParseError(f"Field {key!r} is null", field=key)
        return node[key]

    def _optional(self, key: str) -> Any:
        value = self._object().get(key)
        return _MISSING if value is None else value

    def _at(self, index: int) -> Any:
        array = self._array()
        if index < 0 or index >= len(array):
            raise ParseError(f"Missing array element [{index}]", field=index)
        return array[index]

    # -------------------------------------------------------------------------
    # 필수 접근자
    # -------------------------------------------------------------------------

    def get_string(self, key: str) -> str:
        return _to_string(self._required(key), key)

    def get_int(self, key: str) -> int:
        return _to_int(self._required(key), key)

    def get_decimal_string(self, key: str) -> str:
        """정확한 10진 문자열 반환 ("50000.00" → "50000.00")"""
        return _to_decimal_string(self._required(key), key)

    def get_decimal(self, key: str) -> Decimal:
        return Decimal(self.get_decimal_string(key))

    def get_bool(self, key: str) -> bool:
        return _to_bool(self._required(key), key)

    def get_list(self, key: str) -> list["JsonWrapper"]:
        """배열 필드 → JsonWrapper 리스트 (배열 순서 유지)"""
        value = self._required(key)
        if not isinstance(value, list):
            raise ParseError(f"Field {key!r} expected array, got {_kind(value)}", field=key)
        return [JsonWrapper(item) for item in value]

    def get_object(self, key: str) -> "JsonWrapper":
        value = self._required(key)
        if not isinstance(value, dict):
            raise ParseError(f"Field {key!r} expected object, got {_kind(value)}", field=key)
        return JsonWrapper(value)

    # -------------------------------------------------------------------------
    # 기본값 접근자
    # -------------------------------------------------------------------------

    def get_string_or_default(self, key: str, default: T) -> str | T:
        value = self._optional(key)
        return default if value is _MISSING else _to_string(value, key)

    def get_int_or_default(self, key: str, default: T) -> int | T:
        value = self._optional(key)
        return default if value is _MISSING else _to_int(value, key)

    def get_decimal_string_or_default(self, key: str, default: T) -> str | T:
        value = self._optional(key)
        return default if value is _MISSING else _to_decimal_string(value, key)

    def get_decimal_or_default(self, key: str, default: T) -> Decimal | T:
        value = self._optional(key)
        return default if value is _MISSING else Decimal(_to_decimal_string(value, key))

    def get_bool_or_default(self, key: str, default: T) -> bool | T:
        value = self._optional(key)
        return default if value is _MISSING else _to_bool(value, key)

    def get_list_or_default(self, key: str, default: T) -> list["JsonWrapper"] | T:
        if self._optional(key) is _MISSING:
            return default
        return self.get_list(key)

    def get_object_or_none(self, key: str) -> "JsonWrapper | None":
        if self._optional(key) is _MISSING:
            return None
        return self.get_object(key)

    # -------------------------------------------------------------------------
    # 배열 접근자 (캔들스틱처럼 위치 기반 행)
    # -------------------------------------------------------------------------

    def items(self) -> list["JsonWrapper"]:
        """배열 노드의 원소 목록"""
        return [JsonWrapper(item) for item in self._array()]

    def get_string_at(self, index: int) -> str:
        return _to_string(self._at(index), index)

    def get_int_at(self, index: int) -> int:
        return _to_int(self._at(index), index)

    def get_decimal_string_at(self, index: int) -> str:
        return _to_decimal_string(self._at(index), index)

    def get_decimal_at(self, index: int) -> Decimal:
        return Decimal(self.get_decimal_string_at(index))

    def get_bool_at(self, index: int) -> bool:
        return _to_bool(self._at(index), index)

    def __len__(self) -> int:
        if isinstance(self._node, (list, dict)):
            return len(self._node)
        raise TypeError(f"JSON {_kind(self._node)} has no length")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonWrapper):
            return NotImplemented
        return self._node == other._node

    def __repr__(self) -> str:
        return f"JsonWrapper({self._node!r})"
