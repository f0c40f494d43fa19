"""評価コンテキストとプリミティブ属性フィルタ"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

Primitive = Union[str, int, float, bool]

TARGETING_KEY = "targetingKey"
VISITOR_INFO_KEY = "fsVisitorInfo"


@dataclass(frozen=True)
class VisitorInfo:
    """Flagship 訪問者情報 (同意状態・認証状態)。"""

    has_consented: bool | None = None
    is_authenticated: bool | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> VisitorInfo:
        """``{"hasConsented": ..., "isAuthenticated": ...}`` 形式から生成する。"""
        return cls(
            has_consented=data.get("hasConsented"),
            is_authenticated=data.get("isAuthenticated"),
        )


@dataclass
class EvaluationContext:
    """フラグ評価コンテキスト。

    targeting_key が None の場合は匿名訪問者として扱う。
    attributes には予約フィールド (targetingKey / fsVisitorInfo) を含めない。
    """

    targeting_key: str | None = None
    visitor_info: VisitorInfo | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> EvaluationContext:
        """予約フィールドを含むフラットなマッピングからコンテキストを生成する。

        例: ``{"targetingKey": "user-123", "fsVisitorInfo": {"hasConsented": True}, "age": 30}``
        """
        if not data:
            return cls()
        attributes = dict(data)
        targeting_key = attributes.pop(TARGETING_KEY, None)
        raw_info = attributes.pop(VISITOR_INFO_KEY, None)
        if isinstance(raw_info, VisitorInfo) or raw_info is None:
            visitor_info = raw_info
        else:
            visitor_info = VisitorInfo.from_mapping(raw_info)
        return cls(
            targeting_key=targeting_key,
            visitor_info=visitor_info,
            attributes=attributes,
        )

    @property
    def has_consented(self) -> bool | None:
        if self.visitor_info is None:
            return None
        return self.visitor_info.has_consented


def is_primitive(value: Any) -> bool:
    """Flagship に転送できるプリミティブ値か判定する。"""
    return isinstance(value, (str, int, float, bool))


def to_primitive_record(attributes: Mapping[str, Any]) -> dict[str, Primitive]:
    """属性バッグからプリミティブ値のみを取り出す。

    None・マッピング・シーケンス・呼び出し可能オブジェクトなどは黙って除外する。
    """
    return {key: value for key, value in attributes.items() if is_primitive(value)}
