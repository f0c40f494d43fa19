"""provider データモデル"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ProviderStatus(str, Enum):
    """外部に公開するプロバイダ状態。"""

    NOT_READY = "NOT_READY"
    READY = "READY"


@dataclass(frozen=True)
class ProviderMetadata:
    """プロバイダメタデータ。"""

    name: str


@dataclass
class ResolutionDetails(Generic[T]):
    """フラグ解決結果。

    フラグまたは訪問者が存在しない場合、flag_metadata は None。
    """

    value: T
    flag_metadata: dict[str, Any] | None = None
