"""FeatureProvider インターフェース"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

from .context import EvaluationContext
from .models import ProviderMetadata, ProviderStatus, ResolutionDetails

T = TypeVar("T")


class FeatureProvider(ABC):
    """評価コンテキストプロトコルに接続するプロバイダの基底クラス。

    ライフサイクルフックは何もしないデフォルト実装を持つため、
    呼び出し側はメソッドの有無を確認する必要がない。
    """

    metadata: ProviderMetadata
    runs_on: str = "client"

    @property
    def status(self) -> ProviderStatus:
        return ProviderStatus.READY

    async def initialize(self, context: EvaluationContext | None = None) -> None:
        return None

    async def on_context_change(
        self, old_context: EvaluationContext, new_context: EvaluationContext
    ) -> None:
        return None

    async def on_close(self) -> None:
        return None

    @abstractmethod
    def resolve_boolean_evaluation(
        self, flag_key: str, default_value: bool
    ) -> ResolutionDetails[bool]: ...

    @abstractmethod
    def resolve_string_evaluation(
        self, flag_key: str, default_value: str
    ) -> ResolutionDetails[str]: ...

    @abstractmethod
    def resolve_number_evaluation(
        self, flag_key: str, default_value: float
    ) -> ResolutionDetails[float]: ...

    @abstractmethod
    def resolve_object_evaluation(
        self, flag_key: str, default_value: T
    ) -> ResolutionDetails[T]: ...

