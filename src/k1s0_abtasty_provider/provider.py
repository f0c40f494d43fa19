"""ABTastyProvider 実装"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, TypeVar

from .adapter_logger import AdapterLogger, HostLogger
from .backend import FlagshipClientProtocol, VisitorProtocol
from .config import ProviderConfig
from .events import ProviderEvent, ProviderEventEmitter
from .interfaces import FeatureProvider
from .models import ProviderMetadata, ProviderStatus, ResolutionDetails
from .reconciler import ContextLike, VisitorReconciler

T = TypeVar("T")

PROVIDER_NAME = "ABTasty"


def _collapses_to_default(value: Any) -> bool:
    """JavaScript の truthiness で偽となる値か判定する。

    None・False・0・NaN・空文字列が対象。空リスト/空辞書は偽としない。
    """
    if value is None or isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    if isinstance(value, str):
        return value == ""
    return False


def _sanitize_metadata(metadata: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if metadata is None:
        return None
    sanitized = dict(metadata)
    if sanitized.get("slug") is None:
        sanitized["slug"] = ""
    return sanitized


class ABTastyProvider(FeatureProvider):
    """Flagship SDK と連携するフィーチャーフラグプロバイダ。"""

    runs_on = "client"

    def __init__(
        self,
        client: FlagshipClientProtocol,
        env_id: str,
        api_key: str,
        config: Mapping[str, Any] | None = None,
        logger: HostLogger | None = None,
    ) -> None:
        self.metadata = ProviderMetadata(name=PROVIDER_NAME)
        self.events = ProviderEventEmitter(PROVIDER_NAME)
        self._reconciler = VisitorReconciler(
            client,
            env_id=env_id,
            api_key=api_key,
            options=dict(config or {}),
            log_manager=AdapterLogger(logger) if logger is not None else None,
        )

    @classmethod
    def from_config(
        cls,
        client: FlagshipClientProtocol,
        config: ProviderConfig,
        logger: HostLogger | None = None,
    ) -> ABTastyProvider:
        """ProviderConfig からプロバイダを生成する。

        logger を省略した場合は SDK のログ中継を設定しない。
        """
        return cls(
            client,
            env_id=config.env_id,
            api_key=config.api_key,
            config=config.flagship.to_start_options(),
            logger=logger,
        )

    @property
    def status(self) -> ProviderStatus:
        return self._reconciler.status

    @property
    def visitor(self) -> VisitorProtocol | None:
        return self._reconciler.visitor

    async def initialize(self, context: ContextLike = None) -> None:
        """SDK を起動し最初の訪問者を取得済みにしてから READY を発行する。

        失敗した場合は ERROR を発行し、例外をそのまま送出する。
        """
        try:
            await self._reconciler.initialize(context)
        except Exception as e:
            await self.events.emit(ProviderEvent.ERROR, message=str(e))
            raise
        await self.events.emit(ProviderEvent.READY)

    async def on_context_change(
        self, old_context: ContextLike, new_context: ContextLike
    ) -> None:
        await self._reconciler.reconcile(old_context, new_context)

    async def on_close(self) -> None:
        await self._reconciler.shutdown()

    def _resolve_evaluation(self, flag_key: str, default_value: T) -> ResolutionDetails[T]:
        visitor = self._reconciler.visitor
        flag = visitor.get_flag(flag_key) if visitor is not None else None
        if flag is None:
            return ResolutionDetails(value=default_value)

        value = flag.get_value(default_value)
        # value || default: 偽と評価される値はデフォルト値に置き換える
        if _collapses_to_default(value):
            value = default_value
        return ResolutionDetails(
            value=value,
            flag_metadata=_sanitize_metadata(flag.metadata),
        )

    def resolve_boolean_evaluation(
        self, flag_key: str, default_value: bool
    ) -> ResolutionDetails[bool]:
        return self._resolve_evaluation(flag_key, default_value)

    def resolve_string_evaluation(
        self, flag_key: str, default_value: str
    ) -> ResolutionDetails[str]:
        return self._resolve_evaluation(flag_key, default_value)

    def resolve_number_evaluation(
        self, flag_key: str, default_value: float
    ) -> ResolutionDetails[float]:
        return self._resolve_evaluation(flag_key, default_value)

    def resolve_object_evaluation(
        self, flag_key: str, default_value: T
    ) -> ResolutionDetails[T]:
        return self._resolve_evaluation(flag_key, default_value)
