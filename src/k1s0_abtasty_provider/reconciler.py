"""訪問者セッションの照合 (作成・パッチ・同意・再取得)"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

import structlog

from .adapter_logger import AdapterLogger
from .backend import FetchStatus, FlagshipClientProtocol, SdkStatus, VisitorProtocol
from .context import EvaluationContext, to_primitive_record
from .models import ProviderStatus

# 出力はホストの logging 設定に従う。未設定なら何も出力しない。
logger = structlog.wrap_logger(logging.getLogger(__name__))

ContextLike = Union[EvaluationContext, Mapping[str, Any], None]


def as_context(context: ContextLike) -> EvaluationContext:
    """マッピング形式のコンテキストを EvaluationContext に正規化する。"""
    if isinstance(context, EvaluationContext):
        return context
    return EvaluationContext.from_mapping(context)


class VisitorReconciler:
    """現在の訪問者ハンドルを唯一保持し、コンテキスト変更ごとに作成かパッチかを決める。

    呼び出し側はコンテキスト変更を直列化する責任を持つ。
    内部ロックは持たず、並行呼び出しでは最後の書き込みが勝つ。
    """

    def __init__(
        self,
        client: FlagshipClientProtocol,
        env_id: str,
        api_key: str,
        options: dict[str, Any] | None = None,
        log_manager: AdapterLogger | None = None,
    ) -> None:
        self._client = client
        self._env_id = env_id
        self._api_key = api_key
        self._options = dict(options or {})
        self._log_manager = log_manager
        self._visitor: VisitorProtocol | None = None

    @property
    def visitor(self) -> VisitorProtocol | None:
        return self._visitor

    @property
    def status(self) -> ProviderStatus:
        """SDK のグローバル状態を 2 値に写像する。キャッシュしない。"""
        sdk_status = self._client.get_status()
        if sdk_status in (SdkStatus.NOT_INITIALIZED, SdkStatus.INITIALIZING):
            return ProviderStatus.NOT_READY
        return ProviderStatus.READY

    async def initialize(self, context: ContextLike = None) -> VisitorProtocol:
        """SDK を (未初期化なら) 起動し、新しい訪問者を作成して取得まで待つ。

        既存の訪問者は常に置き換える。
        """
        await self._start_backend()
        self._visitor = await self._create_visitor(as_context(context))
        return self._visitor

    async def reconcile(
        self, old_context: ContextLike, new_context: ContextLike
    ) -> VisitorProtocol:
        """新しいコンテキストを現在の訪問者へ反映する。

        判定は old_context ではなく、現在の訪問者の ID との比較で行う。
        1 回の呼び出しで作成される訪問者は高々 1 つ、取得も高々 1 回。
        """
        context = as_context(new_context)
        current = self._visitor

        if current is None or context.targeting_key != current.visitor_id:
            logger.debug(
                "visitor identity changed",
                previous_visitor_id=None if current is None else current.visitor_id,
                visitor_id=context.targeting_key,
            )
            self._visitor = await self._create_visitor(context)
            return self._visitor

        has_consented = context.has_consented
        if has_consented is not None and has_consented != current.has_consented:
            logger.debug(
                "visitor consent changed",
                visitor_id=current.visitor_id,
                has_consented=has_consented,
            )
            current.set_consent(has_consented)

        current.update_context(to_primitive_record(context.attributes))

        if current.fetch_status == FetchStatus.FETCH_REQUIRED:
            logger.debug("refetching flags", visitor_id=current.visitor_id)
            await current.fetch_flags()
        return current

    async def shutdown(self) -> None:
        """SDK のグローバルリソースを解放する。訪問者ハンドルには触れない。"""
        await self._client.close()

    async def _start_backend(self) -> None:
        if self._client.get_status() != SdkStatus.NOT_INITIALIZED:
            return
        options = {
            **self._options,
            "fetch_now": False,
            "log_manager": self._log_manager,
        }
        logger.debug("starting flagship sdk", env_id=self._env_id)
        await self._client.start(self._env_id, self._api_key, options)

    async def _create_visitor(self, context: EvaluationContext) -> VisitorProtocol:
        kwargs: dict[str, Any] = {}
        if context.visitor_info is not None:
            if context.visitor_info.has_consented is not None:
                kwargs["has_consented"] = context.visitor_info.has_consented
            if context.visitor_info.is_authenticated is not None:
                kwargs["is_authenticated"] = context.visitor_info.is_authenticated
        if context.targeting_key is not None:
            kwargs["visitor_id"] = context.targeting_key

        visitor = self._client.new_visitor(
            context=to_primitive_record(context.attributes), **kwargs
        )
        await visitor.fetch_flags()
        logger.debug(
            "visitor created",
            visitor_id=visitor.visitor_id,
            fetch_status=visitor.fetch_status,
        )
        return visitor
