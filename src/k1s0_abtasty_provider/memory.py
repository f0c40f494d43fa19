"""InMemoryFlagshipClient 実装"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .backend import FetchStatus, SdkStatus
from .context import Primitive


def _matches_type(value: Any, default_value: Any) -> bool:
    if default_value is None:
        return True
    if isinstance(default_value, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default_value, bool)
    if isinstance(default_value, (int, float)):
        return isinstance(value, (int, float))
    if isinstance(default_value, Mapping):
        return isinstance(value, Mapping)
    return isinstance(value, type(default_value))


@dataclass
class InMemoryFlag:
    """テスト用フラグ定義。

    targeting が空でなければ、訪問者コンテキストが全キーで一致した場合のみ割り当てられる。
    """

    key: str
    value: Any
    metadata: dict[str, Any] | None = field(default_factory=dict)
    targeting: dict[str, Primitive] = field(default_factory=dict)

    def applies_to(self, context: Mapping[str, Primitive]) -> bool:
        return all(context.get(k) == v for k, v in self.targeting.items())

    def get_value(self, default_value: Any) -> Any:
        """型が一致しない場合や値が None の場合はデフォルト値を返す。"""
        if self.value is None or not _matches_type(self.value, default_value):
            return default_value
        return self.value


class InMemoryVisitor:
    """テスト用インメモリ訪問者。"""

    def __init__(
        self,
        client: InMemoryFlagshipClient,
        visitor_id: str,
        context: Mapping[str, Primitive],
        has_consented: bool = True,
        is_authenticated: bool = False,
    ) -> None:
        self._client = client
        self._visitor_id = visitor_id
        self._has_consented = has_consented
        self.is_authenticated = is_authenticated
        self.context: dict[str, Primitive] = dict(context)
        self._fetch_status = FetchStatus.FETCH_REQUIRED
        self._flags: dict[str, InMemoryFlag] = {}
        self.fetch_count = 0
        self.update_context_calls: list[dict[str, Primitive]] = []
        self.set_consent_calls: list[bool] = []

    @property
    def visitor_id(self) -> str:
        return self._visitor_id

    @property
    def has_consented(self) -> bool:
        return self._has_consented

    @property
    def fetch_status(self) -> FetchStatus:
        return self._fetch_status

    async def fetch_flags(self) -> None:
        """クライアントに登録されたフラグから、現在のコンテキストに合うものを取り込む。"""
        self._fetch_status = FetchStatus.FETCHING
        self.fetch_count += 1
        self._flags = {
            flag.key: flag
            for flag in self._client.flags.values()
            if flag.applies_to(self.context)
        }
        self._fetch_status = FetchStatus.FETCHED

    def update_context(self, context: Mapping[str, Primitive]) -> None:
        self.update_context_calls.append(dict(context))
        merged = {**self.context, **context}
        if merged != self.context:
            self._fetch_status = FetchStatus.FETCH_REQUIRED
        self.context = merged

    def set_consent(self, has_consented: bool) -> None:
        self.set_consent_calls.append(has_consented)
        self._has_consented = has_consented

    def get_flag(self, key: str) -> InMemoryFlag | None:
        return self._flags.get(key)


class InMemoryFlagshipClient:
    """テスト用インメモリ Flagship クライアント。"""

    def __init__(self) -> None:
        self.flags: dict[str, InMemoryFlag] = {}
        self.visitors: list[InMemoryVisitor] = []
        self.start_calls: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False
        self._status = SdkStatus.NOT_INITIALIZED

    def set_flag(self, flag: InMemoryFlag) -> None:
        """フラグを設定する。取得済みの訪問者には次回 fetch_flags で反映される。"""
        self.flags[flag.key] = flag

    async def start(self, env_id: str, api_key: str, options: dict[str, Any]) -> None:
        self._status = SdkStatus.INITIALIZING
        self.start_calls.append((env_id, api_key, dict(options)))
        if not env_id or not api_key:
            self._status = SdkStatus.FAILED
            raise ValueError("env_id と api_key は必須です")
        self._status = SdkStatus.READY

    def get_status(self) -> SdkStatus:
        return self._status

    def new_visitor(
        self,
        *,
        context: Mapping[str, Primitive],
        visitor_id: str | None = None,
        has_consented: bool | None = None,
        is_authenticated: bool | None = None,
    ) -> InMemoryVisitor:
        visitor = InMemoryVisitor(
            self,
            visitor_id=visitor_id or uuid.uuid4().hex,
            context=context,
            has_consented=True if has_consented is None else has_consented,
            is_authenticated=bool(is_authenticated),
        )
        self.visitors.append(visitor)
        return visitor

    async def close(self) -> None:
        self.closed = True
