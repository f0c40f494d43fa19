"""Flagship SDK クライアントプロトコル"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Any, Protocol

from .context import Primitive


class SdkStatus(str, Enum):
    """Flagship SDK のグローバル状態。"""

    NOT_INITIALIZED = "SDK_NOT_INITIALIZED"
    INITIALIZING = "SDK_INITIALIZING"
    READY = "SDK_INITIALIZED"
    FAILED = "SDK_FAILED"


class FetchStatus(str, Enum):
    """訪問者ごとのフラグ取得状態。"""

    FETCH_REQUIRED = "FETCH_REQUIRED"
    FETCHING = "FETCHING"
    FETCHED = "FETCHED"
    PANIC = "PANIC"


class LogLevel(IntEnum):
    """Flagship SDK のログレベル。"""

    NONE = 0
    EMERGENCY = 1
    ALERT = 2
    CRITICAL = 3
    ERROR = 4
    WARNING = 5
    NOTICE = 6
    INFO = 7
    DEBUG = 8
    ALL = 9


class FlagProtocol(Protocol):
    """単一フラグ。"""

    @property
    def metadata(self) -> Mapping[str, Any] | None: ...

    def get_value(self, default_value: Any) -> Any: ...


class VisitorProtocol(Protocol):
    """Flagship 訪問者 (セッションハンドル)。"""

    @property
    def visitor_id(self) -> str | None: ...

    @property
    def has_consented(self) -> bool | None: ...

    @property
    def fetch_status(self) -> FetchStatus: ...

    async def fetch_flags(self) -> None: ...

    def update_context(self, context: Mapping[str, Primitive]) -> None: ...

    def set_consent(self, has_consented: bool) -> None: ...

    def get_flag(self, key: str) -> FlagProtocol | None: ...


class FlagshipClientProtocol(Protocol):
    """Flagship SDK のグローバルクライアントプロトコル。"""

    async def start(self, env_id: str, api_key: str, options: dict[str, Any]) -> None: ...

    def get_status(self) -> SdkStatus: ...

    def new_visitor(
        self,
        *,
        context: Mapping[str, Primitive],
        visitor_id: str | None = None,
        has_consented: bool | None = None,
        is_authenticated: bool | None = None,
    ) -> VisitorProtocol: ...

    async def close(self) -> None: ...
