"""Flagship SDK のログをホストロガーへ中継するアダプタ"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .backend import LogLevel

_RESET = "\x1b[0m"

_COLOR_CODES: dict[LogLevel, str] = {
    LogLevel.EMERGENCY: "\x1b[1;37;41m",
    LogLevel.ALERT: "\x1b[1;37;45m",
    LogLevel.CRITICAL: "\x1b[1;37;41m",
    LogLevel.ERROR: "\x1b[1;37;41m",
    LogLevel.WARNING: "\x1b[33;1m",
    LogLevel.NOTICE: "\x1b[36;1m",
    LogLevel.INFO: "\x1b[32;1m",
    LogLevel.DEBUG: "\x1b[90;1m",
    LogLevel.NONE: "",
    LogLevel.ALL: "\x1b[90;1m",
}


class HostLogger(Protocol):
    """中継先ロガー。structlog の BoundLogger / logging.Logger のどちらでもよい。"""

    def error(self, event: str) -> object: ...

    def warning(self, event: str) -> object: ...

    def info(self, event: str) -> object: ...

    def debug(self, event: str) -> object: ...


class AdapterLogger:
    """Flagship SDK の log manager インターフェースを実装する。

    10 段階の SDK ログレベルをホストロガーの 4 メソッドへ振り分ける。
    """

    def __init__(
        self,
        logger: HostLogger,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._logger = logger
        self._clock = clock

    def format_log_output(self, level: LogLevel, message: str, tag: str) -> str:
        """``[YYYY-MM-DD HH:MM:SS.mmm] [Flagship SDK] [LEVEL] [tag] message`` 形式に整形する。"""
        now = self._clock()
        timestamp = f"{now:%Y-%m-%d %H:%M:%S}.{now.microsecond // 1000:03d}"
        color = _COLOR_CODES.get(level, "")
        level_name = LogLevel(level).name.ljust(2)
        return f"{color}[{timestamp}] [Flagship SDK] [{level_name}] [{tag}] {message}{_RESET}"

    def emergency(self, message: str, tag: str) -> None:
        self._logger.error(self.format_log_output(LogLevel.EMERGENCY, message, tag))

    def alert(self, message: str, tag: str) -> None:
        self._logger.error(self.format_log_output(LogLevel.ALERT, message, tag))

    def critical(self, message: str, tag: str) -> None:
        self._logger.error(self.format_log_output(LogLevel.CRITICAL, message, tag))

    def error(self, message: str, tag: str) -> None:
        self._logger.error(self.format_log_output(LogLevel.ERROR, message, tag))

    def warning(self, message: str, tag: str) -> None:
        self._logger.warning(self.format_log_output(LogLevel.WARNING, message, tag))

    def notice(self, message: str, tag: str) -> None:
        self._logger.warning(self.format_log_output(LogLevel.NOTICE, message, tag))

    def info(self, message: str, tag: str) -> None:
        self._logger.info(self.format_log_output(LogLevel.INFO, message, tag))

    def debug(self, message: str, tag: str) -> None:
        self._logger.debug(self.format_log_output(LogLevel.DEBUG, message, tag))

    def log(self, level: LogLevel, message: str, tag: str) -> None:
        self._logger.debug(self.format_log_output(level, message, tag))
