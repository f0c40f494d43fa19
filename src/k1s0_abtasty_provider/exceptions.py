"""abtasty provider ライブラリの例外型定義"""

from __future__ import annotations


class ProviderError(Exception):
    """abtasty provider ライブラリのエラー基底クラス。

    バックエンド (Flagship SDK) 由来の例外はラップせずにそのまま伝播する。
    本クラスは設定読み込みなど、このライブラリ自身が検出するエラーにのみ使う。
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ProviderErrorCodes:
    """ProviderError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
