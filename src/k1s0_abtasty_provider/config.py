"""プロバイダ設定 (pydantic BaseModel) と YAML 読み込み"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ProviderError, ProviderErrorCodes

DEFAULT_SECTION = "abtasty"

# 認証情報は設定ファイルではなく環境変数から上書きできる
ENV_OVERRIDES: dict[str, str] = {
    "ABTASTY_ENV_ID": "env_id",
    "ABTASTY_API_KEY": "api_key",
}


class DecisionMode(str, Enum):
    """Flagship SDK の判定モード。"""

    DECISION_API = "DECISION-API"
    BUCKETING = "BUCKETING"
    EDGE = "EDGE"


class FlagshipOptions(BaseModel):
    """Flagship SDK の start オプション。

    未知のキーはそのまま SDK に渡す。
    """

    model_config = ConfigDict(extra="allow")

    decision_mode: DecisionMode = DecisionMode.DECISION_API
    timeout: float = Field(default=2.0, gt=0)
    polling_interval: float = Field(default=5.0, ge=0)

    def to_start_options(self) -> dict[str, Any]:
        """明示的に設定された項目と追加キーのみを返す。未設定の項目は SDK の既定値に任せる。

        polling_interval は BUCKETING モードでのみ渡す。
        """
        options = self.model_dump(mode="json", exclude_unset=True)
        options.update(self.model_extra or {})
        if self.decision_mode is not DecisionMode.BUCKETING:
            options.pop("polling_interval", None)
        return options


class ProviderConfig(BaseModel):
    """プロバイダ設定全体。"""

    env_id: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
    flagship: FlagshipOptions = Field(default_factory=FlagshipOptions)


def load_config(
    path: Path,
    section: str = DEFAULT_SECTION,
    environ: Mapping[str, str] | None = None,
) -> ProviderConfig:
    """アプリケーション設定ファイルの section 部分から ProviderConfig を生成する。

    環境変数 ABTASTY_ENV_ID / ABTASTY_API_KEY が設定されていればファイルの値より優先する。

    Raises:
        ProviderError: 読み込み・YAML 解析・検証に失敗した場合
    """
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ProviderError(
            code=ProviderErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    except yaml.YAMLError as e:
        raise ProviderError(
            code=ProviderErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e

    raw = document.get(section) if isinstance(document, dict) else None
    data: dict[str, Any] = dict(raw) if isinstance(raw, dict) else {}
    env = os.environ if environ is None else environ
    for name, field_name in ENV_OVERRIDES.items():
        if env.get(name):
            data[field_name] = env[name]

    try:
        return ProviderConfig.model_validate(data)
    except ValidationError as e:
        raise ProviderError(
            code=ProviderErrorCodes.VALIDATION,
            message=f"Invalid '{section}' section in {path}: {e}",
            cause=e,
        ) from e
