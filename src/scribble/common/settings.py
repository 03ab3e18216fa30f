"""
どこで: `scribble.common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

環境変数:
- `SCRIBBLE_LOG_LEVEL`: ロギングレベル（既定 "INFO"）。
- `SCRIBBLE_DEBUG_PATH`: パス成長/パージのデバッグログを有効化（既定 0）。
- `SCRIBBLE_MAX_STALLED_SEGMENTS`: 1 フレーム内で全長が伸びない生成の連続許容回数（既定 1000）。
- `SCRIBBLE_INITIAL_CAPACITY`: PathStore の初期バッファ点数（既定 1024）。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Logging
    LOG_LEVEL: str = "INFO"
    DEBUG_PATH: bool = False

    # Path engine
    MAX_STALLED_SEGMENTS: int = 1000
    INITIAL_CAPACITY: int = 1024


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 下限を持つ整数は `env_int(min_value=...)` で丸める。
    """
    _settings.LOG_LEVEL = env_str("SCRIBBLE_LOG_LEVEL", "INFO").upper()
    _settings.DEBUG_PATH = env_bool("SCRIBBLE_DEBUG_PATH", False)
    _settings.MAX_STALLED_SEGMENTS = (
        env_int("SCRIBBLE_MAX_STALLED_SEGMENTS", 1000, min_value=1) or 1000
    )
    _settings.INITIAL_CAPACITY = env_int("SCRIBBLE_INITIAL_CAPACITY", 1024, min_value=2) or 1024


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
