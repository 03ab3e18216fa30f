"""
どこで: `scribble.api` 入口（高レベル公開 API）。
何を: ウィンドウ実行 `run_scribble` とヘッドレスプレビュー関数を再輸出。
なぜ: 利用者が単一名前空間から設定→実行→保存まで完結できるようにするため。

Usage:
    from scribble.api import run_scribble
    from scribble import AnimationParams, GenerationMode

    run_scribble(AnimationParams(mode=GenerationMode.MIXED), width=1024, height=768)
"""

from .headless import render_preview, run_headless, save_preview_png
from .runner import run_scribble
from .runner import run_scribble as run

__all__ = [
    "run_scribble",
    "run",
    "render_preview",
    "save_preview_png",
    "run_headless",
]
