"""
どこで: `scribble.engine.export.image`。
何を: 現在の描画ウィンドウ内容を PNG として保存するラッパ。
なぜ: ワンアクションでスクリーンショットを得られるようにするため。

保存されるのはウィンドウのカラーバッファそのもの（ピクセル化後の見た目）。
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pyglet

from scribble.util.paths import ensure_screenshots_dir, unique_path

logger = logging.getLogger(__name__)


def default_png_path(width: int, height: int, *, prefix: str = "scribble") -> Path:
    """`data/screenshot/<prefix>_<timestamp>_<w>x<h>.png`（衝突時は連番付き）を返す。"""
    out_dir = ensure_screenshots_dir()
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return unique_path(out_dir / f"{prefix}_{ts}_{int(width)}x{int(height)}.png")


def save_png(window: "pyglet.window.Window", path: Path | None = None) -> Path:
    """現在のウィンドウ内容を PNG として保存する。

    Parameters
    ----------
    window : pyglet.window.Window
        対象ウィンドウ。
    path : Path | None
        出力先パス。None の場合は既定の `data/screenshot/` にタイムスタンプ名で保存。

    Returns
    -------
    Path
        保存先のファイルパス。

    Raises
    ------
    RuntimeError
        カラーバッファの取得/保存に失敗した場合（ヘッドレス環境など）。
    """
    if path is None:
        path = default_png_path(window.width, window.height)
    else:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

    try:
        buffer = pyglet.image.get_buffer_manager().get_color_buffer()
        buffer.save(str(path))
    except Exception as e:  # pyglet が未初期化/ヘッドレスなど
        raise RuntimeError(f"failed to save PNG: {e}") from e
    logger.info("saved PNG: %s", path)
    return path


__all__ = ["save_png", "default_png_path"]
