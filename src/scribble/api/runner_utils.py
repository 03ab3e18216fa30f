"""
どこで: `scribble.api.runner_utils`（純粋関数/小ヘルパ）。
何を: FPS/ウィンドウサイズ/色の解決と、RenderWindow・ModernGL・ピクセル化レンダラの初期化を提供。
なぜ: `scribble.api.runner` を薄く保ち、設定解決部分を GUI なしでテストできるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from scribble.common.types import RGBA
from scribble.util.color import normalize_color
from scribble.util.utils import config_section

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_BACKGROUND: RGBA = (0.0, 0.0, 0.0, 1.0)
DEFAULT_LINE_COLOR: RGBA = (1.0, 1.0, 1.0, 1.0)


def resolve_fps(
    requested_fps: int | None,
    *,
    default: int = DEFAULT_FPS,
    cfg: Mapping[str, Any] | None = None,
) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    - それ以外は設定ファイルの `runner.fps` を読み、失敗時は既定値。
    """
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError):
            return max(1, int(default))
    runner = config_section("runner", dict(cfg) if cfg is not None else None)
    try:
        return max(1, int(runner.get("fps", default)))
    except (TypeError, ValueError):
        logger.debug("invalid runner.fps in config: %r", runner.get("fps"))
        return max(1, int(default))


def resolve_window_size(
    width: int | None,
    height: int | None,
    *,
    cfg: Mapping[str, Any] | None = None,
) -> tuple[int, int]:
    """ウィンドウサイズ `(w, h)` を解決する（明示 > `runner.width/height` > 800x600）。

    明示値が 0 以下なら `ValueError`。
    """
    runner = config_section("runner", dict(cfg) if cfg is not None else None)
    w = width if width is not None else runner.get("width", DEFAULT_WIDTH)
    h = height if height is not None else runner.get("height", DEFAULT_HEIGHT)
    try:
        w_i, h_i = int(w), int(h)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid window size: {(w, h)!r}") from e
    if w_i <= 0 or h_i <= 0:
        raise ValueError(f"window size must be positive, got: {(w_i, h_i)}")
    return w_i, h_i


def resolve_colors(
    background: Any,
    line_color: Any,
    *,
    cfg: Mapping[str, Any] | None = None,
) -> tuple[RGBA, RGBA]:
    """背景色と線色を RGBA(0–1) で返す（指定 > `canvas:` 設定 > 黒背景/白線）。"""
    canvas = config_section("canvas", dict(cfg) if cfg is not None else None)
    bg_src = background if background is not None else canvas.get("background_color")
    line_src = line_color if line_color is not None else canvas.get("line_color")
    bg = normalize_color(bg_src) if bg_src is not None else DEFAULT_BACKGROUND
    line = normalize_color(line_src) if line_src is not None else DEFAULT_LINE_COLOR
    return bg, line


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    animator: Any,
    *,
    fullscreen: bool = False,
    background: RGBA = DEFAULT_BACKGROUND,
    line_color: RGBA = DEFAULT_LINE_COLOR,
):
    """ウィンドウ/ModernGL/PixelatedLineRenderer を生成して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, line_renderer)
    """
    import moderngl

    from scribble.engine.core.render_window import RenderWindow
    from scribble.engine.render.pixel_renderer import PixelatedLineRenderer

    rendering_window = RenderWindow(
        window_width, window_height, bg_color=background, fullscreen=fullscreen
    )
    mgl_ctx: moderngl.Context = moderngl.create_context()

    line_renderer = PixelatedLineRenderer(
        mgl_ctx,
        animator,
        rendering_window.width,
        rendering_window.height,
        scale_factor=animator.params.scale_factor,
        line_color=line_color,
        background=background,
        framebuffer_size=tuple(rendering_window.get_framebuffer_size()),
    )
    return rendering_window, mgl_ctx, line_renderer


__all__ = [
    "resolve_fps",
    "resolve_window_size",
    "resolve_colors",
    "create_window_and_renderer",
]
