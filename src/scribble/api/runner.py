"""
どこで: `scribble.api.runner`（実行ランナー）。
何を: `ScribbleAnimator` を固定 FPS で駆動し、pyglet ウィンドウ + ModernGL のピクセル化レンダラで表示する。
なぜ: 少ない記述でスクリーンセーバ相当のアニメーションを起動できるようにするため。

実行フロー（概要）:
1) パラメータ解決: `params is None` なら `AnimationParams.from_config()`（`scribble:` セクション）。
   FPS は「明示 > `runner.fps` > `params.fps`」で決め、回転量の計算にも同じ値を使う。
2) 検証: `AnimationParams.validate()` で誤設定を `ValueError` として拒否する。
3) アニメータ生成と `reset(w, h)`。`init_only=True` ならここで返す（pyglet を読み込まない）。
4) ウィンドウ/GL: `RenderWindow` + ModernGL + `PixelatedLineRenderer` を生成。
5) フレーム駆動: `FrameClock([animator, renderer])` を `pyglet.clock.schedule_interval` で呼ぶ。
   アニメータの更新 → レンダラへの転送の順序は固定。

キー操作:
- `ESC`: 終了
- `R`: 現在のウィンドウサイズで作り直し（reset）
- `P`: PNG 保存（`data/screenshot/`）
- `SPACE`: 一時停止/再開

ウィンドウのリサイズでも境界球を計算し直して reset する。
"""

from __future__ import annotations

import logging
from typing import Any

from scribble.common.logging import setup_default_logging
from scribble.engine.core.params import AnimationParams
from scribble.engine.runtime.animator import ScribbleAnimator

from .runner_utils import resolve_colors, resolve_fps, resolve_window_size

logger = logging.getLogger(__name__)


def run_scribble(
    params: AnimationParams | None = None,
    *,
    width: int | None = None,
    height: int | None = None,
    fullscreen: bool = False,
    fps: int | None = None,
    background: Any = None,
    line_color: Any = None,
    seed: int | None = None,
    init_only: bool = False,
) -> ScribbleAnimator:
    """スクリブルアニメーションをウィンドウで実行する。

    Parameters
    ----------
    params : AnimationParams | None
        アニメーション設定。None で設定ファイル（`scribble:`）から構築。
    width, height : int | None
        ウィンドウサイズ [px]。None で `runner.width/height`、なければ 800x600。
    fullscreen : bool, default False
        全画面表示。サイズは実際のスクリーンに従い、reset もその寸法で行う。
    fps : int | None
        フレームレート。None で `runner.fps`、なければ `params.fps`。
    background, line_color : str | tuple | None
        色（RGBA 0–1 / 0–255 または `#RRGGBB[AA]`）。None で `canvas:` 設定、なければ黒/白。
    seed : int | None
        乱数シード。None で非決定的。
    init_only : bool, default False
        True でウィンドウを作らず、reset 済みのアニメータを返して終了する。

    Returns
    -------
    ScribbleAnimator
        駆動したアニメータ（`init_only` 時は reset 直後の状態）。
    """
    setup_default_logging()

    base = params if params is not None else AnimationParams.from_config()
    fps_value = resolve_fps(fps, default=base.fps)
    p = base.with_overrides(fps=fps_value).validate()

    window_width, window_height = resolve_window_size(width, height)
    bg_rgba, line_rgba = resolve_colors(background, line_color)

    animator = ScribbleAnimator(p, seed=seed)
    animator.reset(window_width, window_height)
    logger.info(
        "scribble: mode=%s size=%dx%d fps=%d seed=%s",
        p.mode.name.lower(),
        window_width,
        window_height,
        fps_value,
        seed,
    )

    if init_only:
        return animator

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from scribble.engine.core.frame_clock import FrameClock
    from scribble.engine.export.image import save_png

    from .runner_utils import create_window_and_renderer

    rendering_window, _mgl_ctx, line_renderer = create_window_and_renderer(
        window_width,
        window_height,
        animator,
        fullscreen=fullscreen,
        background=bg_rgba,
        line_color=line_rgba,
    )
    if fullscreen:
        animator.reset(rendering_window.width, rendering_window.height)

    rendering_window.add_draw_callback(line_renderer.draw)

    def _on_resize(w: int, h: int) -> None:
        if w <= 0 or h <= 0:
            # 最小化などで 0 が来ることがある
            return
        line_renderer.resize(w, h, tuple(rendering_window.get_framebuffer_size()))
        animator.reset(w, h)

    rendering_window.add_resize_callback(_on_resize)

    frame_clock = FrameClock([animator, line_renderer])
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps_value)

    def _handle_save_png() -> None:
        try:
            save_png(rendering_window)
        except RuntimeError as e:
            logger.warning("PNG save failed: %s", e)

    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            rendering_window.close()
        elif sym == key.R:
            animator.reset(rendering_window.width, rendering_window.height)
        elif sym == key.P:
            _handle_save_png()
        elif sym == key.SPACE:
            if animator.is_running:
                animator.stop()
            else:
                animator.resume()
            logger.info("animation %s", "running" if animator.is_running else "stopped")

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        pyglet.clock.unschedule(frame_clock.tick)
        animator.stop()
        line_renderer.release()
        setattr(on_close, "_closed", True)
        logger.info("closed after %d frames", frame_clock.frames)
        pyglet.app.exit()

    pyglet.app.run()
    return animator


__all__ = ["run_scribble"]
