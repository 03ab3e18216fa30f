"""
どこで: `scribble.api.headless`（GUI なしのプレビュー）。
何を: アニメータの現在フレームを Matplotlib(Agg) で低解像度に描き、numpy の最近傍拡大で
      ウィンドウと同じ見た目の RGBA 画像を作る。PNG 保存と「N フレーム進めて保存」も提供する。
なぜ: GL/ウィンドウが使えない環境（CI/サーバ）でもアニメーションの見た目を確認できるようにするため。

座標系はウィンドウ描画と同じ（原点左下, Y 上向き）。返す画像は行 0 が画面上端。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.image import imsave

from scribble.engine.core.params import AnimationParams
from scribble.engine.render.projection import pixel_buffer_size, project_points
from scribble.engine.runtime.animator import ScribbleAnimator

from .runner_utils import resolve_colors, resolve_window_size

logger = logging.getLogger(__name__)

_DPI = 100


def _upscale_nearest(img: np.ndarray, width: int, height: int) -> np.ndarray:
    """`(h0, w0, C)` 画像を最近傍で `(height, width, C)` へ拡大する。"""
    h0, w0 = img.shape[:2]
    rows = (np.arange(height) * h0) // height
    cols = (np.arange(width) * w0) // width
    return img[rows[:, None], cols[None, :]]


def render_preview(
    animator: ScribbleAnimator,
    width: int,
    height: int,
    *,
    scale_factor: float | None = None,
    background: Any = None,
    line_color: Any = None,
) -> np.ndarray:
    """現在フレームを `(height, width, 4)` の uint8 RGBA 画像として返す。

    - 低解像度バッファ寸法は `pixel_buffer_size(width, height, scale_factor)`。
    - 線はアンチエイリアスなしの 1px 幅。点が 2 未満なら背景のみ。
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"preview size must be positive, got {(width, height)}")
    s = animator.params.scale_factor if scale_factor is None else scale_factor
    pw, ph = pixel_buffer_size(width, height, s)
    bg, line = resolve_colors(background, line_color)

    fig = Figure(figsize=(pw / _DPI, ph / _DPI), dpi=_DPI)
    canvas = FigureCanvasAgg(fig)
    fig.patch.set_facecolor(bg)
    ax = fig.add_axes((0, 0, 1, 1))  # full-bleed
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.axis("off")
    ax.set_facecolor(bg)

    xy = project_points(animator.visible_points(), animator.current_rotation(), width, height)
    if xy.shape[0] >= 2:
        ax.plot(
            xy[:, 0],
            xy[:, 1],
            color=line,
            linewidth=72.0 / _DPI,  # 1px
            antialiased=False,
            solid_joinstyle="miter",
        )

    canvas.draw()
    small = np.asarray(canvas.buffer_rgba(), dtype=np.uint8)
    return _upscale_nearest(small, int(width), int(height))


def save_preview_png(
    animator: ScribbleAnimator,
    path: str | Path,
    width: int,
    height: int,
    **kwargs: Any,
) -> Path:
    """`render_preview` の結果を PNG として保存し、パスを返す。"""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    img = render_preview(animator, width, height, **kwargs)
    imsave(str(out), img)
    logger.info("saved preview: %s (%dx%d)", out, img.shape[1], img.shape[0])
    return out


def run_headless(
    params: AnimationParams | None = None,
    *,
    frames: int,
    out: str | Path,
    width: int | None = None,
    height: int | None = None,
    seed: int | None = None,
    background: Any = None,
    line_color: Any = None,
) -> Path:
    """ウィンドウを開かずに `frames` フレーム進め、最終フレームを PNG に保存する。"""
    if frames < 0:
        raise ValueError(f"frames must be >= 0, got {frames}")
    p = (params if params is not None else AnimationParams.from_config()).validate()
    w, h = resolve_window_size(width, height)
    animator = ScribbleAnimator(p, seed=seed)
    animator.reset(w, h)
    for _ in range(int(frames)):
        animator.step()
    logger.debug("headless: %r", animator)
    return save_preview_png(
        animator, out, w, h, background=background, line_color=line_color
    )


__all__ = ["render_preview", "save_preview_png", "run_headless"]
