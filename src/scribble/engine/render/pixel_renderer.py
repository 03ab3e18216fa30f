"""
どこで: `scribble.engine.render` の高レベル描画。
何を: アニメータの可視点列を Y 軸回転で 2D 投影し、低解像度のオフスクリーンテクスチャへ
      アンチエイリアスなしで線を描いてから、最近傍補間で画面全体へ拡大して貼る。
なぜ: ピクセル化された線画の見た目を GPU 上で安価に作り、毎フレームの転送/描画/リソース寿命を
      一箇所に集約するため。

描画手順（`draw()`）:
1) オフスクリーン FBO（`floor(w*s) x floor(h*s)`）をクリアし、ビューポート座標のまま LINE_STRIP を描く
   （シェーダは `viewport` で正規化するので、縮小は FBO の解像度だけで決まる）。
2) 既定フレームバッファへ戻り、FBO のテクスチャを NEAREST フィルタで全画面クアッドに貼る。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import moderngl as mgl
import numpy as np

from ..core.tickable import Tickable
from .line_mesh import LineMesh
from .projection import pixel_buffer_size, project_points
from .shader import Shader

if TYPE_CHECKING:
    from scribble.engine.runtime.animator import ScribbleAnimator

logger = logging.getLogger(__name__)

# 全画面クアッド（pos.xy, uv.xy）を TRIANGLE_STRIP で描く
_QUAD = np.array(
    [
        [-1.0, -1.0, 0.0, 0.0],
        [1.0, -1.0, 1.0, 0.0],
        [-1.0, 1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0, 1.0],
    ],
    dtype="f4",
)


class PixelatedLineRenderer(Tickable):
    """
    アニメータから可視点列を受け取り、ピクセル化して画面に描く。
    tick で CPU 側の投影と GPU 転送、draw で描画のみを行う。
    """

    def __init__(
        self,
        mgl_context: Any,
        animator: "ScribbleAnimator",
        width: int,
        height: int,
        *,
        scale_factor: float = 0.5,
        line_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
        background: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
        framebuffer_size: tuple[int, int] | None = None,
    ):
        self.ctx = mgl_context
        self.animator = animator
        self.scale_factor = float(scale_factor)
        self.background = tuple(float(c) for c in background)

        self.line_program = Shader.create_line_program(mgl_context)
        self.line_program["color"].value = tuple(float(c) for c in line_color)
        self.gpu = LineMesh(ctx=mgl_context, program=self.line_program)

        self.blit_program = Shader.create_blit_program(mgl_context)
        self._quad_vbo = mgl_context.buffer(_QUAD.tobytes())
        self._quad_vao = mgl_context.vertex_array(
            self.blit_program, [(self._quad_vbo, "2f 2f", "in_pos", "in_uv")]
        )

        self._texture: Any = None
        self._fbo: Any = None
        self.width = 0
        self.height = 0
        self.pixel_size = (1, 1)
        self.framebuffer_size = (1, 1)
        self.resize(width, height, framebuffer_size)

    # --------------------------------------------------------------------- #
    # Tickable                                                               #
    # --------------------------------------------------------------------- #
    def tick(self, dt: float) -> None:
        """
        アニメータが再描画を要求していれば、可視点列を投影して GPU へ転送。
        """
        if not self.animator.consume_redraw():
            return
        self.upload_points(self.animator.visible_points(), self.animator.current_rotation())

    # --------------------------------------------------------------------- #
    # Public drawing API                                                    #
    # --------------------------------------------------------------------- #
    def upload_points(self, points: np.ndarray, rotation: float) -> None:
        xy = project_points(points, rotation, self.width, self.height)
        self.gpu.upload(xy)

    def resize(
        self, width: int, height: int, framebuffer_size: tuple[int, int] | None = None
    ) -> None:
        """論理サイズ（とウィンドウの実フレームバッファサイズ）に合わせて FBO を作り直す。"""
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.framebuffer_size = framebuffer_size or (self.width, self.height)
        self.pixel_size = pixel_buffer_size(self.width, self.height, self.scale_factor)
        self._release_target()
        self._texture = self.ctx.texture(self.pixel_size, 4)
        self._texture.filter = (mgl.NEAREST, mgl.NEAREST)
        self._texture.repeat_x = False
        self._texture.repeat_y = False
        self._fbo = self.ctx.framebuffer(color_attachments=[self._texture])
        self.line_program["viewport"].value = (float(self.width), float(self.height))
        logger.debug(
            "render target: logical=%dx%d pixel=%dx%d framebuffer=%s",
            self.width,
            self.height,
            self.pixel_size[0],
            self.pixel_size[1],
            self.framebuffer_size,
        )

    def draw(self) -> None:
        """GPUに送ったデータをピクセル化して画面に描画"""
        self._fbo.use()
        self.ctx.viewport = (0, 0, self.pixel_size[0], self.pixel_size[1])
        self._fbo.clear(*self.background)
        self.gpu.render(mgl.LINE_STRIP)

        self.ctx.screen.use()
        fw, fh = self.framebuffer_size
        self.ctx.viewport = (0, 0, int(fw), int(fh))
        self._texture.use(location=0)
        self.blit_program["tex"].value = 0
        self._quad_vao.render(mgl.TRIANGLE_STRIP)

    def release(self) -> None:
        """GPU リソースを解放。"""
        self._release_target()
        self.gpu.release()
        self._quad_vao.release()
        self._quad_vbo.release()

    # --------------------------------------------------------------------- #
    # Internal helpers                                                      #
    # --------------------------------------------------------------------- #
    def _release_target(self) -> None:
        if self._fbo is not None:
            self._fbo.release()
            self._fbo = None
        if self._texture is not None:
            self._texture.release()
            self._texture = None


__all__ = ["PixelatedLineRenderer"]
