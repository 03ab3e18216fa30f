"""
どこで: `scribble.engine.render` の低レベルメッシュ層。
何を: 折れ線 1 本ぶんの VBO/VAO の確保・更新・解放を担当し、LINE_STRIP で描画可能な LineMesh を管理。
なぜ: GPU 転送の詳細をレンダラから切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LineMesh:
    """
    GPUに折れ線の頂点データを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期GPUメモリ確保量（既定: 256KB = 32768 頂点）。必要に応じて自動拡張。
        initial_reserve: int = 256 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: `in_vert`（vec2）を受け取るシェーダープログラム
        VBO (Vertex Buffer Object): GPUに送る「頂点データ」を格納するメモリ。
        VAO (Vertex Array Object): VBO とシェーダ入力の対応付け。
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = ctx.simple_vertex_array(program, self.vbo, "in_vert")

        # 描画ステート
        self.vertex_count: int = 0

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        if vbo_size <= self.vbo.size:
            return
        self.vbo.release()
        self.vao.release()
        self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.vbo.size * 2), dynamic=True)
        # VAO は VBO が差し替わるたびに張り直す
        self.vao = self.ctx.simple_vertex_array(self.program, self.vbo, "in_vert")

    def upload(self, vertices: np.ndarray) -> None:
        """`(k, 2)` の頂点列をGPUへ送り込む"""
        data = np.ascontiguousarray(vertices, dtype="f4")
        self.vertex_count = int(data.shape[0]) if data.ndim == 2 else 0
        if self.vertex_count == 0:
            return
        self._ensure_capacity(data.nbytes)
        self.vbo.orphan()
        self.vbo.write(data.tobytes())

    def render(self, mode: int) -> None:
        if self.vertex_count >= 2:
            self.vao.render(mode, vertices=self.vertex_count)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.vao.release()
