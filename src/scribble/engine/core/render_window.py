"""
どこで: `scribble.engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA なし/背景クリア/リサイズ通知）と描画コールバック登録を提供。
なぜ: レンダラ/アニメータから GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(800, 600, bg_color=(0, 0, 0, 1))

    def draw_scene():
        renderer.draw()

    win.add_draw_callback(draw_scene)
    pyglet.app.run()
"""

from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
        fullscreen: bool = False,
        caption: str = "Scribble",
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            fullscreen: True で全画面表示（width/height は無視される）。
        """
        # ピクセル化表示なので MSAA は使わない（線のエッジを硬いまま拡大する）
        config = Config(double_buffer=True, vsync=True)
        if fullscreen:
            super().__init__(fullscreen=True, caption=caption, config=config)
        else:
            super().__init__(
                width=width, height=height, caption=caption, config=config, resizable=True
            )
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_resize_callback(self, func: Callable[[int, int], None]) -> None:
        """リサイズ時に `(width, height)` で呼び出す関数を登録する。"""
        self._resize_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。登録された描画コールバックを呼び出す。"""
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    def on_resize(self, width, height):  # noqa: ANN001
        super().on_resize(width, height)
        for cb in self._resize_callbacks:
            cb(width, height)
