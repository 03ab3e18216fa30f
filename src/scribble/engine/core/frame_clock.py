"""
どこで: `scribble.engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（dt 測定と再入防止）。
なぜ: タイマから呼び出すだけで「アニメータ更新 → レンダラ転送」の順序を統一し、
      1 フレームの処理が重なって実行されないことを保証するため。
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from .tickable import Tickable

logger = logging.getLogger(__name__)


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self._in_tick = False
        self.frames = 0

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if self._in_tick:
            # PathStore は再入不可。タイマの重複呼び出しはこのフレームを捨てる
            logger.debug("FrameClock.tick re-entered; frame skipped")
            return
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now

        self._in_tick = True
        try:
            for t in self._tickables:
                t.tick(dt)
        finally:
            self._in_tick = False
        self.frames += 1
