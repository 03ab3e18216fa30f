"""
どこで: `scribble.engine.runtime.animator`（アニメーション状態機械）。
何を: パス・トリムカーソル・回転角・混合モードのフラグを排他的に所有し、1 フレームごとに
      「回転 → トグル → カーソル前進 → 先頭パージ → 末尾成長 → 再描画通知」を行う。
なぜ: PathStore の読み書きを 1 つの所有者に閉じ込め、ホスト（タイマ/ウィンドウ）からは
      `reset`/`step`/`visible_points`/`current_rotation` だけで扱えるようにするため。

状態遷移:

    IDLE --reset()--> RUNNING --stop()--> STOPPED
                         ^                   |
                         +--resume()/reset()-+

フレーム処理（`step()`、RUNNING のときのみ）:
1) 回転: `rotation_speed`[回転/分] と固定 FPS から 1 フレーム分を加え、`[0, 2π)` に折り返す。
2) 混合モードなら一様乱数 1 つでトグル判定。
3) トリムカーソルを `draw_speed / speed_divisor` 進める。
4) `cursor - keep_behind > 0` ならその超過分だけ先頭をトリムし、カーソルからも同じだけ引く
   （カーソルは常に「現在の先頭からの既描画距離」を表す）。
5) 全長が `cursor + draw_length * lookahead_factor` に届くまで生成→追加を繰り返す。
   最小セグメント長が正なら各生成で全長が必ず伸びるので有限回で止まる。誤設定に備え、
   全長が伸びない生成が `MAX_STALLED_SEGMENTS` 回続いたらこのフレームの成長を打ち切る。
6) `needs_redraw` を立て、登録済みの再描画コールバックを呼ぶ。

スレッド安全性:
- 再入不可。ホストは `step()` を直列に呼ぶこと（`FrameClock` が再入を防ぐ）。
- インスタンス間で可変状態は共有しない（乱数源もインスタンスごと）。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

import numpy as np

from scribble.common.param_utils import wrap_angle
from scribble.common.settings import get as _get_settings
from scribble.common.types import RandomSource
from scribble.engine.core.params import AnimationParams, GenerationMode
from scribble.engine.core.path_store import PathStore
from scribble.generators import BoundingSphere, MixedToggle, Strategy, generate, strategy_for_mode

logger = logging.getLogger(__name__)


class AnimatorState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class ScribbleAnimator:
    """3D スクリブルのアニメーション状態機械（Tickable 互換）。"""

    def __init__(
        self,
        params: AnimationParams | None = None,
        *,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        self.params = params if params is not None else AnimationParams()
        self.rng: RandomSource = rng if rng is not None else np.random.default_rng(seed)
        self.store = PathStore()
        self.bounds: BoundingSphere | None = None
        self.state = AnimatorState.IDLE
        self.trim_cursor = 0.0
        self.rotation = 0.0
        self.toggle = MixedToggle(
            self.params.toggle_probability, using_organic=self.params.start_organic
        )
        self.needs_redraw = False
        self.frame_count = 0
        self._redraw_callbacks: list[Callable[[], None]] = []

    # ── ライフサイクル ───────────────
    def reset(self, width: float, height: float) -> None:
        """境界球をビューポートから計算し直し、パスを空にして種まきする（→ RUNNING）。"""
        if not (width > 0 and height > 0):
            raise ValueError(f"viewport must be positive, got {(width, height)}")
        p = self.params
        self.bounds = BoundingSphere.from_viewport(width, height, p.sphere_radius_ratio)
        self.store.clear()
        self.toggle.using_organic = bool(p.start_organic)
        for _ in range(int(p.seed_segments)):
            self._append_generated()
        self.trim_cursor = 0.0
        self.rotation = 0.0
        self.frame_count = 0
        self.state = AnimatorState.RUNNING
        self._signal_redraw()
        logger.debug(
            "reset: viewport=%sx%s bounds=%s seeded=%d mode=%s",
            width,
            height,
            self.bounds,
            len(self.store),
            p.mode.name,
        )

    def stop(self) -> None:
        """フレーム駆動を止める（データは破棄しない）。"""
        if self.state is AnimatorState.RUNNING:
            self.state = AnimatorState.STOPPED

    def resume(self) -> None:
        """STOPPED から RUNNING に戻す（IDLE では何もしない）。"""
        if self.state is AnimatorState.STOPPED:
            self.state = AnimatorState.RUNNING

    @property
    def is_running(self) -> bool:
        return self.state is AnimatorState.RUNNING

    # ── フレーム処理 ─────────────────
    def step(self) -> bool:
        """1 フレーム進める。RUNNING でなければ何もせず False を返す。"""
        if self.state is not AnimatorState.RUNNING:
            return False
        p = self.params

        self.rotation = wrap_angle(self.rotation + p.rotation_step)

        if p.mode is GenerationMode.MIXED:
            self.toggle.update(self.rng)

        self.trim_cursor += p.frame_speed

        purge = self.trim_cursor - p.keep_behind_margin
        if purge > 0.0:
            self.store.trim_prefix(purge)
            self.trim_cursor -= purge

        self._grow_to(self.trim_cursor + p.lookahead_length)

        self.frame_count += 1
        self._signal_redraw()
        return True

    def tick(self, dt: float) -> None:
        """Tickable 互換。固定フレームレート前提なので dt は使わず 1 step 進める。"""
        self.step()

    # ── 描画側クエリ ─────────────────
    def visible_points(self) -> np.ndarray:
        """描画対象の弧長窓 `[max(0, cursor - draw_length), cursor]` の点列 `(k, 3)`。"""
        start = max(0.0, self.trim_cursor - self.params.draw_length)
        return self.store.windowed_points(start, self.trim_cursor)

    def current_rotation(self) -> float:
        return self.rotation

    @property
    def active_strategy(self) -> Strategy:
        return strategy_for_mode(self.params.mode, using_organic=self.toggle.using_organic)

    # ── 再描画通知 ───────────────────
    def add_redraw_callback(self, func: Callable[[], None]) -> None:
        self._redraw_callbacks.append(func)

    def consume_redraw(self) -> bool:
        """`needs_redraw` を読み出してクリアする。"""
        flag = self.needs_redraw
        self.needs_redraw = False
        return flag

    # ── 内部ヘルパ ────────────────────
    def _append_generated(self) -> None:
        assert self.bounds is not None
        pt = generate(self.active_strategy, self.store, self.bounds, self.params, self.rng)
        self.store.append(pt)

    def _grow_to(self, needed: float) -> None:
        max_stalls = _get_settings().MAX_STALLED_SEGMENTS
        stalls = 0
        added = 0
        total = self.store.total_length()
        while total < needed:
            self._append_generated()
            added += 1
            new_total = self.store.total_length()
            if new_total > total:
                stalls = 0
            else:
                stalls += 1
                if stalls >= max_stalls:
                    logger.warning(
                        "path growth stalled after %d segments without progress "
                        "(total=%.3f needed=%.3f); check segment length settings",
                        stalls,
                        new_total,
                        needed,
                    )
                    break
            total = new_total
        if added and _get_settings().DEBUG_PATH:
            logger.debug(
                "grow: added=%d points=%d total=%.3f", added, len(self.store), total
            )

    def _signal_redraw(self) -> None:
        self.needs_redraw = True
        for cb in self._redraw_callbacks:
            cb()

    def __repr__(self) -> str:
        return (
            f"ScribbleAnimator(state={self.state.name}, mode={self.params.mode.name}, "
            f"points={len(self.store)}, cursor={self.trim_cursor:.1f})"
        )


__all__ = ["AnimatorState", "ScribbleAnimator"]
