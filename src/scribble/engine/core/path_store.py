"""
弧長インデックス付きパス（PathStore）

本モジュールは、伸び続け・先頭から削られ続ける 3D ポリラインを、各頂点までの累積距離配列と
対で保持する `PathStore` を提供する。アニメーション 1 フレームごとの
「先頭トリム → 末尾への追加 → 弧長窓の切り出し」をすべてこのクラスで完結させる。

データモデル（不変条件）:
- `points: float64 ndarray (N, 3)`: 先頭（index 0）から末尾への頂点列。
- `cumulative: float64 ndarray (N,)`: `cum[0] == 0`、
  `cum[i] = cum[i-1] + |points[i] - points[i-1]|`。単調非減少。
- `len(points) == len(cumulative)`、`cum[-1]` が保持中パスの全長。
- 弧長 0 は常に「現在の先頭」を指す（トリムのたびに全体を再基準化する）。

内部表現:
- 容量付きの連続バッファ 2 本と先頭 index `_head` を持つ。
- 末尾追加は償却 O(1)（容量不足時のみ詰め直し/倍化）。
- 先頭の k 点削除は `_head` を進めるだけの O(1)、累積距離の再基準化は O(n) の一括減算。
  再構築ではなく減算なので、トリムを何度繰り返しても浮動小数の誤差が積み上がらない。
  アニメーション規模（数千点）では O(n) の再基準化で十分に速く、単純さを優先している。

直感図（trim_prefix(15)）:

    # 前:  points  (0,0,0)   (10,0,0)   (20,0,0)
    #      cum      0         10         20
    #                               ^ 15（区間 [1, 2] の中点）
    # 後:  points  (15,0,0)  (20,0,0)
    #      cum      0         5

性能上の注意:
- `index_for_distance` は `np.searchsorted` による二分探索（O(log n)）。
- ビュー（`points`/`cumulative`）は読み取り専用。書き換えは本クラスの操作に限る。
"""

from __future__ import annotations

import logging

import numpy as np

from scribble.common.settings import get as _get_settings
from scribble.common.types import PointLike

from .geometry import as_point, distance, lerp

logger = logging.getLogger(__name__)


class PathStore:
    """累積弧長インデックス付きの 3D ポリライン。

    生成器は `append` と読み取りのみ、削除/並べ替えは所有者（アニメータ）の
    `trim_prefix`/`clear` に限る。
    """

    __slots__ = ("_coords", "_cum", "_head", "_size")

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is None:
            capacity = _get_settings().INITIAL_CAPACITY
        cap = max(2, int(capacity))
        self._coords = np.empty((cap, 3), dtype=np.float64)
        self._cum = np.empty(cap, dtype=np.float64)
        self._head = 0
        self._size = 0

    # ── ファクトリ ───────────────────
    @classmethod
    def from_points(cls, points: "np.ndarray | list[PointLike]") -> "PathStore":
        """点列から PathStore を構築する（順に `append` するのと等価）。"""
        pts = list(points)
        store = cls(capacity=max(2, len(pts)))
        for p in pts:
            store.append(p)
        return store

    # ── 読み取り ─────────────────────
    def __len__(self) -> int:
        return self._size

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def points(self) -> np.ndarray:
        """頂点列 `(N, 3)` の読み取り専用ビュー。"""
        view = self._coords[self._head : self._head + self._size]
        view.setflags(write=False)
        return view

    @property
    def cumulative(self) -> np.ndarray:
        """累積距離 `(N,)` の読み取り専用ビュー。"""
        view = self._cum[self._head : self._head + self._size]
        view.setflags(write=False)
        return view

    def first(self) -> np.ndarray:
        if self._size == 0:
            raise IndexError("first() on empty PathStore")
        return self._coords[self._head].copy()

    def last(self) -> np.ndarray:
        if self._size == 0:
            raise IndexError("last() on empty PathStore")
        return self._coords[self._head + self._size - 1].copy()

    def point(self, i: int) -> np.ndarray:
        """i 番目（負数は末尾から）の頂点のコピーを返す。"""
        if i < 0:
            i += self._size
        if not 0 <= i < self._size:
            raise IndexError(f"point index out of range: {i}")
        return self._coords[self._head + i].copy()

    def total_length(self) -> float:
        """保持中パスの全長（空なら 0）。"""
        if self._size == 0:
            return 0.0
        return float(self._cum[self._head + self._size - 1])

    # ── 追加/削除 ────────────────────
    def append(self, p: PointLike) -> None:
        """末尾へ 1 点追加し、累積距離を差分更新する（償却 O(1)）。"""
        pt = as_point(p)
        self._reserve_tail()
        tail = self._head + self._size
        self._coords[tail] = pt
        if self._size == 0:
            self._cum[tail] = 0.0
        else:
            seg = distance(self._coords[tail - 1], pt)
            self._cum[tail] = self._cum[tail - 1] + seg
        self._size += 1

    def clear(self) -> None:
        self._head = 0
        self._size = 0

    def trim_prefix(self, purge_dist: float) -> None:
        """先頭から弧長 `purge_dist` ぶんを取り除き、弧長 0 を新しい先頭へ移す。

        - 2 点未満、または `purge_dist <= 0` は何もしない。
        - `purge_dist >= total_length()` は全消去。
        - それ以外は `purge_dist` を含む区間 `[seg, seg+1]` を求め、`seg` より前の点を捨て、
          新しい先頭を区間内の補間点で置き換える。残りの累積距離は `purge_dist` を減算し、
          先頭だけは丸め誤差なしの 0 を代入する。
        """
        purge = float(purge_dist)
        if self._size < 2 or purge <= 0.0:
            return
        total = self.total_length()
        if purge >= total:
            self.clear()
            return

        idx = self.index_for_distance(purge)
        if idx is None:
            return
        seg = max(0, idx - 1)
        new_head = self._interpolate(seg, idx, purge)

        self._head += seg
        self._size -= seg
        h = self._head
        self._coords[h] = new_head
        self._cum[h : h + self._size] -= purge
        self._cum[h] = 0.0
        if _get_settings().DEBUG_PATH:
            logger.debug(
                "trim_prefix: purged=%.3f dropped=%d remaining=%d total=%.3f",
                purge,
                seg,
                self._size,
                self.total_length(),
            )

    # ── 弧長クエリ ────────────────────
    def index_for_distance(self, d: float) -> int | None:
        """`cum[i] >= d` を満たす最小の i を返す（二分探索）。

        - `d <= cum[0]` なら 0。
        - `d > cum[-1]`（または空）なら None。
        """
        if self._size == 0:
            return None
        cum = self._cum[self._head : self._head + self._size]
        d = float(d)
        if d <= cum[0]:
            return 0
        if d > cum[-1]:
            return None
        return int(np.searchsorted(cum, d, side="left"))

    def point_at_distance(self, d: float) -> np.ndarray:
        """弧長 `d` の位置の点を返す（範囲外は先頭/末尾にクランプ）。

        - 空のパスは原点を返す。
        - 同一点が連続する長さ 0 の区間では `t = 0`（区間始点）を返す。
        """
        if self._size == 0:
            return np.zeros(3, dtype=np.float64)
        if self._size == 1 or d <= 0.0:
            return self.first()
        if d >= self.total_length():
            return self.last()
        idx = self.index_for_distance(d)
        if idx is None:  # pragma: no cover - d < total なので到達しない
            return self.last()
        if idx == 0:
            return self.first()
        return self._interpolate(idx - 1, idx, float(d))

    def windowed_points(self, start_offset: float, end_offset: float) -> np.ndarray:
        """弧長窓 `[start_offset, end_offset]` に含まれる部分パスを返す。

        返り値の並び:
        1. `start_offset` の補間点
        2. 累積距離が `start_offset < cum[i] < end_offset` の保存点
        3. `end_offset` の補間点

        窓が空/逆転/`[0, total]` の完全に外側、または保存点が 2 未満の場合は
        形状 `(0, 3)` の空配列を返す（呼び出し側は描画をスキップする）。
        """
        empty = np.empty((0, 3), dtype=np.float64)
        if self._size < 2:
            return empty
        total = self.total_length()
        start = float(start_offset)
        end = float(end_offset)
        if start >= total or end <= 0.0:
            return empty
        start = max(0.0, start)
        end = min(total, end)
        if end <= start:
            return empty

        cum = self._cum[self._head : self._head + self._size]
        lo = int(np.searchsorted(cum, start, side="right"))
        hi = int(np.searchsorted(cum, end, side="left"))
        inner = self._coords[self._head + lo : self._head + max(lo, hi)]

        out = np.empty((inner.shape[0] + 2, 3), dtype=np.float64)
        out[0] = self.point_at_distance(start)
        out[1:-1] = inner
        out[-1] = self.point_at_distance(end)
        return out

    # ── 内部ヘルパ ────────────────────
    def _interpolate(self, i0: int, i1: int, d: float) -> np.ndarray:
        """区間 `[i0, i1]`（論理 index）上で弧長 `d` の補間点を返す。"""
        h = self._head
        seg_start = float(self._cum[h + i0])
        seg_len = float(self._cum[h + i1]) - seg_start
        p0 = self._coords[h + i0]
        if seg_len <= 0.0:
            return p0.copy()
        t = (d - seg_start) / seg_len
        return lerp(p0, self._coords[h + i1], t)

    def _reserve_tail(self) -> None:
        """末尾に 1 点分の空きを確保する（詰め直し、足りなければ倍化）。"""
        cap = self._coords.shape[0]
        if self._head + self._size < cap:
            return
        h, n = self._head, self._size
        if n < cap // 2:
            # 先頭側の空きが十分なので詰め直すだけ
            self._coords[:n] = self._coords[h : h + n]
            self._cum[:n] = self._cum[h : h + n]
        else:
            new_cap = cap * 2
            coords = np.empty((new_cap, 3), dtype=np.float64)
            cum = np.empty(new_cap, dtype=np.float64)
            coords[:n] = self._coords[h : h + n]
            cum[:n] = self._cum[h : h + n]
            self._coords = coords
            self._cum = cum
        self._head = 0

    def __repr__(self) -> str:
        return f"PathStore(points={self._size}, total_length={self.total_length():.3f})"


__all__ = ["PathStore"]
