"""
どこで: `scribble` パッケージのルート。
何を: 球内に閉じ込めた 3D スクリブル（伸び続け・削られ続けるポリライン）を生成し、
      回転するピクセル化線画としてアニメーションする。
なぜ: 弧長インデックス付きパスエンジンを中核に、生成/描画/ホストを層ごとに分離するため。

使用例:
    from scribble import AnimationParams, GenerationMode, ScribbleAnimator

    anim = ScribbleAnimator(AnimationParams(mode=GenerationMode.MIXED))
    anim.reset(800, 600)
    anim.step()
    pts = anim.visible_points()  # (k, 3) float64
"""

from __future__ import annotations

from .engine.core.params import AnimationParams, GenerationMode
from .engine.core.path_store import PathStore
from .engine.runtime.animator import AnimatorState, ScribbleAnimator

__version__ = "0.1.0"

__all__ = [
    "AnimationParams",
    "GenerationMode",
    "PathStore",
    "AnimatorState",
    "ScribbleAnimator",
    "__version__",
]
