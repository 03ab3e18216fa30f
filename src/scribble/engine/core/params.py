"""
どこで: `scribble.engine.core.params`
何を: アニメーション設定レコード `AnimationParams` と生成モード `GenerationMode` を定義し、
      設定ファイル（`configs/default.yaml` の `scribble:` セクション）からの構築と検証を提供。
なぜ: 実行中は読み取り専用の設定を 1 か所に集約し、ホストが `reset` 前に誤設定を拒否できるようにするため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class GenerationMode(Enum):
    """セグメント生成モード。値は従来の数値コード（1/2/3）。"""

    RANDOM = 1  # 球内一様ランダム点のみ（ギザギザの線）
    ORGANIC = 2  # 直前の進行方向を曲げて伸ばす（滑らかな線）
    MIXED = 3  # フレームごとの確率トグルで RANDOM/ORGANIC を切り替え

    @classmethod
    def parse(cls, value: "GenerationMode | str | int") -> "GenerationMode":
        """名前（大文字小文字不問）・数値コード・列挙値のいずれかから解決する。

        別名: "old" → RANDOM、"smooth" → ORGANIC。
        """
        if isinstance(value, GenerationMode):
            return value
        if isinstance(value, bool):
            raise ValueError(f"invalid generation mode: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as e:
                raise ValueError(f"invalid generation mode code: {value}") from e
        if isinstance(value, str):
            key = value.strip().lower()
            aliases = {"old": "random", "smooth": "organic"}
            key = aliases.get(key, key)
            if key.isdigit():
                return cls.parse(int(key))
            for mode in cls:
                if mode.name.lower() == key:
                    return mode
            allowed = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"invalid generation mode: {value!r}; allowed={allowed}")
        raise ValueError(f"invalid generation mode type: {type(value)!r}")


@dataclass(frozen=True)
class AnimationParams:
    """アニメーション設定（実行中は不変）。

    長さの単位はビューポートのピクセル。既定値は 30 FPS・800x600 程度の画面を想定している。
    """

    draw_speed: float = 100.0
    speed_divisor: float = 10.0
    rotation_speed: float = 1.0  # 回転/分
    draw_length: float = 12000.0
    lookahead_factor: float = 10.0
    keep_behind: float | None = None
    scale_factor: float = 0.5
    min_segment_length: float = 10.0
    max_segment_length: float = 60.0
    max_bend_deg: float = 30.0
    mode: GenerationMode = GenerationMode.ORGANIC
    toggle_probability: float = 0.01
    fps: int = 30
    seed_segments: int = 20
    sphere_radius_ratio: float = 0.67
    boundary_threshold: float = 0.6
    start_organic: bool = False

    # ── 派生値 ─────────────────────
    @property
    def frame_speed(self) -> float:
        """1 フレームあたりのトリムカーソル前進量。"""
        return self.draw_speed / self.speed_divisor

    @property
    def lookahead_length(self) -> float:
        """カーソルより先に確保しておくパス長。"""
        return self.draw_length * self.lookahead_factor

    @property
    def keep_behind_margin(self) -> float:
        """パージせずに残す既描画パス長（未指定時は先読み長の 1.5 倍）。"""
        if self.keep_behind is None:
            return 1.5 * self.lookahead_length
        return float(self.keep_behind)

    @property
    def max_bend_rad(self) -> float:
        return math.radians(self.max_bend_deg)

    @property
    def rotation_step(self) -> float:
        """1 フレームあたりの回転量 [rad]（固定フレームレート前提）。"""
        return (self.rotation_speed / 60.0) * math.tau / float(self.fps)

    # ── 検証 ──────────────────────
    def validate(self) -> "AnimationParams":
        """誤設定を `ValueError` で拒否し、自身を返す。

        コアは検証を前提としないが、ホスト（ランナー/CLI）は `reset` 前に必ず呼ぶ。
        特に最小セグメント長が正であることは、成長ループの停止性の前提になる。
        """
        problems: list[str] = []
        if not self.min_segment_length > 0.0:
            problems.append(f"min_segment_length must be > 0, got {self.min_segment_length}")
        if self.max_segment_length < self.min_segment_length:
            problems.append(
                "max_segment_length must be >= min_segment_length, got "
                f"{self.max_segment_length} < {self.min_segment_length}"
            )
        for name in ("draw_speed", "speed_divisor", "draw_length", "lookahead_factor"):
            if not getattr(self, name) > 0.0:
                problems.append(f"{name} must be > 0, got {getattr(self, name)}")
        if self.keep_behind is not None and self.keep_behind < 0.0:
            problems.append(f"keep_behind must be >= 0, got {self.keep_behind}")
        if int(self.fps) < 1:
            problems.append(f"fps must be >= 1, got {self.fps}")
        if int(self.seed_segments) < 0:
            problems.append(f"seed_segments must be >= 0, got {self.seed_segments}")
        if not 0.0 <= self.toggle_probability <= 1.0:
            problems.append(f"toggle_probability must be in [0, 1], got {self.toggle_probability}")
        if not self.sphere_radius_ratio > 0.0:
            problems.append(f"sphere_radius_ratio must be > 0, got {self.sphere_radius_ratio}")
        if not 0.0 <= self.boundary_threshold < 1.0:
            problems.append(f"boundary_threshold must be in [0, 1), got {self.boundary_threshold}")
        if self.max_bend_deg < 0.0:
            problems.append(f"max_bend_deg must be >= 0, got {self.max_bend_deg}")
        if problems:
            raise ValueError("invalid animation params: " + "; ".join(problems))
        return self

    # ── 構築 ──────────────────────
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "AnimationParams":
        """辞書（設定ファイルの `scribble:` セクション等）から構築する。

        - 未知のキーは無視する（debug ログのみ）。
        - `mode` は `GenerationMode.parse` で解決する。
        """
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in mapping.items():
            if key not in known:
                unknown.append(str(key))
                continue
            if key == "mode":
                kwargs[key] = GenerationMode.parse(value)
            elif key in ("fps", "seed_segments"):
                kwargs[key] = int(value)
            elif key == "start_organic":
                kwargs[key] = bool(value)
            elif key == "keep_behind":
                kwargs[key] = None if value is None else float(value)
            else:
                kwargs[key] = float(value)
        if unknown:
            logger.debug("ignoring unknown animation params: %s", sorted(unknown))
        return cls(**kwargs)

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None = None) -> "AnimationParams":
        """`load_config()` の `scribble:` セクションから構築する（無ければ既定値）。"""
        from scribble.util.utils import config_section

        section = config_section("scribble", dict(cfg) if cfg is not None else None)
        return cls.from_mapping(section)

    def with_overrides(self, **overrides: Any) -> "AnimationParams":
        """`None` 以外の上書きを適用した新しいインスタンスを返す。"""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if "mode" in updates:
            updates["mode"] = GenerationMode.parse(updates["mode"])
        return replace(self, **updates) if updates else self


__all__ = ["AnimationParams", "GenerationMode"]
