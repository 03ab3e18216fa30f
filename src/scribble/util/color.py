"""
どこで: `scribble.util.color`。
何を: 色指定（Hex 文字列 / RGB(A) タプル 0–1 または 0–255）を RGBA(0–1) へ正規化。
なぜ: 設定ファイル・CLI・レンダラで同一の受理仕様とエラーメッセージを使うため。
"""

from __future__ import annotations

from typing import Sequence

from scribble.common.param_utils import clamp01
from scribble.common.types import RGBA


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "RRGGBB" など（大文字/小文字不問）。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 文字列は Hex として解釈する。
    - 3/4 要素の数値列は、いずれかが 1 を超えれば 0–255 とみなす。
    - アルファ省略時は 1.0。
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[float] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    vals = [float(v) for v in seq]
    if len(vals) == 3:
        vals.append(255.0 if any(v > 1.0 for v in vals) else 1.0)
    if any(v > 1.0 for v in vals):
        vals = [v / 255.0 for v in vals]
    r, g, b, a = (clamp01(v) for v in vals)
    return (r, g, b, a)


__all__ = ["parse_hex_color_str", "normalize_color"]
