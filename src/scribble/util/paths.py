"""
どこで: `scribble.util.paths`。
何を: PNG 保存先ディレクトリの生成と解決ユーティリティを提供する。
なぜ: ランタイム/CLI から簡潔に保存先を扱え、並行呼び出しでも安全に作成できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def ensure_screenshots_dir() -> Path:
    """スクリーンショット出力先 `data/screenshot/` を作成して返す。

    - プロジェクトルート直下の `data/screenshot/` に作成する。
    - 既存の場合もそのまま Path を返す。
    """
    root = _find_project_root(Path(__file__).parent)
    out = root / "data" / "screenshot"
    out.mkdir(parents=True, exist_ok=True)
    return out


def unique_path(path: Path) -> Path:
    """既存ファイルと衝突しないパスを返す（`name-1.png`, `name-2.png`, ...）。"""
    if not path.exists():
        return path
    i = 1
    while True:
        cand = path.parent / f"{path.stem}-{i}{path.suffix}"
        if not cand.exists():
            return cand
        i += 1
