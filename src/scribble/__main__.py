"""
どこで: `scribble.__main__`（コマンドライン入口）。
何を: 引数を `AnimationParams` へ反映し、ウィンドウ実行またはヘッドレスの PNG 書き出しを行う。
なぜ: `python -m scribble` / `scribble` コマンドから設定ファイルなしでも試せるようにするため。

例:
    scribble --mode mixed --width 1024 --height 768
    scribble --headless-frames 300 --out data/screenshot/preview.png --seed 1
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Mapping, Sequence

from scribble.common.logging import setup_default_logging
from scribble.engine.core.params import AnimationParams, GenerationMode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="scribble", description="3D scribble animator")
    p.add_argument(
        "--mode",
        choices=[m.name.lower() for m in GenerationMode],
        default=None,
        help="segment generation mode (default: from config, else organic)",
    )
    p.add_argument("--width", type=int, default=None, help="window width in px")
    p.add_argument("--height", type=int, default=None, help="window height in px")
    p.add_argument("--fullscreen", action="store_true", help="open a fullscreen window")
    p.add_argument("--fps", type=int, default=None, help="frames per second")
    p.add_argument("--seed", type=int, default=None, help="random seed")
    p.add_argument(
        "--headless-frames",
        type=int,
        default=None,
        metavar="N",
        help="advance N frames without a window and write a PNG",
    )
    p.add_argument("--out", default=None, metavar="PATH", help="PNG path for headless mode")
    p.add_argument("--log-level", default=None, help="logging level (default: SCRIBBLE_LOG_LEVEL)")
    return p


def resolve_params(
    args: argparse.Namespace, cfg: Mapping[str, Any] | None = None
) -> AnimationParams:
    """設定ファイルの値に CLI 引数を上書きした `AnimationParams` を返す。

    FPS はウィンドウ実行と同じく `resolve_fps` で `runner.fps` を解決する。
    明示の `--fps` はそのまま渡し、不正値は `validate()` で弾く。
    """
    params = AnimationParams.from_config(cfg)
    fps = args.fps
    if fps is None:
        from scribble.api.runner_utils import resolve_fps

        fps = resolve_fps(None, default=params.fps, cfg=cfg)
    return params.with_overrides(mode=args.mode, fps=fps)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_default_logging(args.log_level)

    try:
        params = resolve_params(args).validate()
    except ValueError as e:
        parser.error(str(e))

    if args.headless_frames is not None:
        from pathlib import Path

        from scribble.api.headless import run_headless
        from scribble.util.paths import ensure_screenshots_dir, unique_path

        out = (
            Path(args.out)
            if args.out is not None
            else unique_path(ensure_screenshots_dir() / "preview.png")
        )
        try:
            path = run_headless(
                params,
                frames=args.headless_frames,
                out=out,
                width=args.width,
                height=args.height,
                seed=args.seed,
            )
        except ValueError as e:
            parser.error(str(e))
        print(path)
        return 0

    from scribble.api.runner import run_scribble

    run_scribble(
        params,
        width=args.width,
        height=args.height,
        fullscreen=args.fullscreen,
        fps=args.fps,
        seed=args.seed,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
