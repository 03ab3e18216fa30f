"""
どこで: `scribble.engine.core` サブパッケージ。
何を: 幾何プリミティブ・弧長インデックス付き PathStore・アニメーションパラメータ・
      フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
なぜ: 計算の基盤を構成し、上位層（generators/runtime/render/api）から再利用可能にするため。
"""
