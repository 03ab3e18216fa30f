"""
どこで: `scribble.engine.render` サブパッケージ。
何を: 3D 点列の 2D 投影（Y 軸回転）と、低解像度オフスクリーン描画→最近傍拡大による
      ピクセル化ラインレンダラ（ModernGL）を提供。
なぜ: アニメータの出力（`visible_points`/`current_rotation`）を画面表示へ変換する処理を集約するため。
"""
