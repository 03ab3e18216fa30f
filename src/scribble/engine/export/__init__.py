"""
どこで: `scribble.engine.export` サブパッケージ。
何を: 表示中のウィンドウ内容を PNG として保存するエクスポート機能を提供。
なぜ: ランナーのキー操作から 1 アクションで静止画を残せるようにするため。
"""
