"""
どこで: `scribble.common` サブパッケージ。
何を: 環境変数設定・ロギング・軽量型・数値ヘルパなど、全層から参照される基盤を提供。
なぜ: 依存の最も内側に置き、循環参照なしで再利用できるようにするため。
"""
