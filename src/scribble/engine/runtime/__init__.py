"""
どこで: `scribble.engine.runtime` サブパッケージ。
何を: フレームごとにパスを削り・伸ばし・回転を進めるアニメーション状態機械。
なぜ: PathStore と生成戦略（generators）を束ね、ホストからは `reset`/`step` だけで駆動できるようにするため。
"""
