"""
どこで: `scribble.engine.render.shader`。
何を: ライン描画用と、オフスクリーンテクスチャを画面へ貼るブリット用の GLSL プログラムを生成。
なぜ: シェーダソースをレンダラ本体から分離し、ModernGL コンテキストさえあれば生成できるようにするため。
"""

from __future__ import annotations

from typing import Any

LINE_VERTEX_SHADER = """
#version 330
uniform vec2 viewport;
in vec2 in_vert;
void main() {
    // ビューポート座標（原点左下, Y 上向き）→ クリップ空間
    vec2 ndc = in_vert / viewport * 2.0 - 1.0;
    gl_Position = vec4(ndc, 0.0, 1.0);
}
"""

LINE_FRAGMENT_SHADER = """
#version 330
uniform vec4 color;
out vec4 f_color;
void main() {
    f_color = color;
}
"""

BLIT_VERTEX_SHADER = """
#version 330
in vec2 in_pos;
in vec2 in_uv;
out vec2 v_uv;
void main() {
    v_uv = in_uv;
    gl_Position = vec4(in_pos, 0.0, 1.0);
}
"""

BLIT_FRAGMENT_SHADER = """
#version 330
uniform sampler2D tex;
in vec2 v_uv;
out vec4 f_color;
void main() {
    f_color = texture(tex, v_uv);
}
"""


class Shader:
    @staticmethod
    def create_line_program(ctx: Any) -> Any:
        return ctx.program(vertex_shader=LINE_VERTEX_SHADER, fragment_shader=LINE_FRAGMENT_SHADER)

    @staticmethod
    def create_blit_program(ctx: Any) -> Any:
        return ctx.program(vertex_shader=BLIT_VERTEX_SHADER, fragment_shader=BLIT_FRAGMENT_SHADER)


__all__ = ["Shader"]
