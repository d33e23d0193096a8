# src/retro_chip8/arch/chip8/instructions/graphics.py
"""
描画命令（画面消去とスプライト描画）の実装。
"""
from .base import ExecutionContext, Instruction

SPRITE_WIDTH = 8

# @intent:responsibility 00E0: フレームバッファの全ピクセルを消灯します。
def execute_cls(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.display.clear()

# @intent:responsibility DXYN: I から N バイトのスプライトを (VX, VY) にXOR描画し、衝突をVFに設定します。
# @intent:rationale スプライトは描画前に全て読み出すため、範囲外のIで失敗しても画面は変化しません。
#                  座標は画面サイズで折り返します（クリッピングはしません）。
def execute_drw(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    display = ctx.display
    origin_x = state.v[ins.x]
    origin_y = state.v[ins.y]

    ctx.bus.check_range(state.i, ins.n)
    rows = [ctx.bus.read(state.i + row) for row in range(ins.n)]

    state.vf = 0
    for row, sprite_byte in enumerate(rows):
        y = (origin_y + row) % display.height
        for col in range(SPRITE_WIDTH):
            if sprite_byte & (0x80 >> col):
                x = (origin_x + col) % display.width
                if display.toggle(x, y):
                    state.vf = 1
