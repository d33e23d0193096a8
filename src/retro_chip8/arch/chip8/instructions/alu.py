# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令（7XNN と 8XY_ ファミリ）の実装。

VFは汎用レジスタであると同時にキャリー/ボローフラグでもあります。
オペランドは命令開始時に読み出し、フラグを書き込んだ後に結果をVXへ書き込みます。
"""
from .base import ExecutionContext, Instruction

# @intent:responsibility 7XNN: VX に NN を加算します（キャリーフラグは変化しません）。
def execute_add_vx_nn(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = (ctx.state.v[ins.x] + ins.nn) & 0xFF

# @intent:responsibility 8XY0: VX = VY
def execute_ld_vx_vy(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ctx.state.v[ins.y]

def execute_or(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] |= ctx.state.v[ins.y]

def execute_and(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] &= ctx.state.v[ins.y]

def execute_xor(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] ^= ctx.state.v[ins.y]

# @intent:responsibility 8XY4: VX += VY。和が255を超えた場合 VF=1。
def execute_add_vx_vy(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    total = v[ins.x] + v[ins.y]
    v[0xF] = 1 if total > 0xFF else 0
    v[ins.x] = total & 0xFF

# @intent:responsibility 8XY5: VX -= VY。VX > VY の場合のみ VF=1（等しい場合は0）。
def execute_sub(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    vx, vy = v[ins.x], v[ins.y]
    v[0xF] = 1 if vx > vy else 0
    v[ins.x] = (vx - vy) & 0xFF

# @intent:responsibility 8XY7: VX = VY - VX。VX < VY の場合のみ VF=1（等しい場合は0）。
def execute_subn(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    vx, vy = v[ins.x], v[ins.y]
    v[0xF] = 1 if vx < vy else 0
    v[ins.x] = (vy - vx) & 0xFF

# @intent:responsibility 8XY6: VXを右シフトし、押し出されたビットをVFに格納します。
# @intent:note VYではなくVXを対象とします。
def execute_shr(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    vx = v[ins.x]
    v[0xF] = vx & 0x01
    v[ins.x] = vx >> 1

# @intent:responsibility 8XYE: VXを左シフトし、押し出された最上位ビットをVFに格納します。
# @intent:note VYではなくVXを対象とします。
def execute_shl(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    vx = v[ins.x]
    v[0xF] = (vx & 0x80) >> 7
    v[ins.x] = (vx << 1) & 0xFF
