# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、Iレジスタ、タイマ、メモリブロック転送）の実装。
"""
from retro_chip8.arch.chip8.memory import FONT_START_ADDRESS, FONT_GLYPH_SIZE
from .base import ExecutionContext, Instruction

# @intent:responsibility 6XNN: VX = NN
def execute_ld_vx_nn(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ins.nn

# @intent:responsibility ANNN: I = NNN
def execute_ld_i(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.i = ins.nnn

# @intent:responsibility CXNN: VX = 乱数バイト AND NN
def execute_rnd(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ctx.rng.randint(0, 0xFF) & ins.nn

# --- Timers ---

def execute_ld_vx_dt(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ctx.state.delay_timer

def execute_ld_dt_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.delay_timer = ctx.state.v[ins.x]

def execute_ld_st_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.sound_timer = ctx.state.v[ins.x]

# --- Index register ---

# @intent:responsibility FX1E: I += VX。オーバーフロー検出は行わず、16bitで折り返します。
def execute_add_i_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.i = (ctx.state.i + ctx.state.v[ins.x]) & 0xFFFF

# @intent:responsibility FX29: I を VX に対応する組み込みフォントのアドレスに設定します。
def execute_ld_f_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.i = FONT_START_ADDRESS + FONT_GLYPH_SIZE * ctx.state.v[ins.x]

# --- Memory ---

# @intent:responsibility FX33: VX の10進表現（百の位、十の位、一の位）を I, I+1, I+2 に格納します。
def execute_ld_b_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    i = ctx.state.i
    ctx.bus.check_range(i, 3)
    value = ctx.state.v[ins.x]
    ctx.bus.write(i, value // 100)
    ctx.bus.write(i + 1, (value // 10) % 10)
    ctx.bus.write(i + 2, value % 10)

# @intent:responsibility FX55: V0..VX を I から始まるメモリに格納します。Iは変更しません。
def execute_ld_i_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    i = ctx.state.i
    ctx.bus.check_range(i, ins.x + 1)
    for reg in range(ins.x + 1):
        ctx.bus.write(i + reg, ctx.state.v[reg])

# @intent:responsibility FX65: I から始まるメモリを V0..VX に読み込みます。Iは変更しません。
def execute_ld_vx_i(ctx: ExecutionContext, ins: Instruction) -> None:
    i = ctx.state.i
    ctx.bus.check_range(i, ins.x + 1)
    values = [ctx.bus.read(i + reg) for reg in range(ins.x + 1)]
    ctx.state.v[:ins.x + 1] = values
