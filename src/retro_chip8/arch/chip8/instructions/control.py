# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力待ち）の実装。
"""
import logging

from retro_chip8.core.errors import StackOverflowError, StackUnderflowError, UnknownEncodingError
from retro_chip8.arch.chip8.state import STACK_DEPTH
from .base import ExecutionContext, Instruction, skip_next

logger = logging.getLogger(__name__)

# --- Jumps / Subroutines ---

# @intent:responsibility 00EE: サブルーチンから復帰します。
def execute_ret(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    if state.sp == 0:
        raise StackUnderflowError(f"RET at {ctx.instruction_address:#05x} with an empty stack.")
    state.sp -= 1
    state.pc = state.stack[state.sp]

# @intent:responsibility 1NNN: NNNへジャンプします。
def execute_jp(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.pc = ins.nnn

# @intent:responsibility 2NNN: 戻り先（次の命令）をスタックに積み、NNNを呼び出します。
def execute_call(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(f"CALL at {ctx.instruction_address:#05x} exceeds {STACK_DEPTH} nested calls.")
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = ins.nnn

# @intent:responsibility BNNN: NNN + V0 へジャンプします。
def execute_jp_v0(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.pc = ins.nnn + ctx.state.v[0]

# --- Conditional skips ---

def execute_se_vx_nn(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] == ins.nn:
        skip_next(ctx)

def execute_sne_vx_nn(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] != ins.nn:
        skip_next(ctx)

def execute_se_vx_vy(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] == ctx.state.v[ins.y]:
        skip_next(ctx)

def execute_sne_vx_vy(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] != ctx.state.v[ins.y]:
        skip_next(ctx)

# --- Keypad ---

# @intent:responsibility EX9E: VXのキーが押されていれば次の命令を読み飛ばします。
def execute_skp(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.keypad.is_pressed(ctx.state.v[ins.x]):
        skip_next(ctx)

# @intent:responsibility EXA1: VXのキーが押されていなければ次の命令を読み飛ばします。
def execute_sknp(ctx: ExecutionContext, ins: Instruction) -> None:
    if not ctx.keypad.is_pressed(ctx.state.v[ins.x]):
        skip_next(ctx)

# @intent:responsibility FX0A: キー入力を待ち、押された最小のキー番号をVXに格納します。
# @intent:rationale 待機は中断ではなく、PCを2戻して同じ命令を次サイクルで再実行することで表現します。
#                  そのためタイマは待機中も毎サイクル減算されます。
def execute_ld_vx_k(ctx: ExecutionContext, ins: Instruction) -> None:
    key = ctx.keypad.first_pressed()
    if key is None:
        ctx.state.pc = (ctx.state.pc - 2) & 0xFFFF
    else:
        ctx.state.v[ins.x] = key

# --- Unknown ---

# @intent:responsibility 未定義のサブオペコード。strictモードでは例外、そうでなければ何もしません。
def execute_unknown(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.strict:
        raise UnknownEncodingError(ins.word, ctx.instruction_address)
    logger.debug("Ignored unknown instruction %04X at %#05x", ins.word, ctx.instruction_address)
