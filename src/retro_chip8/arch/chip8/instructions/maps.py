# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令ワードと命令種別・実行関数・表示形式のマッピング定義。
"""
from typing import Callable, Dict, Tuple, Union

from .base import ExecutionContext, Instruction, InstructionKind as K
from . import alu, control, graphics, load

ExecFunc = Callable[[ExecutionContext, Instruction], None]
# 上位4bitで一意に決まる場合は種別、そうでなければ (サブオペコードのマスク, {サブオペコード: 種別})
DecodeEntry = Union[K, Tuple[int, Dict[int, K]]]

# @intent:map 命令ワードの上位4bitからデコード規則へのマッピングテーブル。
# @intent:note 0/8/E ファミリは下位4bit、F ファミリは下位8bitで分岐します。5XY0/9XY0 の下位4bitは見ません。
DECODE_MAP: Dict[int, DecodeEntry] = {
    0x0: (0x000F, {0x0: K.CLS, 0xE: K.RET}),
    0x1: K.JP,
    0x2: K.CALL,
    0x3: K.SE_VX_NN,
    0x4: K.SNE_VX_NN,
    0x5: K.SE_VX_VY,
    0x6: K.LD_VX_NN,
    0x7: K.ADD_VX_NN,
    0x8: (0x000F, {
        0x0: K.LD_VX_VY,
        0x1: K.OR,
        0x2: K.AND,
        0x3: K.XOR,
        0x4: K.ADD_VX_VY,
        0x5: K.SUB,
        0x6: K.SHR,
        0x7: K.SUBN,
        0xE: K.SHL,
    }),
    0x9: K.SNE_VX_VY,
    0xA: K.LD_I,
    0xB: K.JP_V0,
    0xC: K.RND,
    0xD: K.DRW,
    0xE: (0x000F, {0xE: K.SKP, 0x1: K.SKNP}),
    0xF: (0x00FF, {
        0x07: K.LD_VX_DT,
        0x0A: K.LD_VX_K,
        0x15: K.LD_DT_VX,
        0x18: K.LD_ST_VX,
        0x1E: K.ADD_I_VX,
        0x29: K.LD_F_VX,
        0x33: K.LD_B_VX,
        0x55: K.LD_I_VX,
        0x65: K.LD_VX_I,
    }),
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP: Dict[K, ExecFunc] = {
    # Control
    K.RET: control.execute_ret,
    K.JP: control.execute_jp,
    K.CALL: control.execute_call,
    K.SE_VX_NN: control.execute_se_vx_nn,
    K.SNE_VX_NN: control.execute_sne_vx_nn,
    K.SE_VX_VY: control.execute_se_vx_vy,
    K.SNE_VX_VY: control.execute_sne_vx_vy,
    K.JP_V0: control.execute_jp_v0,
    K.SKP: control.execute_skp,
    K.SKNP: control.execute_sknp,
    K.LD_VX_K: control.execute_ld_vx_k,
    K.UNKNOWN: control.execute_unknown,

    # ALU
    K.ADD_VX_NN: alu.execute_add_vx_nn,
    K.LD_VX_VY: alu.execute_ld_vx_vy,
    K.OR: alu.execute_or,
    K.AND: alu.execute_and,
    K.XOR: alu.execute_xor,
    K.ADD_VX_VY: alu.execute_add_vx_vy,
    K.SUB: alu.execute_sub,
    K.SHR: alu.execute_shr,
    K.SUBN: alu.execute_subn,
    K.SHL: alu.execute_shl,

    # Load/Store
    K.LD_VX_NN: load.execute_ld_vx_nn,
    K.LD_I: load.execute_ld_i,
    K.RND: load.execute_rnd,
    K.LD_VX_DT: load.execute_ld_vx_dt,
    K.LD_DT_VX: load.execute_ld_dt_vx,
    K.LD_ST_VX: load.execute_ld_st_vx,
    K.ADD_I_VX: load.execute_add_i_vx,
    K.LD_F_VX: load.execute_ld_f_vx,
    K.LD_B_VX: load.execute_ld_b_vx,
    K.LD_I_VX: load.execute_ld_i_vx,
    K.LD_VX_I: load.execute_ld_vx_i,

    # Graphics
    K.CLS: graphics.execute_cls,
    K.DRW: graphics.execute_drw,
}

# @intent:map 命令種別からニーモニックとオペランド書式へのマッピングテーブル（トレース表示用）。
MNEMONIC_MAP: Dict[K, Tuple[str, Tuple[str, ...]]] = {
    K.CLS: ("CLS", ()),
    K.RET: ("RET", ()),
    K.JP: ("JP", ("${nnn:03X}",)),
    K.CALL: ("CALL", ("${nnn:03X}",)),
    K.SE_VX_NN: ("SE", ("V{x:X}", "#{nn:02X}")),
    K.SNE_VX_NN: ("SNE", ("V{x:X}", "#{nn:02X}")),
    K.SE_VX_VY: ("SE", ("V{x:X}", "V{y:X}")),
    K.LD_VX_NN: ("LD", ("V{x:X}", "#{nn:02X}")),
    K.ADD_VX_NN: ("ADD", ("V{x:X}", "#{nn:02X}")),
    K.LD_VX_VY: ("LD", ("V{x:X}", "V{y:X}")),
    K.OR: ("OR", ("V{x:X}", "V{y:X}")),
    K.AND: ("AND", ("V{x:X}", "V{y:X}")),
    K.XOR: ("XOR", ("V{x:X}", "V{y:X}")),
    K.ADD_VX_VY: ("ADD", ("V{x:X}", "V{y:X}")),
    K.SUB: ("SUB", ("V{x:X}", "V{y:X}")),
    K.SHR: ("SHR", ("V{x:X}",)),
    K.SUBN: ("SUBN", ("V{x:X}", "V{y:X}")),
    K.SHL: ("SHL", ("V{x:X}",)),
    K.SNE_VX_VY: ("SNE", ("V{x:X}", "V{y:X}")),
    K.LD_I: ("LD", ("I", "${nnn:03X}")),
    K.JP_V0: ("JP", ("V0", "${nnn:03X}")),
    K.RND: ("RND", ("V{x:X}", "#{nn:02X}")),
    K.DRW: ("DRW", ("V{x:X}", "V{y:X}", "{n}")),
    K.SKP: ("SKP", ("V{x:X}",)),
    K.SKNP: ("SKNP", ("V{x:X}",)),
    K.LD_VX_DT: ("LD", ("V{x:X}", "DT")),
    K.LD_VX_K: ("LD", ("V{x:X}", "K")),
    K.LD_DT_VX: ("LD", ("DT", "V{x:X}")),
    K.LD_ST_VX: ("LD", ("ST", "V{x:X}")),
    K.ADD_I_VX: ("ADD", ("I", "V{x:X}")),
    K.LD_F_VX: ("LD", ("F", "V{x:X}")),
    K.LD_B_VX: ("LD", ("B", "V{x:X}")),
    K.LD_I_VX: ("LD", ("[I]", "V{x:X}")),
    K.LD_VX_I: ("LD", ("V{x:X}", "[I]")),
    K.UNKNOWN: ("UNKNOWN", ("${word:04X}",)),
}
