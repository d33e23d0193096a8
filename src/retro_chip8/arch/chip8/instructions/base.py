# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義。

命令ワードはまず Instruction（種別 + 抽出済みオペランド）にデコードされ、
その種別によって実行関数がディスパッチされます。
"""
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import List

from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.devices import Display, Keypad

# @intent:responsibility デコード後の命令種別を列挙します。
class InstructionKind(Enum):
    CLS = "CLS"               # 00E0
    RET = "RET"               # 00EE
    JP = "JP"                 # 1NNN
    CALL = "CALL"             # 2NNN
    SE_VX_NN = "SE_VX_NN"     # 3XNN
    SNE_VX_NN = "SNE_VX_NN"   # 4XNN
    SE_VX_VY = "SE_VX_VY"     # 5XY0
    LD_VX_NN = "LD_VX_NN"     # 6XNN
    ADD_VX_NN = "ADD_VX_NN"   # 7XNN
    LD_VX_VY = "LD_VX_VY"     # 8XY0
    OR = "OR"                 # 8XY1
    AND = "AND"               # 8XY2
    XOR = "XOR"               # 8XY3
    ADD_VX_VY = "ADD_VX_VY"   # 8XY4
    SUB = "SUB"               # 8XY5
    SHR = "SHR"               # 8XY6
    SUBN = "SUBN"             # 8XY7
    SHL = "SHL"               # 8XYE
    SNE_VX_VY = "SNE_VX_VY"   # 9XY0
    LD_I = "LD_I"             # ANNN
    JP_V0 = "JP_V0"           # BNNN
    RND = "RND"               # CXNN
    DRW = "DRW"               # DXYN
    SKP = "SKP"               # EX9E
    SKNP = "SKNP"             # EXA1
    LD_VX_DT = "LD_VX_DT"     # FX07
    LD_VX_K = "LD_VX_K"       # FX0A
    LD_DT_VX = "LD_DT_VX"     # FX15
    LD_ST_VX = "LD_ST_VX"     # FX18
    ADD_I_VX = "ADD_I_VX"     # FX1E
    LD_F_VX = "LD_F_VX"       # FX29
    LD_B_VX = "LD_B_VX"       # FX33
    LD_I_VX = "LD_I_VX"       # FX55
    LD_VX_I = "LD_VX_I"       # FX65
    UNKNOWN = "UNKNOWN"       # 未定義のサブオペコード

# @intent:data_structure デコード済みの命令。位置で決まる全オペランドを保持します。
@dataclass(frozen=True)
class Instruction:
    kind: InstructionKind
    word: int

    @property
    def x(self) -> int:
        return (self.word & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.word & 0x00F0) >> 4

    @property
    def n(self) -> int:
        return self.word & 0x000F

    @property
    def nn(self) -> int:
        return self.word & 0x00FF

    @property
    def nnn(self) -> int:
        return self.word & 0x0FFF

    @property
    def raw_bytes(self) -> List[int]:
        return [(self.word >> 8) & 0xFF, self.word & 0xFF]

# @intent:data_structure 命令の実行に必要な全ての資源を束ねたコンテキスト。
# @intent:rationale 実行関数のシグネチャを統一し、CPUクラスへの依存を避けます。
@dataclass
class ExecutionContext:
    state: Chip8CpuState
    bus: Bus
    display: Display
    keypad: Keypad
    rng: Random
    strict: bool = False

    # @intent:utility_function 現在実行中の命令の先頭アドレス（PCは既に2進んでいる）。
    @property
    def instruction_address(self) -> int:
        return (self.state.pc - 2) & 0xFFFF

# @intent:utility_function 次の命令を読み飛ばします。
def skip_next(ctx: ExecutionContext) -> None:
    ctx.state.pc = (ctx.state.pc + 2) & 0xFFFF
