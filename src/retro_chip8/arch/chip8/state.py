# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field, replace
from typing import List

from retro_chip8.core.state import CpuState

REGISTER_COUNT = 16
STACK_DEPTH = 16
PROGRAM_START = 0x200

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP, スタック, タイマ）の状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spはスタックに積まれている要素数（0-16）を表します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x000          # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    opcode: int = 0x0000    # 最後にフェッチした命令ワード

    # @intent:accessor VFはキャリー/ボロー/衝突フラグを兼ねるため、専用のプロパティを提供します。
    @property
    def vf(self) -> int:
        return self.v[0xF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[0xF] = value & 0xFF

    def copy(self) -> 'Chip8CpuState':
        return replace(self, v=list(self.v), stack=list(self.stack))
