# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

ホストは reset() → load_program() の後、一定間隔で step() を呼び出し、
その合間にキーパッドへの書き込みとフレームバッファ・タイマの読み出しを行います。
"""
import logging
import os
from random import Random
from typing import Dict, List, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.common.types import RegisterLayoutInfo, RegisterInfo
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.devices import Display, Keypad
from retro_chip8.arch.chip8.memory import (
    MAX_PROGRAM_SIZE, PROGRAM_START_ADDRESS, build_memory_bus, install_font
)
from retro_chip8.arch.chip8.instructions import ExecutionContext, decode_opcode, execute_instruction

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマ更新）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 インタプリタ。メモリ、レジスタ、スタック、タイマ、キーパッド、フレームバッファを所有します。

    strict=True の場合、未定義のサブオペコードは UnknownEncodingError として報告されます。
    False（既定）の場合は何もしない命令として扱われます。
    """
    def __init__(self, bus: Optional[Bus] = None, strict: bool = False, rng: Optional[Random] = None):
        self._display = Display()
        self._keypad = Keypad()
        self._rng = rng if rng is not None else Random()
        self._strict = strict
        self._program_name = ""
        super().__init__(bus if bus is not None else build_memory_bus())
        self.reset()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(pc=PROGRAM_START_ADDRESS)

    # @intent:responsibility 全ての状態をゼロクリアし、PCを0x200に設定し、フォントを再配置します。
    def reset(self) -> None:
        super().reset()
        self._bus.clear()
        install_font(self._bus)
        self._display.clear()
        self._keypad.clear()
        self._program_name = ""

    # @intent:responsibility プログラムを0x200から順に配置し、表示名を記録します。
    # @intent:pre-condition len(data) <= 3584。超える場合はメモリに触れる前に ProgramTooLargeError を送出します。
    def load_program(self, data: bytes, name: str = "") -> None:
        """
        プログラムのバイト列を 0x200 以降にロードします。他の状態はリセットしません。
        name はファイルパス等の識別子で、そのベース名が program_name になります。
        """
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(len(data), MAX_PROGRAM_SIZE)
        self._bus.load(PROGRAM_START_ADDRESS, data)
        self._program_name = os.path.basename(name)
        logger.debug("Loaded %d bytes as '%s'", len(data), self._program_name)

    # @intent:responsibility PCから2バイトを読み出し、ビッグエンディアンの命令ワードとして返します。
    def _fetch(self) -> int:
        pc = self._state.pc
        self._bus.check_range(pc, 2)
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        ctx = ExecutionContext(
            state=self._state,
            bus=self._bus,
            display=self._display,
            keypad=self._keypad,
            rng=self._rng,
            strict=self._strict,
        )
        execute_instruction(operation, ctx)

    # @intent:responsibility 実行した命令ワードを記録し、命令に関わらず両タイマを1ずつ減算します（0で止まる）。
    def _end_cycle(self, operation: Operation) -> None:
        state = self._state
        state.opcode = operation.decoded.word
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # --- Host interface ---

    @property
    def display(self) -> Display:
        return self._display

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def program_name(self) -> str:
        return self._program_name

    @property
    def strict(self) -> bool:
        return self._strict

    @strict.setter
    def strict(self, value: bool) -> None:
        self._strict = value

    @property
    def delay_timer(self) -> int:
        return self._state.delay_timer

    @property
    def sound_timer(self) -> int:
        return self._state.sound_timer

    # @intent:responsibility サウンドタイマが0でない間、ホストはブザーを鳴らすべきです。
    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # --- UI helpers ---

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{idx:X}": value for idx, value in enumerate(s.v)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return registers

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{idx:X}", 8) for idx in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [RegisterInfo("DT", 8), RegisterInfo("ST", 8)]),
        ]

    # @intent:responsibility CHIP-8に独立したフラグレジスタはないため、VFと音の状態をフラグとして見せます。
    def get_flag_state(self) -> Dict[str, bool]:
        return {"VF": self._state.vf != 0, "SOUND": self.sound_active}
