# src/retro_chip8/arch/chip8/memory.py
"""
CHIP-8 のメモリマップと組み込みフォント。

0x000-0x04F: 未使用
0x050-0x09F: 組み込みフォント (16文字 x 5バイト)
0x0A0-0x1FF: 未使用
0x200-0xFFF: プログラムおよびワーク領域

アドレス空間全体が1つのRAMです。フォント領域も実行中は通常のメモリとして読み書きでき、
reset() の度に FONT_SET から書き戻されます。
"""
from retro_chip8.transport.bus import Bus, RAM

MEMORY_SIZE = 0x1000
FONT_START_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5
PROGRAM_START_ADDRESS = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START_ADDRESS

# @intent:constant 16進数字 0-F のスプライトパターン。メモリ上のコピーが書き換えられても、この定数は変化しません。
FONT_SET = (
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
)
FONT_END_ADDRESS = FONT_START_ADDRESS + len(FONT_SET) - 1

# @intent:responsibility 標準的なCHIP-8のメモリマップを持つバスを生成します。
def build_memory_bus() -> Bus:
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    return bus

# @intent:responsibility 不変のFONT_SETをフォント領域に書き込みます。
def install_font(bus: Bus) -> None:
    bus.load(FONT_START_ADDRESS, FONT_SET)
