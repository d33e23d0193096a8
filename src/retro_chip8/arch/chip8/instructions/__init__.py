# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import List

from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, Instruction, InstructionKind
from .maps import DECODE_MAP, EXECUTE_MAP, MNEMONIC_MAP

# @intent:responsibility 命令ワードを命令種別とオペランドに分解します。状態に依存しない純粋関数です。
def decode_word(word: int) -> Instruction:
    """
    16bitの命令ワードをデコードし、Instructionを返します。
    未定義のサブオペコードは InstructionKind.UNKNOWN になります。
    """
    word &= 0xFFFF
    entry = DECODE_MAP[word >> 12]
    if isinstance(entry, InstructionKind):
        return Instruction(entry, word)
    mask, sub_map = entry
    return Instruction(sub_map.get(word & mask, InstructionKind.UNKNOWN), word)

# @intent:responsibility デコード済み命令のオペランドを表示用文字列に整形します。
def format_operands(instruction: Instruction) -> List[str]:
    _, templates = MNEMONIC_MAP[instruction.kind]
    fields = {
        "x": instruction.x, "y": instruction.y, "n": instruction.n,
        "nn": instruction.nn, "nnn": instruction.nnn, "word": instruction.word,
    }
    return [template.format(**fields) for template in templates]

# @intent:responsibility 命令ワードをデコードし、Operationオブジェクトを返します。
def decode_opcode(word: int) -> Operation:
    instruction = decode_word(word)
    mnemonic, _ = MNEMONIC_MAP[instruction.kind]
    return Operation(
        opcode_hex=f"{instruction.word:04X}",
        mnemonic=mnemonic,
        operands=format_operands(instruction),
        operand_bytes=instruction.raw_bytes,
        cycle_count=1,
        length=2,
        decoded=instruction,
    )

# @intent:responsibility デコードされた命令を実行します。
def execute_instruction(operation: Operation, ctx: ExecutionContext) -> None:
    instruction: Instruction = operation.decoded
    EXECUTE_MAP[instruction.kind](ctx, instruction)
