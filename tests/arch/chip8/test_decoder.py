# tests/arch/chip8/test_decoder.py
"""
命令デコーダの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.instructions import decode_opcode, decode_word, format_operands
from retro_chip8.arch.chip8.instructions.base import InstructionKind as K
from retro_chip8.arch.chip8.instructions.maps import EXECUTE_MAP, MNEMONIC_MAP

# @intent:test_suite 命令ワードから命令種別とオペランドへの分解を検証します。

@pytest.mark.parametrize("word, kind", [
    (0x00E0, K.CLS),
    (0x00EE, K.RET),
    (0x1234, K.JP),
    (0x2345, K.CALL),
    (0x3A12, K.SE_VX_NN),
    (0x4A12, K.SNE_VX_NN),
    (0x5AB0, K.SE_VX_VY),
    (0x6A12, K.LD_VX_NN),
    (0x7A12, K.ADD_VX_NN),
    (0x8AB0, K.LD_VX_VY),
    (0x8AB1, K.OR),
    (0x8AB2, K.AND),
    (0x8AB3, K.XOR),
    (0x8AB4, K.ADD_VX_VY),
    (0x8AB5, K.SUB),
    (0x8AB6, K.SHR),
    (0x8AB7, K.SUBN),
    (0x8ABE, K.SHL),
    (0x9AB0, K.SNE_VX_VY),
    (0xA123, K.LD_I),
    (0xB123, K.JP_V0),
    (0xCA12, K.RND),
    (0xDAB5, K.DRW),
    (0xEA9E, K.SKP),
    (0xEAA1, K.SKNP),
    (0xFA07, K.LD_VX_DT),
    (0xFA0A, K.LD_VX_K),
    (0xFA15, K.LD_DT_VX),
    (0xFA18, K.LD_ST_VX),
    (0xFA1E, K.ADD_I_VX),
    (0xFA29, K.LD_F_VX),
    (0xFA33, K.LD_B_VX),
    (0xFA55, K.LD_I_VX),
    (0xFA65, K.LD_VX_I),
])
def test_decode_kind(word, kind):
    assert decode_word(word).kind == kind

@pytest.mark.parametrize("word", [0x8AB8, 0x8ABF, 0xEA00, 0xFA00, 0xFAFF, 0x00E5])
def test_decode_unknown(word):
    assert decode_word(word).kind == K.UNKNOWN

def test_zero_word_follows_low_nibble():
    # 0NNN (機械語呼び出し) は区別せず、下位4bitで分岐する
    assert decode_word(0x0000).kind == K.CLS
    assert decode_word(0x0123).kind == K.UNKNOWN

def test_operand_fields():
    ins = decode_word(0xD12F)
    assert (ins.x, ins.y, ins.n, ins.nn, ins.nnn) == (0x1, 0x2, 0xF, 0x2F, 0x12F)
    assert ins.raw_bytes == [0xD1, 0x2F]

def test_format_operands():
    assert format_operands(decode_word(0xA2F0)) == ["I", "$2F0"]
    assert format_operands(decode_word(0xD125)) == ["V1", "V2", "5"]
    assert format_operands(decode_word(0x8AB8)) == ["$8AB8"]

def test_decode_opcode_operation():
    op = decode_opcode(0x2345)
    assert op.opcode_hex == "2345"
    assert op.mnemonic == "CALL"
    assert op.operands == ["$345"]
    assert op.length == 2
    assert op.decoded.kind == K.CALL

def test_every_kind_is_dispatchable():
    for kind in K:
        assert kind in EXECUTE_MAP
        assert kind in MNEMONIC_MAP
