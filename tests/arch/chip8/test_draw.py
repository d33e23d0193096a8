# tests/arch/chip8/test_draw.py
"""
描画命令（00E0, DXYN）とフレームバッファの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.devices import PIXEL_ON, PIXEL_OFF
from retro_chip8.arch.chip8.memory import FONT_START_ADDRESS
from retro_chip8.core.errors import OutOfBoundsError

# @intent:test_suite XOR描画、衝突検出、折り返し、画面消去を検証します。

def run(cpu: Chip8Cpu, *words: int) -> None:
    program = bytearray()
    for word in words:
        program += bytes([word >> 8, word & 0xFF])
    cpu.load_program(bytes(program))
    for _ in words:
        cpu.step()

@pytest.fixture
def cpu():
    return Chip8Cpu()

def test_draw_font_glyph(cpu):
    # I=フォント"0", V0=0, V1=0, DRW V0, V1, 5
    run(cpu, 0xA000 | FONT_START_ADDRESS, 0xD015)
    display = cpu.display
    assert {(x, 0) for x in range(4)} <= display.lit_pixels()
    assert display.is_on(0, 1) and display.is_on(3, 1)
    assert not display.is_on(1, 1)
    assert cpu.get_state().vf == 0

# @intent:test_case_xor 同じスプライトを同じ位置に2回描くと画面が元に戻り、VF=1になることを検証します。
def test_draw_twice_erases_and_reports_collision(cpu):
    state = cpu.get_state()
    state.v[0x0] = 10
    state.v[0x1] = 7
    run(cpu, 0xA000 | FONT_START_ADDRESS, 0xD015, 0xD015)
    assert cpu.display.lit_pixels() == set()
    assert state.vf == 1

# @intent:test_case_xor 既に点灯しているピクセルと一部重なる位置でも、2回描くと描画前の画面に戻ることを検証します。
def test_draw_twice_over_lit_pixels_restores_screen(cpu):
    state = cpu.get_state()
    display = cpu.display
    for x, y in ((0, 0), (3, 1), (1, 1), (40, 20)):
        display.toggle(x, y)
    before = display.lit_pixels()

    cpu.load_program(bytes([0xA0 | (FONT_START_ADDRESS >> 8), FONT_START_ADDRESS & 0xFF, 0xD0, 0x15, 0xD0, 0x15]))
    cpu.step()
    cpu.step()
    assert state.vf == 1
    assert (0, 0) not in display.lit_pixels()

    state.vf = 0
    cpu.step()
    assert display.lit_pixels() == before
    assert state.vf == 1

def test_draw_without_collision_clears_vf(cpu):
    state = cpu.get_state()
    state.vf = 1
    state.v[0x0] = 0
    state.v[0x1] = 0
    run(cpu, 0xA000 | FONT_START_ADDRESS, 0xD011)
    assert state.vf == 0

def test_draw_wraps_around_edges(cpu):
    state = cpu.get_state()
    state.v[0x0] = 62
    state.v[0x1] = 31
    state.i = 0x300
    cpu.get_bus().load(0x300, [0xFF, 0x80])
    run(cpu, 0xD012)
    lit = cpu.display.lit_pixels()
    assert (62, 31) in lit and (63, 31) in lit
    assert (0, 31) in lit and (5, 31) in lit
    assert (62, 0) in lit
    assert len(lit) == 9

def test_draw_origin_is_taken_modulo_screen(cpu):
    state = cpu.get_state()
    state.v[0x0] = 64 + 3
    state.v[0x1] = 32 + 2
    state.i = 0x300
    cpu.get_bus().load(0x300, [0x80])
    run(cpu, 0xD011)
    assert cpu.display.lit_pixels() == {(3, 2)}

def test_draw_coordinates_read_before_flag_reset(cpu):
    state = cpu.get_state()
    state.vf = 5
    state.v[0x0] = 0
    state.i = 0x300
    cpu.get_bus().load(0x300, [0x80])
    run(cpu, 0xD0F1)
    assert cpu.display.lit_pixels() == {(0, 5)}

def test_draw_zero_rows_is_noop(cpu):
    state = cpu.get_state()
    state.vf = 1
    run(cpu, 0xD000)
    assert cpu.display.lit_pixels() == set()
    assert state.vf == 0

def test_draw_out_of_range_sprite_leaves_screen_untouched(cpu):
    state = cpu.get_state()
    state.i = 0xFFE
    with pytest.raises(OutOfBoundsError):
        run(cpu, 0xD005)
    assert cpu.display.lit_pixels() == set()
    assert state.pc == 0x200

def test_cls(cpu):
    run(cpu, 0xA000 | FONT_START_ADDRESS, 0xD015, 0x00E0)
    assert all(pixel == PIXEL_OFF for pixel in cpu.display.pixels)

def test_framebuffer_layout(cpu):
    display = cpu.display
    assert (display.width, display.height) == (64, 32)
    assert len(display.pixels) == 64 * 32
    assert display.pitch == display.pixels.itemsize * 64
    assert display.toggle(1, 2) is False
    assert display.pixels[2 * 64 + 1] == PIXEL_ON
    assert display.toggle(1, 2) is True
    with pytest.raises(OutOfBoundsError):
        display.is_on(64, 0)
