# tests/arch/chip8/test_chip8_cpu.py
"""
retro_chip8.arch.chip8.cpu モジュールの単体テスト。
リセット、プログラムのロード、命令サイクル全体の振る舞いを検証します。
"""
import pytest
from random import Random

from retro_chip8.arch.chip8 import Chip8Cpu, Chip8CpuState
from retro_chip8.arch.chip8.memory import FONT_SET, FONT_START_ADDRESS, MAX_PROGRAM_SIZE
from retro_chip8.core.errors import Chip8Error, OutOfBoundsError, ProgramTooLargeError
from retro_chip8.core.snapshot import Snapshot

# @intent:test_suite CHIP-8インタプリタのホスト向けインターフェースと命令サイクルを検証します。

@pytest.fixture
def cpu():
    return Chip8Cpu(rng=Random(0))

class TestReset:
    def test_initial_state(self, cpu):
        state = cpu.get_state()
        assert isinstance(state, Chip8CpuState)
        assert state.pc == 0x200
        assert state.v == [0] * 16
        assert (state.i, state.sp, state.delay_timer, state.sound_timer) == (0, 0, 0, 0)
        assert cpu.display.lit_pixels() == set()
        assert cpu.program_name == ""

    def test_font_is_installed(self, cpu):
        bus = cpu.get_bus()
        assert [bus.peek(FONT_START_ADDRESS + k) for k in range(len(FONT_SET))] == list(FONT_SET)

    # @intent:test_case_reset reset() がレジスタ、メモリ、画面、キー、表示名を全て初期化することを検証します。
    def test_reset_clears_everything(self, cpu):
        cpu.load_program(bytes([0x60, 0x05, 0xA0, 0x50, 0xD0, 0x05]), "roms/demo.ch8")
        cpu.keypad.press(0x4)
        for _ in range(3):
            cpu.step()
        cpu.get_state().delay_timer = 9

        cpu.reset()

        state = cpu.get_state()
        assert state.pc == 0x200
        assert state.v == [0] * 16
        assert state.i == 0
        assert state.delay_timer == 0
        assert cpu.get_bus().peek(0x200) == 0
        assert cpu.display.lit_pixels() == set()
        assert cpu.keypad.first_pressed() is None
        assert cpu.program_name == ""
        assert cpu.cycle_count == 0
        assert cpu.get_bus().peek(FONT_START_ADDRESS) == FONT_SET[0]

class TestLoadProgram:
    def test_load_places_bytes_at_program_start(self, cpu):
        cpu.load_program(bytes([0x12, 0x34, 0x56]), "/tmp/games/PONG.ch8")
        bus = cpu.get_bus()
        assert [bus.peek(0x200 + k) for k in range(3)] == [0x12, 0x34, 0x56]
        assert cpu.program_name == "PONG.ch8"

    def test_load_maximum_size(self, cpu):
        cpu.load_program(bytes([0xAB]) * MAX_PROGRAM_SIZE)
        assert cpu.get_bus().peek(0xFFF) == 0xAB

    # @intent:test_case_size 3585バイトのプログラムは拒否され、メモリは変更されないことを検証します。
    def test_load_too_large(self, cpu):
        with pytest.raises(ProgramTooLargeError) as excinfo:
            cpu.load_program(bytes([0xAB]) * (MAX_PROGRAM_SIZE + 1), "big.ch8")
        assert excinfo.value.size == MAX_PROGRAM_SIZE + 1
        assert cpu.get_bus().peek(0x200) == 0
        assert cpu.program_name == ""

    def test_load_empty_program(self, cpu):
        cpu.load_program(b"")
        assert cpu.get_state().pc == 0x200

class TestCycle:
    def test_simple_program(self, cpu):
        # LD V0, #05 / ADD V0, #03
        cpu.load_program(bytes([0x60, 0x05, 0x70, 0x03]))
        cpu.step()
        cpu.step()
        state = cpu.get_state()
        assert state.v[0] == 0x08
        assert state.pc == 0x204
        assert state.opcode == 0x7003

    def test_snapshot_contents(self, cpu):
        cpu.load_program(bytes([0x6A, 0x05]))
        snapshot = cpu.step()
        assert isinstance(snapshot, Snapshot)
        assert snapshot.operation.opcode_hex == "6A05"
        assert snapshot.metadata.symbol_info == "LD VA, #05"
        assert snapshot.state.v[0xA] == 0x05
        assert snapshot.state.pc == 0x202

    def test_timers_tick_once_per_cycle_and_stop_at_zero(self, cpu):
        # LD V1, #02 / LD DT, V1 / JP $204
        cpu.load_program(bytes([0x61, 0x02, 0xF1, 0x15, 0x12, 0x04]))
        cpu.step()
        cpu.step()
        assert cpu.delay_timer == 1
        cpu.step()
        assert cpu.delay_timer == 0
        cpu.step()
        assert cpu.delay_timer == 0

    def test_sound_active(self, cpu):
        cpu.load_program(bytes([0x60, 0x02, 0xF0, 0x18]))
        cpu.step()
        assert not cpu.sound_active
        cpu.step()
        assert cpu.sound_timer == 1
        assert cpu.sound_active
        assert cpu.get_flag_state()["SOUND"] is True

    def test_wait_for_key_keeps_pc(self, cpu):
        cpu.load_program(bytes([0xF0, 0x0A]))
        for _ in range(3):
            cpu.step()
        assert cpu.get_state().pc == 0x200
        cpu.keypad.press(0xB)
        cpu.step()
        assert cpu.get_state().pc == 0x202
        assert cpu.get_state().v[0] == 0xB

    # @intent:test_case_atomic メモリ末尾を越えるフェッチは失敗し、状態が一切変化しないことを検証します。
    def test_fetch_past_end_of_memory(self, cpu):
        state = cpu.get_state()
        state.pc = 0xFFF
        state.delay_timer = 5
        with pytest.raises(OutOfBoundsError):
            cpu.step()
        assert state.pc == 0xFFF
        assert state.delay_timer == 5
        assert state.opcode == 0

    def test_failed_cycle_skips_timers(self, cpu):
        cpu.load_program(bytes([0x00, 0xEE]))
        cpu.get_state().delay_timer = 3
        with pytest.raises(Chip8Error):
            cpu.step()
        assert cpu.delay_timer == 3

    def test_trace_hook_receives_each_cycle(self, cpu):
        seen = []
        cpu.set_trace_hook(seen.append)
        cpu.load_program(bytes([0x60, 0x01, 0x61, 0x02]))
        cpu.step()
        cpu.step()
        assert [s.operation.opcode_hex for s in seen] == ["6001", "6102"]

    def test_strict_from_constructor(self):
        cpu = Chip8Cpu(strict=True)
        assert cpu.strict
        cpu.load_program(bytes([0xF0, 0xFF]))
        with pytest.raises(Chip8Error):
            cpu.step()

class TestRegisterViewHelpers:
    def test_register_map(self, cpu):
        cpu.get_state().v[0xC] = 0x42
        registers = cpu.get_register_map()
        assert registers["VC"] == 0x42
        assert registers["PC"] == 0x200
        assert set(registers) >= {"I", "SP", "DT", "ST"}

    def test_register_layout_covers_map(self, cpu):
        names = {reg.name for group in cpu.get_register_layout() for reg in group.registers}
        assert names == set(cpu.get_register_map())
