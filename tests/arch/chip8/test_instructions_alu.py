import unittest
from retro_chip8.arch.chip8.cpu import Chip8Cpu

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.state = self.cpu.get_state()

    def _execute(self, word):
        self.state.pc = 0x200
        self.cpu.load_program(bytes([word >> 8, word & 0xFF]))
        self.cpu.step()

    def test_add_vx_nn_wraps_without_flag(self):
        self.state.v[0x3] = 0xFF
        self.state.vf = 0x55
        # ADD V3, #02
        self._execute(0x7302)
        self.assertEqual(self.state.v[0x3], 0x01)
        self.assertEqual(self.state.vf, 0x55)

    def test_ld_vx_vy(self):
        self.state.v[0x2] = 0x7A
        self._execute(0x8120)
        self.assertEqual(self.state.v[0x1], 0x7A)

    def test_logical(self):
        for word, expected in ((0x8011, 0xFC), (0x8012, 0x30), (0x8013, 0xCC)):
            self.state.v[0x0] = 0xF0
            self.state.v[0x1] = 0x3C
            self._execute(word)
            self.assertEqual(self.state.v[0x0], expected, f"{word:04X}")

    def test_add_vx_vy_carry_all_pairs(self):
        for a in range(256):
            for b in range(0, 256, 17):
                self.state.v[0x0] = a
                self.state.v[0x1] = b
                self._execute(0x8014)
                self.assertEqual(self.state.v[0x0], (a + b) & 0xFF)
                self.assertEqual(self.state.vf, 1 if a + b > 255 else 0)

    def test_sub_no_borrow(self):
        self.state.v[0x0] = 0x30
        self.state.v[0x1] = 0x10
        self._execute(0x8015)
        self.assertEqual(self.state.v[0x0], 0x20)
        self.assertEqual(self.state.vf, 1)

    def test_sub_equal_operands_reports_borrow(self):
        # VX == VY の場合 VF=0（厳密な比較）
        self.state.v[0x0] = 0x42
        self.state.v[0x1] = 0x42
        self._execute(0x8015)
        self.assertEqual(self.state.v[0x0], 0x00)
        self.assertEqual(self.state.vf, 0)

    def test_sub_underflow(self):
        self.state.v[0x0] = 0x10
        self.state.v[0x1] = 0x30
        self._execute(0x8015)
        self.assertEqual(self.state.v[0x0], 0xE0)
        self.assertEqual(self.state.vf, 0)

    def test_subn(self):
        self.state.v[0x0] = 0x10
        self.state.v[0x1] = 0x30
        self._execute(0x8017)
        self.assertEqual(self.state.v[0x0], 0x20)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0x0] = 0x30
        self.state.v[0x1] = 0x30
        self._execute(0x8017)
        self.assertEqual(self.state.v[0x0], 0x00)
        self.assertEqual(self.state.vf, 0)

    def test_shr_uses_vx(self):
        self.state.v[0x0] = 0x05
        self.state.v[0x1] = 0xFF
        self._execute(0x8016)
        self.assertEqual(self.state.v[0x0], 0x02)
        self.assertEqual(self.state.vf, 1)

    def test_shl_uses_vx(self):
        self.state.v[0x0] = 0x81
        self._execute(0x801E)
        self.assertEqual(self.state.v[0x0], 0x02)
        self.assertEqual(self.state.vf, 1)

    def test_vf_as_destination_keeps_result(self):
        # VF自身が演算先の場合、フラグの後に結果が書き込まれる
        self.state.vf = 0xFF
        self.state.v[0x1] = 0x02
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 0x01)

if __name__ == '__main__':
    unittest.main()
