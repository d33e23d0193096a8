import sys
import unittest
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QSize

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.ui.display_view import DisplayView
from retro_chip8.ui.register_view import RegisterView

class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication(sys.argv)

    def test_size_hint_uses_scale(self):
        view = DisplayView(Chip8Cpu().display, scale=4)
        self.assertEqual(view.sizeHint(), QSize(256, 128))

    def test_render_image_matches_framebuffer(self):
        cpu = Chip8Cpu()
        cpu.display.toggle(5, 3)
        image = DisplayView(cpu.display).render_image()
        self.assertEqual((image.width(), image.height()), (64, 32))
        self.assertEqual(image.pixel(5, 3) & 0xFFFFFF, 0xFFFFFF)
        self.assertEqual(image.pixel(0, 0) & 0xFFFFFF, 0x000000)

    def test_render_image_is_detached_from_buffer(self):
        cpu = Chip8Cpu()
        view = DisplayView(cpu.display)
        image = view.render_image()
        cpu.display.toggle(0, 0)
        self.assertEqual(image.pixel(0, 0) & 0xFFFFFF, 0x000000)

class TestRegisterView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication(sys.argv)

    def test_displays_hex_values(self):
        cpu = Chip8Cpu()
        view = RegisterView()
        view.set_cpu(cpu)
        self.assertEqual(view.displayed_value("PC"), "0200")

        cpu.get_state().v[0xA] = 0x0A
        cpu.get_state().i = 0x2F0
        view.update_registers()
        self.assertEqual(view.displayed_value("VA"), "0A")
        self.assertEqual(view.displayed_value("I"), "02F0")
        self.assertEqual(view.displayed_value("SP"), "00")

if __name__ == '__main__':
    unittest.main()
