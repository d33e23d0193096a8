# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。

ホスト側の実行ループ（一定間隔での step() 呼び出し）、描画、キー入力を担当します。
インタプリタ自体はスレッドを持たないため、全ての呼び出しはGUIスレッドの QTimer から行います。
"""
import logging
from typing import Dict, Optional, Tuple

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar, QFileDialog, QMessageBox
from PySide6.QtGui import QPalette, QColor, QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.memory import PROGRAM_START_ADDRESS
from retro_chip8.config.models import HostConfig
from retro_chip8.core.errors import Chip8Error
from retro_chip8.loader.loader import RomLoader
from .display_view import DisplayView
from .register_view import RegisterView
from .fonts import get_monospace_font_family

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Retro Chip8"
RENDER_INTERVAL_MS = 16

# @intent:responsibility キー名 → キーパッド番号 の対応表を、Qtのキーコード → キーパッド番号 に変換します。
def resolve_key_bindings(bindings: Dict[str, int]) -> Dict[int, int]:
    resolved = {}
    for name, pad in bindings.items():
        key = getattr(Qt.Key, f"Key_{name}", None)
        if key is None:
            logger.warning("Unknown key name '%s' in key bindings, ignored", name)
            continue
        resolved[int(getattr(key, "value", key))] = pad
    return resolved

# @intent:responsibility アプリケーションのメインウィンドウを定義し、実行ループとUIコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, cpu: Chip8Cpu, host: Optional[HostConfig] = None, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.host = host or HostConfig()
        self._key_map = resolve_key_bindings(self.host.key_bindings)
        self._program: Optional[Tuple[bytes, str]] = None

        self._set_dark_theme()
        self.display_view = DisplayView(cpu.display, self.host.scale)
        self.setCentralWidget(self.display_view)
        self._create_register_dock()
        self._create_toolbar()
        self._create_menus()

        # @intent:rationale 命令実行と描画の周期を分離します（描画は約60Hz）。
        self._cycle_timer = QTimer(self)
        self._cycle_timer.timeout.connect(self._run_cycle)
        self._render_timer = QTimer(self)
        self._render_timer.timeout.connect(self._refresh_view)

        self._update_title()
        self._update_ui_state(False)

    # --- Run control ---

    @property
    def is_running(self) -> bool:
        return self._cycle_timer.isActive()

    # @intent:responsibility 実行ループを開始します。
    @Slot()
    def start(self):
        self._cycle_timer.start(self.host.cycle_delay_ms)
        self._render_timer.start(RENDER_INTERVAL_MS)
        self._update_ui_state(True)

    # @intent:responsibility 実行ループを停止します。
    @Slot()
    def pause(self):
        self._cycle_timer.stop()
        self._render_timer.stop()
        self._refresh_view()
        self._update_ui_state(False)

    # @intent:responsibility 1サイクル実行します。致命的エラーの場合は実行を止めて報告します。
    @Slot()
    def _run_cycle(self) -> bool:
        try:
            self.cpu.step()
        except Chip8Error as e:
            self.pause()
            logger.error("Execution stopped at PC=%03X: %s", self.cpu.get_state().pc, e)
            QMessageBox.critical(self, "Execution Error", f"{type(e).__name__}: {e}")
            return False
        return True

    @Slot()
    def _step_once(self):
        if self._run_cycle():
            self._refresh_view()

    @Slot()
    def _refresh_view(self):
        self.display_view.update()
        self.register_view.update_registers()

    # @intent:responsibility ROMを選び直して最初から実行できる状態にします。
    @Slot()
    def _load_rom_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            self.load_rom(file_name)

    # @intent:responsibility ROMを読み込み、CPUをリセットしてからロードします。失敗時は現在の状態を保ちます。
    def load_rom(self, file_name: str) -> bool:
        was_running = self.is_running
        self.pause()
        try:
            size = RomLoader().load_rom(file_name, self.cpu, reset=True)
        except (OSError, Chip8Error) as e:
            logger.error("Failed to load ROM '%s': %s", file_name, e)
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")
            return False

        bus = self.cpu.get_bus()
        image = bytes(bus.peek(PROGRAM_START_ADDRESS + k) for k in range(size))
        self._program = (image, file_name)
        self._refresh_view()
        self._update_title()
        if was_running:
            self.start()
        return True

    # @intent:responsibility reset() はメモリもクリアするため、直前のROMを再ロードして初期状態に戻します。
    @Slot()
    def _reset(self):
        self.cpu.reset()
        if self._program is not None:
            data, name = self._program
            self.cpu.load_program(data, name)
        self._refresh_view()

    # --- Keyboard ---

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Escape:
            self.close()
            return
        pad = self._key_map.get(event.key())
        if pad is None:
            super().keyPressEvent(event)
            return
        if not event.isAutoRepeat():
            self.cpu.keypad.press(pad)

    def keyReleaseEvent(self, event: QKeyEvent):
        pad = self._key_map.get(event.key())
        if pad is None:
            super().keyReleaseEvent(event)
            return
        if not event.isAutoRepeat():
            self.cpu.keypad.release(pad)

    # --- Construction ---

    def _update_title(self):
        name = self.cpu.program_name
        self.setWindowTitle(f"{WINDOW_TITLE} - {name}" if name else WINDOW_TITLE)

    def _update_ui_state(self, is_running: bool):
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.pause_action.setEnabled(is_running)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")
        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_file)
        file_menu.addAction(self.load_rom_action)

    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.pause_action = QAction("Pause", self)
        self.pause_action.triggered.connect(self.pause)
        toolbar.addAction(self.pause_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step_once)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    def _create_register_dock(self):
        dock = QDockWidget("Registers", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self.cpu)
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow, QToolBar {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
        """)

    def closeEvent(self, event: QCloseEvent):
        self._cycle_timer.stop()
        self._render_timer.stop()
        event.accept()
