# src/retro_chip8/ui/register_view.py
"""
CPUのレジスタを表示する読み取り専用ウィジェット。
AbstractCpuのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Optional, Tuple
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.common.types import RegisterLayoutInfo
from retro_chip8.ui.fonts import get_monospace_font_family

GROUP_COLUMNS = 4
GROUP_STYLE = """
    QGroupBox { font-weight: bold; border: 1px solid #262626; border-radius: 3px; margin-top: 18px; color: #DDD; }
    QGroupBox::title { subcontrol-origin: margin; left: 8px; padding: 0 4px; color: #4FC3C3; }
"""

# @intent:responsibility CPUのレジスタ値を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    """
    get_register_layout() のグループ毎に、名前と16進値の組を格子状に並べます。
    値は 0x 接頭辞なしで、レジスタ幅に合わせてゼロ詰めされます（例: "0A", "0200"）。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #101010; color: #C0C0C0;")
        self._root = QVBoxLayout(self)
        self._root.setContentsMargins(4, 4, 4, 4)

        self._font_family = get_monospace_font_family()
        # レジスタ名 -> (値ラベル, 16進桁数)
        self._cells: Dict[str, Tuple[QLabel, int]] = {}
        self._cpu: Optional[AbstractCpu] = None

    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._rebuild()
        self.update_registers()

    def _rebuild(self) -> None:
        while self._root.count():
            widget = self._root.takeAt(0).widget()
            if widget is not None:
                widget.deleteLater()
        self._cells.clear()

        for group in self._cpu.get_register_layout():
            self._root.addWidget(self._build_group(group))
        self._root.addStretch()

    def _build_group(self, group: RegisterLayoutInfo) -> QGroupBox:
        box = QGroupBox(group.group_name)
        box.setStyleSheet(GROUP_STYLE)
        grid = QGridLayout(box)
        grid.setContentsMargins(8, 14, 8, 8)
        grid.setHorizontalSpacing(8)

        for idx, reg in enumerate(group.registers):
            digits = (reg.width + 3) // 4
            name = QLabel(reg.name)
            value = QLabel("0" * digits)
            value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD75F;")
            value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)

            row, col = divmod(idx, GROUP_COLUMNS)
            grid.addWidget(name, row, col * 2)
            grid.addWidget(value, row, col * 2 + 1)
            self._cells[reg.name] = (value, digits)
        return box

    # @intent:responsibility 現在のCPU状態を取得し、レジスタの表示値を更新します。
    def update_registers(self) -> None:
        if self._cpu is None:
            return
        for name, reg_value in self._cpu.get_register_map().items():
            cell = self._cells.get(name)
            if cell is not None:
                label, digits = cell
                label.setText(f"{reg_value:0{digits}X}")

    def displayed_value(self, name: str) -> str:
        return self._cells[name][0].text()
