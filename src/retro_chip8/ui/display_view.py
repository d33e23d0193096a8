"""
フレームバッファ表示ウィジェット。

Display の32bitピクセル配列とピッチをそのまま QImage に渡し、
ウィジェットサイズに拡大して描画します。
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QImage, QPainter, QColor

from retro_chip8.arch.chip8.devices import Display

COLOR_BG = "#000000"

# @intent:responsibility フレームバッファを拡大表示するウィジェット。
class DisplayView(QWidget):
    def __init__(self, display: Display, scale: int = 10, parent=None):
        super().__init__(parent)
        self._display = display
        self._scale = scale
        self.setAttribute(Qt.WA_OpaquePaintEvent)
        self.setFocusPolicy(Qt.NoFocus)

    def set_display(self, display: Display) -> None:
        self._display = display
        self.update()

    def sizeHint(self) -> QSize:
        return QSize(self._display.width * self._scale, self._display.height * self._scale)

    # @intent:responsibility 現在のフレームバッファの内容を QImage として返します。
    # @intent:rationale QImage はバッファをコピーせず参照するため、copy() で独立させて返します。
    def render_image(self) -> QImage:
        d = self._display
        data = d.as_bytes()
        image = QImage(data, d.width, d.height, d.pitch, QImage.Format_RGB32)
        return image.copy()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(COLOR_BG))
        painter.drawImage(self.rect(), self.render_image())
        painter.end()
