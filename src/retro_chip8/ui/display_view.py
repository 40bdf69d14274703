# src/retro_chip8/ui/display_view.py
"""
CHIP-8 フレームバッファ表示ウィジェット。

64x32 の 0/1 グリッドを指定倍率で単色描画します。色以外の加工は行いません。
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor

from retro_chip8.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility 受け取ったフレームを保持し、再描画要求に応じてピクセルを描画します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._frame = bytes(DISPLAY_WIDTH * DISPLAY_HEIGHT)
        self.setMinimumSize(DISPLAY_WIDTH * 2, DISPLAY_HEIGHT * 2)

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    # @intent:responsibility 新しいフレームを設定し、ウィジェットの再描画をスケジュールします。
    def set_frame(self, frame: bytes) -> None:
        if len(frame) != DISPLAY_WIDTH * DISPLAY_HEIGHT:
            raise ValueError(f"Frame must be {DISPLAY_WIDTH * DISPLAY_HEIGHT} pixels, got {len(frame)}")
        self._frame = bytes(frame)
        self.update()

    def frame(self) -> bytes:
        return self._frame

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)

        # ウィジェットのサイズに合わせて整数倍率を決める
        scale = max(1, min(self.width() // DISPLAY_WIDTH, self.height() // DISPLAY_HEIGHT))
        offset_x = (self.width() - DISPLAY_WIDTH * scale) // 2
        offset_y = (self.height() - DISPLAY_HEIGHT * scale) // 2

        for y in range(DISPLAY_HEIGHT):
            row = y * DISPLAY_WIDTH
            for x in range(DISPLAY_WIDTH):
                if self._frame[row + x]:
                    painter.fillRect(offset_x + x * scale, offset_y + y * scale, scale, scale, self._foreground)
        painter.end()
