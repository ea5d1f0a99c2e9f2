# src/retro_chip8/ui/display_view.py
"""
フレームバッファ表示ウィジェット。
モノクロのフレームバッファを拡大率に従ってスケーリングし描画します。
"""
from typing import Optional

from PySide6.QtCore import QRect, QSize
from PySide6.QtGui import QColor, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QWidget

from retro_chip8.common.types import Framebuffer
from retro_chip8.config.models import DisplayConfig

# @intent:utility_function RGBA形式の32bit整数をQColorへ変換します。
def rgba_to_qcolor(value: int) -> QColor:
    return QColor((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

# @intent:responsibility フレームバッファの内容を拡大表示するウィジェットを提供します。
class DisplayView(QWidget):
    """
    CHIP-8の画面を表示するウィジェット。
    点灯ピクセルは前景色で塗りつぶし、pixel_outlineが有効なら背景色で枠線を描きます。
    """
    def __init__(self, width: int, height: int, config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config or DisplayConfig()
        self._width = width
        self._height = height
        self._framebuffer: Framebuffer = [[False] * width for _ in range(height)]
        self._fg = rgba_to_qcolor(self._config.fg_color)
        self._bg = rgba_to_qcolor(self._config.bg_color)
        self.setMinimumSize(width, height)

    def sizeHint(self) -> QSize:
        scale = self._config.scale_factor
        return QSize(self._width * scale, self._height * scale)

    # @intent:responsibility 表示するフレームバッファを差し替え、再描画を要求します。
    def set_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._framebuffer = framebuffer
        self.update()

    def lit_pixel_count(self) -> int:
        return sum(sum(1 for pixel in row if pixel) for row in self._framebuffer)

    # @intent:responsibility ウィジェットサイズに合わせた拡大率を算出します（最低1）。
    def current_scale(self) -> int:
        return max(1, min(self.width() // self._width, self.height() // self._height))

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._bg)

        scale = self.current_scale()
        offset_x = (self.width() - self._width * scale) // 2
        offset_y = (self.height() - self._height * scale) // 2
        outline = self._config.pixel_outline and scale > 2
        painter.setPen(QPen(self._bg))

        for y, row in enumerate(self._framebuffer):
            for x, lit in enumerate(row):
                if not lit:
                    continue
                rect = QRect(offset_x + x * scale, offset_y + y * scale, scale, scale)
                painter.fillRect(rect, self._fg)
                if outline:
                    painter.drawRect(rect.adjusted(0, 0, -1, -1))
        painter.end()
