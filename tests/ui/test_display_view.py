# tests/ui/test_display_view.py
import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from retro_chip8.config.models import DisplayConfig
from retro_chip8.ui.display_view import DisplayView, rgba_to_qcolor

class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_rgba_to_qcolor(self):
        color = rgba_to_qcolor(0x11223344)
        self.assertEqual((color.red(), color.green(), color.blue(), color.alpha()), (0x11, 0x22, 0x33, 0x44))

    def test_size_hint_uses_scale(self):
        view = DisplayView(64, 32, DisplayConfig(scale_factor=10))
        self.assertEqual(view.sizeHint().width(), 640)
        self.assertEqual(view.sizeHint().height(), 320)

    def test_set_framebuffer_and_paint(self):
        """
        点灯ピクセル数が反映され、描画処理が例外なく完了することを検証します。
        """
        view = DisplayView(64, 32, DisplayConfig(scale_factor=4))
        frame = [[False] * 64 for _ in range(32)]
        frame[0][0] = True
        frame[31][63] = True
        view.set_framebuffer(frame)
        self.assertEqual(view.lit_pixel_count(), 2)

        view.resize(256, 128)
        self.assertEqual(view.current_scale(), 4)
        image = view.grab()
        self.assertFalse(image.isNull())

    def test_scale_never_below_one(self):
        view = DisplayView(64, 32)
        view.resize(10, 10)
        self.assertEqual(view.current_scale(), 1)

if __name__ == '__main__':
    unittest.main()
