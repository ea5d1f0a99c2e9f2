# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
60HzのQTimerでフレームドライバを駆動し、キー入力をキーパッドへ、
フレームバッファを表示ウィジェットへ、サウンドタイマーをビープ音へ橋渡しします。
"""
import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import QDockWidget, QMainWindow

from retro_chip8.config.models import SystemConfig
from retro_chip8.core.state import RunState
from retro_chip8.emulator.system import Chip8System
from .audio import Beeper
from .display_view import DisplayView
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# @intent:constant 1フレームの間隔(ms)。約60Hz。
FRAME_INTERVAL_MS = 16

# @intent:responsibility アプリケーションのメインウィンドウを定義し、外部コラボレータ（描画・音声・入力）を組み立てます。
class MainWindow(QMainWindow):
    """
    Esc/ウィンドウクローズで終了、Spaceで一時停止の切り替え、
    一時停止中はF10で1命令ずつ実行します。
    """
    def __init__(self, system: Chip8System, config: SystemConfig, title: str = "Retro CHIP-8",
                 beeper: Optional[Beeper] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self._system = system
        self._config = config
        self._keymap = {name.upper(): index for name, index in config.keymap.items()}

        machine = config.machine
        self.display_view = DisplayView(machine.display_width, machine.display_height, config.display, self)
        self.setCentralWidget(self.display_view)

        self.register_view = RegisterView(self)
        self.register_view.set_cpu(system.cpu)
        dock = QDockWidget("Registers", self)
        dock.setWidget(self.register_view)
        dock.setAllowedAreas(Qt.RightDockWidgetArea | Qt.LeftDockWidgetArea)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

        self._beeper = beeper if beeper is not None else Beeper(config.audio)

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self.run_frame)

    def start(self) -> None:
        self._timer.start(FRAME_INTERVAL_MS)

    # @intent:responsibility 1フレーム分の実行と、描画・音声・表示の更新を行います。
    def run_frame(self) -> None:
        if self._system.run_state == RunState.QUIT:
            self.close()
            return

        snapshots = self._system.run_frame()
        self.display_view.set_framebuffer(self._system.framebuffer())
        self._beeper.set_active(self._system.sound_active)
        self.register_view.refresh(snapshots[-1] if snapshots else None)

        if self._system.run_state == RunState.QUIT:
            self.close()

    # @intent:utility_function Qtのキーコードをキーマップの表示名へ変換します。ASCII印字可能文字のみ対象。
    @staticmethod
    def key_name(key: int) -> Optional[str]:
        if 0x20 < key < 0x7F:
            return chr(key).upper()
        return None

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key == Qt.Key_Escape:
            self._system.quit()
            self.close()
            return
        if event.isAutoRepeat():
            return
        if key == Qt.Key_Space:
            self._system.toggle_pause()
            self.register_view.refresh()
            return
        if key == Qt.Key_F10 and self._system.run_state == RunState.PAUSED:
            snapshot = self._system.step()
            self.display_view.set_framebuffer(self._system.framebuffer())
            self.register_view.refresh(snapshot)
            return

        index = self._keymap.get(self.key_name(key))
        if index is None:
            super().keyPressEvent(event)
            return
        self._system.set_key(index, True)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if event.isAutoRepeat():
            return
        index = self._keymap.get(self.key_name(event.key()))
        if index is None:
            super().keyReleaseEvent(event)
            return
        self._system.set_key(index, False)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._timer.stop()
        self._beeper.stop()
        self._system.quit()
        super().closeEvent(event)
