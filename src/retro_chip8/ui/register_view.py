# src/retro_chip8/ui/register_view.py
"""
レジスタと実行状態を表示するウィジェット。
CPUのレジスタレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QVBoxLayout, QWidget

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Snapshot

# @intent:constant 1行に並べるレジスタ数。
COLUMNS = 4

# @intent:responsibility レジスタ値、実行状態、直前の命令を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._fixed_font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
        self._value_labels: Dict[str, QLabel] = {}
        self._hex_widths: Dict[str, int] = {}
        self._cpu: Optional[AbstractCpu] = None

        self._status_label = QLabel("")
        self._status_label.setFont(self._fixed_font)
        self._instruction_label = QLabel("")
        self._instruction_label.setFont(self._fixed_font)
        self._instruction_label.setStyleSheet("color: #00AAAA;")

    # @intent:responsibility 表示対象のCPUを設定し、レジスタのグリッドを構築します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._build_groups()
        self.refresh()

    def _build_groups(self) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget() and item.widget() not in (self._status_label, self._instruction_label):
                item.widget().deleteLater()
        self._value_labels.clear()
        self._hex_widths.clear()

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            grid = QGridLayout(box)
            grid.setHorizontalSpacing(12)
            for index, reg in enumerate(group.registers):
                width = (reg.width + 3) // 4
                value = QLabel("0" * width)
                value.setFont(self._fixed_font)
                value.setStyleSheet("color: #FFD700;")
                value.setAlignment(Qt.AlignRight)
                row, col = divmod(index, COLUMNS)
                grid.addWidget(QLabel(f"{reg.name}"), row, col * 2)
                grid.addWidget(value, row, col * 2 + 1)
                self._value_labels[reg.name] = value
                self._hex_widths[reg.name] = width
            self._layout.addWidget(box)

        self._layout.addWidget(self._status_label)
        self._layout.addWidget(self._instruction_label)
        self._layout.addStretch()

    # @intent:responsibility 現在のCPU状態からレジスタ表示を更新します。
    def refresh(self, snapshot: Optional[Snapshot] = None) -> None:
        if not self._cpu:
            return
        for name, value in self._cpu.get_register_map().items():
            label = self._value_labels.get(name)
            if label is not None:
                label.setText(f"{value:0{self._hex_widths[name]}X}")

        state = self._cpu.get_state()
        status = state.run_state.value
        if getattr(state, "is_waiting_for_key", False):
            status += " (waiting for key)"
        self._status_label.setText(status)
        if snapshot is not None and snapshot.metadata.symbol_info:
            self._instruction_label.setText(snapshot.metadata.symbol_info)

    def value_text(self, name: str) -> str:
        return self._value_labels[name].text()

    def status_text(self) -> str:
        return self._status_label.text()
