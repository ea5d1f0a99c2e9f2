# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8固有の状態定義。
"""
import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.common.types import Framebuffer
from retro_chip8.core.state import CpuState

# @intent:constant 汎用レジスタ数とキーパッドのキー数。
NUM_REGISTERS = 16
NUM_KEYS = 16

# @intent:responsibility CHIP-8マシンの全ての状態（V0-VF, I, スタック, タイマー, キーパッド, フレームバッファ）を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8のマシン状態を保持するデータクラス。
    実行エンジンの全ての操作はこの集約を明示的に受け取ります。
    """
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS) # V0-VF
    i: int = 0x0000 # Index Register
    stack: List[int] = field(default_factory=list)
    stack_capacity: int = 16
    delay_timer: int = 0
    sound_timer: int = 0
    keypad: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    display_width: int = 64
    display_height: int = 32
    framebuffer: Framebuffer = field(default_factory=list)
    key_wait_register: Optional[int] = None # FX0Aでキー入力待ち中の格納先レジスタ

    def __post_init__(self):
        if not self.framebuffer:
            self.framebuffer = [[False] * self.display_width for _ in range(self.display_height)]

    # @intent:responsibility Snapshot用のコピーを生成します。要素が不変値のためリストの複製のみで独立性が保たれます。
    def copy(self) -> "Chip8CpuState":
        return dataclasses.replace(
            self,
            v=list(self.v),
            stack=list(self.stack),
            keypad=list(self.keypad),
            framebuffer=[row[:] for row in self.framebuffer],
        )

    # @intent:accessor VFフラグレジスタへのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[0xF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[0xF] = value & 0xFF

    # @intent:responsibility FX0Aによるキー入力待ち状態かどうかを返します。
    @property
    def is_waiting_for_key(self) -> bool:
        return self.key_wait_register is not None

    # @intent:responsibility サウンドタイマーが非ゼロ（音を鳴らすべき状態）かどうかを返します。
    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    # @intent:responsibility 押下中のキーのうち最小のインデックスを返します。押下が無ければNone。
    def first_pressed_key(self) -> Optional[int]:
        for index, pressed in enumerate(self.keypad):
            if pressed:
                return index
        return None

    def clear_framebuffer(self) -> None:
        for row in self.framebuffer:
            for x in range(len(row)):
                row[x] = False
