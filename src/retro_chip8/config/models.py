from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from retro_chip8.common.types import Keymap

class ErrorPolicy(Enum):
    LENIENT = "lenient"  # 診断として記録し実行を継続
    STRICT = "strict"    # QUITへ遷移し例外を送出

# Chip8 keypad     QWERTY
# 123C             1234
# 456D             QWER
# 789E             ASDF
# A0BF             ZXCV
DEFAULT_KEYMAP: Keymap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass(frozen=True)
class MachineConfig:
    display_width: int = 64
    display_height: int = 32
    clock_hz: int = 500  # instructions per second
    memory_size: int = 4096
    font_offset: int = 0x050
    entry_offset: int = 0x200
    stack_capacity: int = 16
    shift_uses_vy: bool = False
    jump_offset_uses_vx: bool = False
    index_overflow_sets_vf: bool = False
    error_policy: ErrorPolicy = ErrorPolicy.LENIENT

    @property
    def instructions_per_frame(self) -> int:
        # 60Hzフレームあたりの命令数。最低1命令は実行する。
        return max(1, self.clock_hz // 60)

@dataclass(frozen=True)
class DisplayConfig:
    scale_factor: int = 20
    fg_color: int = 0xFFFFFFFF  # RGBA
    bg_color: int = 0x000000FF  # RGBA
    pixel_outline: bool = True

@dataclass(frozen=True)
class AudioConfig:
    enabled: bool = True
    tone_hz: int = 440
    volume: float = 0.25
    sample_rate: int = 44100

@dataclass(frozen=True)
class SystemConfig:
    machine: MachineConfig = field(default_factory=MachineConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
