# src/retro_chip8/arch/chip8/timers.py
"""
60Hzタイマー処理。
"""
import logging

from retro_chip8.arch.chip8.state import Chip8CpuState

logger = logging.getLogger(__name__)

# @intent:responsibility ディレイタイマーとサウンドタイマーを1ずつ減算します。0未満にはなりません。
# @intent:pre-condition 外部の60Hzフレームごとに1回だけ呼び出されることを想定します。
def tick_timers(state: Chip8CpuState) -> None:
    if state.delay_timer > 0:
        state.delay_timer -= 1
    if state.sound_timer > 0:
        state.sound_timer -= 1
        if state.sound_timer == 0:
            logger.debug("Sound timer expired, stopping tone.")
