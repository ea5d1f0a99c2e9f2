# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
ヘッダを持たない生バイト列のROMをメモリバンクへ配置し、マシン状態を実行可能にします。
"""
import logging
import os
from typing import Union

from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.common.errors import RomTooLargeError, SourceUnreadableError
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.state import RunState
from retro_chip8.loader.font import FONT_SET
from retro_chip8.transport.memory import MemoryBank

logger = logging.getLogger(__name__)

class RomLoader:
    """
    フォントテーブルとROMイメージをメモリバンクへロードするローダー。
    """
    def __init__(self, config: MachineConfig):
        self._config = config

    def install_font(self, memory: MemoryBank) -> None:
        memory.load(self._config.font_offset, FONT_SET)

    # @intent:responsibility ファイルからROMを読み込み、メモリへ配置します。
    # @intent:post-condition 成功時は PC=entry_offset, run_state=RUNNING となります。
    def load_rom(self, file_path: Union[str, os.PathLike], memory: MemoryBank, state: Chip8CpuState) -> int:
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise SourceUnreadableError(str(file_path), e) from e
        return self.load_rom_bytes(data, memory, state, source=str(file_path))

    # @intent:responsibility バイト列をROMとしてメモリへ配置します。
    # @intent:pre-condition ROMサイズは memory_size - entry_offset 以下である必要があります。超過時は何も書き込みません。
    def load_rom_bytes(self, data: bytes, memory: MemoryBank, state: Chip8CpuState, source: str = "<bytes>") -> int:
        entry = self._config.entry_offset
        max_size = memory.get_size() - entry
        if len(data) > max_size:
            raise RomTooLargeError(source, len(data), max_size)

        self.install_font(memory)
        memory.load(entry, data)

        state.pc = entry
        state.run_state = RunState.RUNNING
        logger.info("Loaded ROM %s (%d bytes) at %#05x", source, len(data), entry)
        return len(data)
