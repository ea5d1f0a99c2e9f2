import logging
from typing import Optional, Tuple

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.loader.loader import RomLoader
from retro_chip8.transport.memory import MemoryBank
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、MemoryBankとCPUを生成し、ROMをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig, rom_path: Optional[str] = None,
                     seed: Optional[int] = None) -> Tuple[Chip8Cpu, MemoryBank]:
        machine = config.machine
        memory = MemoryBank(machine.memory_size)
        cpu = Chip8Cpu(memory, machine, seed=seed)

        loader = RomLoader(machine)
        if rom_path is not None:
            # ロードエラーは起動処理に対して致命的なため、そのまま呼び出し元へ送出する
            loader.load_rom(rom_path, memory, cpu.get_state())
        else:
            loader.install_font(memory)

        logger.debug("Built system: %dx%d display, %d Hz, stack %d",
                     machine.display_width, machine.display_height,
                     machine.clock_hz, machine.stack_capacity)
        return cpu, memory
