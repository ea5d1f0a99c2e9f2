# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
import random
from typing import Dict, List, Optional, Tuple

from retro_chip8.arch.chip8 import disassembler
from retro_chip8.arch.chip8.decoder import decode, fetch_word
from retro_chip8.arch.chip8.instructions import ExecutionContext, execute_instruction
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.timers import tick_timers
from retro_chip8.common.errors import ExecutionError
from retro_chip8.common.types import RegisterInfo, RegisterLayoutInfo
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.instruction import Instruction
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.transport.memory import MemoryBank

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition seedを指定するとCXNNの乱数列が再現可能になります。
    def __init__(self, memory: MemoryBank, config: Optional[MachineConfig] = None, seed: Optional[int] = None):
        self._config = config or MachineConfig()
        self._rng = random.Random(seed)
        super().__init__(memory)

    @property
    def config(self) -> MachineConfig:
        return self._config

    # @intent:responsibility 構成に従ったCHIP-8の初期状態を生成します。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(
            pc=self._config.entry_offset,
            stack_capacity=self._config.stack_capacity,
            display_width=self._config.display_width,
            display_height=self._config.display_height,
        )

    def get_state(self) -> Chip8CpuState:
        return self._state

    # @intent:responsibility PCから2バイトをビッグエンディアンでフェッチします。
    def _fetch(self) -> int:
        return fetch_word(self._memory, self._state.pc)

    def _decode(self, opcode: int) -> Instruction:
        return decode(opcode)

    # @intent:responsibility 命令を実行し、このステップの診断を返します。
    def _execute(self, instruction: Instruction) -> List[ExecutionError]:
        ctx = ExecutionContext(self._config, self._rng)
        logger.debug("Execute %s: %s", instruction.opcode_hex, instruction)
        execute_instruction(instruction, self._state, self._memory, ctx)
        return ctx.diagnostics

    # @intent:responsibility FX0Aのキー入力待ち中は命令をフェッチせず、キー押下で待機を解除します。
    # @intent:post-condition 解除時はVXへキー番号を格納し、PCをFX0Aの次の命令へ進めます。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        state = self._state
        if not state.is_waiting_for_key:
            return None

        key = state.first_pressed_key()
        if key is not None:
            logger.debug("Storing key %X in V%X, leaving key wait.", key, state.key_wait_register)
            state.v[state.key_wait_register] = key
            state.key_wait_register = None
            state.pc = (state.pc + 2) & 0xFFFF
        return self._create_snapshot(current_pc, None)

    # @intent:responsibility 60Hzのタイマー減算を行います。
    def tick_timers(self) -> None:
        tick_timers(self._state)

    # @intent:responsibility キーパッドの1キーの押下状態を更新します。
    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < len(self._state.keypad):
            raise IndexError(f"Key index {index} out of range.")
        self._state.keypad[index] = pressed

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{index:X}": value for index, value in enumerate(s.v)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return regs

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._memory, start_addr, length)
