# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.common.errors import UnimplementedOpcodeError
from retro_chip8.core.instruction import Instruction
from retro_chip8.transport.memory import MemoryBank
from .base import ExecutionContext, instruction_address
from .maps import EXECUTE_MAP

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(ins: Instruction, state: Chip8CpuState, memory: MemoryBank, ctx: ExecutionContext) -> None:
    """
    デコードされた命令を実行し、マシン状態を変更します。
    未実装の命令はPCのプリインクリメント以外の状態を変更せず、診断として報告されます。
    """
    executor = EXECUTE_MAP.get(ins.key)
    if executor is None:
        ctx.report(UnimplementedOpcodeError(instruction_address(state, ins), ins.word))
        return
    executor(state, memory, ins, ctx)

__all__ = ["ExecutionContext", "EXECUTE_MAP", "execute_instruction"]
