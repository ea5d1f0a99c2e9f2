# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import logging
import random
from dataclasses import dataclass, field
from typing import List

from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.common.errors import (
    ExecutionError, MemoryAccessError, StackOverflowError, StackUnderflowError,
)
from retro_chip8.config.models import ErrorPolicy, MachineConfig
from retro_chip8.core.instruction import Instruction
from retro_chip8.transport.memory import MemoryBank

logger = logging.getLogger(__name__)

# @intent:responsibility 命令実行に必要な外部要素（構成、乱数源、診断の収集先）をまとめて保持します。
@dataclass
class ExecutionContext:
    config: MachineConfig
    rng: random.Random = field(default_factory=random.Random)
    diagnostics: List[ExecutionError] = field(default_factory=list)

    # @intent:responsibility 実行時エラーをエラーポリシーに従って処理します。
    # @intent:post-condition STRICTでは例外を送出し、LENIENTでは警告を記録して処理を戻します。
    def report(self, error: ExecutionError) -> None:
        if self.config.error_policy is ErrorPolicy.STRICT:
            raise error
        logger.warning("%s", error)
        self.diagnostics.append(error)

# @intent:utility_function 命令アドレス（プリインクリメント前のPC）を返します。
def instruction_address(state: Chip8CpuState, ins: Instruction) -> int:
    return (state.pc - ins.length) & 0xFFFF

# @intent:utility_function 次の命令をスキップします。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 戻りアドレスをスタックへ積みます。
# @intent:return 積めた場合True。容量超過時はエラーを報告しFalse。
def push_return(state: Chip8CpuState, ctx: ExecutionContext, ins: Instruction) -> bool:
    if len(state.stack) >= state.stack_capacity:
        ctx.report(StackOverflowError(instruction_address(state, ins), ins.word, state.stack_capacity))
        return False
    state.stack.append(state.pc)
    state.sp = len(state.stack)
    return True

# @intent:utility_function スタックから戻りアドレスを取り出してPCへ設定します。
def pop_return(state: Chip8CpuState, ctx: ExecutionContext, ins: Instruction) -> bool:
    if not state.stack:
        ctx.report(StackUnderflowError(instruction_address(state, ins), ins.word))
        return False
    state.pc = state.stack.pop()
    state.sp = len(state.stack)
    return True

# @intent:utility_function Iから始まるlengthバイトがメモリ範囲内にあるかを確認します。
# @intent:return 範囲内であればTrue。範囲外ならエラーを報告しFalse（命令は状態を変更せずに終わる）。
def check_index_range(state: Chip8CpuState, memory: MemoryBank, ctx: ExecutionContext,
                      ins: Instruction, length: int) -> bool:
    if state.i + length <= memory.get_size():
        return True
    ctx.report(MemoryAccessError(instruction_address(state, ins), ins.word, state.i, length, memory.get_size()))
    return False
