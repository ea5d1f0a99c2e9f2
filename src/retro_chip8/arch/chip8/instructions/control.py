# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御フロー命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.instruction import Instruction
from retro_chip8.transport.memory import MemoryBank
from .base import ExecutionContext, pop_return, push_return, skip_next

# --- RET (00EE) ---
# @intent:responsibility サブルーチンから復帰します。空スタックではStackUnderflowを報告します。
def execute_ret(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    pop_return(state, ctx, ins)

# --- JP addr (1NNN) ---
def execute_jp(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.pc = ins.nnn

# --- CALL addr (2NNN) ---
# @intent:responsibility 現在のPCを積んでNNNへ分岐します。
# @intent:rationale LENIENTではスタックが満杯でも分岐自体は行い、SPは容量を超えない。
def execute_call(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    push_return(state, ctx, ins)
    state.pc = ins.nnn

# --- SE Vx, byte (3XNN) ---
def execute_se_imm(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if state.v[ins.x] == ins.nn:
        skip_next(state)

# --- SNE Vx, byte (4XNN) ---
def execute_sne_imm(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if state.v[ins.x] != ins.nn:
        skip_next(state)

# --- SE Vx, Vy (5XY0) ---
def execute_se_reg(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if state.v[ins.x] == state.v[ins.y]:
        skip_next(state)

# --- SNE Vx, Vy (9XY0) ---
def execute_sne_reg(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if state.v[ins.x] != state.v[ins.y]:
        skip_next(state)

# --- JP V0, addr (BNNN) ---
# @intent:responsibility オフセット付きジャンプ。jump_offset_uses_vx が有効なら VX（XはNNNの上位ニブル）を加算します。
def execute_jp_offset(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    register = ins.x if ctx.config.jump_offset_uses_vx else 0x0
    state.pc = (ins.nnn + state.v[register]) & 0xFFFF
