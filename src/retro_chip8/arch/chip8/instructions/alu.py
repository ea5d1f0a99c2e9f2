# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFをフラグとして使う命令では、結果をVXへ書き込んだ後にVFを設定します。
これによりXまたはYがFの場合もフラグ値が最終結果として残ります。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.instruction import Instruction
from retro_chip8.transport.memory import MemoryBank
from .base import ExecutionContext

# --- ADD Vx, byte (7XNN) ---
# @intent:responsibility VXにNNを8bitラップアラウンドで加算します。VFは変化しません。
def execute_add_imm(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] = (state.v[ins.x] + ins.nn) & 0xFF

# --- OR / AND / XOR (8XY1-8XY3) ---
def execute_or(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] |= state.v[ins.y]

def execute_and(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] &= state.v[ins.y]

def execute_xor(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] ^= state.v[ins.y]

# --- ADD Vx, Vy (8XY4) ---
# @intent:responsibility 9bitの和が255を超えた場合にVF=1（キャリー）とします。
def execute_add_reg(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    res = state.v[ins.x] + state.v[ins.y]
    state.v[ins.x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8XY5) ---
# @intent:responsibility VX - VY。減算前に VX >= VY であればVF=1（ボローなし）とします。
def execute_sub(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    v1, v2 = state.v[ins.x], state.v[ins.y]
    state.v[ins.x] = (v1 - v2) & 0xFF
    state.vf = 1 if v1 >= v2 else 0

# --- SUBN Vx, Vy (8XY7) ---
# @intent:responsibility VY - VX。減算前に VY >= VX であればVF=1（ボローなし）とします。
def execute_subn(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    v1, v2 = state.v[ins.x], state.v[ins.y]
    state.v[ins.x] = (v2 - v1) & 0xFF
    state.vf = 1 if v2 >= v1 else 0

# @intent:utility_function シフト命令の入力値を取得します。shift_uses_vy が有効なら先にVYをVXへコピーします。
def _shift_source(state: Chip8CpuState, ins: Instruction, ctx: ExecutionContext) -> int:
    if ctx.config.shift_uses_vy:
        state.v[ins.x] = state.v[ins.y]
    return state.v[ins.x]

# --- SHR Vx {, Vy} (8XY6) ---
def execute_shr(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    value = _shift_source(state, ins, ctx)
    state.v[ins.x] = value >> 1
    state.vf = value & 0x01

# --- SHL Vx {, Vy} (8XYE) ---
def execute_shl(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    value = _shift_source(state, ins, ctx)
    state.v[ins.x] = (value << 1) & 0xFF
    state.vf = (value >> 7) & 0x01

# --- RND Vx, byte (CXNN) ---
def execute_rnd(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] = ctx.rng.randrange(256) & ins.nn
