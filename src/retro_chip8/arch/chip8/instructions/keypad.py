# src/retro_chip8/arch/chip8/instructions/keypad.py
"""
キーパッド命令の実装。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.instruction import Instruction
from retro_chip8.transport.memory import MemoryBank
from .base import ExecutionContext, instruction_address, skip_next

# --- SKP Vx (EX9E) ---
def execute_skp(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if state.keypad[state.v[ins.x] & 0xF]:
        skip_next(state)

# --- SKNP Vx (EXA1) ---
def execute_sknp(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if not state.keypad[state.v[ins.x] & 0xF]:
        skip_next(state)

# --- LD Vx, K (FX0A) ---
# @intent:responsibility キーが押されていればVXへ格納し、押されていなければキー入力待ちモードへ入ります。
# @intent:post-condition 待機中はPCがFX0A命令自身を指したまま進まない。待機の解除はCPUのstepが担当する。
def execute_wait_key(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    key = state.first_pressed_key()
    if key is not None:
        state.v[ins.x] = key
        return
    state.pc = instruction_address(state, ins)
    state.key_wait_register = ins.x
