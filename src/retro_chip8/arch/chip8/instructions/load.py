# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令の実装。
レジスタ、インデックスレジスタ、タイマー、メモリ間のデータ転送を扱います。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.instruction import Instruction
from retro_chip8.loader.font import GLYPH_HEIGHT
from retro_chip8.transport.memory import MemoryBank
from .base import ExecutionContext, check_index_range

# --- LD Vx, byte (6XNN) ---
def execute_ld_imm(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] = ins.nn

# --- LD Vx, Vy (8XY0) ---
def execute_ld_reg(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] = state.v[ins.y]

# --- LD I, addr (ANNN) ---
def execute_ld_i(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.i = ins.nnn

# --- LD Vx, DT (FX07) ---
def execute_ld_vx_dt(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.v[ins.x] = state.delay_timer

# --- LD DT, Vx (FX15) ---
def execute_ld_dt_vx(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.delay_timer = state.v[ins.x]

# --- LD ST, Vx (FX18) ---
def execute_ld_st_vx(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.sound_timer = state.v[ins.x]

# --- ADD I, Vx (FX1E) ---
# @intent:responsibility I に VX を16bitで加算します。
# @intent:rationale VFは通常変化しない。index_overflow_sets_vf が有効な場合のみ、0xFFFを超えたかをVFへ設定する。
def execute_add_i(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    result = state.i + state.v[ins.x]
    state.i = result & 0xFFFF
    if ctx.config.index_overflow_sets_vf:
        state.vf = 1 if result > 0x0FFF else 0

# --- LD F, Vx (FX29) ---
# @intent:responsibility VXの下位ニブルに対応するフォントグリフのアドレスをIに設定します。
def execute_ld_font(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.i = ((state.v[ins.x] & 0xF) * GLYPH_HEIGHT + ctx.config.font_offset) & 0xFFFF

# --- LD B, Vx (FX33) ---
# @intent:responsibility VXを10進3桁に分解し、百の位/十の位/一の位を I, I+1, I+2 に格納します。
def execute_ld_bcd(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if not check_index_range(state, memory, ctx, ins, 3):
        return
    value = state.v[ins.x]
    memory.write(state.i, value // 100)
    memory.write(state.i + 1, (value // 10) % 10)
    memory.write(state.i + 2, value % 10)

# --- LD [I], Vx (FX55) ---
# @intent:responsibility V0..VX をIから始まるメモリへ格納します。Iは変化しません。
def execute_store_registers(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if not check_index_range(state, memory, ctx, ins, ins.x + 1):
        return
    for offset in range(ins.x + 1):
        memory.write(state.i + offset, state.v[offset])

# --- LD Vx, [I] (FX65) ---
def execute_load_registers(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if not check_index_range(state, memory, ctx, ins, ins.x + 1):
        return
    for offset in range(ins.x + 1):
        state.v[offset] = memory.read(state.i + offset)
