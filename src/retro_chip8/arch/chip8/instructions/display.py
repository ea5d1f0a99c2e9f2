# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（画面消去、スプライト描画）の実装。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.instruction import Instruction
from retro_chip8.transport.memory import MemoryBank
from .base import ExecutionContext, check_index_range

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    state.clear_framebuffer()

# --- DRW Vx, Vy, nibble (DXYN) ---
# @intent:responsibility Iから読んだNバイトのスプライトをフレームバッファへXOR描画します。
# @intent:rationale 描画開始位置は画面サイズで折り返すが、スプライト自体は画面端でクリップし折り返さない。
def execute_drw(state: Chip8CpuState, memory: MemoryBank, ins: Instruction, ctx: ExecutionContext) -> None:
    if not check_index_range(state, memory, ctx, ins, ins.n):
        return
    width, height = state.display_width, state.display_height
    origin_x = state.v[ins.x] % width
    origin_y = state.v[ins.y] % height
    state.vf = 0

    for row in range(ins.n):
        y = origin_y + row
        if y >= height:
            break
        sprite_byte = memory.read(state.i + row)
        line = state.framebuffer[y]
        for bit in range(8):
            x = origin_x + bit
            if x >= width:
                break
            if sprite_byte & (0x80 >> bit):
                if line[x]:
                    state.vf = 1
                line[x] = not line[x]
