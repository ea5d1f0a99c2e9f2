# tests/core/test_snapshot.py
"""
CpuState、Instruction、Snapshotの不変性とコピーの検証。
"""
import dataclasses
import pytest

from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.core.instruction import Instruction, InstructionForm
from retro_chip8.core.snapshot import Metadata, Snapshot
from retro_chip8.core.state import CpuState, RunState

def test_cpu_state_defaults():
    state = CpuState()
    assert state.pc == 0x0000
    assert state.sp == 0x0000
    assert state.run_state == RunState.QUIT

def test_state_copy_is_independent():
    state = Chip8CpuState()
    clone = state.copy()
    state.v[0] = 0x42
    state.framebuffer[0][0] = True
    assert clone.v[0] == 0
    assert clone.framebuffer[0][0] is False

def test_chip8_state_geometry():
    state = Chip8CpuState(display_width=128, display_height=64)
    assert len(state.framebuffer) == 64
    assert all(len(row) == 128 for row in state.framebuffer)

def test_instruction_is_frozen():
    ins = Instruction(0x1200, InstructionForm.ADDR, (0x1, None), "JP", ["$200"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        ins.word = 0

def test_snapshot_is_frozen():
    snapshot = Snapshot(state=CpuState(), instruction=None, metadata=Metadata(cycle_count=0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.instruction = None
    assert snapshot.memory_activity == []
    assert snapshot.diagnostics == []
