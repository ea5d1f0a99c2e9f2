# tests/debugger/test_debugger.py
"""
Debuggerクラスのブレークポイント判定と実行履歴の検証。
"""
import unittest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.debugger.debugger import (
    BreakpointCondition, BreakpointConditionType, Debugger, read_register,
)
from retro_chip8.transport.memory import MemoryBank

class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.memory = MemoryBank()
        # LD V0, #$05 / LD I, $300 / LD [I], V0 / LD V0, #$05
        self.memory.load(0x200, [0x60, 0x05, 0xA3, 0x00, 0xF0, 0x55, 0x60, 0x05])
        self.cpu = Chip8Cpu(self.memory)
        self.debugger = Debugger(self.cpu, history_limit=2)

    def test_add_and_remove_breakpoint(self):
        bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x202)
        self.debugger.add_breakpoint(bp)
        self.debugger.add_breakpoint(bp)
        self.assertEqual(self.debugger.get_breakpoints(), [bp])
        self.assertTrue(self.debugger.is_pc_breakpoint(0x202))
        self.assertFalse(self.debugger.is_pc_breakpoint(0x200))
        self.debugger.remove_breakpoint(bp)
        self.assertEqual(self.debugger.get_breakpoints(), [])

    def test_disabled_pc_breakpoint(self):
        bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x200, enabled=False)
        self.debugger.add_breakpoint(bp)
        self.assertFalse(self.debugger.is_pc_breakpoint(0x200))

    def test_register_value(self):
        bp = BreakpointCondition(BreakpointConditionType.REGISTER_VALUE, value=5, register_name="V0")
        self.debugger.add_breakpoint(bp)
        snapshot = self.debugger.step_instruction()
        self.assertEqual(self.debugger.check_breakpoints(snapshot), bp)

    def test_register_change(self):
        bp = BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="i")
        self.debugger.add_breakpoint(bp)
        first = self.debugger.step_instruction()
        self.assertIsNone(self.debugger.check_breakpoints(first))
        second = self.debugger.step_instruction()
        self.assertEqual(self.debugger.check_breakpoints(second), bp)

    def test_register_change_ignores_same_value(self):
        bp = BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="V0")
        self.debugger.add_breakpoint(bp)
        for _ in range(3):
            self.debugger.step_instruction()
        # 4命令目は V0 に同じ値 5 を書き込む
        snapshot = self.debugger.step_instruction()
        self.assertIsNone(self.debugger.check_breakpoints(snapshot))

    def test_memory_breakpoints(self):
        read_bp = BreakpointCondition(BreakpointConditionType.MEMORY_READ, address=0x203)
        write_bp = BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300)
        self.debugger.add_breakpoint(write_bp)
        self.debugger.add_breakpoint(read_bp)

        self.assertIsNone(self.debugger.check_breakpoints(self.debugger.step_instruction()))
        self.assertEqual(self.debugger.check_breakpoints(self.debugger.step_instruction()), read_bp)
        self.assertEqual(self.debugger.check_breakpoints(self.debugger.step_instruction()), write_bp)
        self.assertEqual(self.memory.peek(0x300), 5)

    def test_history_is_bounded(self):
        for _ in range(3):
            self.debugger.step_instruction()
        history = self.debugger.get_history()
        self.assertEqual(len(history), 2)
        self.assertEqual([s.metadata.pc for s in history], [0x202, 0x204])
        self.assertIs(self.debugger.get_last_snapshot(), history[-1])

    def test_read_register(self):
        state = self.cpu.get_state()
        state.v[0xC] = 0x42
        state.delay_timer = 9
        self.assertEqual(read_register(state, "vc"), 0x42)
        self.assertEqual(read_register(state, "DT"), 9)
        self.assertEqual(read_register(state, "PC"), 0x200)
        self.assertIsNone(read_register(state, "ACC"))
        self.assertIsNone(read_register(state, "VX"))
        self.assertIsNone(read_register(state, "vg"))

if __name__ == '__main__':
    unittest.main()
