import unittest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.errors import StackOverflowError, StackUnderflowError
from retro_chip8.config.models import ErrorPolicy, MachineConfig
from retro_chip8.core.state import RunState
from retro_chip8.transport.memory import MemoryBank

class TestControlInstructions(unittest.TestCase):
    config = MachineConfig()

    def setUp(self):
        self.memory = MemoryBank()
        self.cpu = Chip8Cpu(self.memory, self.config)
        self.state = self.cpu.get_state()
        self.state.run_state = RunState.RUNNING

    def _execute(self, word, pc=0x200):
        self.memory.load(pc, [word >> 8, word & 0xFF])
        self.state.pc = pc
        return self.cpu.step()

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_and_ret(self):
        self._execute(0x2400, pc=0x202)
        self.assertEqual(self.state.pc, 0x400)
        self.assertEqual(self.state.stack, [0x204])
        self.assertEqual(self.state.sp, 1)

        self._execute(0x00EE, pc=0x400)
        self.assertEqual(self.state.pc, 0x204)
        self.assertEqual(self.state.sp, 0)

    def test_skip_imm(self):
        self.state.v[0x3] = 0x42
        self._execute(0x3342)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x3343)
        self.assertEqual(self.state.pc, 0x202)
        self._execute(0x4343)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x4342)
        self.assertEqual(self.state.pc, 0x202)

    def test_skip_reg(self):
        self.state.v[0x1] = self.state.v[0x2] = 7
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x202)
        self.state.v[0x2] = 8
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x204)

    def test_jp_offset(self):
        self.state.v[0x0] = 0x10
        self.state.v[0x3] = 0x20
        self._execute(0xB300)
        expected = 0x320 if self.config.jump_offset_uses_vx else 0x310
        self.assertEqual(self.state.pc, expected)

    # @intent:test_case_underflow 空スタックでのRETは診断として報告され、実行は継続することを検証します。
    def test_ret_underflow_is_reported(self):
        snapshot = self._execute(0x00EE)
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(len(snapshot.diagnostics), 1)
        self.assertIsInstance(snapshot.diagnostics[0], StackUnderflowError)
        self.assertEqual(self.state.run_state, RunState.RUNNING)

    # @intent:test_case_overflow_lenient 容量+1回のCALLでSPが容量を超えないことを検証します。
    def test_call_overflow_lenient(self):
        capacity = self.config.stack_capacity
        for _ in range(capacity):
            snapshot = self._execute(0x2200)
            self.assertEqual(snapshot.diagnostics, [])
        snapshot = self._execute(0x2300)
        self.assertEqual(self.state.sp, capacity)
        self.assertEqual(len(self.state.stack), capacity)
        self.assertEqual(self.state.pc, 0x300)
        self.assertIsInstance(snapshot.diagnostics[0], StackOverflowError)

class TestJumpQuirk(TestControlInstructions):
    config = MachineConfig(jump_offset_uses_vx=True)

class TestStrictPolicy(unittest.TestCase):
    def setUp(self):
        self.memory = MemoryBank()
        self.cpu = Chip8Cpu(self.memory, MachineConfig(stack_capacity=2, error_policy=ErrorPolicy.STRICT))
        self.state = self.cpu.get_state()
        self.state.run_state = RunState.RUNNING

    def test_call_overflow_strict(self):
        self.memory.load(0x200, [0x22, 0x00])
        self.cpu.step()
        self.cpu.step()
        with self.assertRaises(StackOverflowError):
            self.cpu.step()
        self.assertEqual(self.state.sp, 2)
        self.assertEqual(self.state.run_state, RunState.QUIT)

    def test_ret_underflow_strict(self):
        self.memory.load(0x200, [0x00, 0xEE])
        with self.assertRaises(StackUnderflowError):
            self.cpu.step()
        self.assertEqual(self.state.run_state, RunState.QUIT)

if __name__ == '__main__':
    unittest.main()
