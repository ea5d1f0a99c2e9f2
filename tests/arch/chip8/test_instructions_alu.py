import unittest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import MachineConfig
from retro_chip8.transport.memory import MemoryBank

class Chip8InstructionTestCase(unittest.TestCase):
    config = MachineConfig()

    def setUp(self):
        self.memory = MemoryBank()
        self.cpu = Chip8Cpu(self.memory, self.config, seed=1234)
        self.state = self.cpu.get_state()

    def _execute(self, word):
        self.memory.load(0x200, [word >> 8, word & 0xFF])
        self.state.pc = 0x200
        return self.cpu.step()

class TestAluInstructions(Chip8InstructionTestCase):
    def test_add_imm_wraps_and_keeps_vf(self):
        self.state.v[0x3] = 0xFF
        self.state.vf = 0x07
        self._execute(0x7302)
        self.assertEqual(self.state.v[0x3], 0x01)
        self.assertEqual(self.state.vf, 0x07)

    def test_logic(self):
        self.state.v[1], self.state.v[2] = 0b1100, 0b1010
        self._execute(0x8121)
        self.assertEqual(self.state.v[1], 0b1110)
        self.state.v[1] = 0b1100
        self._execute(0x8122)
        self.assertEqual(self.state.v[1], 0b1000)
        self.state.v[1] = 0b1100
        self._execute(0x8123)
        self.assertEqual(self.state.v[1], 0b0110)

    # @intent:test_case_carry 全ての入力の組み合わせでキャリーフラグが正しいことを検証します。
    def test_add_reg_carry_exhaustive(self):
        for a in range(256):
            for b in range(256):
                self.state.v[0x1], self.state.v[0x2] = a, b
                self._execute(0x8124)
                self.assertEqual(self.state.v[0x1], (a + b) & 0xFF)
                self.assertEqual(self.state.vf, 1 if a + b > 255 else 0)

    def test_sub_borrow_polarity(self):
        for a in range(0, 256, 5):
            for b in range(0, 256, 3):
                self.state.v[0x1], self.state.v[0x2] = a, b
                self._execute(0x8125)
                self.assertEqual(self.state.v[0x1], (a - b) & 0xFF)
                self.assertEqual(self.state.vf, 1 if a >= b else 0)

    def test_subn_borrow_polarity(self):
        for a in range(0, 256, 5):
            for b in range(0, 256, 3):
                self.state.v[0x1], self.state.v[0x2] = a, b
                self._execute(0x8127)
                self.assertEqual(self.state.v[0x1], (b - a) & 0xFF)
                self.assertEqual(self.state.vf, 1 if b >= a else 0)

    def test_sub_equal_operands_sets_no_borrow(self):
        self.state.v[0x1] = self.state.v[0x2] = 0x40
        self._execute(0x8125)
        self.assertEqual(self.state.v[0x1], 0)
        self.assertEqual(self.state.vf, 1)

    def test_shr_ignores_vy_by_default(self):
        self.state.v[0x1], self.state.v[0x2] = 0x05, 0xF0
        self._execute(0x8126)
        self.assertEqual(self.state.v[0x1], 0x02)
        self.assertEqual(self.state.vf, 1)

    def test_shl_ignores_vy_by_default(self):
        self.state.v[0x1], self.state.v[0x2] = 0x81, 0x01
        self._execute(0x812E)
        self.assertEqual(self.state.v[0x1], 0x02)
        self.assertEqual(self.state.vf, 1)

    def test_flag_register_as_destination_keeps_flag(self):
        self.state.v[0xF], self.state.v[0x1] = 0xFF, 0x01
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 1)

    def test_rnd_is_masked(self):
        for _ in range(50):
            self._execute(0xC50F)
            self.assertEqual(self.state.v[0x5] & 0xF0, 0)
        self._execute(0xC500)
        self.assertEqual(self.state.v[0x5], 0)

class TestShiftQuirk(Chip8InstructionTestCase):
    config = MachineConfig(shift_uses_vy=True)

    def test_shr_copies_vy(self):
        self.state.v[0x1], self.state.v[0x2] = 0x00, 0x03
        self._execute(0x8126)
        self.assertEqual(self.state.v[0x1], 0x01)
        self.assertEqual(self.state.vf, 1)

    def test_shl_copies_vy(self):
        self.state.v[0x1], self.state.v[0x2] = 0xFF, 0x40
        self._execute(0x812E)
        self.assertEqual(self.state.v[0x1], 0x80)
        self.assertEqual(self.state.vf, 0)

if __name__ == '__main__':
    unittest.main()
