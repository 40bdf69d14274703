import unittest

from retro_chip8.arch.chip8.state import Chip8State, FONT_SET, MEMORY_SIZE
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction, ExecutionContext

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.state = Chip8State()
        self.ctx = ExecutionContext()

    def _execute(self, opcode):
        execute_instruction(decode_opcode(opcode), self.state, self.ctx)

    def test_ld_vx_byte_and_vx_vy(self):
        self._execute(0x6A42)
        self.assertEqual(self.state.v[0xA], 0x42)
        self._execute(0x8BA0)
        self.assertEqual(self.state.v[0xB], 0x42)

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_add_i_vx_wraps_at_16_bits(self):
        self.state.i = 0xFFFF
        self.state.v[0x2] = 0x02
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0x0001)

    def test_timers(self):
        self.state.v[0x1] = 0x30
        self._execute(0xF115)
        self._execute(0xF118)
        self.assertEqual(self.state.delay_timer, 0x30)
        self.assertEqual(self.state.sound_timer, 0x30)

        self.state.delay_timer = 0x12
        self._execute(0xF207)
        self.assertEqual(self.state.v[0x2], 0x12)

    def test_ld_f_vx_points_at_digit_sprite(self):
        self.state.v[0x0] = 0x0A
        self._execute(0xF029)
        self.assertEqual(self.state.i, 0x0A * 5)
        self.assertEqual(bytes(self.state.memory[self.state.i:self.state.i + 5]), FONT_SET[50:55])

        # 上位ニブルは無視される
        self.state.v[0x0] = 0x1A
        self._execute(0xF029)
        self.assertEqual(self.state.i, 0x0A * 5)

    def test_ld_b_vx(self):
        self.state.i = 0x300
        self.state.v[0x7] = 254
        self._execute(0xF733)
        self.assertEqual(list(self.state.memory[0x300:0x303]), [2, 5, 4])
        self.assertEqual(self.state.i, 0x300)

    def test_ld_b_vx_wraps_address(self):
        self.state.i = MEMORY_SIZE - 1
        self.state.v[0x7] = 123
        self._execute(0xF733)
        self.assertEqual(self.state.memory[MEMORY_SIZE - 1], 1)
        self.assertEqual(self.state.memory[0], 2)
        self.assertEqual(self.state.memory[1], 3)

    def test_ld_i_vx_stores_and_advances_i(self):
        self.state.i = 0x400
        self.state.v[0:3] = [0x11, 0x22, 0x33]
        self.state.v[0x3] = 0x44
        # LD [I], V2
        self._execute(0xF255)
        self.assertEqual(list(self.state.memory[0x400:0x404]), [0x11, 0x22, 0x33, 0x00])
        self.assertEqual(self.state.i, 0x403)

    def test_ld_vx_i_loads_and_advances_i(self):
        self.state.i = 0x400
        self.state.memory[0x400:0x403] = bytes([0xAA, 0xBB, 0xCC])
        self.state.v[0x2] = 0x99
        # LD V1, [I]
        self._execute(0xF165)
        self.assertEqual(self.state.v[0:3], [0xAA, 0xBB, 0x99])
        self.assertEqual(self.state.i, 0x402)


if __name__ == '__main__':
    unittest.main()
