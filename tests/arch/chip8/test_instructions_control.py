import unittest

from retro_chip8.core.errors import StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import HaltPhase, MEMORY_SIZE, STACK_SIZE

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.state = self.cpu.get_state()

    def _write(self, address, *words):
        for n, word in enumerate(words):
            self.state.memory[address + n * 2] = word >> 8
            self.state.memory[address + n * 2 + 1] = word & 0xFF

    def test_jp(self):
        self._write(0x200, 0x1ABC)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0xABC)
        self.assertFalse(self.state.jump_flag)

    def test_sys_executes_as_jump(self):
        self._write(0x200, 0x00A0)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x0A0)

    def test_call_then_ret_resumes_after_call(self):
        # 0x200: CALL 0x206 / 0x202: LD V0, 0x05 / 0x206: RET
        self._write(0x200, 0x2206, 0x6005)
        self._write(0x206, 0x00EE)

        self.cpu.step()
        self.assertEqual(self.state.pc, 0x206)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.stack[1], 0x200)

        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

        self.cpu.step()
        self.assertEqual(self.state.v[0x0], 0x05)

    def test_call_overflow_is_reported_and_execution_continues(self):
        # CALL 0x200 を無限に再帰する
        self._write(0x200, 0x2200)
        for _ in range(STACK_SIZE - 1):
            snapshot = self.cpu.step()
            self.assertIsNone(snapshot.error)
        self.assertEqual(self.state.sp, STACK_SIZE - 1)

        snapshot = self.cpu.step()
        self.assertIsInstance(snapshot.error, StackOverflowError)
        self.assertEqual(self.state.sp, STACK_SIZE - 1)
        self.assertEqual(self.state.pc, 0x202)

    def test_ret_with_empty_stack_is_reported(self):
        self._write(0x200, 0x00EE)
        snapshot = self.cpu.step()
        self.assertIsInstance(snapshot.error, StackUnderflowError)
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def test_jp_v0_wraps_program_counter(self):
        self.state.v[0x0] = 0xFF
        self._write(0x200, 0xBFFF)
        self.cpu.step()
        self.assertEqual(self.state.pc, (0xFFF + 0xFF) % MEMORY_SIZE)

    def test_fetch_at_end_of_memory_wraps(self):
        self.state.pc = MEMORY_SIZE - 1
        self.state.memory[MEMORY_SIZE - 1] = 0x60
        # 2バイト目はアドレス0（フォントの先頭 0xF0）から読まれる
        snapshot = self.cpu.step()
        self.assertEqual(snapshot.operation.opcode, 0x60F0)
        self.assertEqual(self.state.v[0x0], 0xF0)
        self.assertEqual(self.state.pc, 0x001)

    def test_skip_instructions(self):
        cases = [
            (0x3005, lambda s: s.v.__setitem__(0, 0x05), True),
            (0x3005, lambda s: s.v.__setitem__(0, 0x06), False),
            (0x4005, lambda s: s.v.__setitem__(0, 0x06), True),
            (0x4005, lambda s: s.v.__setitem__(0, 0x05), False),
            (0x5010, lambda s: s.v.__setitem__(1, s.v[0]), True),
            (0x9010, lambda s: s.v.__setitem__(1, s.v[0] + 1), True),
            (0x9010, lambda s: s.v.__setitem__(1, s.v[0]), False),
        ]
        for opcode, prepare, skipped in cases:
            with self.subTest(opcode=f"{opcode:04X}", skipped=skipped):
                self.cpu.reset()
                self.state = self.cpu.get_state()
                self._write(0x200, opcode)
                prepare(self.state)
                self.cpu.step()
                self.assertEqual(self.state.pc, 0x204 if skipped else 0x202)

    def test_skp_and_sknp_use_keypad(self):
        self.state.v[0x0] = 0x0A
        self.cpu.set_keys([n == 0x0A for n in range(16)])
        self._write(0x200, 0xE09E, 0x0000, 0xE0A1)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x206)

    def test_ld_vx_k_enters_halt(self):
        self._write(0x200, 0xF30A)
        self.cpu.step()
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.HALT)
        self.assertEqual(self.state.keyboard_halt.register, 3)
        self.assertTrue(self.cpu.is_halted)
        self.assertEqual(self.state.pc, 0x202)


class TestChip8KeyboardHalt(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.state = self.cpu.get_state()
        self.state.memory[0x200:0x202] = bytes([0xF3, 0x0A])
        self.cpu.step()

    def _keys(self, *pressed):
        self.cpu.set_keys([n in pressed for n in range(16)])
        self.cpu.update_keyboard_halt()

    def test_round_trip(self):
        self._keys()
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.HALT)

        self._keys(0x5)
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.WAIT_FOR_RELEASE)
        self.assertEqual(self.state.v[0x3], 0x5)

        self._keys(0x5)
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.WAIT_FOR_RELEASE)

        self._keys()
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.RESUME)
        self.assertFalse(self.cpu.is_halted)

    def test_releasing_another_key_does_not_resume(self):
        self._keys(0x5)
        self._keys(0x5, 0x7)
        self._keys(0x5)
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.WAIT_FOR_RELEASE)
        self.assertEqual(self.state.v[0x3], 0x5)

        self._keys(0x7)
        self.assertIs(self.state.keyboard_halt.phase, HaltPhase.RESUME)

    def test_lowest_pressed_key_wins(self):
        self._keys(0xC, 0x2, 0x9)
        self.assertEqual(self.state.v[0x3], 0x2)


if __name__ == '__main__':
    unittest.main()
