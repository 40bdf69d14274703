# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
import random
from typing import Dict, List, Optional

from retro_chip8.common.types import DisassemblyLine, RegisterLayoutInfo, RegisterInfo
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8State, HaltPhase, MEMORY_SIZE, KEY_COUNT
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction, ExecutionContext
from retro_chip8.arch.chip8 import disassembler
from retro_chip8.loader.loader import RomLoader

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8をエミュレートするクラス。
    マシン状態を排他的に所有し、命令実行は常にこの状態を明示的に受け渡して行います。
    """
    def __init__(self, shift_quirk: bool = False, rng: Optional[random.Random] = None):
        self._context = ExecutionContext(shift_quirk=shift_quirk, rng=rng or random.Random())
        self._loader = RomLoader()
        self._program = b""
        super().__init__()

    @property
    def shift_quirk(self) -> bool:
        return self._context.shift_quirk

    def _create_initial_state(self) -> Chip8State:
        return Chip8State()

    # @intent:responsibility 状態を作り直した上で、最後にロードしたプログラムを再配置します。
    def reset(self) -> None:
        super().reset()
        if self._program:
            self._loader.load_bytes(self._program, self._state)

    # @intent:responsibility プログラムバイト列を 0x200 からロードし、リセット時の再ロード用に保持します。
    def load_rom(self, rom: bytes) -> int:
        self._program = bytes(rom)
        return self._loader.load_bytes(self._program, self._state)

    # @intent:responsibility デバイスから得た16キーの状態で、キーパッドを丸ごと置き換えます。
    def set_keys(self, keys) -> None:
        keys = list(keys)
        if len(keys) != KEY_COUNT:
            raise ValueError(f"Expected {KEY_COUNT} key states, got {len(keys)}")
        self._state.keypad = [bool(k) for k in keys]

    @property
    def is_halted(self) -> bool:
        return not self._state.keyboard_halt.is_resumed

    # @intent:responsibility PCから2バイトを読み出し、ビッグエンディアンの命令ワードを返します。
    def _fetch(self) -> int:
        pc = self._state.pc
        memory = self._state.memory
        return (memory[pc] << 8) | memory[(pc + 1) % MEMORY_SIZE]

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._context)

    # @intent:responsibility ジャンプフラグが立っていなければ命令長分PCを進め、アドレス空間でラップします。
    # @intent:post-condition ジャンプフラグは毎サイクルクリアされます。
    def _update_pc(self, operation: Operation) -> None:
        s = self._state
        if not s.jump_flag:
            s.pc += operation.length
        s.pc %= MEMORY_SIZE
        s.jump_flag = False

    # @intent:responsibility キー入力待ち状態機械を1段進めます。
    def update_keyboard_halt(self) -> None:
        """
        HALT: いずれかのキーが押されていれば、最小番号のキーを Vx に書き込み WAIT_FOR_RELEASE へ。
        WAIT_FOR_RELEASE: Vx に書き込んだキーそのものが離されたときのみ RESUME へ。
        """
        s = self._state
        halt = s.keyboard_halt
        if halt.phase is HaltPhase.HALT:
            if any(s.keypad):
                s.v[halt.register] = s.keypad.index(True)
                s.keyboard_halt = halt.wait_for_release(halt.register)
        elif halt.phase is HaltPhase.WAIT_FOR_RELEASE:
            if not s.keypad[s.v[halt.register] & 0xF]:
                s.keyboard_halt = halt.resume()

    # @intent:responsibility 両タイマーを0に向けて count 回デクリメントします。
    def decrement_timers(self, count: int = 1) -> None:
        s = self._state
        s.delay_timer = max(0, s.delay_timer - count)
        s.sound_timer = max(0, s.sound_timer - count)

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{n:X}": value for n, value in enumerate(s.v)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "VF": s.vf != 0,
            "JUMP": s.jump_flag,
            "DRAW": s.draw_flag,
            "HALT": self.is_halted,
        }

    # @intent:responsibility UI表示用に、16キーの現在の押下状態を返します。
    def get_keypad_state(self) -> List[bool]:
        return list(self._state.keypad)

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._state.memory, start_addr, length)
