# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 固有の状態定義。

メモリ、レジスタ、タイマー、フレームバッファ、コールスタック、キー入力、
およびキー入力待ちの状態機械を1つの可変データクラスとして保持します。
振る舞いは持たず、データと不変条件のみを定義します。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from retro_chip8.core.state import CpuState

# @intent:constant CHIP-8のアドレス空間とレイアウト。
MEMORY_SIZE = 4096
PROGRAM_START = 0x200
FONT_START = 0x000
FONT_SPRITE_SIZE = 5

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 16
KEY_COUNT = 16

# @intent:constant 0〜Fの16進数字フォント（各5バイト）。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


# @intent:responsibility キー入力待ち状態機械のフェーズを定義します。
class HaltPhase(Enum):
    RESUME = "RESUME"                        # 通常実行
    HALT = "HALT"                            # キー押下待ち
    WAIT_FOR_RELEASE = "WAIT_FOR_RELEASE"    # 押されたキーの解放待ち


# @intent:responsibility キー入力待ちの状態（フェーズと格納先レジスタ）を不変に保持します。
@dataclass(frozen=True)
class KeyboardHalt:
    phase: HaltPhase = HaltPhase.RESUME
    register: int = 0

    @classmethod
    def resume(cls) -> "KeyboardHalt":
        return cls()

    @classmethod
    def halt(cls, register: int) -> "KeyboardHalt":
        return cls(HaltPhase.HALT, register)

    @classmethod
    def wait_for_release(cls, register: int) -> "KeyboardHalt":
        return cls(HaltPhase.WAIT_FOR_RELEASE, register)

    @property
    def is_resumed(self) -> bool:
        return self.phase is HaltPhase.RESUME


def _initial_memory() -> bytearray:
    memory = bytearray(MEMORY_SIZE)
    memory[FONT_START:FONT_START + len(FONT_SET)] = FONT_SET
    return memory


# @intent:responsibility CHIP-8の全アーキテクチャ状態を保持します。
# @intent:rationale 全ての値はビット幅でラップアラウンドさせ、命令実装側でマスクします。
@dataclass
class Chip8State(CpuState):
    """
    CHIP-8のマシン状態を保持するデータクラス。
    生成時点でフォントテーブルが 0x000 に配置され、PCは 0x200 を指します。
    """
    pc: int = PROGRAM_START
    memory: bytearray = field(default_factory=_initial_memory)
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000  # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    delay_timer: int = 0
    sound_timer: int = 0
    display: bytearray = field(default_factory=lambda: bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT))
    keypad: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    keyboard_halt: KeyboardHalt = field(default_factory=KeyboardHalt)

    # 1サイクル限りの一時フラグ
    jump_flag: bool = False  # この命令がPCを設定済み。自動インクリメントを抑止する
    draw_flag: bool = False  # フレームバッファが変化し、再描画が必要

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    def pixel(self, x: int, y: int) -> int:
        return self.display[(y % DISPLAY_HEIGHT) * DISPLAY_WIDTH + (x % DISPLAY_WIDTH)]

    # @intent:responsibility レジスタダンプを文字列化します（デバッグ出力用）。
    def format_state(self) -> str:
        lines = [f"V{n:X}: {value:X}" for n, value in enumerate(self.v)]
        lines += [
            f"I: {self.i:X}",
            f"PC: {self.pc:X}",
            f"SP: {self.sp:X}",
            f"DT: {self.delay_timer:X}",
            f"ST: {self.sound_timer:X}",
            f"Jump flag: {self.jump_flag}",
        ]
        return "\n".join(lines)
