# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックスレジスタ、タイマー、メモリブロック転送）の実装。
"""
from typing import List

from retro_chip8.arch.chip8.state import Chip8State, FONT_START, FONT_SPRITE_SIZE
from .base import ExecutionContext, AddrOperand, RegByteOperand, RegRegOperand, RegOperand, wrap_address

# --- バリアント定義 ---

class LdVxByte(RegByteOperand):
    mnemonic = "LD"

class LdVxVy(RegRegOperand):
    mnemonic = "LD"

class LdI(AddrOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["I", f"0x{self.nnn:03X}"]

class LdVxDt(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", "DT"]

class LdDtVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["DT", f"V{self.x:X}"]

class LdStVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["ST", f"V{self.x:X}"]

class AddIVx(RegOperand):
    mnemonic = "ADD"

    @property
    def operands(self) -> List[str]:
        return ["I", f"V{self.x:X}"]

class LdFVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["F", f"V{self.x:X}"]

class LdBVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["B", f"V{self.x:X}"]

class LdIVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["[I]", f"V{self.x:X}"]

class LdVxI(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", "[I]"]


# --- レジスタ ---

def execute_ld_vx_byte(state: Chip8State, op: LdVxByte, ctx: ExecutionContext) -> None:
    state.v[op.x] = op.kk

def execute_ld_vx_vy(state: Chip8State, op: LdVxVy, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.v[op.y]


# --- インデックスレジスタ ---

def execute_ld_i(state: Chip8State, op: LdI, ctx: ExecutionContext) -> None:
    state.i = op.nnn

def execute_add_i_vx(state: Chip8State, op: AddIVx, ctx: ExecutionContext) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# @intent:responsibility I を Vx の下位4ビットが示す数字フォントの先頭アドレスに設定します。
def execute_ld_f_vx(state: Chip8State, op: LdFVx, ctx: ExecutionContext) -> None:
    state.i = FONT_START + (state.v[op.x] & 0x0F) * FONT_SPRITE_SIZE


# --- タイマー ---

def execute_ld_vx_dt(state: Chip8State, op: LdVxDt, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.delay_timer

def execute_ld_dt_vx(state: Chip8State, op: LdDtVx, ctx: ExecutionContext) -> None:
    state.delay_timer = state.v[op.x]

def execute_ld_st_vx(state: Chip8State, op: LdStVx, ctx: ExecutionContext) -> None:
    state.sound_timer = state.v[op.x]


# --- メモリ ---

# @intent:responsibility Vx を10進3桁（百、十、一の位）に分解し、I, I+1, I+2 に格納します。
def execute_ld_b_vx(state: Chip8State, op: LdBVx, ctx: ExecutionContext) -> None:
    value = state.v[op.x]
    digits = (value // 100, (value // 10) % 10, value % 10)
    for offset, digit in enumerate(digits):
        state.memory[wrap_address(state.i + offset)] = digit

# @intent:responsibility V0〜Vx を I から順にメモリへ格納します。
# @intent:post-condition I は転送したブロックの直後を指します（元には戻しません）。
def execute_ld_i_vx(state: Chip8State, op: LdIVx, ctx: ExecutionContext) -> None:
    for n in range(op.x + 1):
        state.memory[wrap_address(state.i)] = state.v[n]
        state.i = (state.i + 1) & 0xFFFF

# @intent:responsibility I から順にメモリを V0〜Vx へ読み込みます。
def execute_ld_vx_i(state: Chip8State, op: LdVxI, ctx: ExecutionContext) -> None:
    for n in range(op.x + 1):
        state.v[n] = state.memory[wrap_address(state.i)]
        state.i = (state.i + 1) & 0xFFFF
