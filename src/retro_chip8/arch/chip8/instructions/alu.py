# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFへの書き込み順序は命令ごとに固定されています。
加減算は結果を書いた後にVFを、論理演算はVFをクリアした後に演算を、
シフトはVFを書いた後にシフトを行います。
"""
from typing import List

from retro_chip8.arch.chip8.state import Chip8State
from .base import ExecutionContext, RegByteOperand, RegRegOperand

# --- バリアント定義 ---

class AddVxByte(RegByteOperand):
    mnemonic = "ADD"

class OrVxVy(RegRegOperand):
    mnemonic = "OR"

class AndVxVy(RegRegOperand):
    mnemonic = "AND"

class XorVxVy(RegRegOperand):
    mnemonic = "XOR"

class AddVxVy(RegRegOperand):
    mnemonic = "ADD"

class SubVxVy(RegRegOperand):
    mnemonic = "SUB"

class SubnVxVy(RegRegOperand):
    mnemonic = "SUBN"

class ShrVxVy(RegRegOperand):
    mnemonic = "SHR"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", f"{{V{self.y:X}}}"]

class ShlVxVy(RegRegOperand):
    mnemonic = "SHL"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", f"{{V{self.y:X}}}"]

class Rnd(RegByteOperand):
    mnemonic = "RND"


# --- 加算 ---

# @intent:responsibility Vx に即値を加算します。キャリーはVFに反映しません。
def execute_add_vx_byte(state: Chip8State, op: AddVxByte, ctx: ExecutionContext) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# @intent:responsibility Vx = Vx + Vy。VF = キャリー。
def execute_add_vx_vy(state: Chip8State, op: AddVxVy, ctx: ExecutionContext) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0


# --- 減算 ---

# @intent:utility_function a - b を計算し、(結果, NOTボロー) を返します。VF=1 は「ボローなし」を意味します。
def _sub8(a: int, b: int):
    return (a - b) & 0xFF, 1 if a >= b else 0

# @intent:responsibility Vx = Vx - Vy。VF = NOT ボロー。
def execute_sub_vx_vy(state: Chip8State, op: SubVxVy, ctx: ExecutionContext) -> None:
    res, not_borrow = _sub8(state.v[op.x], state.v[op.y])
    state.v[op.x] = res
    state.vf = not_borrow

# @intent:responsibility Vx = Vy - Vx。VF = NOT ボロー。
def execute_subn_vx_vy(state: Chip8State, op: SubnVxVy, ctx: ExecutionContext) -> None:
    res, not_borrow = _sub8(state.v[op.y], state.v[op.x])
    state.v[op.x] = res
    state.vf = not_borrow


# --- 論理演算 ---
# VFは演算の前に0クリアされる（クワーク）。

def execute_or_vx_vy(state: Chip8State, op: OrVxVy, ctx: ExecutionContext) -> None:
    state.vf = 0
    state.v[op.x] |= state.v[op.y]

def execute_and_vx_vy(state: Chip8State, op: AndVxVy, ctx: ExecutionContext) -> None:
    state.vf = 0
    state.v[op.x] &= state.v[op.y]

def execute_xor_vx_vy(state: Chip8State, op: XorVxVy, ctx: ExecutionContext) -> None:
    state.vf = 0
    state.v[op.x] ^= state.v[op.y]


# --- シフト ---

# @intent:responsibility Vx を1ビット右シフトし、押し出されたビットをVFに格納します。
# @intent:pre-condition shift_quirk が False の場合、シフト前に Vx へ Vy をコピーします。
def execute_shr(state: Chip8State, op: ShrVxVy, ctx: ExecutionContext) -> None:
    if not ctx.shift_quirk:
        state.v[op.x] = state.v[op.y]
    state.vf = state.v[op.x] & 0x01
    state.v[op.x] >>= 1

# @intent:responsibility Vx を1ビット左シフトし、押し出されたビットをVFに格納します。
def execute_shl(state: Chip8State, op: ShlVxVy, ctx: ExecutionContext) -> None:
    if not ctx.shift_quirk:
        state.v[op.x] = state.v[op.y]
    state.vf = (state.v[op.x] & 0x80) >> 7
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF


# --- 乱数 ---

def execute_rnd(state: Chip8State, op: Rnd, ctx: ExecutionContext) -> None:
    state.v[op.x] = ctx.rng.randrange(0x100) & op.kk
