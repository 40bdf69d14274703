# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力）の実装。
"""
from typing import List

from retro_chip8.core.errors import StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.state import Chip8State, KeyboardHalt, STACK_SIZE
from .base import (
    ExecutionContext, NoOperand, AddrOperand, RegByteOperand, RegRegOperand, RegOperand,
)

# --- バリアント定義 ---

class Ret(NoOperand):
    mnemonic = "RET"

class Sys(AddrOperand):
    mnemonic = "SYS"

class Jp(AddrOperand):
    mnemonic = "JP"

class Call(AddrOperand):
    mnemonic = "CALL"

class JpV0(AddrOperand):
    mnemonic = "JP"

    @property
    def operands(self) -> List[str]:
        return ["V0", f"0x{self.nnn:03X}"]

class SeVxByte(RegByteOperand):
    mnemonic = "SE"

class SneVxByte(RegByteOperand):
    mnemonic = "SNE"

class SeVxVy(RegRegOperand):
    mnemonic = "SE"

class SneVxVy(RegRegOperand):
    mnemonic = "SNE"

class Skp(RegOperand):
    mnemonic = "SKP"

class Sknp(RegOperand):
    mnemonic = "SKNP"

class LdVxK(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", "K"]


# @intent:utility_function 次の1命令をスキップします。ジャンプフラグは立てず、通常の自動インクリメントが上乗せされます。
def _skip_if(state: Chip8State, condition: bool) -> None:
    if condition:
        state.pc += 2


# --- ジャンプ ---

# @intent:responsibility PCを設定し、自動インクリメントを抑止します。
def _jump(state: Chip8State, target: int) -> None:
    state.pc = target
    state.jump_flag = True

def execute_sys(state: Chip8State, op: Sys, ctx: ExecutionContext) -> None:
    _jump(state, op.nnn)

def execute_jp(state: Chip8State, op: Jp, ctx: ExecutionContext) -> None:
    _jump(state, op.nnn)

# @intent:responsibility V0 + nnn へジャンプします。アドレス空間を超えた値はサイクル末尾でラップされます。
def execute_jp_v0(state: Chip8State, op: JpV0, ctx: ExecutionContext) -> None:
    _jump(state, op.nnn + state.v[0])


# --- サブルーチン ---

# @intent:responsibility 現在のPC（CALL命令自身のアドレス）をプッシュしてジャンプします。
# @intent:pre-condition スタックに空きがあること。満杯の場合は状態を変更せずに StackOverflowError を送出します。
def execute_call(state: Chip8State, op: Call, ctx: ExecutionContext) -> None:
    if state.sp + 1 >= STACK_SIZE:
        raise StackOverflowError(f"Call stack overflow at {state.pc:#05x} (depth {state.sp})")
    state.sp += 1
    state.stack[state.sp] = state.pc
    _jump(state, op.nnn)

# @intent:responsibility 保存されたCALLのアドレスへ戻ります。直後の自動インクリメントでCALLの次の命令に進みます。
def execute_ret(state: Chip8State, op: Ret, ctx: ExecutionContext) -> None:
    if state.sp == 0:
        raise StackUnderflowError(f"Return with empty call stack at {state.pc:#05x}")
    state.pc = state.stack[state.sp]
    state.sp -= 1


# --- 条件スキップ ---

def execute_se_vx_byte(state: Chip8State, op: SeVxByte, ctx: ExecutionContext) -> None:
    _skip_if(state, state.v[op.x] == op.kk)

def execute_sne_vx_byte(state: Chip8State, op: SneVxByte, ctx: ExecutionContext) -> None:
    _skip_if(state, state.v[op.x] != op.kk)

def execute_se_vx_vy(state: Chip8State, op: SeVxVy, ctx: ExecutionContext) -> None:
    _skip_if(state, state.v[op.x] == state.v[op.y])

def execute_sne_vx_vy(state: Chip8State, op: SneVxVy, ctx: ExecutionContext) -> None:
    _skip_if(state, state.v[op.x] != state.v[op.y])

def execute_skp(state: Chip8State, op: Skp, ctx: ExecutionContext) -> None:
    _skip_if(state, state.keypad[state.v[op.x] & 0xF])

def execute_sknp(state: Chip8State, op: Sknp, ctx: ExecutionContext) -> None:
    _skip_if(state, not state.keypad[state.v[op.x] & 0xF])


# --- キー入力待ち ---

# @intent:responsibility キー入力待ち状態へ遷移します。ブロックはせず、解除はエンジンの状態機械が行います。
def execute_ld_vx_k(state: Chip8State, op: LdVxK, ctx: ExecutionContext) -> None:
    state.keyboard_halt = KeyboardHalt.halt(op.x)
