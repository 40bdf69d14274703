# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。

命令ワードからのニブル抽出、オペランド形状ごとの基底バリアント、
および実行時設定（シフトクワーク、乱数源）をまとめた ExecutionContext を提供します。
"""
import random
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import MEMORY_SIZE


# @intent:utility_function 命令ワードの各フィールドを抽出します。
def reg_x(opcode: int) -> int:
    return (opcode & 0x0F00) >> 8

def reg_y(opcode: int) -> int:
    return (opcode & 0x00F0) >> 4

def nibble(opcode: int) -> int:
    return opcode & 0x000F

def byte(opcode: int) -> int:
    return opcode & 0x00FF

def addr(opcode: int) -> int:
    return opcode & 0x0FFF


# @intent:utility_function メモリアドレスをアドレス空間内にラップします。
def wrap_address(address: int) -> int:
    return address % MEMORY_SIZE


# @intent:responsibility 命令実行時に参照される、プログラム単位で切り替え可能な設定を保持します。
@dataclass
class ExecutionContext:
    """
    shift_quirk: True の場合、SHR/SHL は Vx をその場でシフトし Vy を無視します。
    rng: RND 命令の乱数源。テストではシード固定のインスタンスを渡します。
    """
    shift_quirk: bool = False
    rng: random.Random = field(default_factory=random.Random)


# --- オペランド形状ごとの基底バリアント ---

@dataclass(frozen=True)
class NoOperand(Operation):
    @classmethod
    def from_opcode(cls, opcode: int) -> "NoOperand":
        return cls(opcode)


@dataclass(frozen=True)
class AddrOperand(Operation):
    nnn: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "AddrOperand":
        return cls(opcode, addr(opcode))

    @property
    def operands(self) -> List[str]:
        return [f"0x{self.nnn:03X}"]


@dataclass(frozen=True)
class RegByteOperand(Operation):
    x: int
    kk: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "RegByteOperand":
        return cls(opcode, reg_x(opcode), byte(opcode))

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", f"0x{self.kk:02X}"]


@dataclass(frozen=True)
class RegRegOperand(Operation):
    x: int
    y: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "RegRegOperand":
        return cls(opcode, reg_x(opcode), reg_y(opcode))

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", f"V{self.y:X}"]


@dataclass(frozen=True)
class RegOperand(Operation):
    x: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "RegOperand":
        return cls(opcode, reg_x(opcode))

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}"]


@dataclass(frozen=True)
class NibbleOperand(Operation):
    n: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "NibbleOperand":
        return cls(opcode, nibble(opcode))

    @property
    def operands(self) -> List[str]:
        return [f"{self.n}"]


@dataclass(frozen=True)
class SpriteOperand(Operation):
    x: int
    y: int
    n: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "SpriteOperand":
        return cls(opcode, reg_x(opcode), reg_y(opcode), nibble(opcode))

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", f"V{self.y:X}", f"{self.n}"]
