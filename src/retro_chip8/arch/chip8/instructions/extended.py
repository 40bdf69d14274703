# src/retro_chip8/arch/chip8/instructions/extended.py
"""
SUPER-CHIP拡張命令。

デコードは可能ですが、実行すると状態を変更せずに NotImplementedInstructionError を送出します。
"""
from typing import List

from retro_chip8.core.errors import NotImplementedInstructionError
from retro_chip8.arch.chip8.state import Chip8State
from .base import ExecutionContext, NoOperand, NibbleOperand, RegRegOperand, RegOperand

# --- バリアント定義 ---

class Scd(NibbleOperand):
    mnemonic = "SCD"

class Scr(NoOperand):
    mnemonic = "SCR"

class Scl(NoOperand):
    mnemonic = "SCL"

class Exit(NoOperand):
    mnemonic = "EXIT"

class Low(NoOperand):
    mnemonic = "LOW"

class High(NoOperand):
    mnemonic = "HIGH"

class DrwVxVy0(RegRegOperand):
    mnemonic = "DRW"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", f"V{self.y:X}", "0"]

class LdHfVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["HF", f"V{self.x:X}"]

class LdRVx(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return ["R", f"V{self.x:X}"]

class LdVxR(RegOperand):
    mnemonic = "LD"

    @property
    def operands(self) -> List[str]:
        return [f"V{self.x:X}", "R"]


# @intent:responsibility 未実装の拡張命令の実行を報告します。
def execute_unimplemented(state: Chip8State, op, ctx: ExecutionContext) -> None:
    raise NotImplementedInstructionError(str(op))
