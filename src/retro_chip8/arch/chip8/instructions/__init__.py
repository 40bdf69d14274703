"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.core.errors import InvalidOpcodeError, NotImplementedInstructionError
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8State
from .base import ExecutionContext
from .control import Sys
from .display import Drw
from .extended import Scd, DrwVxVy0
from .maps import FAMILY_MAP, SYSTEM_MAP, ALU_MAP, KEY_MAP, MISC_MAP, EXECUTE_MAP

# @intent:responsibility 16ビットの命令ワードをデコードし、対応する命令バリアントを返します。
# @intent:rationale 状態を読まない純粋関数です。既知のパターンに一致しない場合は InvalidOpcodeError を送出します。
def decode_opcode(opcode: int) -> Operation:
    """
    先頭ニブルでファミリーを選択し、0x0/0x8/0xD/0xE/0xF は下位バイトまたは下位ニブルで更に判別します。
    ファミリー0x0 は 0x0000〜0x00FF のみが有効で、特殊ワード以外は SYS nnn になります。
    """
    opcode &= 0xFFFF
    family = opcode >> 12

    if family == 0x0:
        # 0x0100〜0x0FFF はどの命令にも該当しない
        if opcode > 0x00FF:
            variant = None
        elif opcode & 0xFFF0 == 0x00C0:
            variant = Scd
        else:
            variant = SYSTEM_MAP.get(opcode, Sys)
    elif family == 0x8:
        variant = ALU_MAP.get(opcode & 0x000F)
    elif family == 0xD:
        variant = DrwVxVy0 if opcode & 0x000F == 0 else Drw
    elif family == 0xE:
        variant = KEY_MAP.get(opcode & 0x00FF)
    elif family == 0xF:
        variant = MISC_MAP.get(opcode & 0x00FF)
    else:
        variant = FAMILY_MAP.get(family)

    if variant is None:
        raise InvalidOpcodeError(opcode)
    return variant.from_opcode(opcode)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8State, ctx: ExecutionContext) -> None:
    """
    デコードされた命令を実行し、CHIP-8の状態を変更します。
    実行できない命令は ExecutionError のサブクラスを送出します。
    """
    executor = EXECUTE_MAP.get(type(operation))
    if executor is None:
        raise NotImplementedInstructionError(str(operation))
    executor(state, operation, ctx)
