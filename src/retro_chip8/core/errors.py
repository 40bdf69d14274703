# retro_chip8/core/errors.py
"""
エミュレータ全体で使用する例外階層。

デコード失敗は致命的、実行失敗は報告のみで継続、という区別を型で表現します。
"""


class Chip8Error(Exception):
    """retro_chip8が送出する全ての例外の基底クラス。"""


# @intent:responsibility 認識できない命令ワードを表します。実行ループを停止させる致命的エラーです。
class InvalidOpcodeError(Chip8Error):
    def __init__(self, opcode: int):
        super().__init__(f"Invalid opcode: {opcode:#06X}")
        self.opcode = opcode


# @intent:responsibility 命令は認識されたが実行できなかったことを表します。ループは次の命令へ進みます。
class ExecutionError(Chip8Error):
    pass


class NotImplementedInstructionError(ExecutionError):
    def __init__(self, mnemonic: str):
        super().__init__(f"Super Chip-48 instruction not implemented: {mnemonic}")
        self.mnemonic = mnemonic


class StackOverflowError(ExecutionError):
    pass


class StackUnderflowError(ExecutionError):
    pass


# @intent:responsibility 入出力デバイス（表示・キー入力・音）の障害を表します。
class DeviceError(Chip8Error):
    pass


class RomTooLargeError(Chip8Error):
    def __init__(self, size: int, capacity: int):
        super().__init__(f"ROM too large: {size} bytes, max {capacity}")
        self.size = size
        self.capacity = capacity
