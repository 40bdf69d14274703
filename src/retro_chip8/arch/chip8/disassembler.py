# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用します。
"""
from typing import List

from retro_chip8.common.types import DisassemblyLine
from retro_chip8.core.errors import InvalidOpcodeError
from retro_chip8.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: bytes, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    デコードできないワードは "DW 0xXXXX" として出力し、例外は送出しません。

    Returns:
        List of (address, hex_word, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, len(memory) - 1)

    while current_addr < end_addr:
        word = (memory[current_addr] << 8) | memory[current_addr + 1]
        try:
            mnemonic_str = str(decode_opcode(word))
        except InvalidOpcodeError:
            mnemonic_str = f"DW 0x{word:04X}"
        result.append((current_addr, f"{word:04X}", mnemonic_str))
        current_addr += 2

    return result
