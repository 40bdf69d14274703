# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。

ヘッダーを持たない生のプログラムバイト列を 0x200 から配置します。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.core.errors import RomTooLargeError
from retro_chip8.arch.chip8.state import Chip8State, MEMORY_SIZE, PROGRAM_START

logger = logging.getLogger(__name__)

# @intent:constant 0x200 からアドレス空間末尾までに配置可能なバイト数。
ROM_CAPACITY = MEMORY_SIZE - PROGRAM_START


class RomLoader:
    """
    CHIP-8プログラムをファイルから読み込み、マシン状態のメモリへロードするローダー。
    """
    def __init__(self, strict: bool = False):
        # strict=True の場合、容量超過は切り詰めずに RomTooLargeError を送出する
        self._strict = strict

    def read_file(self, file_path: Union[str, Path]) -> bytes:
        path = Path(file_path)
        data = path.read_bytes()
        logger.info("Read ROM %s (%d bytes)", path, len(data))
        return data

    # @intent:responsibility バイト列をメモリの 0x200 以降にコピーします。
    # @intent:post-condition 容量を超えた末尾は切り捨て、警告として報告します。戻り値は実際にロードしたバイト数です。
    def load_bytes(self, rom: bytes, state: Chip8State) -> int:
        if len(rom) > ROM_CAPACITY:
            error = RomTooLargeError(len(rom), ROM_CAPACITY)
            if self._strict:
                raise error
            logger.warning("%s; truncating %d trailing bytes", error, len(rom) - ROM_CAPACITY)
            rom = rom[:ROM_CAPACITY]

        state.memory[PROGRAM_START:PROGRAM_START + len(rom)] = rom
        return len(rom)

    def load_file(self, file_path: Union[str, Path], state: Chip8State) -> int:
        return self.load_bytes(self.read_file(file_path), state)
