# tests/loader/test_rom_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import logging
import pytest

from retro_chip8.core.errors import RomTooLargeError
from retro_chip8.arch.chip8.state import Chip8State, MEMORY_SIZE, PROGRAM_START, FONT_SET
from retro_chip8.loader.loader import RomLoader, ROM_CAPACITY

# @intent:test_suite 生のプログラムバイト列を 0x200 から配置するローダーを検証します。

@pytest.fixture
def state():
    return Chip8State()


class TestRomLoader:
    def test_capacity(self):
        assert ROM_CAPACITY == MEMORY_SIZE - PROGRAM_START == 3584

    def test_load_bytes_at_program_start(self, state):
        loaded = RomLoader().load_bytes(b"\x00\xE0\x12\x00", state)
        assert loaded == 4
        assert state.memory[PROGRAM_START:PROGRAM_START + 4] == bytearray(b"\x00\xE0\x12\x00")
        assert state.memory[PROGRAM_START - 1] == 0
        assert bytes(state.memory[:len(FONT_SET)]) == FONT_SET

    def test_load_empty_rom(self, state):
        assert RomLoader().load_bytes(b"", state) == 0

    def test_exact_capacity_fits(self, state):
        rom = bytes([0xAB]) * ROM_CAPACITY
        assert RomLoader().load_bytes(rom, state) == ROM_CAPACITY
        assert state.memory[MEMORY_SIZE - 1] == 0xAB

    # @intent:test_case_oversize 容量を超えたROMは切り詰められ、警告が記録されます。
    def test_oversize_rom_is_truncated_with_warning(self, state, caplog):
        rom = bytes([0x11]) * (ROM_CAPACITY + 10)
        with caplog.at_level(logging.WARNING):
            loaded = RomLoader().load_bytes(rom, state)
        assert loaded == ROM_CAPACITY
        assert len(state.memory) == MEMORY_SIZE
        assert "ROM too large" in caplog.text
        # アドレス0へ折り返して書き込まれることはない
        assert bytes(state.memory[:len(FONT_SET)]) == FONT_SET

    def test_oversize_rom_strict(self, state):
        with pytest.raises(RomTooLargeError) as exc_info:
            RomLoader(strict=True).load_bytes(bytes(ROM_CAPACITY + 1), state)
        assert exc_info.value.size == ROM_CAPACITY + 1
        assert exc_info.value.capacity == ROM_CAPACITY

    def test_load_file(self, state, tmp_path):
        rom_path = tmp_path / "test.ch8"
        rom_path.write_bytes(b"\x60\x01")
        loader = RomLoader()
        assert loader.read_file(rom_path) == b"\x60\x01"
        assert loader.load_file(str(rom_path), state) == 2
        assert state.memory[PROGRAM_START] == 0x60

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RomLoader().read_file(tmp_path / "missing.ch8")
