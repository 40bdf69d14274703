# tests/core/test_cpu.py
"""
retro_chip8.core.cpuモジュールの単体テスト。
"""
import logging
import pytest
from dataclasses import dataclass
from typing import Dict, List

from retro_chip8.core.state import CpuState
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import ExecutionError, InvalidOpcodeError
from retro_chip8.core.snapshot import Snapshot, Operation
from retro_chip8.common.types import RegisterLayoutInfo, RegisterInfo

# @intent:test_suite 抽象CPUの命令サイクル（Template Method）とエラー区分を検証します。

@dataclass(frozen=True)
class CountOp(Operation):
    mnemonic = "INC"


@dataclass(frozen=True)
class FailOp(Operation):
    mnemonic = "FAIL"


class FakeCpu(AbstractCpu):
    """
    プログラムを命令ワードのリストで受け取る最小構成のテスト用CPU。
    0x0001: カウンタを進める / 0x00FF: 実行失敗 / それ以外: デコード失敗
    """
    def __init__(self, program: List[int]):
        self.program = program
        self.counter = 0
        super().__init__()

    def _create_initial_state(self) -> CpuState:
        return CpuState(pc=0, sp=0)

    def _fetch(self) -> int:
        return self.program[self._state.pc]

    def _decode(self, opcode: int) -> Operation:
        if opcode == 0x0001:
            return CountOp(opcode)
        if opcode == 0x00FF:
            return FailOp(opcode)
        raise InvalidOpcodeError(opcode)

    def _execute(self, operation: Operation) -> None:
        if isinstance(operation, FailOp):
            raise ExecutionError("failed on purpose")
        self.counter += 1

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc += 1

    def get_register_map(self) -> Dict[str, int]:
        return {"PC": self._state.pc, "SP": self._state.sp}

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [RegisterLayoutInfo("Test Group", [RegisterInfo("PC", 16), RegisterInfo("SP", 8)])]

    def get_flag_state(self) -> Dict[str, bool]:
        return {}

    def disassemble(self, start_addr: int, length: int):
        return []


class TestAbstractCpu:
    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            AbstractCpu()

    def test_step_runs_cycle(self):
        cpu = FakeCpu([0x0001, 0x0001])
        snapshot = cpu.step()
        assert isinstance(snapshot, Snapshot)
        assert snapshot.pc == 0
        assert snapshot.metadata.cycle_count == 1
        assert snapshot.metadata.trace == "0000: INC"
        assert cpu.get_state().pc == 1
        assert cpu.counter == 1

    # @intent:test_case_execution_error 実行失敗はSnapshotに記録され、PCは進みます。
    def test_execution_error_is_recorded(self, caplog):
        cpu = FakeCpu([0x00FF, 0x0001])
        with caplog.at_level(logging.ERROR):
            snapshot = cpu.step()
        assert isinstance(snapshot.error, ExecutionError)
        assert "failed on purpose" in caplog.text
        assert cpu.get_state().pc == 1
        assert cpu.cycle_count == 1

    def test_decode_error_propagates(self):
        cpu = FakeCpu([0xBEEF])
        with pytest.raises(InvalidOpcodeError):
            cpu.step()
        assert cpu.cycle_count == 0

    def test_reset_recreates_state(self):
        cpu = FakeCpu([0x0001, 0x0001])
        cpu.step()
        old_state = cpu.get_state()
        cpu.reset()
        assert cpu.get_state() is not old_state
        assert cpu.get_state().pc == 0
        assert cpu.cycle_count == 0
