# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from retro_chip8.core.errors import ExecutionError
from retro_chip8.core.snapshot import Snapshot, Operation, Metadata
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import DisassemblyLine, RegisterLayoutInfo

logger = logging.getLogger(__name__)

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    基本的な状態管理と命令サイクルの抽象化を提供します。
    """
    def __init__(self):
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        """
        状態を部分的にクリアするのではなく、初期状態を作り直します。
        """
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のPCから次の命令ワードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチした命令ワードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        """
        認識できない命令ワードの場合は InvalidOpcodeError を送出します。
        """
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 命令実行後にPCを更新します。
    @abstractmethod
    def _update_pc(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（フェッチ→デコード→実行→PC更新→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進めます。

        デコード失敗（InvalidOpcodeError）は呼び出し元へ伝播します。
        実行失敗（ExecutionError）はログに記録し、PCを進めて継続します。
        """
        initial_pc = self._state.pc

        opcode = self._fetch()
        operation = self._decode(opcode)

        error = None
        try:
            self._execute(operation)
        except ExecutionError as e:
            logger.error("Error executing opcode at %#05x: %s", initial_pc, e)
            error = e

        self._update_pc(operation)
        self._cycle_count += 1

        trace = f"{initial_pc:04X}: {operation}"
        logger.debug(trace)
        return Snapshot(
            pc=initial_pc,
            state=self.get_state(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, trace=trace),
            error=error,
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_word, mnemonic) のタプルリストを返す。
        """
        pass
