# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、デコード済み命令の基底型と、1命令実行後の結果を記録する不変データ構造を定義します。
エンジンのトレースログとテストでの状態検証に用いる責務を負います。
"""
from dataclasses import dataclass
from typing import ClassVar, List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.core.errors import ExecutionError


# @intent:responsibility デコードされた命令の共通部分（生ワードと表示用ニーモニック）を定義します。
# @intent:rationale 各アーキテクチャはこれを継承し、命令ごとに1つのバリアント（直和型の各要素）を定義します。
@dataclass(frozen=True)
class Operation:
    """
    デコードされた命令の基底データクラス。
    サブクラスがオペランドフィールドを追加し、`mnemonic` と `operands` を提供します。
    """
    opcode: int  # 生の命令ワード
    mnemonic: ClassVar[str] = "???"
    length: ClassVar[int] = 2  # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def operands(self) -> List[str]:
        return []

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int
    trace: Optional[str] = None  # 例: "0200: LD V0, 0x05"


# @intent:responsibility 1命令実行直後のCPU状態と実行した命令を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令サイクルの結果を記録したデータ構造。
    `error` には報告のみで継続した実行失敗が入ります。
    """
    pc: int  # 実行した命令のアドレス
    state: CpuState
    operation: Operation
    metadata: Metadata
    error: Optional[ExecutionError] = None
