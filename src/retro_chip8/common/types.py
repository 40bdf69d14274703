"""
共通の型定義を提供するモジュール。
CPU、エンジン、UIなど複数のレイヤーで使用される型を定義します。
"""
from typing import List, NamedTuple, Tuple

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_word, mnemonic)。
DisassemblyLine = Tuple[int, str, str]

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Timers"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
