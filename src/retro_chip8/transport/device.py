# retro_chip8/transport/device.py
"""
Transport Layer (デバイスアダプタ)

このモジュールは、エンジンが外部の表示・入力・音声デバイスに要求するインターフェースを定義します。
デバイスはマシン状態を直接変更せず、入力サンプル・再描画・トーンの3つの窓口のみでエンジンとやり取りします。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from retro_chip8.arch.chip8.state import KEY_COUNT, DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility キー状態以外にデバイスが報告できる制御イベントを定義します。
class ControlEvent(Enum):
    EXIT = "EXIT"
    RESET = "RESET"
    PAUSE = "PAUSE"

# @intent:responsibility ある時点における16キーの押下状態を不変に記録します。
@dataclass(frozen=True)
class KeyState:
    keys: Tuple[bool, ...] = (False,) * KEY_COUNT

    def __post_init__(self):
        if len(self.keys) != KEY_COUNT:
            raise ValueError(f"KeyState requires {KEY_COUNT} keys, got {len(self.keys)}")

    @classmethod
    def pressed(cls, *indices: int) -> "KeyState":
        return cls(tuple(n in indices for n in range(KEY_COUNT)))

InputSample = Union[KeyState, ControlEvent]


# @intent:utility_function フラットなフレームバッファを行ごとの文字列に変換します（ログ・テスト用）。
def frame_to_text(frame: bytes, on: str = "#", off: str = ".") -> str:
    rows = []
    for y in range(DISPLAY_HEIGHT):
        row = frame[y * DISPLAY_WIDTH:(y + 1) * DISPLAY_WIDTH]
        rows.append("".join(on if px else off for px in row))
    return "\n".join(rows)


# @intent:responsibility エンジンが利用するデバイスの抽象インターフェースを定義します。
class DeviceAdapter(ABC):
    """
    表示・入力・音声を担当するデバイスの抽象基底クラス。
    """
    # @intent:responsibility 現在のキー状態、または制御イベントを返します。
    # @intent:pre-condition 短い有限時間を超えてブロックしてはなりません。
    @abstractmethod
    def sample_input(self) -> InputSample:
        pass

    # @intent:responsibility 64x32 の 0/1 フレームバッファを表示します。描画フラグが立った時のみ呼ばれます。
    @abstractmethod
    def present(self, framebuffer: bytes) -> None:
        pass

    # @intent:responsibility サウンドタイマーが非ゼロかどうかをトーンのオン/オフとして受け取ります。毎ティック呼ばれます。
    @abstractmethod
    def present_tone(self, active: bool) -> None:
        pass
