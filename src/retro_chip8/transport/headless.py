# retro_chip8/transport/headless.py
"""
ヘッドレスデバイス。

あらかじめ用意した入力列を順に再生し、描画されたフレームとトーンの変化を記録します。
テストおよび --headless 実行で使用します。
"""
from typing import Iterable, List, Optional

from retro_chip8.transport.device import DeviceAdapter, InputSample, KeyState, ControlEvent


class HeadlessDevice(DeviceAdapter):
    """
    スクリプト化された入力を再生するデバイス。
    入力列を使い切った後は、最後のキー状態を保持し続けます。
    max_ticks を指定した場合、その回数だけサンプリングした後に EXIT を報告します。
    """
    def __init__(self, script: Iterable[InputSample] = (), max_ticks: Optional[int] = None):
        self._script: List[InputSample] = list(script)
        self._position = 0
        self._max_ticks = max_ticks
        self._last_keys = KeyState()
        self.ticks = 0
        self.frames: List[bytes] = []
        self.tone_changes: List[bool] = []
        self._tone: Optional[bool] = None

    # @intent:responsibility 入力列を後から追加します。
    def feed(self, *samples: InputSample) -> None:
        self._script.extend(samples)

    def sample_input(self) -> InputSample:
        if self._max_ticks is not None and self.ticks >= self._max_ticks:
            return ControlEvent.EXIT
        self.ticks += 1

        if self._position < len(self._script):
            sample = self._script[self._position]
            self._position += 1
            if isinstance(sample, KeyState):
                self._last_keys = sample
            return sample

        if self._max_ticks is None:
            return ControlEvent.EXIT
        return self._last_keys

    def present(self, framebuffer: bytes) -> None:
        self.frames.append(bytes(framebuffer))

    def present_tone(self, active: bool) -> None:
        if active != self._tone:
            self.tone_changes.append(active)
            self._tone = active

    @property
    def last_frame(self) -> Optional[bytes]:
        return self.frames[-1] if self.frames else None

    @property
    def tone(self) -> bool:
        return bool(self._tone)
