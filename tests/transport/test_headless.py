# tests/transport/test_headless.py
"""
retro_chip8.transport のデバイス定義とヘッドレスデバイスの単体テスト。
"""
import pytest

from retro_chip8.transport.device import DeviceAdapter, ControlEvent, KeyState, frame_to_text
from retro_chip8.transport.headless import HeadlessDevice

# @intent:test_suite 入力スクリプトの再生、フレーム・トーンの記録、キー状態の値型を検証します。

class TestKeyState:
    def test_default_is_all_released(self):
        assert KeyState().keys == (False,) * 16

    def test_pressed(self):
        keys = KeyState.pressed(0, 0xF).keys
        assert keys[0] and keys[0xF]
        assert sum(keys) == 2

    def test_requires_sixteen_keys(self):
        with pytest.raises(ValueError):
            KeyState((True,) * 15)

    def test_equality(self):
        assert KeyState.pressed(3) == KeyState.pressed(3)


class TestHeadlessDevice:
    def test_is_device_adapter(self):
        assert isinstance(HeadlessDevice(), DeviceAdapter)

    def test_replays_script_then_exits(self):
        device = HeadlessDevice([KeyState.pressed(1), ControlEvent.PAUSE])
        assert device.sample_input() == KeyState.pressed(1)
        assert device.sample_input() is ControlEvent.PAUSE
        assert device.sample_input() is ControlEvent.EXIT
        assert device.ticks == 3

    # @intent:test_case_hold 入力列を使い切った後は最後のキー状態を保持し、max_ticks で終了します。
    def test_holds_last_keys_until_max_ticks(self):
        device = HeadlessDevice([KeyState.pressed(2), ControlEvent.RESET], max_ticks=4)
        samples = [device.sample_input() for _ in range(5)]
        assert samples == [
            KeyState.pressed(2), ControlEvent.RESET, KeyState.pressed(2), KeyState.pressed(2), ControlEvent.EXIT,
        ]

    def test_feed_appends_samples(self):
        device = HeadlessDevice()
        device.feed(KeyState.pressed(7))
        assert device.sample_input() == KeyState.pressed(7)

    def test_records_frames(self):
        device = HeadlessDevice()
        assert device.last_frame is None
        frame = bytearray(64 * 32)
        device.present(frame)
        frame[0] = 1
        # 送られたフレームはコピーとして保持される
        assert device.last_frame == bytes(64 * 32)
        assert len(device.frames) == 1

    def test_records_tone_changes_only(self):
        device = HeadlessDevice()
        for active in (False, True, True, False, False):
            device.present_tone(active)
        assert device.tone_changes == [False, True, False]
        assert not device.tone


def test_frame_to_text():
    frame = bytearray(64 * 32)
    frame[0] = 1
    frame[64 + 63] = 1
    lines = frame_to_text(bytes(frame)).splitlines()
    assert len(lines) == 32
    assert lines[0] == "#" + "." * 63
    assert lines[1] == "." * 63 + "#"
    assert frame_to_text(bytes(frame), on="X", off=" ").splitlines()[0].startswith("X ")
